"""Coordinate Conversion Utilities

The layout engine works top-down: ``cursor_y`` is the distance from the top
edge of the page and grows as content is added. ReportLab draws with the
origin at the bottom-left corner. These pure helpers convert between the
two systems.

- Layout coordinates: points with origin at top-left
- ReportLab coordinates: points with origin at bottom-left
"""

from typing import Tuple


def flip_y_coordinate(y: float, page_height: float) -> float:
    """
    Flip Y coordinate between top-left and bottom-left origin systems.

    Examples:
        >>> flip_y_coordinate(0, 842)  # Top becomes bottom
        842.0
        >>> flip_y_coordinate(842, 842)
        0.0

    Notes:
        This function is its own inverse:
        flip_y_coordinate(flip_y_coordinate(y, h), h) == y
    """
    return float(page_height - y)


def box_to_canvas(
    x: float,
    top: float,
    width: float,
    height: float,
    page_height: float
) -> Tuple[float, float, float, float]:
    """
    Convert a box given by its top edge into ReportLab (x, y, width, height).

    Args:
        x: Left edge in points
        top: Distance of the box's top edge from the top of the page
        width, height: Box size in points
        page_height: Height of the page in points

    Returns:
        Tuple of (x, y, width, height) where (x, y) is the bottom-left corner

    Examples:
        >>> box_to_canvas(10, 0, 100, 50, 842)
        (10, 792.0, 100, 50)
    """
    return x, flip_y_coordinate(top + height, page_height), width, height


def baseline_y(top: float, font_size: float, line_height: float, page_height: float) -> float:
    """
    ReportLab baseline for a text line whose line box starts at ``top``.

    The glyphs are centred vertically in the line box; the baseline sits
    at roughly 80% of the font size below the top of the glyph box.

    Args:
        top: Distance of the line box's top edge from the top of the page
        font_size: Font size in points
        line_height: Height of the line box in points
        page_height: Height of the page in points

    Returns:
        Baseline Y in ReportLab coordinates
    """
    leading_gap = (line_height - font_size) / 2
    return flip_y_coordinate(top + leading_gap + font_size * 0.8, page_height)
