"""Text Measurement and Flow

Greedy word-wrap against font metrics, block height calculation and line
drawing with left, centre, right and justified alignment.
"""
from dataclasses import dataclass
from typing import List

from .blocks import Alignment, LineMetrics
from .coordinate_utils import baseline_y
from .font_manager import Font


@dataclass(frozen=True)
class TextLine:
    """One wrapped line of a block.

    Attributes:
        text: Line text, single-spaced
        width: Measured width in points
        ends_paragraph: True for the last line of a hard-break segment;
            such lines are never stretched when justifying
    """

    text: str
    width: float
    ends_paragraph: bool


def wrap_text(text: str, max_width: float, font: Font) -> List[str]:
    """
    Wrap a single paragraph into lines no wider than ``max_width``.

    Words are filled greedily. A word wider than ``max_width`` is never
    broken: it occupies a line of its own. Runs of whitespace (including
    newlines) collapse to single spaces; use ``flow_lines`` to honour hard
    line breaks.

    Args:
        text: Text to wrap
        max_width: Available width in points
        font: Font used for measurement

    Returns:
        List of line strings (empty for blank text)
    """
    words = text.split()
    if not words:
        return []

    space_width = font.string_width(" ")
    lines = []
    current = [words[0]]
    current_width = font.string_width(words[0])

    for word in words[1:]:
        word_width = font.string_width(word)
        if current_width + space_width + word_width <= max_width:
            current.append(word)
            current_width += space_width + word_width
        else:
            lines.append(" ".join(current))
            current = [word]
            current_width = word_width

    lines.append(" ".join(current))
    return lines


def flow_lines(text: str, max_width: float, font: Font) -> List[TextLine]:
    """
    Wrap text that may contain hard line breaks.

    Each newline-separated segment is wrapped independently; an empty
    segment yields an empty line so that explicit blank lines keep their
    vertical space.

    Args:
        text: Text to flow
        max_width: Available width in points
        font: Font used for measurement

    Returns:
        List of TextLine
    """
    lines = []
    for segment in text.split("\n"):
        wrapped = wrap_text(segment, max_width, font)
        if not wrapped:
            lines.append(TextLine("", 0.0, True))
            continue
        for index, line in enumerate(wrapped):
            lines.append(TextLine(line, font.string_width(line), index == len(wrapped) - 1))

    # Trailing blank lines carry no content
    while lines and not lines[-1].text:
        lines.pop()
    return lines


def block_height(line_count: int, font_size: float, line_metrics: LineMetrics) -> float:
    """Height of a text block: line count times line height."""
    return line_count * line_metrics.line_height(font_size)


def measure_text(text: str, max_width: float, font: Font, line_metrics: LineMetrics) -> float:
    """Height ``text`` occupies once flowed into ``max_width``."""
    return block_height(len(flow_lines(text, max_width, font)), font.size, line_metrics)


def draw_lines(
    canvas,
    lines: List[TextLine],
    x: float,
    top: float,
    max_width: float,
    font: Font,
    line_metrics: LineMetrics,
    alignment: Alignment,
    page_height: float,
) -> float:
    """
    Draw pre-wrapped lines starting at ``top`` (layout coordinates).

    Justified lines distribute the spare width evenly between words; the
    last line of each paragraph stays left-aligned.

    Args:
        canvas: ReportLab canvas
        lines: Output of ``flow_lines``
        x: Left edge of the text column
        top: Top of the first line box, measured from the top of the page
        max_width: Width of the text column
        font: Font to draw with
        line_metrics: Line height rule
        alignment: Horizontal alignment
        page_height: Page height for coordinate conversion

    Returns:
        Total height consumed
    """
    line_height = line_metrics.line_height(font.size)
    canvas.setFont(font.name, font.size)

    for index, line in enumerate(lines):
        if not line.text:
            continue
        y = baseline_y(top + index * line_height, font.size, line_height, page_height)

        if alignment is Alignment.CENTER:
            canvas.drawCentredString(x + max_width / 2, y, line.text)
        elif alignment is Alignment.RIGHT:
            canvas.drawRightString(x + max_width, y, line.text)
        elif alignment is Alignment.JUSTIFY and not line.ends_paragraph:
            _draw_justified(canvas, line, x, y, max_width, font)
        else:
            canvas.drawString(x, y, line.text)

    return len(lines) * line_height


def _draw_justified(canvas, line: TextLine, x: float, y: float, max_width: float, font: Font):
    words = line.text.split(" ")
    if len(words) < 2:
        canvas.drawString(x, y, line.text)
        return

    words_width = sum(font.string_width(word) for word in words)
    gap = (max_width - words_width) / (len(words) - 1)

    cursor_x = x
    for word in words:
        canvas.drawString(cursor_x, y, word)
        cursor_x += font.string_width(word) + gap
