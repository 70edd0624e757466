"""Render Context

Per-render mutable state. One RenderContext is created for every report
and is never shared between renders.
"""
import io
from dataclasses import dataclass, field
from typing import List, Optional

from reportlab.pdfgen import canvas as pdfcanvas

from ..report_options import ReportOptions


@dataclass
class DrawnElement:
    """Log entry for something drawn on a page (layout coordinates)."""

    kind: str
    label: str
    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class PageRecord:
    """A physical page of the output document.

    Attributes:
        kind: "cover", "version_control" or "flowing"
        number: Visible page number (flowing pages only, starting at 1)
        footer_caption: Caption drawn in the footer band, if any
        elements: Everything drawn on the page, in drawing order
    """

    kind: str
    number: Optional[int] = None
    footer_caption: Optional[str] = None
    elements: List[DrawnElement] = field(default_factory=list)

    def labels(self, kind: Optional[str] = None) -> List[str]:
        return [e.label for e in self.elements if kind is None or e.kind == kind]


@dataclass
class RenderContext:
    """Mutable layout state for a single render.

    ``cursor_y`` is measured from the top of the page and only ever grows
    while a page is open; it is reset by ``start_page``.
    """

    options: ReportOptions
    canvas: object = None
    buffer: io.BytesIO = field(default_factory=io.BytesIO)
    cursor_y: float = 0.0
    content_top: float = 0.0
    page_index: int = -1
    page_counter: int = 0
    page_open: bool = False
    pages: List[PageRecord] = field(default_factory=list)
    missing_assets: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.canvas is None:
            # invariant=1 drops timestamps and random IDs so identical input
            # produces identical bytes
            self.canvas = pdfcanvas.Canvas(
                self.buffer,
                pagesize=self.options.page_size,
                invariant=1,
                pageCompression=1,
            )

    @property
    def page_width(self) -> float:
        return self.options.page_size[0]

    @property
    def page_height(self) -> float:
        return self.options.page_size[1]

    @property
    def left(self) -> float:
        return self.options.margin_left

    @property
    def column_width(self) -> float:
        return self.options.column_width

    @property
    def current_page(self) -> PageRecord:
        return self.pages[-1]

    def start_page(self, kind: str, content_top: float) -> PageRecord:
        """
        Close the open page (if any) and begin a new one.

        Flowing pages take the next visible page number; fixed pages are
        not numbered.

        Args:
            kind: Page kind recorded in the PageRecord
            content_top: Cursor position where content starts on this page

        Returns:
            The new PageRecord
        """
        if self.page_open:
            self.canvas.showPage()

        number = None
        if kind == "flowing":
            self.page_counter += 1
            number = self.page_counter

        self.page_index += 1
        self.page_open = True
        self.content_top = content_top
        self.cursor_y = content_top
        record = PageRecord(kind=kind, number=number)
        self.pages.append(record)
        return record

    def close_page(self):
        if self.page_open:
            self.canvas.showPage()
            self.page_open = False

    def advance(self, height: float):
        """Move the cursor down; the cursor never moves up within a page."""
        if height < 0:
            raise ValueError(f"Cursor cannot move up (advance by {height})")
        self.cursor_y += height

    def fits(self, height: float, bottom_limit: float) -> bool:
        return self.cursor_y + height <= bottom_limit

    def at_content_top(self) -> bool:
        return self.cursor_y <= self.content_top

    def record(self, kind: str, label: str, top: float, height: float):
        self.current_page.elements.append(DrawnElement(kind, label, top, height))
