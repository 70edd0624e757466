"""Table Renderer

Lays out bordered grids with caller-supplied column widths. Rows are
atomic: a row that does not fit in the remaining space moves to the next
page, where the header row is repeated.
"""
import logging
from typing import Callable, List, Sequence

from ..config import NO_ITEMS_TEXT, TABLE_CELL_PADDING, TABLE_HEADER_FILL
from .blocks import Alignment, TableBlock
from .coordinate_utils import box_to_canvas
from .font_manager import Font, FontManager
from .render_context import RenderContext
from .text_flow import TextLine, block_height, draw_lines, flow_lines

logger = logging.getLogger(__name__)


class TableRenderer:
    """Measures and draws TableBlocks with page-aware row pagination."""

    def __init__(self, fonts: FontManager):
        self.fonts = fonts

    def header_font(self, table: TableBlock) -> Font:
        return self.fonts.get_font(table.style.font_size, bold=True)

    def body_font(self, table: TableBlock) -> Font:
        return self.fonts.get_font(table.style.font_size)

    def table_rows(self, table: TableBlock) -> List[Sequence[str]]:
        """Body rows, or the single placeholder row for an empty table."""
        if table.rows:
            return [list(row) for row in table.rows]
        return [[NO_ITEMS_TEXT]]

    def wrap_row(self, cells: Sequence[str], widths: Sequence[float], font: Font) -> List[List[TextLine]]:
        """Wrap every cell of a row into its column (a single cell spans the table)."""
        if len(cells) == 1 and len(widths) > 1:
            widths = [sum(widths)]
        inner = [max(w - 2 * TABLE_CELL_PADDING, 1.0) for w in widths]
        return [flow_lines(str(cell or ""), width, font) for cell, width in zip(cells, inner)]

    def row_height(self, wrapped: List[List[TextLine]], table: TableBlock) -> float:
        """Fixed height of a row: its tallest cell plus padding."""
        line_count = max([len(lines) for lines in wrapped] + [1])
        return block_height(line_count, table.style.font_size, table.style.line_metrics) + 2 * TABLE_CELL_PADDING

    def leading_height(self, table: TableBlock) -> float:
        """Height of the header row plus the first body row.

        The layout engine keeps at least this much together so the header
        never sits alone at the bottom of a page.
        """
        header = self.wrap_row(table.headers, table.column_widths, self.header_font(table))
        first = self.wrap_row(self.table_rows(table)[0], table.column_widths, self.body_font(table))
        return self.row_height(header, table) + self.row_height(first, table)

    def render_table(
        self,
        ctx: RenderContext,
        table: TableBlock,
        bottom_limit: float,
        page_break: Callable[[], None],
    ) -> int:
        """
        Draw the table at the cursor, breaking pages between rows.

        Before each body row the remaining space is checked; when the row
        does not fit, ``page_break`` is called exactly once and the header
        row is redrawn at the top of the new page. A row taller than a
        whole page is drawn anyway and overflows.

        Args:
            ctx: Render context (cursor is advanced past the table)
            table: Table to draw
            bottom_limit: Lowest cursor position content may reach
            page_break: Callback that closes the page and opens the next one

        Returns:
            Number of page breaks inserted
        """
        header_font = self.header_font(table)
        body_font = self.body_font(table)
        header = self.wrap_row(table.headers, table.column_widths, header_font)
        header_height = self.row_height(header, table)

        breaks = 0
        self._draw_row(ctx, header, table, header_font, header_height, "header", fill=True)

        for index, cells in enumerate(self.table_rows(table)):
            wrapped = self.wrap_row(cells, table.column_widths, body_font)
            height = self.row_height(wrapped, table)

            # A page holding only the header row gains nothing from a break
            page_has_content = ctx.cursor_y > ctx.content_top + header_height + 0.01
            if not ctx.fits(height, bottom_limit) and page_has_content:
                page_break()
                breaks += 1
                logger.debug("Table row %d moved to page %d", index + 1, ctx.current_page.number)
                self._draw_row(ctx, header, table, header_font, header_height, "header", fill=True)

            label = " | ".join(str(c or "") for c in cells)
            self._draw_row(ctx, wrapped, table, body_font, height, label)

        return breaks

    def _draw_row(
        self,
        ctx: RenderContext,
        wrapped: List[List[TextLine]],
        table: TableBlock,
        font: Font,
        height: float,
        label: str,
        fill: bool = False,
    ):
        canvas = ctx.canvas
        widths = list(table.column_widths)
        if len(wrapped) == 1 and len(widths) > 1:
            widths = [sum(widths)]

        top = ctx.cursor_y
        x = ctx.left
        canvas.saveState()
        for lines, width in zip(wrapped, widths):
            bx, by, bw, bh = box_to_canvas(x, top, width, height, ctx.page_height)
            if fill:
                canvas.setFillColorRGB(*TABLE_HEADER_FILL)
                canvas.rect(bx, by, bw, bh, stroke=1, fill=1)
                canvas.setFillColorRGB(0, 0, 0)
            else:
                canvas.rect(bx, by, bw, bh, stroke=1, fill=0)
            draw_lines(
                canvas, lines,
                x + TABLE_CELL_PADDING, top + TABLE_CELL_PADDING,
                width - 2 * TABLE_CELL_PADDING,
                font, table.style.line_metrics, Alignment.LEFT, ctx.page_height,
            )
            x += width
        canvas.restoreState()

        ctx.record("table_header" if fill else "table_row", label, top, height)
        ctx.advance(height)
