"""Page Band Renderer

Draws the repeating header and footer decoration of flowing pages: a logo
box with the company address block above a rule, and a rule above the
footer caption and page number.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from reportlab.lib import colors

from ..config import (
    BAND_FONT_SIZE,
    BAND_LINE_HEIGHT,
    FOOTER_BAND_HEIGHT,
    HEADER_BAND_HEIGHT,
    HEADER_GAP,
    LOGO_BOX,
    RULE_WIDTH,
)
from .blocks import Alignment, LineMetrics
from .coordinate_utils import baseline_y, box_to_canvas, flip_y_coordinate
from .font_manager import FontManager
from .image_embedder import draw_image
from .render_context import RenderContext
from .text_flow import TextLine, draw_lines

BAND_METRICS = LineMetrics.fixed(BAND_LINE_HEIGHT)


@dataclass(frozen=True)
class PageBand:
    """Assets of the header and footer bands.

    Attributes:
        logo: Prepared JPEG logo (bytes, width, height) or None for the placeholder box
        company_name: First, bold line of the address block
        address_lines: Remaining right-aligned address lines
        caption: Footer caption, already token-substituted
    """

    logo: Optional[tuple] = None
    company_name: str = ""
    address_lines: List[str] = field(default_factory=list)
    caption: str = ""


class PageBandRenderer:
    """Draws header and footer bands onto the current page of a RenderContext."""

    def __init__(self, fonts: FontManager, band: PageBand):
        self.fonts = fonts
        self.band = band

    def content_top(self, ctx: RenderContext) -> float:
        """Cursor position of the first content line below the header band."""
        return ctx.options.margin_top + HEADER_BAND_HEIGHT + HEADER_GAP

    def bottom_limit(self, ctx: RenderContext) -> float:
        """Lowest cursor position content may reach above the footer band."""
        return ctx.page_height - ctx.options.margin_bottom - FOOTER_BAND_HEIGHT

    def draw_header(self, ctx: RenderContext):
        canvas = ctx.canvas
        top = ctx.options.margin_top
        logo_width, logo_height = LOGO_BOX

        canvas.saveState()
        if self.band.logo is not None:
            image_bytes, width, height = self.band.logo
            # Centre the scaled logo vertically in the fixed logo box
            image_top = top + (logo_height - height) / 2
            x, y, w, h = box_to_canvas(ctx.left, image_top, width, height, ctx.page_height)
            draw_image(canvas, image_bytes, x, y, w, h)
            ctx.record("logo", "logo", image_top, height)
        else:
            x, y, w, h = box_to_canvas(ctx.left, top, logo_width, logo_height, ctx.page_height)
            canvas.setStrokeColor(colors.lightgrey)
            canvas.rect(x, y, w, h, stroke=1, fill=0)
            ctx.record("logo", "logo placeholder", top, logo_height)

        address_left = ctx.left + logo_width
        address_width = ctx.column_width - logo_width
        lines = [TextLine(self.band.company_name, 0.0, True)] if self.band.company_name else []
        if lines:
            bold = self.fonts.get_font(BAND_FONT_SIZE, bold=True)
            draw_lines(canvas, lines, address_left, top, address_width, bold,
                       BAND_METRICS, Alignment.RIGHT, ctx.page_height)

        regular = self.fonts.get_font(BAND_FONT_SIZE)
        address = [TextLine(line, 0.0, True) for line in self.band.address_lines]
        draw_lines(canvas, address, address_left, top + len(lines) * BAND_LINE_HEIGHT,
                   address_width, regular, BAND_METRICS, Alignment.RIGHT, ctx.page_height)
        ctx.record("header", self.band.company_name, top, HEADER_BAND_HEIGHT)

        self._rule(ctx, top + HEADER_BAND_HEIGHT)
        canvas.restoreState()

    def draw_footer(self, ctx: RenderContext):
        canvas = ctx.canvas
        rule_top = self.bottom_limit(ctx) + BAND_LINE_HEIGHT / 2
        text_top = rule_top + 4

        canvas.saveState()
        self._rule(ctx, rule_top)

        font = self.fonts.get_font(BAND_FONT_SIZE)
        canvas.setFont(font.name, font.size)
        y = baseline_y(text_top, font.size, BAND_LINE_HEIGHT, ctx.page_height)
        canvas.drawString(ctx.left, y, self.band.caption)

        number = str(ctx.current_page.number or "")
        canvas.drawRightString(ctx.left + ctx.column_width, y, number)
        canvas.restoreState()

        ctx.current_page.footer_caption = self.band.caption
        ctx.record("footer", f"{self.band.caption}|{number}", text_top, BAND_LINE_HEIGHT)

    def _rule(self, ctx: RenderContext, top: float):
        y = flip_y_coordinate(top, ctx.page_height)
        ctx.canvas.setStrokeColor(colors.black)
        ctx.canvas.setLineWidth(RULE_WIDTH)
        ctx.canvas.line(ctx.left, y, ctx.left + ctx.column_width, y)
