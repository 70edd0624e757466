"""Fixed-Layout Pages

Bespoke, non-flowing pages: the cover with its decorative overlay and the
version control page. They carry no header/footer bands and do not count
towards the visible page numbers.
"""
import logging
from typing import Dict, Optional, Union

from reportlab.lib import colors

from ..exceptions import AssetLoadError, UnsupportedPageError
from .blocks import Alignment, FixedPageSpec, LineMetrics, TableBlock
from .coordinate_utils import box_to_canvas, flip_y_coordinate
from .font_manager import FontManager
from .image_embedder import draw_image, embed_image
from .page_band import PageBand
from .render_context import RenderContext
from .table_renderer import TableRenderer
from .text_flow import draw_lines, flow_lines

logger = logging.getLogger(__name__)

COVER_ACCENT = colors.HexColor('#1f4e5f')
COVER_HIGHLIGHT = colors.HexColor('#8cc63f')
REVISION_COLUMNS = (0.15, 0.25, 0.6)  # fractions of the column width


class FixedPageRenderer:
    """Draws FixedPageSpecs onto fresh pages of a RenderContext."""

    def __init__(self, fonts: FontManager, band: PageBand, tables: TableRenderer, image_quality: float):
        self.fonts = fonts
        self.band = band
        self.tables = tables
        self.image_quality = image_quality

    def render(self, ctx: RenderContext, page: FixedPageSpec, assets: Dict[str, Union[bytes, object]]):
        """
        Draw a fixed-layout page on a new physical page.

        Raises:
            UnsupportedPageError: If ``page.kind`` is not a known fixed layout
        """
        if page.kind == "cover":
            ctx.start_page("cover", ctx.options.margin_top)
            self._draw_cover(ctx, page, assets)
        elif page.kind == "version_control":
            ctx.start_page("version_control", ctx.options.margin_top)
            self._draw_version_control(ctx, page)
        else:
            raise UnsupportedPageError(page)

    def _draw_cover(self, ctx: RenderContext, page: FixedPageSpec, assets: Dict):
        canvas = ctx.canvas
        width, height = ctx.page_width, ctx.page_height

        artwork = self._prepare_background(ctx, page.background_key, assets, width, height)
        canvas.saveState()
        if artwork is not None:
            image_bytes, w, h = artwork
            draw_image(canvas, image_bytes, (width - w) / 2, (height - h) / 2, w, h)
            ctx.record("image", page.background_key, (height - h) / 2, h)
        else:
            self._draw_overlay(ctx)
        canvas.restoreState()

        if self.band.logo is not None:
            logo_bytes, w, h = self.band.logo
            x, y, _, _ = box_to_canvas(ctx.left, ctx.options.margin_top, w, h, height)
            draw_image(canvas, logo_bytes, x, y, w, h)
            ctx.record("logo", "logo", ctx.options.margin_top, h)

        top = height * 0.28
        title_font = self.fonts.get_font(22, bold=True)
        title_lines = flow_lines(page.title, ctx.column_width, title_font)
        top += draw_lines(canvas, title_lines, ctx.left, top, ctx.column_width, title_font,
                          LineMetrics.proportional(), Alignment.LEFT, height)
        ctx.record("title", page.title, height * 0.28, top - height * 0.28)

        subtitle_font = self.fonts.get_font(14)
        top += 6
        top += draw_lines(canvas, flow_lines(page.subtitle, ctx.column_width, subtitle_font),
                          ctx.left, top, ctx.column_width, subtitle_font,
                          LineMetrics.proportional(), Alignment.LEFT, height)

        # Project details sit inside the lower overlay band
        detail_top = height * 0.62
        label_font = self.fonts.get_font(11, bold=True)
        value_font = self.fonts.get_font(11)
        label_width = ctx.column_width * 0.3
        canvas.saveState()
        canvas.setFillColor(colors.white if artwork is None else colors.black)
        for label, value in page.details:
            draw_lines(canvas, flow_lines(label, label_width, label_font), ctx.left, detail_top,
                       label_width, label_font, LineMetrics.fixed(16), Alignment.LEFT, height)
            lines = flow_lines(value, ctx.column_width - label_width, value_font)
            draw_lines(canvas, lines, ctx.left + label_width, detail_top,
                       ctx.column_width - label_width, value_font, LineMetrics.fixed(16), Alignment.LEFT, height)
            ctx.record("detail", f"{label} {value}", detail_top, 16 * max(len(lines), 1))
            detail_top += 16 * max(len(lines), 1)
        canvas.restoreState()

    def _draw_overlay(self, ctx: RenderContext):
        """Decorative polygons behind the cover's lower half."""
        canvas = ctx.canvas
        width, height = ctx.page_width, ctx.page_height

        canvas.setFillColor(COVER_ACCENT)
        path = canvas.beginPath()
        path.moveTo(0, 0)
        path.lineTo(width, 0)
        path.lineTo(width, flip_y_coordinate(height * 0.52, height))
        path.lineTo(0, flip_y_coordinate(height * 0.58, height))
        path.close()
        canvas.drawPath(path, stroke=0, fill=1)

        canvas.setFillColor(COVER_HIGHLIGHT)
        path = canvas.beginPath()
        path.moveTo(0, flip_y_coordinate(height * 0.58, height))
        path.lineTo(width, flip_y_coordinate(height * 0.52, height))
        path.lineTo(width, flip_y_coordinate(height * 0.505, height))
        path.lineTo(0, flip_y_coordinate(height * 0.565, height))
        path.close()
        canvas.drawPath(path, stroke=0, fill=1)
        ctx.record("overlay", "cover overlay", height * 0.505, height * 0.495)

    def _prepare_background(self, ctx: RenderContext, key: Optional[str], assets: Dict, width: float, height: float):
        raw = assets.get(key) if key else None
        if not isinstance(raw, bytes):
            return None
        try:
            return embed_image(raw, width, height, self.image_quality, asset_key=key)
        except AssetLoadError as e:
            logger.warning("Cover artwork unavailable, drawing overlay instead: %s", e)
            ctx.missing_assets.append(key)
            return None

    def _draw_version_control(self, ctx: RenderContext, page: FixedPageSpec):
        canvas = ctx.canvas
        height = ctx.page_height

        title_font = self.fonts.get_font(14, bold=True)
        title_height = draw_lines(canvas, flow_lines(page.title, ctx.column_width, title_font),
                                  ctx.left, ctx.cursor_y, ctx.column_width, title_font,
                                  LineMetrics.proportional(), Alignment.CENTER, height)
        ctx.record("title", page.title, ctx.cursor_y, title_height)
        ctx.advance(title_height + 18)

        label_font = self.fonts.get_font(10, bold=True)
        body_font = self.fonts.get_font(10)
        metrics = LineMetrics.proportional()

        for label, lines in page.sections:
            self._labelled_lines(ctx, label, lines, label_font, body_font, metrics)

        if page.details:
            detail_lines = tuple(f"{name}: {value}" for name, value in page.details)
            self._labelled_lines(ctx, "DOCUMENT DETAILS", detail_lines, label_font, body_font, metrics)

        if page.revisions:
            self._labelled_lines(ctx, "REVISION HISTORY", (), label_font, body_font, metrics)
            widths = [ctx.column_width * fraction for fraction in REVISION_COLUMNS]
            table = TableBlock(
                headers=("Revision", "Date", "Description"),
                rows=[list(row) for row in page.revisions],
                column_widths=widths,
            )
            # The revision table is short; it never needs a page break
            self.tables.render_table(ctx, table, bottom_limit=height, page_break=lambda: None)

    def _labelled_lines(self, ctx, label, lines, label_font, body_font, metrics):
        height = ctx.page_height
        used = draw_lines(ctx.canvas, flow_lines(label, ctx.column_width, label_font), ctx.left,
                          ctx.cursor_y, ctx.column_width, label_font, metrics, Alignment.LEFT, height)
        ctx.record("label", label, ctx.cursor_y, used)
        ctx.advance(used + 2)

        for line in lines:
            used = draw_lines(ctx.canvas, flow_lines(line, ctx.column_width, body_font), ctx.left,
                              ctx.cursor_y, ctx.column_width, body_font, metrics, Alignment.LEFT, height)
            ctx.record("text", line, ctx.cursor_y, used)
            ctx.advance(used)
        ctx.advance(12)
