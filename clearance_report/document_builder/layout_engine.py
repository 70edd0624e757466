"""Layout Engine

Walks the content plan, measures each block, decides page breaks and
delegates drawing to the text, table, image, band and fixed-page renderers.

States: ON_PAGE -> (block fits) -> ON_PAGE
        ON_PAGE -> (block does not fit) -> NEW_PAGE -> ON_PAGE
        ON_PAGE -> (plan exhausted) -> FINISHED
"""
import logging
from typing import Dict, List, Union

from ..config import BULLET_INDENT, IMAGE_ERROR_TEXT
from ..exceptions import AssetLoadError, UnsupportedBlockError, UnsupportedPageError
from .blocks import (
    Alignment,
    BulletBlock,
    FixedPageSpec,
    FlowingPageSpec,
    HeadingBlock,
    ImageBlock,
    LineMetrics,
    ParagraphBlock,
    SpacerBlock,
    TableBlock,
)
from .coordinate_utils import box_to_canvas
from .fixed_pages import FixedPageRenderer
from .font_manager import FontManager
from .image_embedder import draw_image, embed_image
from .page_band import PageBandRenderer
from .render_context import RenderContext
from .table_renderer import TableRenderer
from .text_flow import block_height, draw_lines, flow_lines

logger = logging.getLogger(__name__)

CAPTION_FONT_SIZE = 9
CAPTION_METRICS = LineMetrics.proportional()


class LayoutEngine:
    """Places a content plan onto the pages of a RenderContext.

    The engine holds no per-render state of its own; everything that
    changes during a render lives in the RenderContext passed to ``render``.
    """

    def __init__(
        self,
        fonts: FontManager,
        bands: PageBandRenderer,
        tables: TableRenderer,
        fixed_pages: FixedPageRenderer,
        image_quality: float,
    ):
        self.fonts = fonts
        self.bands = bands
        self.tables = tables
        self.fixed_pages = fixed_pages
        self.image_quality = image_quality

    def render(self, ctx: RenderContext, plan: List, assets: Dict[str, Union[bytes, object]]) -> RenderContext:
        """
        Render every page of the plan.

        Args:
            ctx: Fresh render context
            plan: List of FixedPageSpec / FlowingPageSpec
            assets: Asset key -> bytes or the placeholder sentinel

        Returns:
            The same context, with every page closed

        Raises:
            UnsupportedBlockError: If a flowing page contains an unknown block
            UnsupportedPageError: If the plan contains an unknown page variant
        """
        for page in plan:
            if isinstance(page, FixedPageSpec):
                self._finish_page(ctx)
                self.fixed_pages.render(ctx, page, assets)
            elif isinstance(page, FlowingPageSpec):
                self._finish_page(ctx)
                self._start_flowing_page(ctx)
                for block in page.blocks:
                    self.place_block(ctx, block, assets)
            else:
                raise UnsupportedPageError(page)

        # FINISHED: footer on the last page
        self._finish_page(ctx)
        ctx.close_page()
        return ctx

    def page_break(self, ctx: RenderContext):
        """Close the current flowing page and continue on a new one."""
        self._finish_page(ctx)
        self._start_flowing_page(ctx)
        logger.debug("Page break: now on flowing page %d", ctx.page_counter)

    def _start_flowing_page(self, ctx: RenderContext):
        ctx.start_page("flowing", self.bands.content_top(ctx))
        self.bands.draw_header(ctx)

    def _finish_page(self, ctx: RenderContext):
        if ctx.page_open and ctx.current_page.kind == "flowing" and ctx.current_page.footer_caption is None:
            self.bands.draw_footer(ctx)

    def _ensure_room(self, ctx: RenderContext, height: float):
        """Break the page unless ``height`` fits below the cursor.

        A block taller than a whole page is placed at the top of a fresh
        page and allowed to overflow the bottom margin.
        """
        if not ctx.fits(height, self.bands.bottom_limit(ctx)) and not ctx.at_content_top():
            self.page_break(ctx)

    def _margin_before(self, ctx: RenderContext, margin: float) -> float:
        return 0.0 if ctx.at_content_top() else margin

    def place_block(self, ctx: RenderContext, block, assets: Dict):
        """
        Measure and draw a single content block at the cursor.

        Raises:
            UnsupportedBlockError: If ``block`` is not a known ContentBlock variant
        """
        if isinstance(block, (HeadingBlock, ParagraphBlock)):
            self._place_text(ctx, block.text, block.style, ctx.left, ctx.column_width, kind="text")
        elif isinstance(block, BulletBlock):
            self._place_bullet(ctx, block)
        elif isinstance(block, SpacerBlock):
            self._place_spacer(ctx, block)
        elif isinstance(block, TableBlock):
            self._place_table(ctx, block)
        elif isinstance(block, ImageBlock):
            self._place_image(ctx, block, assets)
        else:
            raise UnsupportedBlockError(block)

    def _place_text(self, ctx: RenderContext, text: str, style, x: float, width: float, kind: str) -> float:
        font = self.fonts.get_font(style.font_size, bold=style.bold)
        lines = flow_lines(text, width, font)
        height = block_height(len(lines), style.font_size, style.line_metrics)

        self._ensure_room(ctx, self._margin_before(ctx, style.margin_before) + height)
        ctx.advance(self._margin_before(ctx, style.margin_before))

        draw_lines(ctx.canvas, lines, x, ctx.cursor_y, width, font,
                   style.line_metrics, style.alignment, ctx.page_height)
        ctx.record(kind, text, ctx.cursor_y, height)
        ctx.advance(height + style.margin_after)
        return height

    def _place_bullet(self, ctx: RenderContext, block: BulletBlock):
        style = block.style
        font = self.fonts.get_font(style.font_size, bold=style.bold)
        text_x = ctx.left + BULLET_INDENT
        text_width = ctx.column_width - BULLET_INDENT
        lines = flow_lines(block.text, text_width, font)
        height = block_height(len(lines), style.font_size, style.line_metrics)

        self._ensure_room(ctx, self._margin_before(ctx, style.margin_before) + height)
        ctx.advance(self._margin_before(ctx, style.margin_before))

        marker = flow_lines(block.bullet, BULLET_INDENT, font)
        draw_lines(ctx.canvas, marker, ctx.left + BULLET_INDENT / 3, ctx.cursor_y, BULLET_INDENT,
                   font, style.line_metrics, Alignment.LEFT, ctx.page_height)
        draw_lines(ctx.canvas, lines, text_x, ctx.cursor_y, text_width, font,
                   style.line_metrics, style.alignment, ctx.page_height)
        ctx.record("bullet", block.text, ctx.cursor_y, height)
        ctx.advance(height + style.margin_after)

    def _place_spacer(self, ctx: RenderContext, block: SpacerBlock):
        # Vertical space is meaningless at the top of a page, and a spacer
        # that does not fit simply ends the page's content
        if ctx.at_content_top():
            return
        bottom = self.bands.bottom_limit(ctx)
        height = min(block.height, max(bottom - ctx.cursor_y, 0.0))
        ctx.record("spacer", "", ctx.cursor_y, height)
        ctx.advance(height)

    def _place_table(self, ctx: RenderContext, block: TableBlock):
        style = block.style
        caption_height = 0.0
        caption_font = None
        caption_lines = []
        if block.caption:
            caption_font = self.fonts.get_font(CAPTION_FONT_SIZE, bold=True)
            caption_lines = flow_lines(block.caption, ctx.column_width, caption_font)
            caption_height = block_height(len(caption_lines), CAPTION_FONT_SIZE, CAPTION_METRICS)

        needed = self._margin_before(ctx, style.margin_before) + caption_height + self.tables.leading_height(block)
        self._ensure_room(ctx, needed)
        ctx.advance(self._margin_before(ctx, style.margin_before))

        if caption_lines:
            draw_lines(ctx.canvas, caption_lines, ctx.left, ctx.cursor_y, ctx.column_width,
                       caption_font, CAPTION_METRICS, Alignment.LEFT, ctx.page_height)
            ctx.record("caption", block.caption, ctx.cursor_y, caption_height)
            ctx.advance(caption_height)

        self.tables.render_table(ctx, block, self.bands.bottom_limit(ctx), lambda: self.page_break(ctx))
        ctx.advance(style.margin_after)

    def _place_image(self, ctx: RenderContext, block: ImageBlock, assets: Dict):
        style = block.style
        raw = assets.get(block.asset_key)

        try:
            if not isinstance(raw, bytes):
                raise AssetLoadError(block.asset_key, "asset could not be fetched")
            image_bytes, width, height = embed_image(
                raw, min(block.max_width, ctx.column_width), block.max_height,
                self.image_quality, asset_key=block.asset_key,
            )
        except AssetLoadError as e:
            logger.warning("Image block %s replaced with placeholder: %s", block.asset_key, e.reason)
            ctx.missing_assets.append(block.asset_key)
            self._place_text(ctx, IMAGE_ERROR_TEXT, style, ctx.left, ctx.column_width, kind="image_error")
            return

        caption_font = self.fonts.get_font(CAPTION_FONT_SIZE)
        caption_lines = flow_lines(block.caption, ctx.column_width, caption_font) if block.caption else []
        caption_height = block_height(len(caption_lines), CAPTION_FONT_SIZE, CAPTION_METRICS)

        self._ensure_room(ctx, self._margin_before(ctx, style.margin_before) + height + caption_height)
        ctx.advance(self._margin_before(ctx, style.margin_before))

        if style.alignment is Alignment.CENTER:
            left = ctx.left + (ctx.column_width - width) / 2
        else:
            left = ctx.left
        x, y, w, h = box_to_canvas(left, ctx.cursor_y, width, height, ctx.page_height)
        draw_image(ctx.canvas, image_bytes, x, y, w, h)
        ctx.record("image", block.asset_key, ctx.cursor_y, height)
        ctx.advance(height)

        if caption_lines:
            draw_lines(ctx.canvas, caption_lines, ctx.left, ctx.cursor_y, ctx.column_width,
                       caption_font, CAPTION_METRICS, Alignment.CENTER, ctx.page_height)
            ctx.record("caption", block.caption, ctx.cursor_y, caption_height)
            ctx.advance(caption_height)

        ctx.advance(style.margin_after)
