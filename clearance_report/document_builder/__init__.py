"""Document Builder Package

This package provides the paginated rendering engine for clearance
certificates:

Core Classes:
- LayoutEngine: Walks the content plan and decides page breaks
- RenderContext: Per-render mutable state (cursor, pages, canvas)
- FontManager: Font registration and measurement
- TableRenderer: Bordered grids with atomic rows
- PageBandRenderer: Header and footer bands of flowing pages
- FixedPageRenderer: Cover and version control pages

Functions:
- wrap_text / flow_lines: Greedy word-wrap
- embed_image: Scale and re-encode raster images
- serialize: Finish a render into PDF bytes and a filename
"""

from .blocks import (
    Alignment,
    BlockStyle,
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
from .fixed_pages import FixedPageRenderer
from .font_manager import Font, FontManager
from .image_embedder import embed_image, fit_within
from .layout_engine import LayoutEngine
from .output_serializer import serialize
from .page_band import PageBand, PageBandRenderer
from .render_context import DrawnElement, PageRecord, RenderContext
from .table_renderer import TableRenderer
from .text_flow import TextLine, block_height, flow_lines, measure_text, wrap_text
from . import coordinate_utils

# Expose public API
__all__ = [
    # Engine and state
    'LayoutEngine',
    'RenderContext',
    'PageRecord',
    'DrawnElement',

    # Renderers
    'FontManager',
    'Font',
    'TableRenderer',
    'PageBand',
    'PageBandRenderer',
    'FixedPageRenderer',

    # Content plan
    'Alignment',
    'BlockStyle',
    'LineMetrics',
    'HeadingBlock',
    'ParagraphBlock',
    'BulletBlock',
    'SpacerBlock',
    'TableBlock',
    'ImageBlock',
    'FixedPageSpec',
    'FlowingPageSpec',

    # Functions
    'wrap_text',
    'flow_lines',
    'block_height',
    'measure_text',
    'TextLine',
    'embed_image',
    'fit_within',
    'serialize',

    # Utilities module
    'coordinate_utils',
]
