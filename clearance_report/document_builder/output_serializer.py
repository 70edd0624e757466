"""Output Serializer

Finalizes the pages of a render into one PDF byte buffer and derives the
suggested filename.
"""
import logging
from typing import Tuple

from ..utils import build_report_filename
from .render_context import RenderContext

logger = logging.getLogger(__name__)


def serialize(ctx: RenderContext, record) -> Tuple[bytes, str]:
    """
    Finish the document held by ``ctx``.

    Args:
        ctx: Render context whose pages are complete
        record: ClearanceRecord the document was rendered from

    Returns:
        Tuple of (pdf_bytes, suggested_filename)
    """
    ctx.close_page()
    ctx.canvas.save()
    pdf_bytes = ctx.buffer.getvalue()
    ctx.buffer.close()

    filename = build_report_filename(record)
    logger.debug("Serialized %d pages (%d bytes) as %s", len(ctx.pages), len(pdf_bytes), filename)
    return pdf_bytes, filename
