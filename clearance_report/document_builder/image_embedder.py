"""Image Embedder Module

Decodes raster images, scales them down to fit a bounding box and
re-encodes them as JPEG to bound the size of the output document.
"""
import io
import logging
from typing import Tuple

from PIL import Image as PILImage
from reportlab.lib.utils import ImageReader

from ..config import DEFAULT_IMAGE_QUALITY
from ..exceptions import AssetLoadError

logger = logging.getLogger(__name__)


def fit_within(width: float, height: float, max_width: float, max_height: float) -> Tuple[int, int]:
    """
    Scale (width, height) down to fit (max_width, max_height), keeping aspect ratio.

    Images are never scaled up. Results are whole pixels, at least 1 and
    never above the box.

    Examples:
        >>> fit_within(1600, 1200, 400, 400)
        (400, 300)
        >>> fit_within(100, 50, 400, 400)
        (100, 50)
    """
    ratio = min(max_width / width, max_height / height, 1.0)
    scaled_width = max(1, min(int(max_width), round(width * ratio)))
    scaled_height = max(1, min(int(max_height), round(height * ratio)))
    return scaled_width, scaled_height


def embed_image(
    raw_bytes: bytes,
    max_width: float,
    max_height: float,
    quality: float = DEFAULT_IMAGE_QUALITY,
    asset_key: str = "image",
) -> Tuple[bytes, int, int]:
    """
    Prepare an image for embedding.

    One pixel maps to one point, so the returned size is also the rendered
    box on the page.

    Args:
        raw_bytes: Encoded image (any format Pillow can decode)
        max_width: Maximum rendered width in points
        max_height: Maximum rendered height in points
        quality: JPEG quality in (0, 1]
        asset_key: Asset identity used in error messages

    Returns:
        Tuple of (jpeg_bytes, width, height)

    Raises:
        AssetLoadError: If the bytes cannot be decoded
    """
    if not raw_bytes:
        raise AssetLoadError(asset_key, "empty image data")

    try:
        with PILImage.open(io.BytesIO(raw_bytes)) as img:
            img.load()
            width, height = fit_within(img.width, img.height, max_width, max_height)
            rgb = _flatten_to_rgb(img)
            if (width, height) != rgb.size:
                rgb = rgb.resize((width, height), PILImage.LANCZOS)

            out = io.BytesIO()
            rgb.save(out, format="JPEG", quality=int(round(quality * 100)))
    except (OSError, ValueError, PILImage.DecompressionBombError) as e:
        logger.warning("Could not decode image %s: %s", asset_key, e)
        raise AssetLoadError(asset_key, str(e))

    return out.getvalue(), width, height


def _flatten_to_rgb(img: PILImage.Image) -> PILImage.Image:
    """Convert to RGB, compositing any transparency onto white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = PILImage.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    return img.convert("RGB")


def draw_image(canvas, image_bytes: bytes, x: float, y: float, width: float, height: float):
    """Draw prepared JPEG bytes with the bottom-left corner at (x, y)."""
    canvas.drawImage(ImageReader(io.BytesIO(image_bytes)), x, y, width=width, height=height)
