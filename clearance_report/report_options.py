"""Report Options Dataclass

Configuration options for a report render.
"""
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import (
    ASSET_MAX_WORKERS,
    ASSET_TIMEOUT_SECONDS,
    DEFAULT_IMAGE_QUALITY,
    ENV_PREFIX,
    MARGIN_BOTTOM,
    MARGIN_LEFT,
    MARGIN_RIGHT,
    MARGIN_TOP,
    PAGE_SIZE,
)
from .exceptions import InvalidConfigurationError
from .models import AssetRef


@dataclass(frozen=True)
class ReportOptions:
    """Configuration options for rendering a clearance certificate.

    Attributes:
        page_size: (width, height) in points
        margin_left, margin_right, margin_top, margin_bottom: Page margins in points

        # Assets
        asset_timeout: Overall seconds to wait for logo/background/photo fetches
        asset_max_workers: Threads used to fetch assets concurrently
        image_quality: JPEG re-encode quality for embedded images (0-1]
        logo: Optional logo reference overriding the template's company logo
        background: Optional cover artwork overriding the template's background

        # Fonts
        font_path: Optional TTF used for regular text (Helvetica otherwise)
        bold_font_path: Optional TTF used for bold text

        # Document
        revision: Revision label printed on the version control page
    """

    page_size: Tuple[float, float] = PAGE_SIZE
    margin_left: float = MARGIN_LEFT
    margin_right: float = MARGIN_RIGHT
    margin_top: float = MARGIN_TOP
    margin_bottom: float = MARGIN_BOTTOM

    # Assets
    asset_timeout: float = ASSET_TIMEOUT_SECONDS
    asset_max_workers: int = ASSET_MAX_WORKERS
    image_quality: float = DEFAULT_IMAGE_QUALITY
    logo: Optional[AssetRef] = None
    background: Optional[AssetRef] = None

    # Fonts
    font_path: Optional[str] = None
    bold_font_path: Optional[str] = None

    # Document
    revision: str = "1"

    def __post_init__(self):
        """Validate configuration options after initialization."""
        if not (0.0 < self.image_quality <= 1.0):
            raise InvalidConfigurationError(
                f"image_quality must be between 0.0-1.0, got {self.image_quality}"
            )
        if self.asset_timeout <= 0:
            raise InvalidConfigurationError(
                f"asset_timeout must be positive, got {self.asset_timeout}"
            )
        if self.asset_max_workers < 1:
            raise InvalidConfigurationError(
                f"asset_max_workers must be at least 1, got {self.asset_max_workers}"
            )

        margins = (self.margin_left, self.margin_right, self.margin_top, self.margin_bottom)
        if any(m < 0 for m in margins):
            raise InvalidConfigurationError(f"Margins must not be negative, got {margins}")

        width, height = self.page_size
        if width - self.margin_left - self.margin_right <= 0:
            raise InvalidConfigurationError("Horizontal margins leave no printable width")
        if height - self.margin_top - self.margin_bottom <= 0:
            raise InvalidConfigurationError("Vertical margins leave no printable height")

    @property
    def column_width(self) -> float:
        """Printable width between the left and right margins."""
        return self.page_size[0] - self.margin_left - self.margin_right

    @classmethod
    def from_env(cls, **overrides) -> "ReportOptions":
        """
        Build options from ``CLEARANCE_REPORT_*`` environment variables.

        Recognised variables: ASSET_TIMEOUT, IMAGE_QUALITY, FONT_PATH,
        BOLD_FONT_PATH, LOGO, BACKGROUND. Keyword overrides win.

        Raises:
            InvalidConfigurationError: If a numeric variable cannot be parsed
        """
        values = {}
        try:
            if os.getenv(ENV_PREFIX + "ASSET_TIMEOUT"):
                values["asset_timeout"] = float(os.environ[ENV_PREFIX + "ASSET_TIMEOUT"])
            if os.getenv(ENV_PREFIX + "IMAGE_QUALITY"):
                values["image_quality"] = float(os.environ[ENV_PREFIX + "IMAGE_QUALITY"])
        except ValueError as e:
            raise InvalidConfigurationError(f"Invalid numeric environment setting: {e}")

        for name in ("font_path", "bold_font_path", "logo", "background"):
            value = os.getenv(ENV_PREFIX + name.upper())
            if value:
                values[name] = value

        values.update(overrides)
        return cls(**values)
