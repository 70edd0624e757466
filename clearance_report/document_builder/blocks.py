"""Content Blocks and Page Specifications

The ordered content plan consumed by the layout engine. A plan is a list of
PageSpec values; flowing pages carry ContentBlocks, fixed-layout pages are
drawn by bespoke routines without pagination.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..config import (
    BODY_FONT_SIZE,
    HEADING_FONT_SIZE,
    LINE_SPACING_MULTIPLIER,
    PHOTO_MAX_HEIGHT,
    PHOTO_MAX_WIDTH,
    TABLE_FONT_SIZE,
    TABLE_LINE_HEIGHT,
)


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class LineMetrics:
    """Line height rule for a block.

    Two modes:
    - proportional: line height = font size * multiplier
    - fixed: a constant line height regardless of font size

    Use the ``proportional`` and ``fixed`` constructors rather than
    building instances directly.
    """

    mode: str
    value: float

    @classmethod
    def proportional(cls, multiplier: float = LINE_SPACING_MULTIPLIER) -> "LineMetrics":
        return cls("proportional", multiplier)

    @classmethod
    def fixed(cls, points: float) -> "LineMetrics":
        return cls("fixed", points)

    def line_height(self, font_size: float) -> float:
        if self.mode == "fixed":
            return self.value
        return font_size * self.value


@dataclass(frozen=True)
class BlockStyle:
    """Typography and spacing shared by every block variant."""

    font_size: float = BODY_FONT_SIZE
    bold: bool = False
    alignment: Alignment = Alignment.LEFT
    margin_before: float = 0.0
    margin_after: float = 6.0
    line_metrics: LineMetrics = field(default_factory=LineMetrics.proportional)


HEADING_STYLE = BlockStyle(font_size=HEADING_FONT_SIZE, bold=True, margin_before=6.0, margin_after=6.0)
BODY_STYLE = BlockStyle(alignment=Alignment.JUSTIFY)
BULLET_STYLE = BlockStyle(margin_after=3.0)
TABLE_STYLE = BlockStyle(
    font_size=TABLE_FONT_SIZE,
    margin_before=4.0,
    margin_after=10.0,
    line_metrics=LineMetrics.fixed(TABLE_LINE_HEIGHT),
)
IMAGE_STYLE = BlockStyle(alignment=Alignment.CENTER, margin_before=4.0, margin_after=10.0)


@dataclass(frozen=True)
class HeadingBlock:
    text: str
    style: BlockStyle = HEADING_STYLE


@dataclass(frozen=True)
class ParagraphBlock:
    text: str
    style: BlockStyle = BODY_STYLE


@dataclass(frozen=True)
class BulletBlock:
    text: str
    style: BlockStyle = BULLET_STYLE
    bullet: str = "•"


@dataclass(frozen=True)
class SpacerBlock:
    height: float
    style: BlockStyle = BlockStyle(margin_after=0.0)


@dataclass(frozen=True)
class TableBlock:
    """A bordered grid with caller-supplied column widths.

    An empty ``rows`` list renders a single placeholder row.
    """

    headers: Sequence[str]
    rows: Sequence[Sequence[str]]
    column_widths: Sequence[float]
    style: BlockStyle = TABLE_STYLE
    caption: Optional[str] = None


@dataclass(frozen=True)
class ImageBlock:
    """An embedded raster image.

    ``asset_key`` names an entry in the asset map fetched before layout.
    """

    asset_key: str
    max_width: float = PHOTO_MAX_WIDTH
    max_height: float = PHOTO_MAX_HEIGHT
    caption: Optional[str] = None
    style: BlockStyle = IMAGE_STYLE



@dataclass(frozen=True)
class FixedPageSpec:
    """A bespoke, non-flowing page (cover or version control).

    Attributes:
        kind: "cover" or "version_control"
        title, subtitle: Page title lines
        details: Label/value pairs (cover project details, document details)
        sections: Labelled groups of lines (prepared for / prepared by)
        revisions: Revision history rows (version control page)
        background_key: Asset key of optional cover artwork
    """

    kind: str
    title: str = ""
    subtitle: str = ""
    details: Tuple[Tuple[str, str], ...] = ()
    sections: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()
    revisions: Tuple[Tuple[str, ...], ...] = ()
    background_key: Optional[str] = None


@dataclass(frozen=True)
class FlowingPageSpec:
    """A run of content that starts on a fresh page and flows onto as many
    pages as it needs, each decorated with the header and footer bands."""

    blocks: List = field(default_factory=list)
    title: Optional[str] = None
