"""Report Result Dataclass

Result of rendering a clearance certificate.
"""
from dataclasses import dataclass, field
from typing import List

from .document_builder.render_context import PageRecord


@dataclass
class ReportResult:
    """Result from the report pipeline.

    Attributes:
        pdf_bytes: The finished PDF document
        filename: Deterministic suggested filename (may contain ":" and "/")

        # Pagination
        page_count: Physical pages, including cover and version control
        flowing_page_count: Numbered content pages (the highest footer number)

        # Degraded Output
        missing_assets: Asset keys rendered as placeholders

        # Draw Log
        pages: Per-page record of everything drawn (kind, number, elements)
    """

    pdf_bytes: bytes
    filename: str

    # Pagination
    page_count: int = 0
    flowing_page_count: int = 0

    # Degraded Output
    missing_assets: List[str] = field(default_factory=list)

    # Draw Log
    pages: List[PageRecord] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True if every referenced asset was embedded."""
        return not self.missing_assets

    @property
    def size(self) -> int:
        return len(self.pdf_bytes)
