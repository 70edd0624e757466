"""Clearance Report Pipeline

Main orchestration logic for rendering a clearance certificate.
"""
import logging
from typing import Dict, Optional

from .asset_loader import AssetLoader
from .config import LOGO_BOX
from .default_content import default_template
from .document_builder import (
    FixedPageRenderer,
    FontManager,
    LayoutEngine,
    PageBand,
    PageBandRenderer,
    RenderContext,
    TableRenderer,
    embed_image,
    serialize,
)
from .exceptions import AssetLoadError, InvalidRecordError
from .input_adapter import (
    BACKGROUND_KEY,
    LOGO_KEY,
    build_document_plan,
    collect_asset_refs,
    substitute_tokens,
)
from .models import ClearanceRecord, DocumentTemplate
from .report_options import ReportOptions
from .report_result import ReportResult

logger = logging.getLogger(__name__)


class ReportPipeline:
    """Clearance certificate pipeline orchestrator.

    This class orchestrates one render:
    1. Validation - the record must be a ClearanceRecord
    2. Planning - merge record and template into the content plan
    3. Assets - fetch logo, cover artwork and photographs (bounded timeout)
    4. Layout - place the plan onto pages of a fresh RenderContext
    5. Serialization - finish the PDF and derive its filename

    The pipeline itself holds only configuration; every render allocates
    its own RenderContext, so one pipeline may serve concurrent renders.

    Attributes:
        options: Render options
        loader: Asset loader used for every fetch
    """

    def __init__(self, options: Optional[ReportOptions] = None, loader: Optional[AssetLoader] = None):
        """Initialize pipeline with options and an optional asset loader.

        Args:
            options: Render options (defaults when None)
            loader: Asset loader (built from ``options`` when None)
        """
        self.options = options or ReportOptions()
        self.loader = loader or AssetLoader(
            timeout=self.options.asset_timeout,
            max_workers=self.options.asset_max_workers,
        )

    def generate(self, record: ClearanceRecord, template: Optional[DocumentTemplate] = None) -> ReportResult:
        """Render a clearance certificate.

        Args:
            record: Clearance record to report on
            template: Template to merge; the built-in template for the
                record's clearance type when None

        Returns:
            ReportResult with the PDF bytes and filename

        Raises:
            InvalidRecordError: If ``record`` is not a ClearanceRecord
            UnsupportedBlockError: If the plan contains an unknown block
            UnsupportedPageError: If the plan contains an unknown page variant
        """
        # Step 1: Validation
        if not isinstance(record, ClearanceRecord):
            raise InvalidRecordError(
                f"Expected a ClearanceRecord, got {type(record).__name__}"
            )
        template = template or default_template(record.clearance_type)

        # Step 2: Content plan
        plan = build_document_plan(
            record,
            template,
            column_width=self.options.column_width,
            revision=self.options.revision,
        )

        # Step 3: Assets
        refs = collect_asset_refs(record, template, logo=self.options.logo, background=self.options.background)
        assets = self.loader.fetch_all(refs)

        # Step 4: Layout
        fonts = FontManager(self.options.font_path, self.options.bold_font_path)
        band = self._build_band(record, template, assets)
        tables = TableRenderer(fonts)
        engine = LayoutEngine(
            fonts=fonts,
            bands=PageBandRenderer(fonts, band),
            tables=tables,
            fixed_pages=FixedPageRenderer(fonts, band, tables, self.options.image_quality),
            image_quality=self.options.image_quality,
        )
        ctx = RenderContext(options=self.options)
        engine.render(ctx, plan, assets)

        # Step 5: Serialization
        pdf_bytes, filename = serialize(ctx, record)
        missing = [key for key in (LOGO_KEY, BACKGROUND_KEY)
                   if refs.get(key) is not None and not isinstance(assets.get(key), bytes)]
        if band.logo is None and refs.get(LOGO_KEY) is not None and LOGO_KEY not in missing:
            missing.append(LOGO_KEY)
        result = ReportResult(
            pdf_bytes=pdf_bytes,
            filename=filename,
            page_count=len(ctx.pages),
            flowing_page_count=ctx.page_counter,
            missing_assets=missing + list(ctx.missing_assets),
            pages=ctx.pages,
        )
        logger.info(
            "Generated %s: %d pages (%d numbered), %d bytes",
            filename, result.page_count, result.flowing_page_count, result.size,
        )
        return result

    def _build_band(self, record: ClearanceRecord, template: DocumentTemplate, assets: Dict) -> PageBand:
        """Prepare header/footer assets once per render."""
        company = template.company
        return PageBand(
            logo=self._prepare_logo(assets.get(LOGO_KEY)),
            company_name=company.name,
            address_lines=company.header_lines(),
            caption=substitute_tokens(template.footer_text, record),
        )

    def _prepare_logo(self, raw) -> Optional[tuple]:
        if not isinstance(raw, bytes):
            return None
        try:
            return embed_image(raw, LOGO_BOX[0], LOGO_BOX[1], self.options.image_quality, asset_key=LOGO_KEY)
        except AssetLoadError as e:
            logger.warning("Logo unavailable, drawing placeholder box: %s", e.reason)
            return None


def generate_report(
    record: ClearanceRecord,
    template: Optional[DocumentTemplate] = None,
    options: Optional[ReportOptions] = None,
) -> bytes:
    """
    Render a clearance certificate and return the PDF bytes.

    Args:
        record: Clearance record to report on
        template: Optional template (built-in template for the type when None)
        options: Optional render options

    Returns:
        PDF document bytes
    """
    return ReportPipeline(options).generate(record, template).pdf_bytes
