"""Input Adapter Module

Merges a ClearanceRecord with a DocumentTemplate into the ordered content
plan consumed by the layout engine. Pure transform: no I/O, no drawing.
"""
import logging
import re
from typing import Dict, List, Optional, Union

from .config import (
    BACKGROUND_KEY,
    ITEM_TABLE_COLUMNS,
    LOGO_KEY,
    NO_PHOTO_TEXT,
    TOKEN_FALLBACKS,
)
from .default_content import BACKGROUND_SECTIONS, MAIN_BODY_SECTIONS, section_title
from .document_builder.blocks import (
    BlockStyle,
    BulletBlock,
    FixedPageSpec,
    FlowingPageSpec,
    HeadingBlock,
    ImageBlock,
    ParagraphBlock,
    SpacerBlock,
    TableBlock,
)
from .models import AssetRef, ClearanceRecord, DocumentTemplate
from .utils import format_date, format_inspection_time

logger = logging.getLogger(__name__)

PageSpec = Union[FixedPageSpec, FlowingPageSpec]

TOKEN_PATTERN = re.compile(r'\{([A-Z][A-Z0-9_]*)\}')
BULLET_PREFIXES = ("[BULLET]", "•", "-")
PARAGRAPH_BREAK = re.compile(r'\n\s*\n')

ITEMS_TABLE_CAPTION = "Table 1: Asbestos Removal Areas"
APPENDIX_TITLE = "APPENDIX A: PHOTOGRAPHS"
ITEM_HEADING_STYLE = BlockStyle(font_size=11, bold=True, margin_before=8.0, margin_after=4.0)
AIR_MONITORING_RESULT = (
    "Air monitoring was conducted and results were below the clearance indicator "
    "of 0.01 fibres per mL."
)


def photo_key(index: int) -> str:
    """Asset key of the photograph of the 1-based item ``index``."""
    return f"item-{index}-photo"


def token_values(record: ClearanceRecord) -> Dict[str, Optional[str]]:
    """
    Map token names to the record's values.

    A value of None means the field is missing and the fallback literal
    is used instead.
    """
    clearance_date = format_date(record.clearance_date)
    if record.items:
        appendix = "Photographs of the Asbestos Removal Area are presented in Appendix A."
    else:
        appendix = ""

    return {
        "CLIENT_NAME": record.client_name,
        "SITE_NAME": record.site_name,
        "PROJECT_ID": record.project_id,
        "ASBESTOS_TYPE": record.clearance_type.lower(),
        "REPORT_TYPE": record.clearance_type,
        "ASBESTOS_REMOVALIST": record.removalist_name,
        "LAA_NAME": record.assessor_name,
        "LAA_LICENSE": record.assessor_licence,
        "INSPECTION_TIME": format_inspection_time(record.inspection_time),
        "INSPECTION_DATE": clearance_date,
        "CLEARANCE_DATE": clearance_date,
        "AIR_MONITORING_TEXT": AIR_MONITORING_RESULT if record.air_monitoring else "",
        "APPENDIX_REFERENCES": appendix,
    }


def substitute_tokens(text: str, record: ClearanceRecord) -> str:
    """
    Replace ``{TOKEN}`` placeholders with record values.

    Missing fields become their fallback literal ("Unknown Site", ...);
    unknown token names become ``[TOKEN]`` so the defect stays visible.

    Args:
        text: Template text
        record: Record supplying the values

    Returns:
        Text with every placeholder replaced
    """
    values = token_values(record)

    def replace(match):
        name = match.group(1)
        if name not in values:
            logger.warning("Unknown template token {%s}", name)
            return f"[{name}]"
        value = values[name]
        if value is None:
            return TOKEN_FALLBACKS.get(name, "")
        return str(value)

    return TOKEN_PATTERN.sub(replace, text or "")


def _bullet_text(line: str) -> Optional[str]:
    for prefix in BULLET_PREFIXES:
        if line.startswith(prefix):
            return line[len(prefix):].strip()
    return None


def section_blocks(text: str) -> List:
    """
    Split section text into paragraph and bullet blocks.

    Blank lines separate paragraphs; single newlines inside a paragraph
    are kept as hard line breaks. Lines starting with "•", "-" or
    "[BULLET]" become bullet blocks.
    """
    blocks = []
    for chunk in PARAGRAPH_BREAK.split(text or ""):
        paragraph_lines = []
        for raw_line in chunk.splitlines():
            line = raw_line.strip()
            if not line:
                continue
            bullet = _bullet_text(line)
            if bullet is None:
                paragraph_lines.append(line)
                continue
            if paragraph_lines:
                blocks.append(ParagraphBlock("\n".join(paragraph_lines)))
                paragraph_lines = []
            if bullet:
                blocks.append(BulletBlock(bullet))
        if paragraph_lines:
            blocks.append(ParagraphBlock("\n".join(paragraph_lines)))
    return blocks


def _section(template: DocumentTemplate, name: str, record: ClearanceRecord, heading: bool = True) -> List:
    body = section_blocks(substitute_tokens(template.section(name), record))
    if not body:
        return []
    if heading:
        return [HeadingBlock(section_title(template, name))] + body
    return body


def items_table(record: ClearanceRecord, column_width: Optional[float] = None) -> TableBlock:
    """
    Build Table 1, the list of removed materials.

    Column widths come from ITEM_TABLE_COLUMNS, scaled to ``column_width``
    when given so the grid always spans the printable column.
    """
    headers = [name for name, _ in ITEM_TABLE_COLUMNS]
    widths = [width for _, width in ITEM_TABLE_COLUMNS]
    if column_width:
        scale = column_width / sum(widths)
        widths = [width * scale for width in widths]

    rows = [
        [str(index), item.location or "", item.material or "", item.asbestos_type or ""]
        for index, item in enumerate(record.items, start=1)
    ]
    return TableBlock(headers=headers, rows=rows, column_widths=widths, caption=ITEMS_TABLE_CAPTION)


def _cover_page(record: ClearanceRecord, template: DocumentTemplate) -> FixedPageSpec:
    details = (
        ("Site:", substitute_tokens("{SITE_NAME}", record)),
        ("Client:", substitute_tokens("{CLIENT_NAME}", record)),
        ("Project:", substitute_tokens("{PROJECT_ID}", record)),
        ("Clearance Date:", substitute_tokens("{CLEARANCE_DATE}", record)),
        ("Clearance Type:", substitute_tokens("{REPORT_TYPE}", record)),
    )
    return FixedPageSpec(
        kind="cover",
        title=substitute_tokens(template.cover_title, record),
        subtitle=substitute_tokens(template.cover_subtitle, record),
        details=details,
        background_key=BACKGROUND_KEY,
    )


def _version_control_page(record: ClearanceRecord, template: DocumentTemplate, revision: str) -> FixedPageSpec:
    company = template.company
    prepared_for = (
        substitute_tokens("{CLIENT_NAME}", record),
        substitute_tokens("{SITE_NAME}", record),
    )
    prepared_by = tuple([company.name] + company.header_lines())
    if company.abn:
        prepared_by += (f"ABN: {company.abn}",)

    issue_date = substitute_tokens("{CLEARANCE_DATE}", record)
    details = (
        ("Document", substitute_tokens("{REPORT_TYPE} Asbestos Clearance Certificate", record)),
        ("Project ID", substitute_tokens("{PROJECT_ID}", record)),
        ("Assessor", substitute_tokens("{LAA_NAME} ({LAA_LICENSE})", record)),
        ("Date of Issue", issue_date),
    )
    return FixedPageSpec(
        kind="version_control",
        title=substitute_tokens(template.cover_title, record),
        details=details,
        sections=(("PREPARED FOR:", prepared_for), ("PREPARED BY:", prepared_by)),
        revisions=((revision, issue_date, "Initial issue"),),
    )


def _main_body(record: ClearanceRecord, template: DocumentTemplate, column_width: Optional[float]) -> FlowingPageSpec:
    blocks = []
    blocks += _section(template, "inspection_details", record)
    blocks.append(items_table(record, column_width))
    for name in MAIN_BODY_SECTIONS[1:]:
        blocks += _section(template, name, record)

    if record.notes:
        blocks.append(HeadingBlock("NOTES"))
        blocks += section_blocks(record.notes)

    sign_off = _section(template, "sign_off", record, heading=False)
    if sign_off:
        blocks.append(SpacerBlock(12.0))
        blocks += sign_off
    return FlowingPageSpec(blocks=blocks, title="main")


def _background(record: ClearanceRecord, template: DocumentTemplate) -> FlowingPageSpec:
    blocks = []
    for name in BACKGROUND_SECTIONS:
        blocks += _section(template, name, record)
    return FlowingPageSpec(blocks=blocks, title="background")


def _appendix(record: ClearanceRecord) -> FlowingPageSpec:
    blocks = [HeadingBlock(APPENDIX_TITLE)]
    for index, item in enumerate(record.items, start=1):
        blocks.append(HeadingBlock(f"Item {index}: {item.location or 'Unspecified location'}",
                                   style=ITEM_HEADING_STYLE))
        blocks.append(ParagraphBlock(
            f"Material: {item.material or 'Not described'}\n"
            f"Asbestos type: {item.asbestos_type or 'Not recorded'}"
        ))
        if item.notes:
            blocks.append(ParagraphBlock(f"Notes: {item.notes}"))
        if item.photograph is not None:
            blocks.append(ImageBlock(photo_key(index), caption=f"Photograph {index}: {item.location}"))
        else:
            blocks.append(ParagraphBlock(NO_PHOTO_TEXT))
    return FlowingPageSpec(blocks=blocks, title="appendix")


def build_document_plan(
    record: ClearanceRecord,
    template: DocumentTemplate,
    column_width: Optional[float] = None,
    revision: str = "1",
) -> List[PageSpec]:
    """
    Build the ordered content plan for a record.

    Order: cover, version control, main body, background information and,
    when the record has items, the Appendix A photographs.

    Args:
        record: Clearance record
        template: Template supplying section texts and company details
        column_width: Printable width used to scale the items table
        revision: Revision label for the version control page

    Returns:
        List of FixedPageSpec / FlowingPageSpec
    """
    plan: List[PageSpec] = [
        _cover_page(record, template),
        _version_control_page(record, template, revision),
        _main_body(record, template, column_width),
        _background(record, template),
    ]
    if record.items:
        plan.append(_appendix(record))

    logger.debug(
        "Built plan with %d page specs (%d flowing blocks)",
        len(plan),
        sum(len(page.blocks) for page in plan if isinstance(page, FlowingPageSpec)),
    )
    return plan


def collect_asset_refs(
    record: ClearanceRecord,
    template: DocumentTemplate,
    logo: Optional[AssetRef] = None,
    background: Optional[AssetRef] = None,
) -> Dict[str, Optional[AssetRef]]:
    """
    List every asset the plan refers to, keyed by asset key.

    ``logo`` and ``background`` override the template's references.
    """
    refs: Dict[str, Optional[AssetRef]] = {
        LOGO_KEY: logo if logo is not None else template.company.logo,
        BACKGROUND_KEY: background if background is not None else template.background,
    }
    for index, item in enumerate(record.items, start=1):
        if item.photograph is not None:
            refs[photo_key(index)] = item.photograph
    return refs
