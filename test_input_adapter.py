"""Tests for token substitution, section parsing and the document plan."""
from datetime import date

import pytest

from clearance_report.config import NO_PHOTO_TEXT
from clearance_report.document_builder import (
    BulletBlock,
    FixedPageSpec,
    FlowingPageSpec,
    HeadingBlock,
    ImageBlock,
    ParagraphBlock,
    TableBlock,
)
from clearance_report.input_adapter import (
    APPENDIX_TITLE,
    build_document_plan,
    collect_asset_refs,
    items_table,
    section_blocks,
    substitute_tokens,
)
from clearance_report.models import ClearanceItem, ClearanceRecord


def blocks_of(plan, title):
    return [page for page in plan if isinstance(page, FlowingPageSpec) and page.title == title][0].blocks


def texts(blocks, kind=ParagraphBlock):
    return [block.text for block in blocks if isinstance(block, kind)]


def test_tokens_are_replaced_with_record_values(record):
    text = "{CLIENT_NAME} engaged us at {SITE_NAME} ({PROJECT_ID}) on {CLEARANCE_DATE} at {INSPECTION_TIME}."
    assert substitute_tokens(text, record) == (
        "Acme Property Group engaged us at Test Site (P123) on 25/07/2024 at 2:30 PM."
    )


def test_type_tokens(record):
    assert substitute_tokens("{REPORT_TYPE} / {ASBESTOS_TYPE}", record) == "Friable / friable"


def test_missing_fields_use_fallback_literals():
    blank = ClearanceRecord()
    text = "{SITE_NAME}|{CLIENT_NAME}|{CLEARANCE_DATE}|{LAA_NAME}|{LAA_LICENSE}|{INSPECTION_TIME}|{ASBESTOS_REMOVALIST}"
    assert substitute_tokens(text, blank) == (
        "Unknown Site|Unknown Client|Unknown Date|Unknown LAA|AA00031|Inspection Time|Unknown Removalist"
    )


def test_unknown_token_stays_visible(record):
    assert substitute_tokens("Signed {SIGNATURE_IMAGE}", record) == "Signed [SIGNATURE_IMAGE]"


def test_lowercase_braces_are_left_alone(record):
    assert substitute_tokens("{not a token}", record) == "{not a token}"


def test_air_monitoring_text_depends_on_record(record):
    assert substitute_tokens("{AIR_MONITORING_TEXT}", record) == ""
    monitored = ClearanceRecord(air_monitoring=True)
    assert "0.01 fibres per mL" in substitute_tokens("{AIR_MONITORING_TEXT}", monitored)


def test_section_blocks_split_paragraphs_and_bullets():
    text = "Intro line.\n\n• first\n- second\n[BULLET]third\n\nClosing line."
    blocks = section_blocks(text)
    assert blocks == [
        ParagraphBlock("Intro line."),
        BulletBlock("first"),
        BulletBlock("second"),
        BulletBlock("third"),
        ParagraphBlock("Closing line."),
    ]


def test_section_blocks_keep_hard_line_breaks():
    assert section_blocks("Jordan Lee\nLicensed Asbestos Assessor - AA00123") == [
        ParagraphBlock("Jordan Lee\nLicensed Asbestos Assessor - AA00123")
    ]


def test_section_blocks_drop_empty_paragraphs():
    assert section_blocks("First\n\n\n\n   \n\nSecond") == [ParagraphBlock("First"), ParagraphBlock("Second")]
    assert section_blocks("") == []


def test_plan_order(record, template):
    plan = build_document_plan(record, template)
    assert [type(page) for page in plan] == [FixedPageSpec, FixedPageSpec] + [FlowingPageSpec] * 3
    assert [page.kind for page in plan[:2]] == ["cover", "version_control"]
    assert [page.title for page in plan[2:]] == ["main", "background", "appendix"]


def test_no_items_means_no_appendix_and_empty_table(empty_record, template):
    plan = build_document_plan(empty_record, template)
    assert len(plan) == 4
    tables = [block for block in blocks_of(plan, "main") if isinstance(block, TableBlock)]
    assert len(tables) == 1
    assert list(tables[0].rows) == []


def test_main_body_sections_in_order(record, template):
    headings = texts(blocks_of(build_document_plan(record, template), "main"), HeadingBlock)
    assert headings == ["INSPECTION DETAILS", "INSPECTION EXCLUSIONS", "CLEARANCE CERTIFICATION"]


def test_record_notes_get_their_own_section(template):
    noted = ClearanceRecord(site_name="Test Site", notes="Access via rear lane.")
    main = blocks_of(build_document_plan(noted, template), "main")
    assert "NOTES" in texts(main, HeadingBlock)
    assert "Access via rear lane." in texts(main)


def test_background_wording_follows_clearance_type(record, template):
    headings = texts(blocks_of(build_document_plan(record, template), "background"), HeadingBlock)
    assert headings[0] == "BACKGROUND INFORMATION REGARDING FRIABLE CLEARANCE INSPECTIONS"
    assert "LEGISLATIVE REQUIREMENTS" in headings


def test_appendix_items_have_photo_or_placeholder(template, png_bytes):
    record = ClearanceRecord(
        site_name="Test Site",
        clearance_date=date(2024, 7, 25),
        items=[
            ClearanceItem(location="Eaves", material="Fibre cement", photograph=png_bytes),
            ClearanceItem(location="Laundry", material="Vinyl tiles", notes="Underlay removed"),
        ],
    )
    appendix = blocks_of(build_document_plan(record, template), "appendix")
    assert appendix[0] == HeadingBlock(APPENDIX_TITLE)

    images = [block for block in appendix if isinstance(block, ImageBlock)]
    assert [image.asset_key for image in images] == ["item-1-photo"]
    assert NO_PHOTO_TEXT in texts(appendix)
    assert "Notes: Underlay removed" in texts(appendix)
    assert texts(appendix, HeadingBlock)[1:] == ["Item 1: Eaves", "Item 2: Laundry"]


def test_items_table_scales_to_column(record):
    table = items_table(record, column_width=400)
    assert sum(table.column_widths) == pytest.approx(400)
    assert [list(row) for row in table.rows] == [
        ["1", "Kitchen splashback", "Fibre cement sheet", "non-friable"],
        ["2", "Bathroom floor", "Vinyl floor tiles", "non-friable"],
    ]
    assert table.caption.startswith("Table 1")


def test_cover_details_are_substituted(record, template):
    cover = build_document_plan(record, template)[0]
    assert ("Site:", "Test Site") in cover.details
    assert ("Clearance Date:", "25/07/2024") in cover.details
    assert cover.background_key == "background"


def test_plan_is_a_pure_function(record, template):
    assert build_document_plan(record, template) == build_document_plan(record, template)


def test_asset_refs_cover_branding_and_photos(template):
    record = ClearanceRecord(items=[
        ClearanceItem(location="A", material="B", photograph="https://example.com/a.jpg"),
        ClearanceItem(location="C", material="D"),
    ])
    refs = collect_asset_refs(record, template, logo="logo.png")
    assert refs == {"logo": "logo.png", "background": None, "item-1-photo": "https://example.com/a.jpg"}
