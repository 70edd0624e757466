"""End-to-end tests for ReportPipeline and generate_report."""
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest
import requests

from clearance_report import (
    ClearanceItem,
    ClearanceRecord,
    InvalidRecordError,
    ReportOptions,
    ReportPipeline,
    generate_report,
)
from clearance_report.config import (
    FOOTER_BAND_HEIGHT,
    IMAGE_ERROR_TEXT,
    MARGIN_BOTTOM,
    NO_ITEMS_TEXT,
    PAGE_SIZE,
)
from clearance_report.input_adapter import APPENDIX_TITLE

BOTTOM_LIMIT = PAGE_SIZE[1] - MARGIN_BOTTOM - FOOTER_BAND_HEIGHT
LONG_LOCATION = (
    "Ceiling void above the north-eastern corridor adjoining the level three plant room, "
    "including the service riser penetrations and the fire-rated bulkhead"
)


def all_labels(result, kind):
    """Labels of ``kind`` drawn on the numbered content pages."""
    return [label for page in result.pages if page.kind == "flowing" for label in page.labels(kind)]


def test_scenario_a_no_items(empty_record):
    result = ReportPipeline().generate(empty_record)

    assert result.pdf_bytes.startswith(b"%PDF")
    assert all_labels(result, "table_row") == [NO_ITEMS_TEXT]
    assert APPENDIX_TITLE not in all_labels(result, "text")
    assert result.missing_assets == []


def test_scenario_b_long_items_paginate():
    items = [ClearanceItem(location=f"{n}. {LONG_LOCATION}", material="Bonded fibre cement sheeting")
             for n in range(1, 26)]
    long_record = ClearanceRecord(
        project_id="P123", site_name="Test Site", clearance_type="Non-friable",
        clearance_date=date(2024, 7, 25), items=items,
    )
    result = ReportPipeline().generate(long_record)

    table_pages = [page for page in result.pages if page.labels("table_row")]
    assert len(table_pages) >= 2

    # Every row rendered exactly once, in order, never split
    rows = all_labels(result, "table_row")
    assert [row.split(" | ")[0] for row in rows] == [str(n) for n in range(1, 26)]
    for page in table_pages:
        for element in page.elements:
            if element.kind == "table_row":
                assert element.bottom <= BOTTOM_LIMIT + 0.01
        assert page.labels("table_header") == ["Item | Location | Material Description | Asbestos Type"]

    flowing = [page for page in result.pages if page.kind == "flowing"]
    assert [page.number for page in flowing] == list(range(1, len(flowing) + 1))
    for page in flowing:
        assert page.labels("footer") == [f"Non-friable Clearance Certificate: Test Site|{page.number}"]
    assert result.flowing_page_count == len(flowing)
    assert result.page_count == len(flowing) + 2


def test_scenario_c_bad_photo_still_renders(png_bytes):
    bad = ClearanceRecord(
        project_id="P123", site_name="Test Site", clearance_date=date(2024, 7, 25),
        items=[
            ClearanceItem(location="Eaves", material="Fibre cement", photograph=b"\x00not-a-jpeg"),
            ClearanceItem(location="Laundry", material="Vinyl tiles", photograph=png_bytes),
        ],
    )
    result = ReportPipeline().generate(bad)

    assert result.pdf_bytes.startswith(b"%PDF")
    assert result.missing_assets == ["item-1-photo"]
    assert all_labels(result, "image_error") == [IMAGE_ERROR_TEXT]
    assert all_labels(result, "image") == ["item-2-photo"]

    # The item's heading and details precede the placeholder
    appendix = [page for page in result.pages if APPENDIX_TITLE in page.labels("text")][0]
    labels = [e.label for e in appendix.elements if e.kind in ("text", "image_error")]
    position = labels.index(IMAGE_ERROR_TEXT)
    assert labels[position - 2] == "Item 1: Eaves"
    assert labels[position - 1].startswith("Material: Fibre cement")


def test_cover_and_version_control_are_unnumbered(record):
    result = ReportPipeline().generate(record)
    assert [page.kind for page in result.pages[:2]] == ["cover", "version_control"]
    assert [page.number for page in result.pages[:2]] == [None, None]
    assert result.pages[2].number == 1
    assert result.pages[2].footer_caption == "Friable Clearance Certificate: Test Site"


def test_output_is_byte_identical_across_runs(png_bytes):
    photographed = ClearanceRecord(
        project_id="P123", site_name="Test Site", clearance_date=date(2024, 7, 25),
        clearance_type="Friable",
        items=[ClearanceItem(location="Eaves", material="Fibre cement", photograph=png_bytes)],
    )
    options = ReportOptions(logo=png_bytes)
    assert generate_report(photographed, options=options) == generate_report(photographed, options=options)


def test_filename_format(record):
    result = ReportPipeline().generate(record)
    assert result.filename == "P123: Friable Asbestos Clearance Report - Test Site (25-07-2024).pdf"


def test_logo_is_drawn_in_every_header(record, png_bytes):
    result = ReportPipeline(ReportOptions(logo=png_bytes)).generate(record)
    for page in result.pages:
        if page.kind == "flowing":
            assert page.labels("logo") == ["logo"]


def test_unreachable_logo_falls_back_to_placeholder_box(record):
    result = ReportPipeline(ReportOptions(logo="https://branding.example.com/logo.png")).generate(record)
    assert "logo" in result.missing_assets
    flowing = [page for page in result.pages if page.kind == "flowing"]
    assert all(page.labels("logo") == ["logo placeholder"] for page in flowing)


def test_photo_urls_are_fetched(monkeypatch, png_bytes):
    class Response:
        content = png_bytes

        def raise_for_status(self):
            pass

    monkeypatch.setattr(requests, "get", lambda url, timeout=None: Response())
    record = ClearanceRecord(items=[ClearanceItem(location="Eaves", material="Fibre cement",
                                                  photograph="https://photos.example.com/eaves.jpg")])
    result = ReportPipeline().generate(record)
    assert all_labels(result, "image") == ["item-1-photo"]
    assert result.is_complete


def test_incomplete_record_still_renders():
    result = ReportPipeline().generate(ClearanceRecord())
    assert result.pdf_bytes.startswith(b"%PDF")
    assert result.filename == "Unknown: Non-friable Asbestos Clearance Report - Unknown (Unknown).pdf"
    assert all_labels(result, "footer")[0] == "Non-friable Clearance Certificate: Unknown Site|1"


def test_non_record_input_is_rejected():
    with pytest.raises(InvalidRecordError):
        generate_report({"projectId": "P123"})


def test_undecodable_cover_artwork_is_reported_missing(record):
    result = ReportPipeline(ReportOptions(background=b"\x00not-an-image")).generate(record)
    assert result.missing_assets == ["background"]
    assert not result.is_complete
    assert result.pages[0].labels("overlay") == ["cover overlay"]


def test_concurrent_renders_match_serial_renders(png_bytes):
    records = [
        ClearanceRecord(
            project_id=f"P{n}", site_name=f"Site {n}", clearance_date=date(2024, 7, n),
            clearance_type=("Non-friable", "Friable", "Mixed")[n % 3],
            items=[ClearanceItem(location=f"Room {i}", material="Fibre cement", photograph=png_bytes)
                   for i in range(1, n + 1)],
        )
        for n in range(1, 7)
    ]
    serial = [generate_report(record) for record in records]

    with ThreadPoolExecutor(max_workers=6) as executor:
        parallel = list(executor.map(generate_report, records))

    assert parallel == serial
