"""Shared pytest fixtures for the clearance report tests."""
import io
from datetime import date

import pytest
import requests
from PIL import Image

from clearance_report.default_content import default_template
from clearance_report.document_builder import (
    FixedPageRenderer,
    FontManager,
    LayoutEngine,
    PageBand,
    PageBandRenderer,
    RenderContext,
    TableRenderer,
)
from clearance_report.models import ClearanceItem, ClearanceRecord
from clearance_report.report_options import ReportOptions

FOOTER_CAPTION = "Friable Clearance Certificate: Test Site"


def make_image(width=800, height=600, fmt="PNG", mode="RGB", color=(200, 40, 40)) -> bytes:
    """Encode a solid-colour test image."""
    if mode == "RGBA":
        color = color + (128,)
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Fail any test that reaches for the network without patching it."""
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("network access disabled in tests")
    monkeypatch.setattr(requests, "get", refuse)


@pytest.fixture
def png_bytes() -> bytes:
    return make_image()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image(1600, 1200, fmt="JPEG")


@pytest.fixture
def record() -> ClearanceRecord:
    return ClearanceRecord(
        project_id="P123",
        site_name="Test Site",
        client_name="Acme Property Group",
        clearance_date=date(2024, 7, 25),
        clearance_type="Friable",
        assessor_name="Jordan Lee",
        assessor_licence="AA00123",
        removalist_name="Safe Removals Pty Ltd",
        inspection_time="14:30",
        items=[
            ClearanceItem(location="Kitchen splashback", material="Fibre cement sheet"),
            ClearanceItem(location="Bathroom floor", material="Vinyl floor tiles", notes="Adhesive removed"),
        ],
    )


@pytest.fixture
def empty_record() -> ClearanceRecord:
    return ClearanceRecord(
        project_id="P200",
        site_name="Empty Site",
        clearance_date=date(2024, 1, 5),
        clearance_type="Non-friable",
    )


@pytest.fixture
def template():
    return default_template("Friable")


@pytest.fixture
def options() -> ReportOptions:
    return ReportOptions()


@pytest.fixture
def ctx(options) -> RenderContext:
    return RenderContext(options=options)


@pytest.fixture
def fonts() -> FontManager:
    return FontManager()


@pytest.fixture
def band() -> PageBand:
    return PageBand(
        company_name="Lancaster & Dickenson Consulting Pty Ltd",
        address_lines=["4/6 Dacre Street", "Mitchell ACT 2911"],
        caption=FOOTER_CAPTION,
    )


@pytest.fixture
def bands(fonts, band) -> PageBandRenderer:
    return PageBandRenderer(fonts, band)


@pytest.fixture
def engine(fonts, band, bands) -> LayoutEngine:
    tables = TableRenderer(fonts)
    return LayoutEngine(
        fonts=fonts,
        bands=bands,
        tables=tables,
        fixed_pages=FixedPageRenderer(fonts, band, tables, 0.8),
        image_quality=0.8,
    )
