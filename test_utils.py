"""Tests for date, time and filename helpers."""
from datetime import date

import pytest

from clearance_report.document_builder.coordinate_utils import baseline_y, box_to_canvas, flip_y_coordinate
from clearance_report.models import ClearanceRecord
from clearance_report.utils import build_report_filename, clean_filename, format_date, format_inspection_time


def test_filename_matches_documented_format():
    record = ClearanceRecord(project_id="P123", clearance_type="Friable", site_name="Test Site",
                             clearance_date=date(2024, 7, 25))
    assert build_report_filename(record) == "P123: Friable Asbestos Clearance Report - Test Site (25-07-2024).pdf"


def test_filename_uses_unknown_for_missing_fields():
    record = ClearanceRecord(clearance_type="Mixed")
    assert build_report_filename(record) == "Unknown: Mixed Asbestos Clearance Report - Unknown (Unknown).pdf"


def test_clean_filename_replaces_reserved_characters():
    assert clean_filename("P123: Friable Report - A/B Site (25-07-2024).pdf") == (
        "P123_ Friable Report - A_B Site (25-07-2024).pdf"
    )
    assert clean_filename("") == "report.pdf"


@pytest.mark.parametrize("value, expected", [
    ("00:30", "12:30 AM"),
    ("09:05", "9:05 AM"),
    ("12:00", "12:00 PM"),
    ("14:30", "2:30 PM"),
    ("23:59", "11:59 PM"),
    ("mid-morning", "mid-morning"),
    (None, None),
])
def test_format_inspection_time(value, expected):
    assert format_inspection_time(value) == expected


def test_format_date():
    assert format_date(date(2024, 7, 5)) == "05/07/2024"
    assert format_date(date(2024, 7, 5), separator="-") == "05-07-2024"
    assert format_date(None) is None


def test_coordinate_helpers():
    assert flip_y_coordinate(0, 842) == 842.0
    assert flip_y_coordinate(flip_y_coordinate(100, 842), 842) == 100
    assert box_to_canvas(10, 0, 100, 50, 842) == (10, 792.0, 100, 50)
    # Baseline sits inside the line box
    baseline = baseline_y(100, 10, 12, 842)
    assert flip_y_coordinate(112, 842) < baseline < flip_y_coordinate(100, 842)
