"""Utilities Module

Helper functions for dates, times and report filenames.
"""
import re
from datetime import date
from typing import Optional

from .config import FILENAME_UNKNOWN


def format_date(value: Optional[date], separator: str = "/") -> Optional[str]:
    """
    Format a date day-first (en-GB), e.g. 25/07/2024.

    Args:
        value: Date to format
        separator: Separator between day, month and year

    Returns:
        Formatted string, or None when ``value`` is None
    """
    if value is None:
        return None
    return value.strftime(f"%d{separator}%m{separator}%Y")


def format_inspection_time(value: Optional[str]) -> Optional[str]:
    """
    Convert a 24-hour "HH:MM" time to 12-hour format with AM/PM.

    Values that are not "HH:MM" are returned unchanged.

    Examples:
        >>> format_inspection_time("14:05")
        '2:05 PM'
        >>> format_inspection_time("00:30")
        '12:30 AM'
    """
    if not value:
        return None

    match = re.match(r'^(\d{1,2}):(\d{2})$', value.strip())
    if not match:
        return value

    hours = int(match.group(1))
    minutes = match.group(2)
    suffix = "PM" if hours >= 12 else "AM"
    if hours == 0:
        hours = 12
    elif hours > 12:
        hours -= 12
    return f"{hours}:{minutes} {suffix}"


def build_report_filename(record) -> str:
    """
    Derive the deterministic suggested filename for a clearance report.

    Format: ``{ProjectID}: {ClearanceType} Asbestos Clearance Report - {SiteName} ({DD-MM-YYYY}).pdf``

    Args:
        record: ClearanceRecord

    Returns:
        Suggested filename; missing fields become "Unknown"
    """
    project_id = record.project_id or FILENAME_UNKNOWN
    site_name = record.site_name or FILENAME_UNKNOWN
    clearance_date = format_date(record.clearance_date, separator="-") or FILENAME_UNKNOWN

    return (
        f"{project_id}: {record.clearance_type} Asbestos Clearance Report - "
        f"{site_name} ({clearance_date}).pdf"
    )


def clean_filename(filename: str) -> str:
    """
    Make a suggested filename safe for saving on disk.

    Path separators and characters reserved on common filesystems are
    replaced with underscores; the extension is preserved.

    Args:
        filename: Suggested filename

    Returns:
        Cleaned filename
    """
    name = re.sub(r'[\\/:*?"<>|]', '_', filename)
    name = re.sub(r'\s+', ' ', name).strip()
    return name or 'report.pdf'
