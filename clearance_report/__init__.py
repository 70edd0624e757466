"""Clearance Report

Renders asbestos removal clearance certificates to PDF.

Entry points:
- generate_report: Record (+ template, options) -> PDF bytes
- ReportPipeline: Same, returning a ReportResult with filename and page counts
"""

from .asset_loader import USE_PLACEHOLDER, AssetLoader
from .default_content import default_template
from .exceptions import (
    AssetLoadError,
    ClearanceReportError,
    InvalidConfigurationError,
    InvalidRecordError,
    UnsupportedBlockError,
    UnsupportedPageError,
    ValidationError,
)
from .input_adapter import build_document_plan, substitute_tokens
from .models import ClearanceItem, ClearanceRecord, CompanyDetails, DocumentTemplate
from .pipeline import ReportPipeline, generate_report
from .report_options import ReportOptions
from .report_result import ReportResult
from .utils import build_report_filename, clean_filename

__all__ = [
    'generate_report',
    'ReportPipeline',
    'ReportOptions',
    'ReportResult',
    'ClearanceRecord',
    'ClearanceItem',
    'CompanyDetails',
    'DocumentTemplate',
    'default_template',
    'build_document_plan',
    'substitute_tokens',
    'AssetLoader',
    'USE_PLACEHOLDER',
    'build_report_filename',
    'clean_filename',
    'ClearanceReportError',
    'ValidationError',
    'InvalidRecordError',
    'InvalidConfigurationError',
    'AssetLoadError',
    'UnsupportedBlockError',
    'UnsupportedPageError',
]
