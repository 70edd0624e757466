"""Custom Exception Hierarchy

Exception hierarchy for the clearance report renderer. Asset problems are
recoverable and never reach the caller; unsupported plan content is a
template or programming defect and aborts the render.
"""


class ClearanceReportError(Exception):
    """Base exception for all clearance report errors.

    Catching this exception will catch every custom exception raised by
    the package.
    """
    pass


# Validation Errors
class ValidationError(ClearanceReportError):
    """Raised when input validation fails."""
    pass


class InvalidRecordError(ValidationError):
    """Raised when the supplied record cannot be turned into a report."""
    pass


class InvalidConfigurationError(ValidationError):
    """Raised when configuration parameters are invalid."""
    pass


# Asset Errors
class AssetLoadError(ClearanceReportError):
    """Raised when a branding image or item photograph cannot be loaded or decoded.

    Always recovered locally: the caller substitutes a placeholder and the
    render continues.
    """

    def __init__(self, asset_key: str, reason: str):
        self.asset_key = asset_key
        self.reason = reason
        super().__init__(f"Failed to load asset '{asset_key}': {reason}")


# Rendering Errors
class RenderingError(ClearanceReportError):
    """Base class for PDF rendering errors."""
    pass


class UnsupportedBlockError(RenderingError):
    """Raised when the content plan contains an unrecognized block variant."""

    def __init__(self, block):
        self.block = block
        super().__init__(
            f"Unsupported content block: {type(block).__name__}"
        )


class UnsupportedPageError(RenderingError):
    """Raised when the content plan contains an unrecognized page variant."""

    def __init__(self, page):
        self.page = page
        super().__init__(
            f"Unsupported page specification: {type(page).__name__}"
        )


class FontError(RenderingError):
    """Raised when font setup or registration fails."""
    pass
