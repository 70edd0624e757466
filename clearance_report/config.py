"""Configuration Constants

Constants for clearance certificate rendering.

All measurements are in PDF points (1/72 inch) unless noted otherwise.
"""
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm

# Page Geometry
PAGE_SIZE = A4
MARGIN_LEFT = 2 * cm
MARGIN_RIGHT = 2 * cm
MARGIN_TOP = 1.5 * cm
MARGIN_BOTTOM = 1.5 * cm

# Page Bands (header/footer drawn on every flowing page)
HEADER_BAND_HEIGHT = 2.2 * cm
HEADER_GAP = 0.5 * cm  # Space between header rule and first content line
FOOTER_BAND_HEIGHT = 1.2 * cm
LOGO_BOX = (4.2 * cm, 1.8 * cm)  # (width, height)
BAND_FONT_SIZE = 8
BAND_LINE_HEIGHT = 10.0
RULE_WIDTH = 0.75

# Fonts
DEFAULT_FONT = 'Helvetica'
DEFAULT_BOLD_FONT = 'Helvetica-Bold'
HEADING_FONT_SIZE = 12
BODY_FONT_SIZE = 10
TABLE_FONT_SIZE = 9

# Line Metrics
LINE_SPACING_MULTIPLIER = 1.2  # Proportional mode: font_size * multiplier
TABLE_LINE_HEIGHT = 11.0       # Fixed mode for dense tabular text
BULLET_INDENT = 0.6 * cm

# Tables
TABLE_CELL_PADDING = 3.0
TABLE_HEADER_FILL = (0.85, 0.85, 0.85)
NO_ITEMS_TEXT = "No items recorded"
ITEM_TABLE_COLUMNS = (
    ("Item", 1.2 * cm),
    ("Location", 5.0 * cm),
    ("Material Description", 6.0 * cm),
    ("Asbestos Type", 4.8 * cm),
)

# Images
DEFAULT_IMAGE_QUALITY = 0.8
PHOTO_MAX_WIDTH = 12 * cm
PHOTO_MAX_HEIGHT = 9 * cm
IMAGE_ERROR_TEXT = "[Error loading image]"
NO_PHOTO_TEXT = "No photograph available"

# Asset Loading
ASSET_TIMEOUT_SECONDS = 30.0
ASSET_MAX_WORKERS = 4
LOGO_KEY = "logo"
BACKGROUND_KEY = "background"
# Branding files read once per process; item photographs are always re-read
STATIC_ASSET_KEYS = (LOGO_KEY, BACKGROUND_KEY)

# Clearance Types
CLEARANCE_TYPES = ("Non-friable", "Friable", "Mixed")
DEFAULT_CLEARANCE_TYPE = "Non-friable"

# Token Fallbacks (used when a record field is missing)
TOKEN_FALLBACKS = {
    "CLIENT_NAME": "Unknown Client",
    "SITE_NAME": "Unknown Site",
    "PROJECT_ID": "Unknown Project",
    "ASBESTOS_TYPE": "non-friable",
    "REPORT_TYPE": DEFAULT_CLEARANCE_TYPE,
    "ASBESTOS_REMOVALIST": "Unknown Removalist",
    "LAA_NAME": "Unknown LAA",
    "LAA_LICENSE": "AA00031",
    "INSPECTION_TIME": "Inspection Time",
    "INSPECTION_DATE": "Unknown Date",
    "CLEARANCE_DATE": "Unknown Date",
}

# Filename
FILENAME_UNKNOWN = "Unknown"

# Environment Variables (read by ReportOptions.from_env)
ENV_PREFIX = "CLEARANCE_REPORT_"
