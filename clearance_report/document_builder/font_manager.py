"""Font Manager Module

Handles font registration, font fallback and string measurement.
"""
import logging
import os
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from ..config import DEFAULT_BOLD_FONT, DEFAULT_FONT
from ..exceptions import FontError

logger = logging.getLogger(__name__)

# Process-wide cache of registered TTF files: path -> registered font name.
# Font metrics are read-only once registered, so sharing them across
# concurrent renders is safe.
_REGISTERED_FONTS: Dict[str, str] = {}
_REGISTRATION_LOCK = threading.Lock()


@dataclass(frozen=True)
class Font:
    """A concrete font face at a size."""

    name: str
    size: float

    def string_width(self, text: str) -> float:
        """Width of ``text`` in points using the font's metrics."""
        return pdfmetrics.stringWidth(text, self.name, self.size)


def register_ttf(font_path: str, font_name: Optional[str] = None) -> str:
    """
    Register a TrueType font with ReportLab once per process.

    Args:
        font_path: Path to the .ttf file
        font_name: Name to register under (defaults to the file stem)

    Returns:
        The registered font name

    Raises:
        FontError: If the file is missing or is not a usable TTF
    """
    with _REGISTRATION_LOCK:
        if font_path in _REGISTERED_FONTS:
            return _REGISTERED_FONTS[font_path]

        if not os.path.exists(font_path):
            raise FontError(f"Font file not found: {font_path}")

        name = font_name or os.path.splitext(os.path.basename(font_path))[0]
        try:
            pdfmetrics.registerFont(TTFont(name, font_path))
        except (TTFError, OSError) as e:
            raise FontError(f"Could not load font {font_path}: {e}")
        _REGISTERED_FONTS[font_path] = name
        logger.debug("Registered font %s from %s", name, font_path)
        return name


class FontManager:
    """Manages font registration and hands out measured fonts.

    This class handles:
    - Optional TTF registration for regular and bold faces
    - Fallback to the built-in Helvetica faces
    - Bold variant fallback to the regular face

    The built-in faces need no embedding, which keeps output byte-identical
    across machines.

    Attributes:
        font_name: Name of the regular font (e.g. 'DejaVuSans' or 'Helvetica')
        font_name_bold: Name of the bold font (e.g. 'DejaVuSans-Bold' or 'Helvetica-Bold')
    """

    def __init__(self, font_path: Optional[str] = None, bold_font_path: Optional[str] = None):
        """
        Initialize FontManager and register any configured fonts.

        Args:
            font_path: Optional TTF for regular text
            bold_font_path: Optional TTF for bold text
        """
        self.font_name = DEFAULT_FONT
        self.font_name_bold = DEFAULT_BOLD_FONT
        self._setup_fonts(font_path, bold_font_path)

    def _setup_fonts(self, font_path: Optional[str], bold_font_path: Optional[str]):
        """
        Register configured TTF fonts, falling back to Helvetica.

        A missing or broken regular font leaves both faces on Helvetica. A
        missing bold font with a working regular TTF reuses the regular
        face for bold text.
        """
        if not font_path:
            return

        try:
            self.font_name = register_ttf(font_path)
        except FontError as e:
            logger.warning("Could not register font %s (%s), using %s", font_path, e, DEFAULT_FONT)
            return

        if not bold_font_path:
            self.font_name_bold = self.font_name
            return

        try:
            self.font_name_bold = register_ttf(bold_font_path)
        except FontError as e:
            logger.warning("Bold font %s not usable (%s), using regular font for bold text", bold_font_path, e)
            self.font_name_bold = self.font_name

    def get_font_name(self, bold: bool = False) -> str:
        """
        Get the registered font name.

        Args:
            bold: If True, return the bold variant; otherwise return regular font

        Returns:
            Font name string suitable for use with ReportLab
        """
        return self.font_name_bold if bold else self.font_name

    def get_font(self, size: float, bold: bool = False) -> Font:
        """Return a measurable Font for the given size and weight."""
        return Font(self.get_font_name(bold), size)
