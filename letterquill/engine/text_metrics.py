"""

TextMetricsEngine - measuring styled text.

Uses ReportLab font metrics; every emphasis combination is measured with its
own font (bold, italic and regular glyph widths differ at the same size).

"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Tuple

from reportlab.pdfbase import pdfmetrics

from ..exceptions import FontError
from .geometry import FontSet
from .utils.font_registry import register_fonts


@lru_cache(maxsize=4096)
def _string_width(text: str, font_name: str, font_size: float) -> float:
    return pdfmetrics.stringWidth(text, font_name, font_size)


class TextMetricsEngine:
    """

    Engine for measuring text runs.

    Resolves the font for a bold/italic combination through a ``FontSet``
    and returns widths in points at a given font size.

    """

    def __init__(self, fonts: FontSet):
        """Registers any TrueType fonts in ``fonts`` and validates all names."""
        self.fonts = fonts
        register_fonts(fonts)
        self._space_widths: Dict[Tuple[str, float], float] = {}
        for font_name in {fonts.regular, fonts.bold, fonts.italic, fonts.bold_italic}:
            try:
                pdfmetrics.getFont(font_name)
            except KeyError as exc:
                raise FontError(f"Unknown font: {font_name}", font_name=font_name, cause=exc) from exc

    def font_name(self, bold: bool = False, italic: bool = False) -> str:
        return self.fonts.for_style(bold, italic)

    def measure(self, text: str, font_size: float, bold: bool = False, italic: bool = False) -> float:
        """

        Measures text width.

        Args:
        text: Text to measure
        font_size: Font size in points
        bold: Use the bold variant
        italic: Use the italic variant

        Returns:
        Width in points

        """
        if not text:
            return 0.0
        return _string_width(text, self.font_name(bold, italic), float(font_size))

    def space_width(self, font_size: float, bold: bool = False, italic: bool = False) -> float:
        font_name = self.font_name(bold, italic)
        key = (font_name, float(font_size))
        if key not in self._space_widths:
            self._space_widths[key] = _string_width(" ", font_name, float(font_size))
        return self._space_widths[key]

    def measure_font(self, text: str, font_name: str, font_size: float) -> float:
        """Width of ``text`` in an explicitly named font (captions, footer)."""
        if not text:
            return 0.0
        return _string_width(text, font_name, float(font_size))
