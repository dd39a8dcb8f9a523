"""Letter layout engine: geometry, metrics, line breaking, layout and PDF output."""

from .geometry import FontSet, PageGeometry
from .layout_engine import LetterLayoutEngine, is_closing, is_postscript
from .layout_primitives import ImageBox, LetterPage, TextRunBox
from .line_breaker import LineBreaker, LineBreakResult, StyledRun
from .placeholder_resolver import PlaceholderResolver, format_anrede, replace_placeholders
from .text_metrics import TextMetricsEngine

__all__ = [
    "FontSet",
    "PageGeometry",
    "LetterLayoutEngine",
    "is_closing",
    "is_postscript",
    "ImageBox",
    "LetterPage",
    "TextRunBox",
    "LineBreaker",
    "LineBreakResult",
    "StyledRun",
    "PlaceholderResolver",
    "format_anrede",
    "replace_placeholders",
    "TextMetricsEngine",
]
