"""
letterquill - personalised one-page letters rendered to PDF.

The package turns a small HTML letter dialect into a single A4 page:

- Placeholder substitution for recipient fields and salutations
- Markup parsing into paragraph, bullet and QR marker blocks
- Word-wrapped layout with bold/italic runs, postscripts and closings
- An inline QR code (or a bottom-right fallback) linking to a landing page
- Batch export of many letters into one ZIP archive

Main Components:
- parser: letter markup to blocks
- engine: geometry, metrics, line breaking, layout and PDF compilation
- media: QR code generation
- export: batch ZIP exporter
- api: high-level render functions
"""

from .api import (
    PDF_CONTENT_TYPE,
    generate_letter_pdf,
    layout_letter,
    letter_filename,
    render_letter,
)
from .config import LetterConfig
from .engine.geometry import FontSet, PageGeometry
from .exceptions import (
    AssetError,
    FontError,
    GeometryError,
    LetterError,
    RenderError,
    TemplateError,
    TemplateNotFoundError,
)
from .export import BatchLetterExporter, BatchResult
from .media.qr import QRCodeAsset, build_qr_asset
from .models import ImageBlock, LetterTemplate, Recipient, TextBlock, TextSpan
from .parser import parse_to_blocks
from .templates import select_template
from .utils import sanitize_filename
from .version import __version__

__all__ = [
    "__version__",
    "PDF_CONTENT_TYPE",
    "generate_letter_pdf",
    "layout_letter",
    "letter_filename",
    "render_letter",
    "LetterConfig",
    "FontSet",
    "PageGeometry",
    "LetterError",
    "GeometryError",
    "FontError",
    "AssetError",
    "RenderError",
    "TemplateError",
    "TemplateNotFoundError",
    "BatchLetterExporter",
    "BatchResult",
    "QRCodeAsset",
    "build_qr_asset",
    "ImageBlock",
    "LetterTemplate",
    "Recipient",
    "TextBlock",
    "TextSpan",
    "parse_to_blocks",
    "select_template",
    "sanitize_filename",
]
