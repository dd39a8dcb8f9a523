"""
Simple high-level API for rendering letters.

Usage:
    from letterquill import Recipient, generate_letter_pdf, letter_filename

    recipient = Recipient.from_mapping({"first_name": "Anna", "last_name": "Berg",
                                        "company": "Berg GmbH", "anrede": "frau"})
    pdf = generate_letter_pdf("<p>{{anrede}}</p><p>...</p>", recipient)
    Path(letter_filename(recipient)).write_bytes(pdf)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .config import LetterConfig
from .engine.geometry import PageGeometry
from .engine.layout_engine import DEFAULT_FOOTER_LINES, LetterLayoutEngine
from .engine.layout_primitives import LetterPage
from .engine.pdf.pdf_compiler import PDFCompiler
from .engine.placeholder_resolver import replace_placeholders
from .media.qr import QRCodeAsset, build_qr_asset
from .models.blocks import Block
from .models.recipient import Recipient
from .parser.html_parser import parse_to_blocks
from .utils.filenames import sanitize_filename
from .version import __version__

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

RecipientLike = Union[Recipient, Mapping[str, Any]]


def _as_recipient(recipient: RecipientLike) -> Recipient:
    if isinstance(recipient, Recipient):
        return recipient
    return Recipient.from_mapping(recipient)


def layout_letter(
    blocks: Sequence[Block],
    geometry: Optional[PageGeometry] = None,
    landing_url: str = "",
    *,
    footer_lines: Sequence[str] = DEFAULT_FOOTER_LINES,
) -> LetterPage:
    """Lay out blocks without producing a PDF (previews, inspection)."""
    engine = LetterLayoutEngine(geometry, footer_lines=footer_lines)
    return engine.layout(blocks, landing_url)


def render_letter(
    blocks: Sequence[Block],
    geometry: Optional[PageGeometry],
    qr_image: QRCodeAsset,
    *,
    footer_lines: Sequence[str] = DEFAULT_FOOTER_LINES,
    metadata: Optional[Dict[str, str]] = None,
) -> bytes:
    """
    Render parsed blocks to a single-page PDF.

    Args:
        blocks: Parsed letter blocks
        geometry: Page geometry (A4 defaults when None)
        qr_image: QR bitmap and the landing URL it encodes
        footer_lines: Footer chrome
        metadata: Optional PDF document info

    Returns:
        PDF bytes

    Raises:
        AssetError, FontError, RenderError: embedding or finalisation failed
    """
    page = layout_letter(blocks, geometry, qr_image.url, footer_lines=footer_lines)
    return PDFCompiler(metadata).compile(page, qr_image)


def letter_metadata(recipient: Recipient, config: LetterConfig, subject: Optional[str] = None) -> Dict[str, str]:
    title = recipient.display_name
    if recipient.company:
        title = f"{title} - {recipient.company}" if title else recipient.company
    metadata = {
        "title": title,
        "creator": f"letterquill {__version__} ({config.letter_version})",
    }
    if subject:
        metadata["subject"] = subject
    return metadata


def generate_letter_pdf(
    letter_html: str,
    recipient: RecipientLike,
    geometry: Optional[PageGeometry] = None,
    config: Optional[LetterConfig] = None,
    *,
    personalized_intro: Optional[str] = None,
    subject: Optional[str] = None,
) -> bytes:
    """
    Personalise letter markup for one recipient and render it.

    Args:
        letter_html: Template or full letter markup
        recipient: Recipient record or mapping
        geometry: Page geometry (A4 defaults when None)
        config: Base URL, footer and version settings
        personalized_intro: Value for ``{{personalized_intro}}``
        subject: Optional subject recorded in the PDF metadata

    Returns:
        PDF bytes
    """
    recipient = _as_recipient(recipient)
    config = config or LetterConfig()

    html = replace_placeholders(letter_html or "", recipient, personalized_intro)
    blocks = parse_to_blocks(html)
    qr_image = build_qr_asset(config.base_url, recipient.token, config.qr_pixels)

    logger.info("Rendering letter for %s (%d blocks)", recipient.token, len(blocks))
    return render_letter(
        blocks,
        geometry,
        qr_image,
        footer_lines=config.footer_lines,
        metadata=letter_metadata(recipient, config, subject),
    )


def letter_filename(recipient: RecipientLike) -> str:
    """``<LastName>_<Company>_<token>.pdf`` with sanitized components."""
    recipient = _as_recipient(recipient)
    last_name = sanitize_filename(recipient.last_name or "Unknown")
    company = sanitize_filename(recipient.company or "Company")
    token = sanitize_filename(recipient.token) or "letter"
    return f"{last_name}_{company}_{token}.pdf"
