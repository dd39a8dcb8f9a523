"""

PDFCompiler - paints a laid out letter page with ReportLab
-----------------------------------------------------------
Takes the draw primitives produced by the layout engine and the QR asset and
returns the encoded single-page PDF. Output is byte-for-byte reproducible
(ReportLab invariant mode: fixed timestamps and document ID).

"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Dict, Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ...exceptions import AssetError, FontError, RenderError
from ...media.qr import QRCodeAsset
from ..layout_primitives import ImageBox, LetterPage, TextRunBox

logger = logging.getLogger(__name__)


class PDFCompiler:
    """

    Single-page PDF compiler for letters.

    Nothing is returned unless the whole page was painted and the document
    saved; any embedding failure propagates to the caller.

    """

    def __init__(self, metadata: Optional[Dict[str, str]] = None, *, page_compression: bool = True):
        """
        Args:
            metadata: Optional document info (title, author, subject, creator)
            page_compression: Compress the page content stream
        """
        self.metadata = metadata or {}
        self.page_compression = page_compression

    def compile(self, page: LetterPage, qr: QRCodeAsset) -> bytes:
        """
        Paint ``page`` and encode it.

        Args:
            page: Laid out letter page
            qr: QR bitmap drawn for every image box

        Returns:
            PDF bytes

        Raises:
            AssetError: QR bitmap cannot be decoded or drawn
            FontError: a font cannot be embedded
            RenderError: the document cannot be finalised
        """
        qr_image = self._load_image(qr)

        buffer = BytesIO()
        c = canvas.Canvas(
            buffer,
            pagesize=(page.width, page.height),
            invariant=1,
            pageCompression=1 if self.page_compression else 0,
        )
        self._apply_metadata(c)

        for item in page.items:
            if isinstance(item, TextRunBox):
                self._draw_text(c, item)
            elif isinstance(item, ImageBox):
                self._draw_image(c, item, qr_image)

        try:
            c.showPage()
            c.save()
        except Exception as exc:
            raise RenderError(f"Failed to finalise PDF: {exc}", cause=exc) from exc

        data = buffer.getvalue()
        logger.debug("Compiled letter PDF: %d items, %d bytes", len(page.items), len(data))
        return data

    def _apply_metadata(self, c: canvas.Canvas) -> None:
        if self.metadata.get("title"):
            c.setTitle(self.metadata["title"])
        if self.metadata.get("author"):
            c.setAuthor(self.metadata["author"])
        if self.metadata.get("subject"):
            c.setSubject(self.metadata["subject"])
        if self.metadata.get("creator"):
            c.setCreator(self.metadata["creator"])

    @staticmethod
    def _load_image(qr: QRCodeAsset) -> ImageReader:
        try:
            reader = ImageReader(BytesIO(qr.png))
            reader.getSize()
        except Exception as exc:
            raise AssetError(f"QR image cannot be decoded: {exc}", asset="qr", cause=exc) from exc
        return reader

    @staticmethod
    def _draw_text(c: canvas.Canvas, item: TextRunBox) -> None:
        try:
            c.setFont(item.font_name, item.font_size)
        except Exception as exc:
            raise FontError(f"Font cannot be embedded: {item.font_name}", font_name=item.font_name, cause=exc) from exc
        c.setFillColorRGB(*item.color)
        c.drawString(item.x, item.y, item.text)

    @staticmethod
    def _draw_image(c: canvas.Canvas, item: ImageBox, image: ImageReader) -> None:
        try:
            c.drawImage(image, item.x, item.y, width=item.width, height=item.height)
        except Exception as exc:
            raise AssetError(f"QR image cannot be embedded: {exc}", asset="qr", cause=exc) from exc
