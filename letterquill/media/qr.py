"""
QR code assets for letters.

Every letter carries one QR code pointing at the recipient's landing page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO

import qrcode
from PIL import Image as PILImage
from qrcode.constants import ERROR_CORRECT_M

from ..exceptions import AssetError

logger = logging.getLogger(__name__)

QR_PIXELS = 150
QR_DARK = "#1a1a1a"
QR_LIGHT = "#ffffff"


@dataclass(slots=True, frozen=True)
class QRCodeAsset:
    """PNG bitmap plus the URL it encodes (drawn as the caption)."""

    png: bytes
    url: str

    @property
    def size(self) -> tuple[int, int]:
        with PILImage.open(BytesIO(self.png)) as image:
            return image.size


def landing_url(base_url: str, token: str) -> str:
    """Landing page link for ``token``: ``<base_url>/r/<token>``."""
    return f"{base_url.rstrip('/')}/r/{token}"


def generate_qr_png(data: str, pixels: int = QR_PIXELS, border: int = 1) -> bytes:
    """
    Encode ``data`` as a square PNG QR code.

    Args:
        data: Text to encode
        pixels: Edge length of the resulting image
        border: Quiet zone in modules

    Returns:
        PNG bytes

    Raises:
        AssetError: when the code cannot be generated
    """
    if not data:
        raise AssetError("QR code data must not be empty", asset="qr")

    try:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_M,
            box_size=10,
            border=border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color=QR_DARK, back_color=QR_LIGHT)
        # Nearest neighbour keeps module edges sharp
        img = img.resize((pixels, pixels), PILImage.Resampling.NEAREST)

        img_bytes = BytesIO()
        img.save(img_bytes, format="PNG")
    except Exception as exc:
        raise AssetError(f"Failed to generate QR code: {exc}", asset="qr", cause=exc) from exc

    logger.debug("Generated %dpx QR code for %s", pixels, data)
    return img_bytes.getvalue()


def build_qr_asset(base_url: str, token: str, pixels: int = QR_PIXELS) -> QRCodeAsset:
    url = landing_url(base_url, token)
    return QRCodeAsset(png=generate_qr_png(url, pixels=pixels), url=url)
