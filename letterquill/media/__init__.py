"""Media assets embedded in letters."""

from .qr import QRCodeAsset, build_qr_asset, generate_qr_png, landing_url

__all__ = ["QRCodeAsset", "build_qr_asset", "generate_qr_png", "landing_url"]
