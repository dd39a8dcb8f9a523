"""Render configuration that is not page geometry."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

from .engine.layout_engine import DEFAULT_FOOTER_LINES
from .media.qr import QR_PIXELS

DEFAULT_BASE_URL = "https://example.com"
LETTER_VERSION = "v1.0"


@dataclass(slots=True, frozen=True)
class LetterConfig:
    """
    Settings shared by all renders of one deployment.

    Attributes:
        base_url: Landing page host; QR codes point at ``<base_url>/r/<token>``
        footer_lines: Footer chrome, one entry per line (empty entries leave a gap)
        letter_version: Version stamp recorded in the PDF metadata
        qr_pixels: Edge length of the generated QR bitmap
    """

    base_url: str = DEFAULT_BASE_URL
    footer_lines: Tuple[str, ...] = DEFAULT_FOOTER_LINES
    letter_version: str = LETTER_VERSION
    qr_pixels: int = QR_PIXELS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "LetterConfig":
        """Defaults overridden by ``LETTERQUILL_BASE_URL`` (or ``BASE_URL``) and keyword overrides."""
        env = os.environ if environ is None else environ
        config = cls()
        base_url = env.get("LETTERQUILL_BASE_URL") or env.get("BASE_URL")
        if base_url:
            config = replace(config, base_url=base_url)
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if "footer_lines" in overrides:
            overrides["footer_lines"] = tuple(overrides["footer_lines"])
        return replace(config, **overrides) if overrides else config
