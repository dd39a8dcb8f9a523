from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfbase.ttfonts import TTFont  # type: ignore

from ...exceptions import FontError
from ..geometry import FontSet

logger = logging.getLogger(__name__)

_REGISTERED: Dict[str, Path] = {}
_LOCK = threading.Lock()


def registered_font_path(font_name: str) -> Optional[Path]:
    return _REGISTERED.get(font_name)


def register_ttf(font_name: str, font_path: str | Path) -> None:
    """
    Register a TrueType font with ReportLab under ``font_name``.

    Registration is process-wide and idempotent; re-registering the same name
    with a different file is rejected because widths already measured for
    the old file would no longer match what gets embedded.

    Raises:
        FontError: file missing, unreadable, or rejected by ReportLab
    """
    path = Path(font_path)
    with _LOCK:
        existing = _REGISTERED.get(font_name)
        if existing is not None:
            if existing != path:
                raise FontError(
                    f"Font {font_name} already registered from {existing}",
                    font_name=font_name,
                    font_path=str(path),
                )
            return

        if not path.is_file():
            raise FontError(f"Font file not found: {path}", font_name=font_name, font_path=str(path))

        try:
            pdfmetrics.registerFont(TTFont(font_name, str(path)))
        except Exception as exc:
            raise FontError(
                f"Failed to register font {font_name}: {exc}",
                font_name=font_name,
                font_path=str(path),
                cause=exc,
            ) from exc

        _REGISTERED[font_name] = path
        logger.debug("Registered font %s (%s)", font_name, path)


def register_fonts(fonts: FontSet) -> None:
    """Registers every TrueType file listed in ``fonts.files``."""
    for font_name, font_path in fonts.files:
        register_ttf(font_name, font_path)
