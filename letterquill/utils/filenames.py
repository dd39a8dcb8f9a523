"""Download filename helpers."""

from __future__ import annotations

import re

_UNSAFE = re.compile(r"[^a-zA-Z0-9äöüÄÖÜß_-]")
_UNDERSCORES = re.compile(r"_+")


def sanitize_filename(value: str) -> str:
    """
    Make ``value`` safe as a filename component.

    Keeps ASCII letters, digits, ``_``, ``-`` and German umlauts/ß; every other
    character becomes ``_``, runs of ``_`` collapse, and a single leading and
    trailing ``_`` is removed.

    Args:
        value: Raw component (name, company)

    Returns:
        Sanitized component
    """
    cleaned = _UNDERSCORES.sub("_", _UNSAFE.sub("_", value))
    if cleaned.startswith("_"):
        cleaned = cleaned[1:]
    if cleaned.endswith("_"):
        cleaned = cleaned[:-1]
    return cleaned
