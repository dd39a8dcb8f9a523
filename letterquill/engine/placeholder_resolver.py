"""Utilities for resolving recipient placeholders in letter markup."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from ..models.recipient import Recipient

RECIPIENT_PLACEHOLDERS = (
    "first_name",
    "last_name",
    "full_name",
    "company",
    "industry",
    "anrede",
    "personalized_intro",
)


def format_anrede(anrede: Optional[str], first_name: str = "", last_name: str = "") -> str:
    """
    Salutation line for an anrede code.

    ``herr``/``frau`` produce the formal German salutation with the last name,
    ``dear`` the English one with the first name; anything else is empty.
    """
    if not anrede:
        return ""

    code = anrede.strip().lower()
    if code == "herr":
        return f"Sehr geehrter Herr {last_name},"
    if code == "frau":
        return f"Sehr geehrte Frau {last_name},"
    if code == "dear":
        return f"Dear {first_name},"
    return ""


def recipient_values(recipient: Recipient, personalized_intro: Optional[str] = None) -> Dict[str, str]:
    first_name = recipient.first_name or ""
    last_name = recipient.last_name or ""
    full_name = " ".join(part for part in (first_name, last_name) if part) or "Unknown"
    return {
        "first_name": first_name,
        "last_name": last_name,
        "full_name": full_name,
        "company": recipient.company or "",
        "industry": recipient.industry or "",
        "anrede": format_anrede(recipient.anrede, first_name, last_name),
        "personalized_intro": personalized_intro or "",
    }


class PlaceholderResolver:
    """Resolve ``{{name}}`` placeholders; unknown names are left untouched."""

    _pattern = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self.values: Dict[str, Any] = dict(values or {})

    @classmethod
    def for_recipient(cls, recipient: Recipient, personalized_intro: Optional[str] = None) -> "PlaceholderResolver":
        return cls(recipient_values(recipient, personalized_intro))

    def set_values(self, values: Mapping[str, Any]) -> None:
        self.values = dict(values)

    def resolve_text(self, text: str) -> str:
        if not text or "{{" not in text:
            return text

        def replacer(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in self.values:
                return str(self.values[key])
            return match.group(0)

        return self._pattern.sub(replacer, text)


def replace_placeholders(html: str, recipient: Recipient, personalized_intro: Optional[str] = None) -> str:
    """
    Substitute recipient placeholders in letter markup.

    ``{{qr_code}}`` is not a recipient placeholder and survives for the parser.
    """
    return PlaceholderResolver.for_recipient(recipient, personalized_intro).resolve_text(html)
