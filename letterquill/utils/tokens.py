"""Landing-page token helpers."""

from __future__ import annotations

import random
import re
import string
from typing import Optional

_CHAR_MAP = {
    "ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss",
    "Ä": "Ae", "Ö": "Oe", "Ü": "Ue",
    "é": "e", "è": "e", "ê": "e", "ë": "e",
    "á": "a", "à": "a", "â": "a",
    "ó": "o", "ò": "o", "ô": "o",
    "ú": "u", "ù": "u", "û": "u",
    "í": "i", "ì": "i", "î": "i",
    "ñ": "n", "ç": "c",
}

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_TOKEN_ALPHABET = string.digits + string.ascii_lowercase
MAX_SLUG_LENGTH = 40


def slugify(text: str) -> str:
    """Lowercase ASCII slug with German umlauts transliterated, at most 40 characters."""
    transliterated = "".join(_CHAR_MAP.get(ch, ch) for ch in text)
    slug = _NON_SLUG.sub("-", transliterated.lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH]


def random_token(length: int = 8) -> str:
    return "".join(random.choice(_TOKEN_ALPHABET) for _ in range(length))


def generate_token(
    company: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> str:
    """Token from the company slug, else the name slug, else 10 random characters."""
    if company and company.strip():
        slug = slugify(company)
        if slug:
            return slug

    name = " ".join(part for part in (first_name, last_name) if part)
    if name:
        slug = slugify(name)
        if slug:
            return slug

    return random_token(10)
