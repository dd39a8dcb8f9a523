"""Letter markup parsing."""

from .html_parser import (
    QR_PLACEHOLDER,
    decode_entities,
    parse_inline_formatting,
    parse_to_blocks,
    strip_tags,
)

__all__ = [
    "QR_PLACEHOLDER",
    "decode_entities",
    "parse_inline_formatting",
    "parse_to_blocks",
    "strip_tags",
]
