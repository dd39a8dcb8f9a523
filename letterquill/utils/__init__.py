"""Utility helpers: filenames, tokens, logging."""

from .filenames import sanitize_filename
from .tokens import generate_token, slugify

__all__ = ["sanitize_filename", "generate_token", "slugify"]
