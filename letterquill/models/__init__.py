"""
Models module for letter content.

Blocks and spans describe parsed letter markup; recipients and templates are
the records a render is driven by.
"""

from .blocks import Block, ImageBlock, TextBlock, TextSpan
from .recipient import LetterTemplate, Recipient

__all__ = [
    "Block",
    "ImageBlock",
    "TextBlock",
    "TextSpan",
    "LetterTemplate",
    "Recipient",
]
