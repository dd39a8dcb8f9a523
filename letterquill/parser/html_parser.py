"""
Letter markup parser - converts the letter HTML subset into blocks.

Supported:
- paragraphs (``<p>``), line breaks (``<br>``), unordered lists (``<ul>``/``<li>``)
- bold (``<strong>``/``<b>``) and italic (``<em>``/``<i>``) runs
- a fixed set of HTML entities
- the ``{{qr_code}}`` placeholder, emitted as an image block

Anything else degrades to plain text: unknown tags are stripped, unclosed
tags never raise.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List

from ..models.blocks import Block, ImageBlock, TextBlock, TextSpan

logger = logging.getLogger(__name__)

QR_PLACEHOLDER = "{{qr_code}}"

ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&ndash;": "–",
    "&mdash;": "—",
}

_ENTITY_PATTERN = re.compile("|".join(re.escape(name) for name in ENTITIES))
_BR_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
_PARAGRAPH_PATTERN = re.compile(r"</?p(?:\s[^>]*)?>", re.IGNORECASE)
_UL_OPEN_PATTERN = re.compile(r"<ul(?:\s[^>]*)?>", re.IGNORECASE)
_UL_CLOSE_PATTERN = re.compile(r"</ul\s*>", re.IGNORECASE)
_LI_OPEN_PATTERN = re.compile(r"<li(?:\s[^>]*)?>", re.IGNORECASE)
_LI_CLOSE_PATTERN = re.compile(r"</li\s*>", re.IGNORECASE)
_EMPHASIS_TAG_PATTERN = re.compile(r"<(/?)(strong|b|em|i)(?:\s[^>]*)?>", re.IGNORECASE)
_ANY_TAG_PATTERN = re.compile(r"<[^>]+>")


def decode_entities(text: str) -> str:
    """Decode the supported HTML entities in a single pass."""
    return _ENTITY_PATTERN.sub(lambda match: ENTITIES[match.group(0)], text)


def strip_tags(html: str) -> str:
    return _ANY_TAG_PATTERN.sub("", html)


@dataclass(slots=True)
class _InlineState:
    """Active emphasis while scanning one block's markup."""

    bold: bool = False
    italic: bool = False


def parse_inline_formatting(html: str) -> List[TextSpan]:
    """
    Split inline markup into styled spans.

    Emphasis tags switch the bold/italic state; text between them accumulates
    into the current span, which is flushed whenever the state changes. Other
    tags are stripped and entities are decoded at flush time.

    Args:
        html: Inner markup of one paragraph or list item

    Returns:
        Spans in source order; a single plain span if no emphasis is present
    """
    spans: List[TextSpan] = []
    state = _InlineState()
    pending: List[str] = []

    def flush() -> None:
        raw = "".join(pending)
        pending.clear()
        if raw:
            spans.append(TextSpan(decode_entities(raw), bold=state.bold, italic=state.italic))

    last_index = 0
    for match in _EMPHASIS_TAG_PATTERN.finditer(html):
        pending.append(strip_tags(html[last_index:match.start()]))
        last_index = match.end()

        is_open = not match.group(1)
        tag_name = match.group(2).lower()
        if tag_name in ("strong", "b"):
            if state.bold != is_open:
                flush()
                state.bold = is_open
        elif state.italic != is_open:
            flush()
            state.italic = is_open

    pending.append(strip_tags(html[last_index:]))
    flush()

    if not spans:
        plain = strip_tags(html)
        if plain:
            spans.append(TextSpan(decode_entities(plain)))

    return spans


def _text_block(html: str, is_bullet: bool = False) -> TextBlock | None:
    spans = parse_inline_formatting(html.strip())
    if not "".join(span.text for span in spans).strip():
        return None
    return TextBlock(spans=spans, is_bullet=is_bullet)


def _split_on_placeholder(html: str, is_bullet: bool = False) -> List[Block]:
    """Text blocks around each ``{{qr_code}}`` with an image block in between."""
    blocks: List[Block] = []
    parts = html.strip().split(QR_PLACEHOLDER)
    for index, part in enumerate(parts):
        if index > 0:
            blocks.append(ImageBlock())
        block = _text_block(part, is_bullet=is_bullet)
        if block is not None:
            blocks.append(block)
    return blocks


def _split_list_items(list_html: str) -> List[Block]:
    blocks: List[Block] = []
    for item in _LI_OPEN_PATTERN.split(list_html)[1:]:
        content = _LI_CLOSE_PATTERN.sub("", item)
        blocks.extend(_split_on_placeholder(content, is_bullet=True))
    return blocks


def _split_lists(segment: str) -> List[Block]:
    """
    Decompose a paragraph segment that contains ``<ul>`` lists.

    Text before, between and after the lists becomes regular text blocks;
    every ``<li>`` becomes one bullet block.
    """
    blocks: List[Block] = []
    rest = segment
    while True:
        opening = _UL_OPEN_PATTERN.search(rest)
        if opening is None:
            blocks.extend(_split_on_placeholder(rest))
            return blocks

        blocks.extend(_split_on_placeholder(rest[:opening.start()]))
        rest = rest[opening.end():]

        closing = _UL_CLOSE_PATTERN.search(rest)
        if closing is None:
            blocks.extend(_split_list_items(rest))
            return blocks

        blocks.extend(_split_list_items(rest[:closing.start()]))
        rest = rest[closing.end():]


def parse_to_blocks(html: str) -> List[Block]:
    """
    Parse letter markup into an ordered block list.

    Args:
        html: Letter HTML (placeholders other than ``{{qr_code}}`` already substituted)

    Returns:
        Text and image blocks in document order
    """
    normalized = _BR_PATTERN.sub("\n", html or "").replace("\r\n", "\n")

    blocks: List[Block] = []
    for segment in _PARAGRAPH_PATTERN.split(normalized):
        if not segment.strip():
            continue
        if _UL_OPEN_PATTERN.search(segment):
            blocks.extend(_split_lists(segment))
        else:
            blocks.extend(_split_on_placeholder(segment))

    logger.debug(
        "Parsed %d blocks (%d image markers)",
        len(blocks),
        sum(1 for block in blocks if isinstance(block, ImageBlock)),
    )
    return blocks
