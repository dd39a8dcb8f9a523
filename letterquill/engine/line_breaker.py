"""Greedy line breaking over styled spans."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..models.blocks import TextSpan
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\S+")

StyleKey = Tuple[bool, bool]
PLAIN: StyleKey = (False, False)


@dataclass(slots=True)
class StyledRun:
    """Part of a line drawn with one font; ``width`` is measured in that font."""

    text: str
    bold: bool = False
    italic: bool = False
    width: float = 0.0

    @property
    def style_key(self) -> StyleKey:
        return (self.bold, self.italic)


@dataclass(slots=True)
class LineBreakResult:
    """One output line. A line without runs is a blank line (explicit newline)."""

    runs: List[StyledRun] = field(default_factory=list)
    width: float = 0.0

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def is_blank(self) -> bool:
        return not self.runs


class StyleTable:
    """Per-character style lookup for the flattened text of one block."""

    def __init__(self, spans: Sequence[TextSpan]):
        self._styles: List[StyleKey] = []
        for span in spans:
            self._styles.extend([span.style_key] * len(span.text))

    def __len__(self) -> int:
        return len(self._styles)

    def style_at(self, offset: int) -> StyleKey:
        if 0 <= offset < len(self._styles):
            return self._styles[offset]
        logger.warning("No span at offset %d, using plain style", offset)
        return PLAIN


class LineBreaker:
    """Greedy word wrap that keeps each word in the style of its source span."""

    def __init__(self, metrics_engine: TextMetricsEngine) -> None:
        self.metrics_engine = metrics_engine

    def break_spans(self, spans: Sequence[TextSpan], max_width: float, font_size: float) -> List[LineBreakResult]:
        """
        Wrap styled spans into lines no wider than ``max_width``.

        Newlines in the text force a break; a line holding only whitespace
        yields a blank result. A single word wider than ``max_width`` is
        placed alone on its line.

        Args:
            spans: Spans of one text block
            max_width: Available column width in points
            font_size: Font size used for measuring

        Returns:
            Lines in drawing order
        """
        text = "".join(span.text for span in spans)
        styles = StyleTable(spans)

        lines: List[LineBreakResult] = []
        offset = 0
        for source_line in text.split("\n"):
            if source_line.strip():
                lines.extend(self._wrap_line(source_line, offset, styles, max_width, font_size))
            else:
                lines.append(LineBreakResult())
            offset += len(source_line) + 1
        return lines

    def _wrap_line(
        self,
        line: str,
        offset: int,
        styles: StyleTable,
        max_width: float,
        font_size: float,
    ) -> List[LineBreakResult]:
        results: List[LineBreakResult] = []
        current: List[StyledRun] = []
        current_width = 0.0

        for match in _WORD.finditer(line):
            word = match.group(0)
            style = styles.style_at(offset + match.start())
            bold, italic = style
            word_width = self.metrics_engine.measure(word, font_size, bold, italic)

            if not current:
                current.append(StyledRun(word, bold, italic, word_width))
                current_width = word_width
                continue

            added = self.metrics_engine.space_width(font_size, bold, italic) + word_width
            if current_width + added > max_width:
                results.append(LineBreakResult(current, current_width))
                current = [StyledRun(word, bold, italic, word_width)]
                current_width = word_width
                continue

            last = current[-1]
            if last.style_key == style:
                last.text += " " + word
                last.width += added
            else:
                current.append(StyledRun(" " + word, bold, italic, added))
            current_width += added

        if current:
            results.append(LineBreakResult(current, current_width))

        if len(results) > 1:
            logger.debug("Wrapped %d chars into %d lines at width %.2f", len(line), len(results), max_width)
        return results
