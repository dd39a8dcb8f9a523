"""
Letter layout engine.

Lays out parsed letter blocks onto one fixed-size page: greedy word wrap per
block with per-run fonts, a vertical cursor that only moves down, smaller
type for the postscript, extra space below the closing formula, the QR code
inline or in the bottom-right corner, and a fixed footer.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..models.blocks import Block, ImageBlock, TextBlock
from .geometry import PageGeometry
from .layout_primitives import ImageBox, LetterPage, TextRunBox
from .line_breaker import LineBreaker, LineBreakResult
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

POSTSCRIPT_PREFIXES = ("p.s.", "ps:", "p.s:")
CLOSING_PHRASES = ("herzliche gr", "mit freundlichen", "beste gr")

DEFAULT_FOOTER_LINES = (
    "askSOPia.com ist eine Marke der NOVELDO AI GmbH – Am Salzhaus 2 – 60311 Frankfurt am Main",
    "contact@asksopia.com – www.asksopia.com",
    "",
    "Der QR-Code dient ausschließlich der technischen Zuordnung und statistischen Auswertung.",
    "Wenn Sie keine weiteren Informationen wünschen, genügt eine kurze Mitteilung.",
)


def is_postscript(text: str) -> bool:
    return text.lower().startswith(POSTSCRIPT_PREFIXES)


def is_closing(text: str) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in CLOSING_PHRASES)


class _Cursor:
    """Vertical draw position for one render; only ever moves down."""

    def __init__(self, start: float):
        self.y = start
        self.trace: List[float] = [start]

    def advance(self, amount: float) -> None:
        self.y -= max(amount, 0.0)
        self.trace.append(self.y)


class LetterLayoutEngine:
    """
    Produces a ``LetterPage`` from blocks.

    The engine itself holds only read-only configuration; cursor and page are
    created per ``layout`` call, so one engine may serve concurrent renders.
    """

    def __init__(
        self,
        geometry: Optional[PageGeometry] = None,
        metrics: Optional[TextMetricsEngine] = None,
        footer_lines: Sequence[str] = DEFAULT_FOOTER_LINES,
    ):
        self.geometry = geometry or PageGeometry()
        self.metrics = metrics or TextMetricsEngine(self.geometry.fonts)
        self.line_breaker = LineBreaker(self.metrics)
        self.footer_lines = tuple(footer_lines)

    def layout(self, blocks: Sequence[Block], landing_url: str) -> LetterPage:
        """
        Lay out letter blocks.

        Args:
            blocks: Parsed blocks in document order
            landing_url: URL encoded in the QR code, drawn as its caption

        Returns:
            Page with all draw primitives and the cursor trace
        """
        geometry = self.geometry
        page = LetterPage(width=geometry.width, height=geometry.height)
        cursor = _Cursor(geometry.start_y)

        for block in blocks:
            if isinstance(block, ImageBlock):
                if page.qr_inline:
                    logger.debug("Ignoring additional QR placeholder")
                    continue
                self._layout_inline_qr(page, cursor, landing_url)
            elif isinstance(block, TextBlock) and block.spans:
                self._layout_text_block(page, cursor, block)

        if not page.qr_inline:
            self._layout_fallback_qr(page, landing_url)

        self._layout_footer(page)

        if cursor.y < geometry.margin + geometry.footer_top + geometry.footer_line_height:
            logger.warning("Letter body reaches into the footer area (cursor at %.1f)", cursor.y)

        page.cursor_trace = cursor.trace
        logger.debug(
            "Laid out %d blocks into %d draw items, QR %s",
            len(blocks),
            len(page.items),
            "inline" if page.qr_inline else "fallback",
        )
        return page

    def _layout_text_block(self, page: LetterPage, cursor: _Cursor, block: TextBlock) -> None:
        geometry = self.geometry
        text = block.text

        if is_postscript(text):
            lines = self.line_breaker.break_spans(
                block.spans, geometry.available_width(), geometry.postscript_font_size
            )
            self._draw_lines(
                page,
                cursor,
                lines,
                x=geometry.text_x(),
                font_size=geometry.postscript_font_size,
                line_height=geometry.postscript_line_height,
            )
            cursor.advance(geometry.paragraph_gap)
            return

        if block.is_bullet:
            page.items.append(
                TextRunBox(
                    text=geometry.bullet_glyph,
                    x=geometry.margin,
                    y=cursor.y,
                    font_name=geometry.fonts.regular,
                    font_size=geometry.body_font_size,
                    color=geometry.text_color,
                    width=self.metrics.measure_font(
                        geometry.bullet_glyph, geometry.fonts.regular, geometry.body_font_size
                    ),
                    role="bullet",
                )
            )

        lines = self.line_breaker.break_spans(
            block.spans, geometry.available_width(block.is_bullet), geometry.body_font_size
        )
        self._draw_lines(
            page,
            cursor,
            lines,
            x=geometry.text_x(block.is_bullet),
            font_size=geometry.body_font_size,
            line_height=geometry.line_height,
        )

        if not block.is_bullet:
            cursor.advance(geometry.paragraph_gap)
        if is_closing(text):
            cursor.advance(geometry.closing_gap)

    def _draw_lines(
        self,
        page: LetterPage,
        cursor: _Cursor,
        lines: Sequence[LineBreakResult],
        *,
        x: float,
        font_size: float,
        line_height: float,
    ) -> None:
        color = self.geometry.text_color
        for line in lines:
            run_x = x
            for run in line.runs:
                page.items.append(
                    TextRunBox(
                        text=run.text,
                        x=run_x,
                        y=cursor.y,
                        font_name=self.metrics.font_name(run.bold, run.italic),
                        font_size=font_size,
                        color=color,
                        width=run.width,
                    )
                )
                run_x += run.width
            cursor.advance(line_height)

    def _caption(self, text: str, x: float, y: float) -> TextRunBox:
        geometry = self.geometry
        return TextRunBox(
            text=text,
            x=x,
            y=y,
            font_name=geometry.fonts.regular,
            font_size=geometry.qr_caption_size,
            color=geometry.primary_color,
            width=self.metrics.measure_font(text, geometry.fonts.regular, geometry.qr_caption_size),
            role="caption",
        )

    def _layout_inline_qr(self, page: LetterPage, cursor: _Cursor, landing_url: str) -> None:
        geometry = self.geometry
        size = geometry.qr_size
        cursor.advance(geometry.paragraph_gap)

        qr_x = (geometry.width - size) / 2
        page.items.append(ImageBox(x=qr_x, y=cursor.y - size, width=size, height=size, placement="inline"))

        caption = self._caption(landing_url, 0.0, cursor.y - size - geometry.qr_caption_offset)
        caption.x = (geometry.width - caption.width) / 2
        page.items.append(caption)

        cursor.advance(size + geometry.qr_trailing_gap)
        logger.debug("QR placed inline at y=%.1f", cursor.y)

    def _layout_fallback_qr(self, page: LetterPage, landing_url: str) -> None:
        geometry = self.geometry
        size = geometry.qr_size
        qr_x = geometry.width - geometry.margin - size
        qr_y = geometry.margin + geometry.qr_fallback_bottom

        page.items.append(ImageBox(x=qr_x, y=qr_y, width=size, height=size, placement="fallback"))
        page.items.append(self._caption(landing_url, qr_x, qr_y - geometry.qr_fallback_caption_offset))
        logger.debug("No QR placeholder, QR placed in the bottom-right corner")

    def _layout_footer(self, page: LetterPage) -> None:
        geometry = self.geometry
        font_name = geometry.fonts.regular
        y = geometry.margin + geometry.footer_top
        for line in self.footer_lines:
            if line:
                page.items.append(
                    TextRunBox(
                        text=line,
                        x=geometry.margin,
                        y=y,
                        font_name=font_name,
                        font_size=geometry.footer_font_size,
                        color=geometry.footer_color,
                        width=self.metrics.measure_font(line, font_name, geometry.footer_font_size),
                        role="footer",
                    )
                )
            y -= geometry.footer_line_height
