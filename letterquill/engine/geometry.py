"""Page geometry and style configuration for a single letter page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Union

from ..exceptions import GeometryError

RGB = Tuple[float, float, float]

A4_WIDTH = 595.28
A4_HEIGHT = 841.89

TEXT_COLOR: RGB = (0.1, 0.1, 0.1)
PRIMARY_COLOR: RGB = (0.22, 0.51, 0.84)
FOOTER_COLOR: RGB = (0.4, 0.4, 0.4)


@dataclass(slots=True, frozen=True)
class FontSet:
    """
    Font names per emphasis combination.

    Names must be known to ReportLab: either one of the standard Type 1 fonts
    or a TrueType font listed in ``files`` (name -> path), which is
    registered before rendering. ``files`` is stored as sorted pairs so the
    set stays hashable.
    """

    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    italic: str = "Helvetica-Oblique"
    bold_italic: str = "Helvetica-BoldOblique"
    files: Union[Tuple[Tuple[str, str], ...], Mapping[str, str]] = ()

    def __post_init__(self) -> None:
        pairs = self.files.items() if isinstance(self.files, Mapping) else self.files
        object.__setattr__(self, "files", tuple(sorted((str(name), str(path)) for name, path in pairs)))

    def for_style(self, bold: bool, italic: bool) -> str:
        if bold and italic:
            return self.bold_italic
        if bold:
            return self.bold
        if italic:
            return self.italic
        return self.regular


@dataclass(slots=True, frozen=True)
class PageGeometry:
    """
    Immutable per-render page configuration (PDF points).

    The layout cursor starts at ``height - margin - top_reserved`` and only
    moves down from there.
    """

    width: float = A4_WIDTH
    height: float = A4_HEIGHT
    margin: float = 56.0
    top_reserved: float = 160.0

    body_font_size: float = 10.5
    line_height: float = 15.0
    paragraph_gap: float = 7.0
    bullet_indent: float = 14.0
    bullet_glyph: str = "•"

    postscript_font_delta: float = -1.5
    postscript_line_delta: float = -2.0
    closing_gap: float = 30.0

    qr_size: float = 85.0
    qr_caption_size: float = 7.0
    qr_caption_offset: float = 10.0
    qr_trailing_gap: float = 36.0
    qr_fallback_bottom: float = 15.0
    qr_fallback_caption_offset: float = 12.0

    footer_font_size: float = 7.0
    footer_line_height: float = 10.0
    footer_top: float = 50.0

    fonts: FontSet = field(default_factory=FontSet)
    text_color: RGB = TEXT_COLOR
    primary_color: RGB = PRIMARY_COLOR
    footer_color: RGB = FOOTER_COLOR

    def __post_init__(self) -> None:
        positive = {
            "width": self.width,
            "height": self.height,
            "body_font_size": self.body_font_size,
            "line_height": self.line_height,
            "postscript_font_size": self.postscript_font_size,
            "postscript_line_height": self.postscript_line_height,
            "qr_size": self.qr_size,
            "qr_caption_size": self.qr_caption_size,
            "footer_font_size": self.footer_font_size,
            "text_width": self.text_width,
        }
        for name, value in positive.items():
            if value <= 0:
                raise GeometryError(f"{name} must be positive, got {value}", field_name=name, field_value=value)

        non_negative = {
            "margin": self.margin,
            "top_reserved": self.top_reserved,
            "paragraph_gap": self.paragraph_gap,
            "bullet_indent": self.bullet_indent,
            "closing_gap": self.closing_gap,
            "qr_trailing_gap": self.qr_trailing_gap,
            "footer_line_height": self.footer_line_height,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise GeometryError(f"{name} must not be negative, got {value}", field_name=name, field_value=value)

        if self.text_width - self.bullet_indent <= 0:
            raise GeometryError(
                "bullet_indent leaves no room for list text",
                field_name="bullet_indent",
                field_value=self.bullet_indent,
            )

    @property
    def text_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def start_y(self) -> float:
        return self.height - self.margin - self.top_reserved

    @property
    def postscript_font_size(self) -> float:
        return self.body_font_size + self.postscript_font_delta

    @property
    def postscript_line_height(self) -> float:
        return self.line_height + self.postscript_line_delta

    def available_width(self, is_bullet: bool = False) -> float:
        return self.text_width - self.bullet_indent if is_bullet else self.text_width

    def text_x(self, is_bullet: bool = False) -> float:
        return self.margin + self.bullet_indent if is_bullet else self.margin

    @classmethod
    def from_options(cls, options: Optional[Dict[str, object]] = None) -> "PageGeometry":
        """Build geometry from a loose options mapping, ignoring unknown keys."""
        options = dict(options or {})
        fonts = options.pop("fonts", None)
        if isinstance(fonts, dict):
            options["fonts"] = FontSet(**fonts)
        elif isinstance(fonts, FontSet):
            options["fonts"] = fonts
        known = set(cls.__dataclass_fields__)
        return cls(**{key: value for key, value in options.items() if key in known})
