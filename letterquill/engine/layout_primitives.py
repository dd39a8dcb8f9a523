"""

Draw primitives produced by the letter layout engine.

Layout is resolved completely into these records before anything touches a
PDF canvas, so the compiler is a straight painter and tests can inspect
positions, fonts and widths without parsing PDF output.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Union

from .geometry import RGB

TextRole = Literal["body", "bullet", "caption", "footer"]
ImagePlacement = Literal["inline", "fallback"]


@dataclass(slots=True)
class TextRunBox:
    """Text drawn at baseline (x, y) in one font."""

    text: str
    x: float
    y: float
    font_name: str
    font_size: float
    color: RGB
    width: float = 0.0
    role: TextRole = "body"


@dataclass(slots=True)
class ImageBox:
    """QR bitmap placed with its lower-left corner at (x, y)."""

    x: float
    y: float
    width: float
    height: float
    placement: ImagePlacement = "inline"


DrawItem = Union[TextRunBox, ImageBox]


@dataclass(slots=True)
class LetterPage:
    """Fully laid out single letter page."""

    width: float
    height: float
    items: List[DrawItem] = field(default_factory=list)
    cursor_trace: List[float] = field(default_factory=list)

    @property
    def images(self) -> List[ImageBox]:
        return [item for item in self.items if isinstance(item, ImageBox)]

    @property
    def texts(self) -> List[TextRunBox]:
        return [item for item in self.items if isinstance(item, TextRunBox)]

    @property
    def qr_inline(self) -> bool:
        return any(image.placement == "inline" for image in self.images)

    def texts_with_role(self, role: TextRole) -> List[TextRunBox]:
        return [item for item in self.texts if item.role == role]
