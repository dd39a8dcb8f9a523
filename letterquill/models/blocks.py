"""Block and span models shared by the markup parser and the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass(slots=True)
class TextSpan:
    """Run of text sharing one bold/italic combination (entities decoded)."""

    text: str
    bold: bool = False
    italic: bool = False

    @property
    def style_key(self) -> tuple[bool, bool]:
        return (self.bold, self.italic)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "bold": self.bold, "italic": self.italic}


@dataclass(slots=True)
class TextBlock:
    """One paragraph or list item."""

    spans: List[TextSpan] = field(default_factory=list)
    is_bullet: bool = False

    @property
    def text(self) -> str:
        """Concatenated text of all spans."""
        return "".join(span.text for span in self.spans)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "text",
            "is_bullet": self.is_bullet,
            "spans": [span.to_dict() for span in self.spans],
        }


@dataclass(slots=True, frozen=True)
class ImageBlock:
    """Marks where the QR code is drawn inline."""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "qr"}


Block = Union[TextBlock, ImageBlock]
