"""Recipient and letter template records consumed by the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

from ..utils.tokens import generate_token


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(slots=True)
class Recipient:
    """
    One letter recipient.

    Only the fields used for placeholder substitution, the landing-page token
    and the download filename are modelled; anything else from the source
    mapping is kept in ``extra``.
    """

    token: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    anrede: Optional[str] = None
    email: Optional[str] = None
    signal_category: Optional[str] = None
    signal_description: Optional[str] = None
    id: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Recipient":
        """
        Build a recipient from a loose mapping (JSON row, CRM export).

        A missing token is derived from the company or name, the same way
        recipients are keyed when they are first synced.
        """
        known = {f.name for f in fields(cls)} - {"extra", "token", "id"}
        values = {name: _clean(data.get(name)) for name in known}
        token = _clean(data.get("token")) or generate_token(
            values.get("company"), values.get("first_name"), values.get("last_name")
        )
        raw_id = data.get("id")
        extra = {k: v for k, v in data.items() if k not in known and k not in ("token", "id")}
        return cls(
            token=token,
            id=int(raw_id) if raw_id not in (None, "") else None,
            extra=extra,
            **values,
        )

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass(slots=True)
class LetterTemplate:
    """Letter body template; ``industry`` may list several industries separated by commas."""

    body_html: str
    name: str = "Generated"
    industry: Optional[str] = None
    subject_line: Optional[str] = None
    is_default: bool = False
    id: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LetterTemplate":
        return cls(
            body_html=str(data.get("body_html") or ""),
            name=str(data.get("name") or "Generated"),
            industry=_clean(data.get("industry")),
            subject_line=_clean(data.get("subject_line")),
            is_default=bool(data.get("is_default")),
            id=data.get("id"),
        )

    @property
    def industries(self) -> List[str]:
        if not self.industry:
            return []
        return [part.strip().lower() for part in self.industry.split(",") if part.strip()]
