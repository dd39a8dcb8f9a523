"""
Batch exporter - renders letters for many recipients into one ZIP archive.

Each recipient is rendered independently; a failure is recorded and the
batch continues with the next recipient.
"""

from __future__ import annotations

import logging
import zipfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from io import BytesIO
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..api import RecipientLike, _as_recipient, generate_letter_pdf, letter_filename
from ..config import LetterConfig
from ..engine.geometry import PageGeometry
from ..exceptions import TemplateNotFoundError, handle_exception
from ..models.recipient import LetterTemplate, Recipient
from ..templates import select_template

logger = logging.getLogger(__name__)

IntroProvider = Callable[[Recipient], Optional[str]]


@dataclass(slots=True)
class BatchResult:
    """Outcome of one batch export."""

    archive: bytes
    filename: str
    generated: int = 0
    errors: List[str] = field(default_factory=list)
    entries: List[str] = field(default_factory=list)
    failures: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.errors)


@dataclass(slots=True)
class _Rendered:
    recipient: Recipient
    filename: str = ""
    data: Optional[bytes] = None
    error: Optional[str] = None
    error_info: Optional[Dict[str, Any]] = None


class BatchLetterExporter:
    """
    Renders a letter per recipient and packs them into a ZIP archive.
    """

    def __init__(
        self,
        templates: Iterable[LetterTemplate],
        geometry: Optional[PageGeometry] = None,
        config: Optional[LetterConfig] = None,
        intro_provider: Optional[IntroProvider] = None,
        export_options: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize batch exporter.

        Args:
            templates: Candidate templates (industry specific and default)
            geometry: Page geometry shared by all letters
            config: Base URL, footer and version settings
            intro_provider: Optional callable producing ``{{personalized_intro}}``
            export_options: Exporter options (``archive_prefix``, ``compresslevel``)
        """
        self.templates = list(templates)
        self.geometry = geometry or PageGeometry()
        self.config = config or LetterConfig()
        self.intro_provider = intro_provider
        self.export_options = export_options or {}

    def get_export_option(self, key: str, default: Any = None) -> Any:
        return self.export_options.get(key, default)

    def archive_name(self, export_date: Optional[date] = None) -> str:
        prefix = self.get_export_option("archive_prefix", "letters")
        return f"{prefix}-{(export_date or date.today()).isoformat()}.zip"

    def export(
        self,
        recipients: Sequence[RecipientLike],
        *,
        max_workers: int = 1,
        export_date: Optional[date] = None,
    ) -> BatchResult:
        """
        Render letters for ``recipients``.

        Args:
            recipients: Recipient records or mappings
            max_workers: Concurrent renders (1 renders sequentially)
            export_date: Date used for the archive name and entry timestamps

        Returns:
            Archive bytes with the count of generated letters and error messages

        Raises:
            ValueError: no recipients given
        """
        if not recipients:
            raise ValueError("No recipients to export")

        export_date = export_date or date.today()
        prepared = [_as_recipient(recipient) for recipient in recipients]

        if max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                rendered = list(pool.map(self._render_one, prepared))
        else:
            rendered = [self._render_one(recipient) for recipient in prepared]

        archive, entries = self._build_archive(rendered, export_date)
        errors = [item.error for item in rendered if item.error]
        failures = [item.error_info for item in rendered if item.error_info]
        result = BatchResult(
            archive=archive,
            filename=self.archive_name(export_date),
            generated=len(entries),
            errors=errors,
            entries=entries,
            failures=failures,
        )
        logger.info("Batch export finished: %d generated, %d failed", result.generated, result.failed)
        return result

    def _intro_for(self, recipient: Recipient) -> Optional[str]:
        if self.intro_provider is None:
            return None
        try:
            return self.intro_provider(recipient)
        except Exception as exc:
            logger.warning("Failed to personalize letter for %s: %s", recipient.token, exc)
            return None

    def _render_one(self, recipient: Recipient) -> _Rendered:
        label = recipient.display_name or recipient.token
        try:
            template = select_template(self.templates, recipient.industry)
        except TemplateNotFoundError as exc:
            logger.error("No template found for %s", label)
            return self._failed(recipient, label, "No template found", exc)

        try:
            data = generate_letter_pdf(
                template.body_html,
                recipient,
                self.geometry,
                self.config,
                personalized_intro=self._intro_for(recipient),
                subject=template.subject_line,
            )
        except Exception as exc:
            logger.error("Letter for %s failed: %s", label, exc)
            return self._failed(recipient, label, str(exc), exc)

        return _Rendered(recipient, filename=letter_filename(recipient), data=data)

    @staticmethod
    def _failed(recipient: Recipient, label: str, message: str, exc: Exception) -> _Rendered:
        return _Rendered(
            recipient,
            error=f"{label}: {message}",
            error_info=handle_exception(exc, {"recipient": label, "token": recipient.token}),
        )

    def _build_archive(self, rendered: Sequence[_Rendered], export_date: date) -> Tuple[bytes, List[str]]:
        buffer = BytesIO()
        entries: List[str] = []
        seen: Dict[str, int] = {}
        timestamp = (export_date.year, export_date.month, export_date.day, 0, 0, 0)
        compresslevel = self.get_export_option("compresslevel", 9)

        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel) as archive:
            for item in rendered:
                if item.data is None:
                    continue
                name = self._unique_name(item.filename, seen)
                info = zipfile.ZipInfo(name, date_time=timestamp)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, item.data, compresslevel=compresslevel)
                entries.append(name)

        return buffer.getvalue(), entries

    @staticmethod
    def _unique_name(filename: str, seen: Dict[str, int]) -> str:
        count = seen.get(filename, 0) + 1
        seen[filename] = count
        if count == 1:
            return filename
        stem, _, suffix = filename.rpartition(".")
        return f"{stem}-{count}.{suffix}"
