"""Letter template selection."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .exceptions import TemplateNotFoundError
from .models.recipient import LetterTemplate

logger = logging.getLogger(__name__)


def select_template(templates: Iterable[LetterTemplate], industry: Optional[str]) -> LetterTemplate:
    """
    Pick the letter template for an industry.

    The first non-default template whose comma-separated industry list
    contains ``industry`` (case-insensitive) wins; otherwise the first
    default template is used.

    Raises:
        TemplateNotFoundError: neither a matching nor a default template exists
    """
    candidates = list(templates)
    wanted = (industry or "").strip().lower()

    if wanted:
        for template in candidates:
            if not template.is_default and wanted in template.industries:
                logger.debug("Template %r matches industry %r", template.name, industry)
                return template

    for template in candidates:
        if template.is_default:
            return template

    raise TemplateNotFoundError(industry=industry)
