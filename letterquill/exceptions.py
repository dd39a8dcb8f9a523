"""
Exceptions for letter rendering.

Parsing and layout never raise for malformed markup; the classes below cover
the hard failures: invalid page geometry, fonts or images that cannot be
embedded, PDF finalisation, and template lookup.
"""

from typing import Any, Dict, Optional


class LetterError(Exception):
    """
    Base exception for letterquill errors.

    Carries an optional causing exception, a short machine-readable code and
    free-form details so callers (batch exporter, CLI) can report failures
    together with the recipient they belong to.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize letter error.

        Args:
            message: Error message
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.error_code = error_code
        self.details = details or {}

    def get_error_info(self) -> Dict[str, Any]:
        """
        Get error information.

        Returns:
            Dictionary with error information
        """
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'cause': str(self.cause) if self.cause else None,
            'error_code': self.error_code,
            'details': self.details,
        }

    def __str__(self) -> str:
        return self.message


class GeometryError(LetterError):
    """Page geometry that cannot produce a valid layout."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 field_value: Optional[Any] = None, **kwargs):
        super().__init__(message, error_code=kwargs.pop('error_code', 'geometry'), **kwargs)
        self.field_name = field_name
        self.field_value = field_value

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'field_name': self.field_name,
            'field_value': self.field_value,
        })
        return info


class FontError(LetterError):
    """
    Font could not be registered or embedded.

    Raised when a configured TrueType file is missing or unreadable, or when
    ReportLab rejects a font name at paint time.
    """

    def __init__(self, message: str, font_name: Optional[str] = None,
                 font_path: Optional[str] = None, **kwargs):
        super().__init__(message, error_code=kwargs.pop('error_code', 'font'), **kwargs)
        self.font_name = font_name
        self.font_path = font_path

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'font_name': self.font_name,
            'font_path': self.font_path,
        })
        return info


class AssetError(LetterError):
    """QR code could not be generated, decoded or embedded."""

    def __init__(self, message: str, asset: Optional[str] = None, **kwargs):
        super().__init__(message, error_code=kwargs.pop('error_code', 'asset'), **kwargs)
        self.asset = asset

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['asset'] = self.asset
        return info


class RenderError(LetterError):
    """PDF canvas could not be painted or finalised."""

    def __init__(self, message: str, render_engine: Optional[str] = "reportlab", **kwargs):
        super().__init__(message, error_code=kwargs.pop('error_code', 'render'), **kwargs)
        self.render_engine = render_engine

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['render_engine'] = self.render_engine
        return info


class TemplateError(LetterError):
    """Letter template problems."""


class TemplateNotFoundError(TemplateError):
    """No industry template and no default template is available."""

    def __init__(self, message: str = "No letter template found", industry: Optional[str] = None, **kwargs):
        super().__init__(message, error_code=kwargs.pop('error_code', 'template_not_found'), **kwargs)
        self.industry = industry


def handle_exception(exception: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Handle exception and return error information.

    Args:
        exception: Exception to handle
        context: Additional context (e.g. recipient token)

    Returns:
        Dictionary with error information
    """
    if isinstance(exception, LetterError):
        error_info = exception.get_error_info()
    else:
        error_info = {
            'type': exception.__class__.__name__,
            'message': str(exception),
            'error_code': None,
            'details': {},
            'cause': None,
        }

    if context:
        error_info['context'] = context

    return error_info

