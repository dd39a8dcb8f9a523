"""Letter exporters."""

from .zip_exporter import BatchLetterExporter, BatchResult

__all__ = ["BatchLetterExporter", "BatchResult"]
