"""PDF output for laid out letters."""

from .pdf_compiler import PDFCompiler

__all__ = ["PDFCompiler"]
