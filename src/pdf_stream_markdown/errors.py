"""
Exception hierarchy for PDF to markdown conversion.
"""

from typing import Optional


class PdfMarkdownError(Exception):
    """Base class for all conversion errors."""


class DocumentLoadError(PdfMarkdownError):
    """The input could not be parsed as a PDF document. Fatal."""


class PageDecodeError(PdfMarkdownError):
    """A page content stream could not be decoded."""

    def __init__(self, page_index: int, cause: Exception):
        self.page_index = page_index
        self.cause = cause
        super().__init__(f"Failed to decode content of page {page_index + 1}: {cause}")


class OperatorError(PdfMarkdownError):
    """
    A single content-stream operator could not be executed.

    These are recoverable: the interpreter records them and skips the operator.
    """

    def __init__(self, page_index: int, operator: str, cause: Optional[Exception] = None, message: str = ""):
        self.page_index = page_index
        self.operator = operator
        self.cause = cause
        detail = message or str(cause)
        super().__init__(f"Page {page_index + 1}, operator '{operator}': {detail}")


class EncodingDecodeError(PdfMarkdownError):
    """Shown-text bytes could not be decoded with a font encoding."""
