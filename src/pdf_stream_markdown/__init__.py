"""
PDF Stream Markdown - Convert PDF page content streams to markdown.

Pages are interpreted operator by operator into positioned text runs and
ruling lines. Tables are inferred from line geometry, reading order and
section breaks from positions, and headings from relative font size.

Quick Start:
    from pdf_stream_markdown import MarkdownConverter

    with MarkdownConverter("document.pdf") as converter:
        markdown = converter.convert()

Modular Components:
    - document: pypdf-backed page access
    - models: TextRun, LineSegment, Table data classes
    - extractors: Content-stream interpretation and font decoding
    - postprocessors: Segment clean-up pipeline
    - detectors: Table detection from ruling lines
    - analyzers: Table assignment and layout segmentation
    - generators: Markdown output generation
    - renderers, visualizers: Debug overlay
"""

__version__ = "0.1.0"

# Main converter
from .converter import MarkdownConverter, convert_pdf_bytes

# Document access
from .document import PageContent, PdfDocument

# Errors
from .errors import DocumentLoadError, EncodingDecodeError, OperatorError, PageDecodeError, PdfMarkdownError

# Models
from .models import LineSegment, Table, TableBoundary, TextRun

# Components
from .analyzers import LayoutSegmenter, PageAnalysisResult, PageAnalyzer
from .detectors import TableDetector
from .extractors import ContentStreamInterpreter
from .generators import MarkdownGenerator

__all__ = [
    # Main entry points
    "MarkdownConverter",
    "convert_pdf_bytes",
    "PdfDocument",
    "PageContent",

    # Errors
    "PdfMarkdownError",
    "DocumentLoadError",
    "PageDecodeError",
    "OperatorError",
    "EncodingDecodeError",

    # Models
    "TextRun",
    "LineSegment",
    "Table",
    "TableBoundary",

    # Components
    "ContentStreamInterpreter",
    "TableDetector",
    "LayoutSegmenter",
    "PageAnalyzer",
    "PageAnalysisResult",
    "MarkdownGenerator",
]
