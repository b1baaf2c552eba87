"""
Main PDF to Markdown converter.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .analyzers import PageAnalysisResult, PageAnalyzer
from .document import PdfDocument
from .errors import PdfMarkdownError
from .generators import MarkdownGenerator
from .renderers import PageRenderer
from .visualizers import PageAnnotator

logger = logging.getLogger(__name__)

Source = Union[bytes, str, Path, PdfDocument]


class MarkdownConverter:
    """
    Converts a PDF document to markdown, page by page.

    Each page is preceded by a page-number marker. Pages whose content cannot
    be decoded are replaced by an error marker and conversion continues.

    Example:
        with MarkdownConverter("document.pdf") as converter:
            markdown = converter.convert()
            converter.save("document.md")

    Args:
        source: PDF bytes, a path, or an already opened PdfDocument
        analyzer: Page analyzer (defaults to the standard pipeline)
        generator: Markdown generator
        dpi: Resolution of debug images
    """

    def __init__(
        self,
        source: Source,
        analyzer: Optional[PageAnalyzer] = None,
        generator: Optional[MarkdownGenerator] = None,
        dpi: int = 150,
    ):
        if isinstance(source, PdfDocument):
            self.document = source
        elif isinstance(source, (bytes, bytearray)):
            self.document = PdfDocument.from_bytes(bytes(source))
        else:
            self.document = PdfDocument.from_path(source)

        self.analyzer = analyzer or PageAnalyzer()
        self.generator = generator or MarkdownGenerator()
        self.dpi = dpi
        self.diagnostics: List[PdfMarkdownError] = []

        self._renderer = None
        self._annotator = None
        self._fitz_doc = None

    @property
    def page_count(self) -> int:
        """Number of pages in the PDF."""
        return self.document.page_count

    def analyze_page(self, page_num: int = 0) -> PageAnalysisResult:
        """
        Analyze a single page.

        Raises:
            PageDecodeError: If the page content cannot be decoded
        """
        return self.analyzer.analyze(self.document.page(page_num))

    def render_analysis(self, analysis: PageAnalysisResult) -> str:
        """Markdown body of an analyzed page."""
        return self.generator.generate(
            analysis.rows, {"median_font_size": analysis.median_font_size}
        )

    def generate_markdown(self, page_num: int = 0) -> str:
        """Generate the markdown body of a single page (without marker)."""
        return self.render_analysis(self.analyze_page(page_num))

    def convert(self) -> str:
        """Convert the entire document."""
        self.diagnostics = []
        md_parts = []

        for i in range(self.page_count):
            logger.info("Converting page %d/%d", i + 1, self.page_count)
            md_parts.append(self.generator.page_marker(i + 1))
            try:
                analysis = self.analyze_page(i)
            except PdfMarkdownError as e:
                logger.warning("Skipping page %d: %s", i + 1, e)
                self.diagnostics.append(e)
                md_parts.append(self.generator.error_marker(i + 1))
                continue

            self.diagnostics.extend(analysis.diagnostics)
            md_parts.append(self.render_analysis(analysis))

        if self.diagnostics:
            logger.info("Converted with %d diagnostic(s)", len(self.diagnostics))
        return "".join(md_parts)

    def save(self, output_path: Union[str, Path]) -> str:
        """Convert and write markdown to a file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        markdown = self.convert()
        output_path.write_text(markdown, encoding="utf-8")

        logger.info("Saved markdown to: %s", output_path)
        return markdown

    def create_annotated_image(self, page_num: int = 0, output_path: Optional[str] = None) -> np.ndarray:
        """
        Render a page and draw its segments, table cells and text anchors.

        Requires PyMuPDF and OpenCV; not used by ``convert``.
        """
        if self._renderer is None:
            self._renderer = PageRenderer(self.dpi)
            self._annotator = PageAnnotator()
        if self._fitz_doc is None:
            self._fitz_doc = self._renderer.open(self.document.data)

        page = self.document.page(page_num)
        analysis = self.analyzer.analyze(page)
        image = self._renderer.render(self._fitz_doc[page_num])

        annotated = self._annotator.annotate(
            image,
            lambda x, y: self._renderer.to_pixel(x, y, page.height),
            segments=analysis.segments,
            tables=analysis.tables,
            text_runs=analysis.text_runs,
            median_font_size=analysis.median_font_size,
        )

        if output_path:
            self._annotator.save(annotated, output_path)
            logger.info("Annotated image saved: %s", output_path)
        return annotated

    def close(self):
        """Release the rendering document, if one was opened."""
        if self._fitz_doc is not None:
            self._fitz_doc.close()
            self._fitz_doc = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def convert_pdf_bytes(data: bytes) -> str:
    """
    Convert an in-memory PDF to markdown.

    Raises:
        DocumentLoadError: If the bytes are not a readable PDF
    """
    with MarkdownConverter(data) as converter:
        return converter.convert()
