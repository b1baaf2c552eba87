"""
Page analysis combining interpretation, table detection and layout.
"""

import logging
import statistics
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .layout_segmenter import LayoutSegmenter
from ..detectors import TableDetector
from ..errors import OperatorError
from ..extractors import ContentStreamInterpreter
from ..models import LineSegment, Row, Table, TextRun, Unit

logger = logging.getLogger(__name__)


@dataclass
class PageAnalysisResult:
    """Container for page analysis results."""
    page_index: int = 0
    units: List[Unit] = field(default_factory=list)
    tables: List[Table] = field(default_factory=list)
    free_text: List[TextRun] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    diagnostics: List[OperatorError] = field(default_factory=list)

    @property
    def text_runs(self) -> List[TextRun]:
        return [unit for unit in self.units if isinstance(unit, TextRun)]

    @property
    def segments(self) -> List[LineSegment]:
        return [unit for unit in self.units if isinstance(unit, LineSegment)]

    @property
    def median_font_size(self) -> Optional[float]:
        """Median size over every text run that has one, None if none does."""
        sizes = [run.font_size for run in self.text_runs if run.font_size is not None]
        return statistics.median(sizes) if sizes else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_index": self.page_index,
            "text_runs": [run.to_dict() for run in self.text_runs],
            "segments": len(self.segments),
            "tables": [repr(table) for table in self.tables],
            "free_text": len(self.free_text),
            "rows": len(self.rows),
            "median_font_size": self.median_font_size,
            "diagnostics": [str(error) for error in self.diagnostics],
        }


class PageAnalyzer:
    """Analyzes page content using all pipeline components."""

    def __init__(
        self,
        interpreter: Optional[ContentStreamInterpreter] = None,
        detector: Optional[TableDetector] = None,
        segmenter: Optional[LayoutSegmenter] = None,
    ):
        self.interpreter = interpreter or ContentStreamInterpreter()
        self.detector = detector or TableDetector()
        self.segmenter = segmenter or LayoutSegmenter()

    def analyze(self, page) -> PageAnalysisResult:
        """Interpret a loaded page and lay out its content."""
        extraction = self.interpreter.extract(page)
        return self.analyze_units(extraction.units, page.index, extraction.diagnostics)

    def analyze_units(
        self,
        units: List[Unit],
        page_index: int = 0,
        diagnostics: Optional[List[OperatorError]] = None,
    ) -> PageAnalysisResult:
        """Detect tables and build rows from already interpreted units."""
        runs = [unit for unit in units if isinstance(unit, TextRun)]
        segments = [unit for unit in units if isinstance(unit, LineSegment)]

        tables = self.detector.detect(segments, {"page_index": page_index})
        elements = self.segmenter.assemble(runs, tables)
        free_text = [element for element in elements if isinstance(element, TextRun)]
        rows = self.segmenter.build_rows(elements)

        logger.debug(
            "Page %d: %d runs, %d segments, %d tables, %d rows",
            page_index + 1, len(runs), len(segments), len(tables), len(rows),
        )
        return PageAnalysisResult(
            page_index=page_index,
            units=list(units),
            tables=tables,
            free_text=free_text,
            rows=rows,
            diagnostics=list(diagnostics or []),
        )
