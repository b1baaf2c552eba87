"""
Reading order and section breaks from positions alone.
"""

import logging
from typing import List

from ..models import Element, Row, Table, TextRun, sort_into_rows

logger = logging.getLogger(__name__)


class LayoutSegmenter:
    """
    Arranges free text and tables into rows and inserts section breaks.

    A section break (an empty row) follows row 0 when the first vertical gap
    exceeds ``first_gap_threshold``, and follows row i when gap i is more than
    ``gap_growth_ratio`` times gap i-1.

    Args:
        row_tolerance: Maximum y difference for elements sharing a row
        first_gap_threshold: Gap after the first row that starts a new section
        gap_growth_ratio: Relative gap growth that starts a new section
    """

    def __init__(
        self,
        row_tolerance: float = 1.0,
        first_gap_threshold: float = 20.0,
        gap_growth_ratio: float = 1.3,
    ):
        self.row_tolerance = row_tolerance
        self.first_gap_threshold = first_gap_threshold
        self.gap_growth_ratio = gap_growth_ratio

    def assign_text(self, runs: List[TextRun], tables: List[Table]) -> List[TextRun]:
        """
        Offer every run to the tables in order; the first table whose cell
        contains the run claims it.

        Returns:
            Runs claimed by no table, in input order
        """
        free = []
        for run in runs:
            claimed = False
            for table in tables:
                if table.assign(run):
                    claimed = True
                    break
            if not claimed:
                free.append(run)
        return free

    def assemble(self, runs: List[TextRun], tables: List[Table]) -> List[Element]:
        """Free text followed by tables, ready for row building."""
        free = self.assign_text(runs, tables) if tables else list(runs)
        elements: List[Element] = list(free)
        elements.extend(tables)
        return elements

    def build_rows(self, elements: List[Element]) -> List[Row]:
        """
        Group elements into rows, top to bottom, and insert spacer rows.

        Returns:
            Rows of elements; an empty row marks a section break
        """
        rows: List[Row] = sort_into_rows(elements, self.row_tolerance)
        if len(rows) < 2:
            return rows

        heights = [max(element.y for element in row) for row in rows]
        gaps = [upper - lower for upper, lower in zip(heights, heights[1:])]

        result: List[Row] = []
        for i, row in enumerate(rows):
            result.append(row)
            if i == 0:
                if gaps[0] > self.first_gap_threshold:
                    result.append([])
            elif i < len(gaps) and gaps[i] > gaps[i - 1] * self.gap_growth_ratio:
                result.append([])

        logger.debug("Built %d rows with %d section breaks", len(rows), len(result) - len(rows))
        return result

    def segment(self, runs: List[TextRun], tables: List[Table]) -> List[Row]:
        """Assign text to tables and lay out the remaining elements."""
        return self.build_rows(self.assemble(runs, tables))
