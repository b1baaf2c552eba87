"""
Table models built from intersecting ruling lines.
"""

from dataclasses import dataclass, field
from typing import List

from .ordering import sort_into_rows
from .text_run import TextRun


@dataclass
class TableBoundary:
    """
    One rectangular grid cell of a detected table.

    Attributes:
        minx: Left edge
        maxx: Right edge
        miny: Bottom edge
        maxy: Top edge
        elements: Text runs claimed by this cell
    """
    minx: float
    maxx: float
    miny: float
    maxy: float
    elements: List[TextRun] = field(default_factory=list)

    def contains(self, x: float, y: float) -> bool:
        """Strict containment in the open rectangle."""
        return self.minx < x < self.maxx and self.miny < y < self.maxy

    def assign(self, run: TextRun) -> bool:
        """Claim the run if its origin lies inside this cell."""
        if self.contains(run.x, run.y):
            self.elements.append(run)
            return True
        return False

    def sorted_runs(self, tolerance: float = 1.0) -> List[TextRun]:
        """Claimed runs in reading order."""
        return [run for row in sort_into_rows(self.elements, tolerance) for run in row]


@dataclass
class Table:
    """
    A grid of boundaries with a representative center used for layout sorting.

    Attributes:
        boundaries: Grid cells in detection order
        x: Horizontal center of the grid
        y: Vertical center of the grid
    """
    boundaries: List[TableBoundary]
    x: float
    y: float

    def assign(self, run: TextRun) -> bool:
        """Offer a run to the cells in order; the first containing cell claims it."""
        for boundary in self.boundaries:
            if boundary.assign(run):
                return True
        return False

    def sorted_cells(self, tolerance: float = 1.0) -> List[List[List[TextRun]]]:
        """
        Cell contents as rows of cells of runs.

        Cells are ordered top row first, left to right. Two cells share a row
        when their bottom edges are within ``tolerance`` of each other.
        """
        ordered = sorted(self.boundaries, key=lambda b: (-b.miny, b.minx))

        rows: List[List[TableBoundary]] = []
        for boundary in ordered:
            for row in rows:
                if abs(row[0].miny - boundary.miny) < tolerance:
                    row.append(boundary)
                    break
            else:
                rows.append([boundary])

        return [
            [cell.sorted_runs(tolerance) for cell in sorted(row, key=lambda b: b.minx)]
            for row in rows
        ]

    @property
    def text_run_count(self) -> int:
        return sum(len(boundary.elements) for boundary in self.boundaries)

    def __repr__(self) -> str:
        return f"Table(x={self.x:.1f}, y={self.y:.1f}, cells={len(self.boundaries)})"
