"""
LineSegment model for ruling lines drawn by path operators.
"""

import math
from dataclasses import dataclass
from typing import Tuple

Point = Tuple[float, float]


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


@dataclass(frozen=True)
class LineSegment:
    """
    A straight segment in page space.

    Attributes:
        start: First endpoint (x, y)
        end: Second endpoint (x, y)
    """
    start: Point
    end: Point

    @property
    def length(self) -> float:
        return distance(self.start, self.end)

    @property
    def endpoints(self) -> Tuple[Point, Point]:
        return self.start, self.end

    def is_horizontal(self, tolerance: float = 2.0) -> bool:
        """Endpoints share (almost) the same y."""
        return abs(self.start[1] - self.end[1]) < tolerance

    def is_vertical(self, tolerance: float = 2.0) -> bool:
        """Endpoints share (almost) the same x."""
        return abs(self.start[0] - self.end[0]) < tolerance

    def touches(self, other: "LineSegment", tolerance: float) -> bool:
        """Whether any endpoint of this segment lies within tolerance of one of other's."""
        return any(
            distance(p, q) <= tolerance
            for p in self.endpoints
            for q in other.endpoints
        )

    def matches(self, other: "LineSegment", tolerance: float) -> bool:
        """Whether both endpoints coincide with other's, in either order."""
        same = distance(self.start, other.start) < tolerance and distance(self.end, other.end) < tolerance
        swapped = distance(self.start, other.end) < tolerance and distance(self.end, other.start) < tolerance
        return same or swapped
