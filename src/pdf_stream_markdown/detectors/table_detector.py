"""
Table grid detection from ruling lines.

Segments are deduplicated, clustered into connected groups, and each group's
horizontal/vertical crossings are arranged into a grid of cell boundaries.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from .base import BaseDetector
from .disjoint_set import DisjointSet
from ..models import LineSegment, Point, Table, TableBoundary
from ..postprocessors import PostProcessorPipeline, SegmentDeduplicator

logger = logging.getLogger(__name__)


def quantize(value: float, epsilon: float) -> int:
    """Snap a coordinate to a multiple of ``epsilon`` (halves away from zero)."""
    return int(math.copysign(math.floor(abs(value) / epsilon + 0.5), value))


class TableDetector(BaseDetector):
    """
    Detects table grids formed by horizontal and vertical ruling lines.

    Args:
        dedup_tolerance: Endpoint distance below which two segments are duplicates
        connect_tolerance: Endpoint distance at which two segments belong to one cluster
        axis_tolerance: Coordinate difference below which a segment is axis-aligned
        intersect_tolerance: Slack when testing whether two segments cross
        merge_radius: Radius for merging nearby crossings into one grid point
        grid_epsilon: Quantization step used to order grid points into rows
        min_boundaries: Minimum number of cells for a grid to count as a table
        pipeline: Segment pre-processing; defaults to deduplication only
    """

    def __init__(
        self,
        dedup_tolerance: float = 5.0,
        connect_tolerance: float = 10.0,
        axis_tolerance: float = 2.0,
        intersect_tolerance: float = 10.0,
        merge_radius: float = 10.0,
        grid_epsilon: float = 3.0,
        min_boundaries: int = 2,
        pipeline: Optional[PostProcessorPipeline] = None,
    ):
        self.connect_tolerance = connect_tolerance
        self.axis_tolerance = axis_tolerance
        self.intersect_tolerance = intersect_tolerance
        self.merge_radius = merge_radius
        self.grid_epsilon = grid_epsilon
        self.min_boundaries = min_boundaries
        self.pipeline = pipeline or PostProcessorPipeline([SegmentDeduplicator(dedup_tolerance)])

    def detect(self, segments: List[LineSegment], context: Optional[Dict[str, Any]] = None) -> List[Table]:
        """
        Detect tables among the segments of a page.

        Args:
            segments: Segments in stream order
            context: Optional information forwarded to the pipeline

        Returns:
            Tables in cluster order
        """
        segments = self.pipeline(list(segments), context)

        tables = []
        for cluster in self.cluster_segments(segments):
            points = self.find_intersections(cluster)
            if not points:
                continue
            table = self.build_table(points)
            if table is not None:
                tables.append(table)

        logger.debug("Detected %d table(s) from %d segments", len(tables), len(segments))
        return tables

    def cluster_segments(self, segments: List[LineSegment]) -> List[List[LineSegment]]:
        """Group segments connected through endpoints within ``connect_tolerance``."""
        ds = DisjointSet(len(segments))
        for i in range(len(segments)):
            for j in range(i + 1, len(segments)):
                if segments[i].touches(segments[j], self.connect_tolerance):
                    ds.union(i, j)
        return [[segments[i] for i in group] for group in ds.groups()]

    def split_axes(self, segments: List[LineSegment]) -> Tuple[List[LineSegment], List[LineSegment]]:
        """Separate horizontal and vertical segments; slanted ones are dropped."""
        horizontal, vertical = [], []
        for segment in segments:
            if segment.is_horizontal(self.axis_tolerance):
                horizontal.append(segment)
            elif segment.is_vertical(self.axis_tolerance):
                vertical.append(segment)
        return horizontal, vertical

    def find_intersections(self, segments: List[LineSegment]) -> List[Point]:
        """
        Crossing points of the horizontal and vertical segments of one cluster.

        Returns:
            Merged crossing points, empty when either orientation is missing
        """
        horizontal, vertical = self.split_axes(segments)
        if not horizontal or not vertical:
            return []

        tol = self.intersect_tolerance
        points = []
        for h in horizontal:
            h_y = h.start[1]
            h_min, h_max = sorted((h.start[0], h.end[0]))
            for v in vertical:
                v_x = v.start[0]
                v_min, v_max = sorted((v.start[1], v.end[1]))
                if h_min - tol <= v_x <= h_max + tol and v_min - tol <= h_y <= v_max + tol:
                    points.append((v_x, h_y))

        return self.cluster_points(points, self.merge_radius)

    def arrange_grid(self, points: List[Point]) -> List[List[Point]]:
        """
        Order grid points into rows, bottom row first, each row left to right.
        """
        eps = self.grid_epsilon
        ordered = sorted(points, key=lambda p: (quantize(p[1], eps), quantize(p[0], eps)))

        rows: List[List[Point]] = []
        for point in ordered:
            if rows and abs(point[1] - rows[-1][0][1]) <= eps:
                rows[-1].append(point)
            else:
                rows.append([point])

        for row in rows:
            row.sort(key=lambda p: p[0])
        return rows

    def build_table(self, points: List[Point]) -> Optional[Table]:
        """
        Turn grid points into a table.

        A cell spans from a row's point to the next row's point one column to
        the right.

        Returns:
            Table, or None when fewer than ``min_boundaries`` cells form
        """
        rows = self.arrange_grid(points)

        boundaries = []
        for row, next_row in zip(rows, rows[1:]):
            cols = min(len(row), len(next_row))
            for i in range(cols - 1):
                corner, opposite = row[i], next_row[i + 1]
                boundaries.append(TableBoundary(
                    minx=corner[0],
                    maxx=opposite[0],
                    miny=corner[1],
                    maxy=opposite[1],
                ))

        if len(boundaries) < self.min_boundaries:
            return None

        first, last = rows[0][0], rows[-1][-1]
        return Table(
            boundaries=boundaries,
            x=(first[0] + last[0]) / 2,
            y=(first[1] + last[1]) / 2,
        )
