"""
Base class for layout detectors.
"""

from abc import ABC, abstractmethod
from typing import List

import numpy as np

from .disjoint_set import DisjointSet
from ..models import LineSegment, Point, Table, distance


class BaseDetector(ABC):
    """
    Abstract base class for structure detection from vector geometry.

    Subclasses implement ``detect`` to find a specific structure in the
    line segments drawn on a page.
    """

    @abstractmethod
    def detect(self, segments: List[LineSegment]) -> List[Table]:
        """
        Detect structures among line segments.

        Args:
            segments: Segments in page space, in stream order

        Returns:
            List of detected tables
        """
        pass

    @staticmethod
    def cluster_points(points: List[Point], radius: float = 10.0) -> List[Point]:
        """
        Merge points lying within ``radius`` of each other into their centroid.

        Args:
            points: Points to cluster
            radius: Maximum distance for two points to be merged

        Returns:
            One centroid per cluster, in order of first appearance
        """
        ds = DisjointSet(len(points))
        for i in range(len(points)):
            for j in range(i + 1, len(points)):
                if distance(points[i], points[j]) <= radius:
                    ds.union(i, j)

        centroids = []
        for group in ds.groups():
            cx, cy = np.mean([points[i] for i in group], axis=0)
            centroids.append((float(cx), float(cy)))
        return centroids
