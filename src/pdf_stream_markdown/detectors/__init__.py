"""
Table detection from vector ruling lines.
"""

from .base import BaseDetector
from .disjoint_set import DisjointSet
from .table_detector import TableDetector, quantize

__all__ = ["BaseDetector", "DisjointSet", "TableDetector", "quantize"]
