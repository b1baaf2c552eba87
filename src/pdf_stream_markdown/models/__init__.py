"""
Data models for page content interpretation and layout.
"""

from .text_run import TextRun
from .line_segment import LineSegment, Point, distance
from .table import Table, TableBoundary
from .element import Element, Row, Unit
from .ordering import sort_into_rows

__all__ = [
    "TextRun",
    "LineSegment",
    "Point",
    "distance",
    "Table",
    "TableBoundary",
    "Element",
    "Row",
    "Unit",
    "sort_into_rows",
]
