"""
Tagged unions passed between pipeline stages.
"""

from typing import List, Union

from .line_segment import LineSegment
from .table import Table
from .text_run import TextRun

# Raw interpreter output, in stream execution order
Unit = Union[TextRun, LineSegment]

# Unit of layout after table detection
Element = Union[TextRun, Table]

# Elements sharing a y coordinate; an empty row marks a section break
Row = List[Element]
