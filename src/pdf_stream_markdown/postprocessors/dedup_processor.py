"""
Duplicate segment removal.
"""

from typing import Any, Dict, List, Optional

from .base import BasePostProcessor
from ..models import LineSegment


class SegmentDeduplicator(BasePostProcessor):
    """Drops segments whose endpoints match an earlier segment's, in either order."""

    def __init__(self, tolerance: float = 5.0, name: Optional[str] = None):
        super().__init__(name)
        self.tolerance = tolerance

    def process(self, items: List[LineSegment], context: Optional[Dict[str, Any]] = None) -> List[LineSegment]:
        keep: List[LineSegment] = []
        for segment in items:
            if not any(segment.matches(kept, self.tolerance) for kept in keep):
                keep.append(segment)
        return keep
