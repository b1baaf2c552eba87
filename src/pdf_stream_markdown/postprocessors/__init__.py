"""
Segment pre-processing applied before table detection.
"""

from .base import BasePostProcessor, PostProcessorPipeline
from .dedup_processor import SegmentDeduplicator

__all__ = [
    "BasePostProcessor",
    "PostProcessorPipeline",
    "SegmentDeduplicator",
]
