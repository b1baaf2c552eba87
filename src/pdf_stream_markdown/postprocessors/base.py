"""
Base classes for the segment pre-processing pipeline.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models import LineSegment


class BasePostProcessor(ABC):
    """
    Abstract base class for segment processors.

    Processors clean up the ruling lines produced by the interpreter before
    table detection, e.g. by removing duplicates drawn twice by the producer.
    They can be chained in a ``PostProcessorPipeline``.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self.enabled = True

    @abstractmethod
    def process(self, items: List[LineSegment], context: Optional[Dict[str, Any]] = None) -> List[LineSegment]:
        """
        Process a list of segments.

        Args:
            items: Segments in stream order
            context: Optional extra information (e.g. page index)

        Returns:
            Processed segments
        """
        pass

    def __call__(self, items: List[LineSegment], context: Optional[Dict[str, Any]] = None) -> List[LineSegment]:
        if not self.enabled:
            return items
        return self.process(items, context)

    def __repr__(self) -> str:
        return f"{self.name}(enabled={self.enabled})"


class PostProcessorPipeline:
    """
    Processors executed in sequence.

    Example:
        pipeline = PostProcessorPipeline([SegmentDeduplicator(tolerance=5.0)])
        segments = pipeline(segments)
    """

    def __init__(self, processors: Optional[List[BasePostProcessor]] = None):
        self.processors: List[BasePostProcessor] = processors or []

    def add(self, processor: BasePostProcessor) -> "PostProcessorPipeline":
        """Append a processor; returns self for chaining."""
        self.processors.append(processor)
        return self

    def process(self, items: List[LineSegment], context: Optional[Dict[str, Any]] = None) -> List[LineSegment]:
        result = items
        for processor in self.processors:
            result = processor(result, context)
        return result

    def __call__(self, items: List[LineSegment], context: Optional[Dict[str, Any]] = None) -> List[LineSegment]:
        return self.process(items, context)

    def __len__(self) -> int:
        return len(self.processors)

    def __repr__(self) -> str:
        return f"PostProcessorPipeline({[p.name for p in self.processors]})"
