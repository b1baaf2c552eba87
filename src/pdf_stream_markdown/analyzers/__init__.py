"""
Page analysis: table assignment, reading order and section breaks.
"""

from .layout_segmenter import LayoutSegmenter
from .page_analyzer import PageAnalysisResult, PageAnalyzer

__all__ = ["LayoutSegmenter", "PageAnalysisResult", "PageAnalyzer"]
