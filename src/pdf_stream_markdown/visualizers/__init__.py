"""
Debug visualization of detected geometry.
"""

from .annotator import PageAnnotator

__all__ = ["PageAnnotator"]
