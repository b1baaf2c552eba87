"""
Page rendering for debug visualization.
"""

from .page_renderer import PageRenderer

__all__ = ["PageRenderer"]
