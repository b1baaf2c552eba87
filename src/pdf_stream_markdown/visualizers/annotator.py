"""
Page annotation for debug visualization.
"""

from typing import Callable, Dict, List, Optional, Tuple

import cv2
import numpy as np

from ..models import LineSegment, Table, TextRun

# Maps a PDF point (x, y) to an image pixel
PixelMapper = Callable[[float, float], Tuple[int, int]]


class PageAnnotator:
    """Draws interpreted geometry over a rendered page."""

    # Default colors (BGR format)
    COLORS = {
        "segment": (255, 255, 0),   # Cyan
        "cell": (0, 255, 0),        # Green
        "text": (0, 0, 255),        # Red
        "heading": (255, 0, 255),   # Magenta
    }

    def __init__(self, colors: Optional[Dict[str, Tuple[int, int, int]]] = None):
        self.colors = {**self.COLORS, **(colors or {})}

    def annotate(
        self,
        image: np.ndarray,
        to_pixel: PixelMapper,
        segments: Optional[List[LineSegment]] = None,
        tables: Optional[List[Table]] = None,
        text_runs: Optional[List[TextRun]] = None,
        median_font_size: Optional[float] = None,
    ) -> np.ndarray:
        """Create an annotated copy of the image."""
        annotated = image.copy()

        if segments:
            for segment in segments:
                cv2.line(annotated, to_pixel(*segment.start), to_pixel(*segment.end), self.colors["segment"], 1)
        if tables:
            for table in tables:
                for cell in table.boundaries:
                    cv2.rectangle(
                        annotated,
                        to_pixel(cell.minx, cell.maxy),
                        to_pixel(cell.maxx, cell.miny),
                        self.colors["cell"],
                        2,
                    )
        if text_runs:
            self._draw_anchors(annotated, text_runs, to_pixel, median_font_size)

        return annotated

    def _draw_anchors(self, img: np.ndarray, runs: List[TextRun], to_pixel: PixelMapper, median: Optional[float]):
        for run in runs:
            large = median is not None and run.font_size is not None and run.font_size >= 2 * median
            color = self.colors["heading"] if large else self.colors["text"]
            cv2.circle(img, to_pixel(run.x, run.y), 3, color, -1)

    def save(self, image: np.ndarray, path: str) -> bool:
        """Save annotated image to file."""
        return bool(cv2.imwrite(str(path), image))
