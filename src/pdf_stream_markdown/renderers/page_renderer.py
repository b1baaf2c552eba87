"""
PDF page rendering to images for the debug overlay.
"""

from typing import Tuple

import cv2
import numpy as np

try:
    import fitz  # PyMuPDF
except ImportError:
    fitz = None


class PageRenderer:
    """
    Renders PDF pages to BGR images with PyMuPDF.

    Args:
        dpi: Rendering resolution
    """

    def __init__(self, dpi: int = 150):
        if fitz is None:
            raise ImportError("PyMuPDF (fitz) is required for page rendering")

        self.dpi = dpi
        self.zoom = dpi / 72.0  # PDF points to pixels

    @property
    def scale(self) -> float:
        """Scaling factor from PDF points to pixels."""
        return self.zoom

    @staticmethod
    def open(data: bytes):
        """Open an in-memory PDF with PyMuPDF."""
        if fitz is None:
            raise ImportError("PyMuPDF (fitz) is required for page rendering")
        return fitz.open(stream=data, filetype="pdf")

    def render(self, page) -> np.ndarray:
        """
        Render a page.

        Args:
            page: PyMuPDF page object

        Returns:
            OpenCV image (BGR format)
        """
        mat = fitz.Matrix(self.zoom, self.zoom)
        pix = page.get_pixmap(matrix=mat, alpha=False)

        img = np.frombuffer(pix.samples, dtype=np.uint8).reshape(pix.height, pix.width, pix.n)
        if pix.n == 3:
            img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
        elif pix.n == 4:
            img = cv2.cvtColor(img, cv2.COLOR_RGBA2BGR)
        elif pix.n == 1:
            img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
        return img

    def to_pixel(self, x: float, y: float, page_height: float) -> Tuple[int, int]:
        """Map PDF user space (origin bottom-left) to image pixels (origin top-left)."""
        return int(round(x * self.zoom)), int(round((page_height - y) * self.zoom))
