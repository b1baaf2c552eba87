"""
TextRun model for text shown by a single content-stream operator.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass
class TextRun:
    """
    Represents a run of text emitted by one text-showing operator.

    Attributes:
        text: The decoded text content
        x: Horizontal position of the run origin in page space
        y: Vertical position of the run origin in page space (grows upwards)
        font_name: BaseFont name resolved from the page font table
        font_size: Nominal font size scaled by the text matrix
        italic: True when the text matrix carries a shear component
        underlined: Set retroactively when a stroke color follows the run
        color: Fill color as ``#RRGGBB`` when the text is not black
    """
    text: str
    x: float = 0.0
    y: float = 0.0
    font_name: Optional[str] = None
    font_size: Optional[float] = None
    italic: bool = False
    underlined: bool = False
    color: Optional[str] = None

    @property
    def is_bold(self) -> bool:
        """Whether the font name marks the run as bold."""
        return "bold" in (self.font_name or "").lower()

    @property
    def is_italic(self) -> bool:
        """Whether the run is slanted or uses an italic font."""
        return self.italic or "italic" in (self.font_name or "").lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "font_name": self.font_name,
            "font_size": self.font_size,
            "italic": self.italic,
            "underlined": self.underlined,
            "color": self.color,
        }

    def __repr__(self) -> str:
        text = self.text if len(self.text) <= 20 else self.text[:20] + "..."
        return f"TextRun(x={self.x:.1f}, y={self.y:.1f}, text='{text}')"
