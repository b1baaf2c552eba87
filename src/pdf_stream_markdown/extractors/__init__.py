"""
Content-stream extraction components.
"""

from .base import BaseExtractor
from .content_interpreter import ContentStreamInterpreter, InterpretationResult, rgb_to_hex
from .fonts import FontEncoding, FontInfo, FontTable, decode_text, load_font_table, resolve_object
from .graphics_state import GraphicsState, Matrix

__all__ = [
    "BaseExtractor",
    "ContentStreamInterpreter",
    "InterpretationResult",
    "rgb_to_hex",
    "FontEncoding",
    "FontInfo",
    "FontTable",
    "decode_text",
    "load_font_table",
    "resolve_object",
    "GraphicsState",
    "Matrix",
]
