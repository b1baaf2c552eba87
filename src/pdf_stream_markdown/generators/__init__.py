"""
Markdown generation components.
"""

from .base import BaseGenerator
from .markdown_generator import MarkdownGenerator

__all__ = ["BaseGenerator", "MarkdownGenerator"]
