"""
Base class for output generators.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models import Row


class BaseGenerator(ABC):
    """Abstract base class for output generation."""

    @abstractmethod
    def generate(self, rows: List[Row], context: Optional[Dict[str, Any]] = None) -> str:
        """Generate output from laid-out rows of a page."""
        pass
