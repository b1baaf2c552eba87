"""
Base class for page content extractors.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseExtractor(ABC):
    """
    Abstract base class for extracting drawable units from a page.

    Subclasses implement ``extract`` for a specific page representation.
    """

    @abstractmethod
    def extract(self, page: Any) -> Any:
        """
        Extract units from a document page.

        Args:
            page: The page object to extract from

        Returns:
            Extraction result holding the units found on the page
        """
        pass
