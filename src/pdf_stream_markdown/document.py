"""
PDF object model access built on pypdf.

``PdfDocument`` exposes exactly what page interpretation needs: the number of
pages and, per page, the decoded content-stream operators, the font table and
the resource dictionary.
"""

import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

from pypdf import PdfReader
from pypdf.errors import PyPdfError
from pypdf.generic import DictionaryObject, NameObject

from .errors import DocumentLoadError, PageDecodeError
from .extractors.content_interpreter import Operation
from .extractors.fonts import FontTable, load_font_table, resolve_object

logger = logging.getLogger(__name__)


@dataclass
class PageContent:
    """
    Decoded content of one page.

    Attributes:
        index: 0-based page index
        operations: ``(operands, operator)`` pairs in stream order
        fonts: Font table built from the page resources
        resources: Page resource dictionary (None if the page has none)
        pdf: Reader that owns the page, used to parse form XObjects
        width: Media box width in points
        height: Media box height in points
    """
    index: int
    operations: List[Operation] = field(default_factory=list)
    fonts: FontTable = field(default_factory=dict)
    resources: Optional[DictionaryObject] = None
    pdf: Any = None
    width: float = 0.0
    height: float = 0.0

    def __repr__(self) -> str:
        return f"PageContent(index={self.index}, operations={len(self.operations)}, fonts={list(self.fonts)})"


class PdfDocument:
    """
    A parsed PDF document.

    Use ``from_bytes`` or ``from_path`` to construct.

    Raises:
        DocumentLoadError: If the input is not a readable, unencrypted PDF
    """

    def __init__(self, reader: PdfReader, data: bytes = b""):
        if reader.is_encrypted:
            raise DocumentLoadError("Input is an encrypted PDF and could not be parsed")
        self.reader = reader
        self.data = data
        try:
            self._page_count = len(reader.pages)
        except (PyPdfError, ValueError, KeyError, TypeError) as e:
            raise DocumentLoadError(f"Input could not be parsed as PDF: {e}") from e

    @classmethod
    def from_bytes(cls, data: bytes) -> "PdfDocument":
        try:
            reader = PdfReader(BytesIO(data))
        except (PyPdfError, ValueError, KeyError, TypeError, OSError) as e:
            raise DocumentLoadError(f"Input could not be parsed as PDF: {e}") from e
        return cls(reader, data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "PdfDocument":
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise DocumentLoadError(f"Cannot read {path}: {e}") from e
        return cls.from_bytes(data)

    @property
    def page_count(self) -> int:
        return self._page_count

    def page(self, index: int) -> PageContent:
        """
        Load one page.

        Args:
            index: 0-based page index

        Raises:
            IndexError: If the index is out of range
            PageDecodeError: If the page content cannot be decoded
        """
        if not 0 <= index < self._page_count:
            raise IndexError(f"Page {index} out of range (0-{self._page_count - 1})")

        try:
            page = self.reader.pages[index]
            resources = resolve_object(page.get(NameObject("/Resources")))
            if not isinstance(resources, DictionaryObject):
                resources = None

            contents = page.get_contents()
            operations = list(contents.operations) if contents is not None else []
            fonts = load_font_table(resources)
            width, height = float(page.mediabox.width), float(page.mediabox.height)
        except (PyPdfError, NotImplementedError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise PageDecodeError(index, e) from e

        logger.debug("Loaded page %d: %d operators, %d fonts", index + 1, len(operations), len(fonts))
        return PageContent(
            index=index,
            operations=operations,
            fonts=fonts,
            resources=resources,
            pdf=self.reader,
            width=width,
            height=height,
        )

    def __iter__(self) -> Iterator[PageContent]:
        for index in range(self._page_count):
            yield self.page(index)

    def __len__(self) -> int:
        return self._page_count
