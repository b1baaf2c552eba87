"""
Font tables and shown-text decoding.

A page (or form XObject) font table maps resource aliases such as ``/F1`` to
the resolved BaseFont name and a character encoding built with pypdf's
char-map builder. Shown-text bytes are decoded with that encoding, then by
UTF-16 byte-order mark, then as lossy UTF-8.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pypdf._cmap import build_char_map_from_dict
from pypdf.errors import PyPdfError
from pypdf.generic import DictionaryObject, NameObject

from ..errors import EncodingDecodeError

logger = logging.getLogger(__name__)

# Only the encoding and the unicode map of the char map are used
_SPACE_WIDTH = 200.0

FontTable = Dict[str, "FontInfo"]


def resolve_object(obj: Any) -> Any:
    """Follow an indirect reference; direct objects are returned unchanged."""
    if obj is None:
        return None
    get_object = getattr(obj, "get_object", None)
    return get_object() if get_object is not None else obj


class FontEncoding:
    """
    Character encoding of one font.

    Args:
        encoding: Either a Python codec name or a byte -> character table
        char_map: Character -> unicode replacements from the font's ToUnicode CMap
    """

    def __init__(self, encoding: Union[str, Dict[int, str]], char_map: Optional[Dict[Any, str]] = None):
        self.encoding = encoding
        self.char_map = char_map or {}

    @classmethod
    def from_font(cls, font: DictionaryObject) -> Optional["FontEncoding"]:
        """Build the encoding of a font dictionary, or None when pypdf cannot."""
        try:
            char_map = build_char_map_from_dict(_SPACE_WIDTH, font)
        except (PyPdfError, LookupError, ValueError, TypeError, AttributeError, NameError) as exc:
            logger.debug("No encoding for font %s: %s", font.get("/BaseFont"), exc)
            return None
        return cls(char_map[2], char_map[3])

    def decode(self, raw: bytes) -> str:
        """
        Decode shown-text bytes.

        Raises:
            EncodingDecodeError: If the bytes do not fit the encoding
        """
        try:
            if isinstance(self.encoding, str):
                text = raw.decode(self.encoding, "surrogatepass")
            else:
                text = "".join(
                    self.encoding[code] if code in self.encoding else bytes((code,)).decode()
                    for code in raw
                )
        except (UnicodeDecodeError, LookupError) as exc:
            raise EncodingDecodeError(f"cannot decode {raw!r} with {self.encoding!r}") from exc
        return "".join(self.char_map.get(char, char) for char in text)


@dataclass
class FontInfo:
    """
    A font resource as seen by the content stream.

    Attributes:
        alias: Resource name used by ``Tf`` (e.g. ``/F1``)
        base_font: BaseFont name without the leading slash
        encoding: Character encoding, None when it could not be built
    """
    alias: str
    base_font: Optional[str] = None
    encoding: Optional[FontEncoding] = None


def load_font_table(resources: Optional[DictionaryObject]) -> FontTable:
    """Read the ``/Font`` sub-dictionary of a resource dictionary."""
    resources = resolve_object(resources)
    if not isinstance(resources, DictionaryObject):
        return {}

    fonts = resolve_object(resources.get(NameObject("/Font")))
    if not isinstance(fonts, DictionaryObject):
        return {}

    table: FontTable = {}
    for alias, ref in fonts.items():
        font = resolve_object(ref)
        if not isinstance(font, DictionaryObject):
            continue
        base_font = font.get(NameObject("/BaseFont"))
        table[str(alias)] = FontInfo(
            alias=str(alias),
            base_font=str(base_font).lstrip("/") if base_font is not None else None,
            encoding=FontEncoding.from_font(font),
        )
    return table


def _decode_utf16(raw: bytes, codec: str) -> str:
    if len(raw) % 2:
        raw = raw[:-1]
    return raw.decode(codec, errors="replace")


def decode_text(raw: bytes, encoding: Optional[FontEncoding] = None) -> str:
    """
    Decode shown-text bytes; never fails.

    Order: font encoding, UTF-16 by byte-order mark, lossy UTF-8.
    """
    if encoding is not None:
        try:
            return encoding.decode(raw)
        except EncodingDecodeError as exc:
            logger.debug("Falling back from font encoding: %s", exc)

    if raw[:2] == b"\xfe\xff":
        return _decode_utf16(raw[2:], "utf-16-be")
    if raw[:2] == b"\xff\xfe":
        return _decode_utf16(raw[2:], "utf-16-le")
    return raw.decode("utf-8", errors="replace")
