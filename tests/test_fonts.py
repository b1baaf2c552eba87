import pytest

from pdf_stream_markdown.errors import EncodingDecodeError
from pdf_stream_markdown.extractors import FontEncoding, decode_text, load_font_table

from conftest import font_resources


def test_utf16_byte_order_marks():
    assert decode_text(b"\xfe\xff\x00H\x00i") == "Hi"
    assert decode_text(b"\xff\xfeH\x00i\x00") == "Hi"


def test_invalid_utf8_is_replaced():
    assert decode_text(b"ab\xffc") == "ab�c"


def test_dict_encoding_with_unicode_map():
    encoding = FontEncoding({0x41: "A", 0x42: "B"}, {"B": "ß"})
    assert encoding.decode(b"AB") == "Aß"


def test_codec_encoding():
    assert FontEncoding("latin-1").decode(b"caf\xe9") == "café"


def test_decode_failure_raises():
    with pytest.raises(EncodingDecodeError):
        FontEncoding("utf-16-be").decode(b"\xd8\x00\x00")


def test_failing_font_encoding_falls_back():
    encoding = FontEncoding("utf-16-be")
    assert decode_text(b"abc", encoding) == "abc"


def test_load_font_table_resolves_base_font():
    table = load_font_table(font_resources(F1="Helvetica", F2="Times-Bold"))

    assert sorted(table) == ["/F1", "/F2"]
    assert table["/F1"].base_font == "Helvetica"
    assert table["/F2"].base_font == "Times-Bold"
    assert table["/F1"].alias == "/F1"


def test_load_font_table_without_fonts():
    assert load_font_table(None) == {}
    assert load_font_table(font_resources()) == {}
