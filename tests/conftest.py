from io import BytesIO

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    ContentStream,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    StreamObject,
)

from pdf_stream_markdown.extractors import FontInfo


def helvetica(base_font="Helvetica"):
    return DictionaryObject({
        NameObject("/Type"): NameObject("/Font"),
        NameObject("/Subtype"): NameObject("/Type1"),
        NameObject("/BaseFont"): NameObject("/" + base_font),
        NameObject("/Encoding"): NameObject("/WinAnsiEncoding"),
    })


def font_resources(**fonts):
    """``/Font`` resources, e.g. font_resources(F1="Helvetica")."""
    return DictionaryObject({
        NameObject("/Font"): DictionaryObject({
            NameObject("/" + alias): helvetica(base) for alias, base in fonts.items()
        })
    })


def make_stream(data: bytes, **entries) -> DecodedStreamObject:
    stream = DecodedStreamObject()
    stream.set_data(data)
    for key, value in entries.items():
        stream[NameObject("/" + key)] = value
    return stream


def make_form(data: bytes, resources=None, matrix=None) -> DecodedStreamObject:
    form = make_stream(data, Type=NameObject("/XObject"), Subtype=NameObject("/Form"))
    form[NameObject("/BBox")] = ArrayObject([FloatObject(v) for v in (0, 0, 612, 792)])
    if resources is not None:
        form[NameObject("/Resources")] = resources
    if matrix is not None:
        form[NameObject("/Matrix")] = ArrayObject([FloatObject(v) for v in matrix])
    return form


def parse_ops(data: bytes):
    """Operator list of a raw content stream."""
    return ContentStream(make_stream(data), None).operations


def build_pdf(pages, fonts=None, forms=None) -> bytes:
    """
    Write a PDF whose pages carry the given content streams.

    Args:
        pages: Content stream bytes (or ready streams), one entry per page
        fonts: Alias -> BaseFont mapping shared by all pages
        forms: Name -> content bytes (or ready streams) of form XObjects shared by all pages
    """
    writer = PdfWriter()
    for data in pages:
        page = writer.add_blank_page(width=612, height=792)

        resources = font_resources(**(fonts or {"F1": "Helvetica"}))
        if forms:
            resources[NameObject("/XObject")] = DictionaryObject({
                NameObject("/" + name): writer._add_object(body if isinstance(body, StreamObject) else make_form(body))
                for name, body in forms.items()
            })
        page[NameObject("/Resources")] = resources
        page[NameObject("/Contents")] = writer._add_object(data if isinstance(data, StreamObject) else make_stream(data))

    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def fonts():
    """Font table with a regular and a bold face, without encodings."""
    return {
        "/F1": FontInfo(alias="/F1", base_font="Helvetica"),
        "/F2": FontInfo(alias="/F2", base_font="Helvetica-Bold"),
    }


@pytest.fixture
def title_page_pdf() -> bytes:
    """
    One page: a 36pt title above three 12pt body lines.

    The title is three times the body size so it renders as a level-one
    heading; a 24pt title is only twice the median and renders as ``###``.
    """
    return build_pdf([
        b"BT /F1 36 Tf 72 700 Td (Title) Tj ET\n"
        b"BT /F1 12 Tf 72 650 Td (Body one) Tj ET\n"
        b"BT /F1 12 Tf 72 636 Td (Body two) Tj ET\n"
        b"BT /F1 12 Tf 72 622 Td (Body three) Tj ET\n"
    ])
