import numpy as np

from pdf_stream_markdown import MarkdownConverter
from pdf_stream_markdown.models import LineSegment, TextRun
from pdf_stream_markdown.renderers import PageRenderer
from pdf_stream_markdown.visualizers import PageAnnotator

from conftest import build_pdf


def test_to_pixel_flips_y():
    renderer = PageRenderer(dpi=144)

    assert renderer.scale == 2.0
    assert renderer.to_pixel(10, 792, 792) == (20, 0)
    assert renderer.to_pixel(0, 0, 792) == (0, 1584)


def test_annotate_draws_on_a_copy():
    image = np.full((100, 100, 3), 255, dtype=np.uint8)
    annotator = PageAnnotator()

    annotated = annotator.annotate(
        image,
        lambda x, y: (int(x), int(100 - y)),
        segments=[LineSegment((10, 50), (90, 50))],
        text_runs=[TextRun("a", x=20, y=20, font_size=12.0)],
        median_font_size=12.0,
    )

    assert (image == 255).all()
    assert tuple(annotated[50, 50]) == annotator.colors["segment"]
    assert tuple(annotated[80, 20]) == annotator.colors["text"]


def test_create_annotated_image(tmp_path):
    data = build_pdf([b"0 0 0 RG 72 600 100 20 re S BT /F1 12 Tf 80 605 Td (cell) Tj ET"])
    output = tmp_path / "page.png"

    with MarkdownConverter(data, dpi=72) as converter:
        image = converter.create_annotated_image(0, str(output))

    assert image.shape == (792, 612, 3)
    assert output.exists()
