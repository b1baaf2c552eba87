import pytest

from pdf_stream_markdown.generators import MarkdownGenerator
from pdf_stream_markdown.models import Table, TableBoundary, TextRun


@pytest.fixture
def generator():
    return MarkdownGenerator()


def body(text, size=12.0, **kwargs):
    return TextRun(text=text, font_size=size, **kwargs)


@pytest.mark.parametrize("size, expected", [
    (36.0, "#"),
    (35.9, "##"),
    (30.0, "##"),
    (24.0, "###"),
    (23.988, None),
    (12.0, None),
    (None, None),
])
def test_heading_level_by_ratio(generator, size, expected):
    assert generator.heading_level(size, 12.0) == expected


def test_heading_level_defaults_base_size(generator):
    assert generator.heading_level(24.0, None) == "###"


def test_heading_at_twice_the_median(generator):
    rows = [[body("Big", 24.0)], [body("text")]]
    assert generator.generate(rows, {"median_font_size": 12.0}) == "### Big\n\ntext\n"


def test_just_below_twice_the_median_is_body(generator):
    rows = [[body("Big", 23.988)], [body("text")]]
    assert generator.generate(rows, {"median_font_size": 12.0}) == "Big\ntext\n"


def test_inline_styles_in_order(generator):
    run = TextRun(" word ", font_name="Helvetica-BoldOblique", italic=True, underlined=True, color="#FF0000")
    assert generator.style(run) == "<u>***`word`***</u>"


def test_single_styles(generator):
    assert generator.style(TextRun("x", font_name="Arial-Bold")) == "**x**"
    assert generator.style(TextRun("x", font_name="Times-Italic")) == "*x*"
    assert generator.style(TextRun("x", color="#00FF00")) == "`x`"
    assert generator.style(TextRun("x", color="#FFFFFF")) == "x"
    assert generator.style(TextRun("   ")) == ""


def test_consecutive_headings_share_a_line(generator):
    rows = [[body("Part", 36.0)], [body("One", 36.0)], [body("intro")]]
    out = generator.generate(rows, {"median_font_size": 12.0})
    assert out == "# Part<br>One\n\nintro\n"


def test_heading_level_change_starts_new_line(generator):
    rows = [[body("Title", 36.0)], [body("Sub", 30.0)], [body("text")]]
    out = generator.generate(rows, {"median_font_size": 12.0})
    assert out == "# Title\n## Sub\n\ntext\n"


def test_body_runs_join_with_space_and_spacers_blank(generator):
    rows = [[body("a"), body("b")], [], [body("c")], [body("   ")]]
    assert generator.generate(rows) == "a b\n\nc\n"


def test_table_rendering(generator):
    def cell(minx, miny, text):
        boundary = TableBoundary(minx, minx + 50, miny, miny + 20)
        boundary.elements.append(TextRun(text, x=minx + 5, y=miny + 5, font_size=40.0))
        return boundary

    table = Table(
        boundaries=[cell(0, 0, "1"), cell(50, 0, "a|b"), cell(0, 20, "Name")],
        x=50, y=20,
    )
    rows = [[body("before", y=100)], [table]]

    out = generator.generate(rows, {"median_font_size": 12.0})
    assert out == (
        "before\n"
        "\n"
        "| Name |  |\n"
        "|---|---|\n"
        "| 1 | a\\|b |\n"
        "\n"
    )


def test_median_over_runs(generator):
    runs = [body("a", 10.0), body("b", 14.0), TextRun("c")]
    assert generator.median_font_size(runs) == 12.0
    assert generator.median_font_size([TextRun("c")]) is None


def test_median_computed_from_rows_without_context(generator):
    rows = [[body("Head", 36.0)], [body("a")], [body("b")]]
    assert generator.generate(rows).startswith("# Head\n")


def test_rendering_is_repeatable(generator):
    rows = [[body("Title", 36.0)], [], [body("a"), body("b")]]
    assert generator.generate(rows) == generator.generate(rows)


def test_markers():
    assert MarkdownGenerator.page_marker(3) == "\n\n<!-- S-TITLE: Page number 3 -->\n"
    assert MarkdownGenerator.error_marker(2) == "<!-- S-ERROR: Page number 2 could not be decoded -->\n"
