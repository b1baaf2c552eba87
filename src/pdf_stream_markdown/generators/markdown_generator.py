"""
Markdown generation from laid-out page rows.
"""

import statistics
from typing import Any, Dict, List, Optional, Tuple

from .base import BaseGenerator
from ..models import Row, Table, TextRun

PAGE_MARKER = "<!-- S-TITLE: Page number {page} -->"
ERROR_MARKER = "<!-- S-ERROR: Page number {page} could not be decoded -->"

# (minimum size ratio, heading prefix), largest first
HEADING_LEVELS = [(3.0, "#"), (2.5, "##"), (2.0, "###")]


class MarkdownGenerator(BaseGenerator):
    """
    Renders rows of text runs and tables as markdown.

    Runs are styled inline (code for colored text, bold, italic, underline)
    and promoted to headings by their size relative to the page's median
    font size.

    Args:
        default_base_size: Baseline used when the page has no sized text
        table_baseline_size: Baseline for runs inside table cells
    """

    def __init__(self, default_base_size: float = 12.0, table_baseline_size: float = 1000.0):
        self.default_base_size = default_base_size
        self.table_baseline_size = table_baseline_size

    @staticmethod
    def median_font_size(runs: List[TextRun]) -> Optional[float]:
        sizes = [run.font_size for run in runs if run.font_size is not None]
        return statistics.median(sizes) if sizes else None

    @staticmethod
    def page_marker(page_num: int) -> str:
        """Boundary emitted before a page (1-based number)."""
        return "\n\n" + PAGE_MARKER.format(page=page_num) + "\n"

    @staticmethod
    def error_marker(page_num: int) -> str:
        return ERROR_MARKER.format(page=page_num) + "\n"

    def heading_level(self, font_size: Optional[float], base_size: Optional[float]) -> Optional[str]:
        """Heading prefix for a font size, or None for body text."""
        if font_size is None:
            return None
        base = base_size if base_size else self.default_base_size
        ratio = font_size / base
        for threshold, prefix in HEADING_LEVELS:
            if ratio >= threshold:
                return prefix
        return None

    @staticmethod
    def style(run: TextRun) -> str:
        """Inline markdown for a run; empty for blank text."""
        text = run.text.strip()
        if not text:
            return ""
        if run.color and run.color != "#FFFFFF":
            text = f"`{text}`"
        if run.is_bold:
            text = f"**{text}**"
        if run.is_italic:
            text = f"*{text}*"
        if run.underlined:
            text = f"<u>{text}</u>"
        return text

    def render_run(self, run: TextRun, base_size: Optional[float]) -> Tuple[str, Optional[str]]:
        """Styled text and heading prefix of a run."""
        return self.style(run), self.heading_level(run.font_size, base_size)

    def render_table(self, table: Table) -> str:
        """Pipe table; the first row of cells is the header."""
        rows = []
        for cell_row in table.sorted_cells():
            cells = []
            for runs in cell_row:
                parts = [self.render_run(run, self.table_baseline_size)[0] for run in runs]
                cells.append(" ".join(part for part in parts if part).replace("|", "\\|"))
            rows.append(cells)

        if not rows:
            return ""

        n_cols = max(len(row) for row in rows)
        rows = [row + [""] * (n_cols - len(row)) for row in rows]

        result = ["| " + " | ".join(rows[0]) + " |"]
        result.append("|" + "|".join(["---"] * n_cols) + "|")
        for row in rows[1:]:
            result.append("| " + " | ".join(row) + " |")
        return "\n".join(result) + "\n"

    def generate(self, rows: List[Row], context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render the rows of one page.

        Args:
            rows: Rows from the layout segmenter; empty rows are section breaks
            context: May carry ``median_font_size`` computed over all page runs

        Returns:
            Markdown text of the page body
        """
        context = context or {}
        if "median_font_size" in context:
            base_size = context["median_font_size"]
        else:
            base_size = self.median_font_size(
                [element for row in rows for element in row if isinstance(element, TextRun)]
            )

        out: List[str] = []
        heading_level: Optional[str] = None
        heading_parts: List[str] = []

        def close_heading(blank_line: bool) -> None:
            nonlocal heading_level, heading_parts
            if heading_level is None:
                return
            out.append(f"{heading_level} {'<br>'.join(heading_parts)}\n")
            if blank_line:
                out.append("\n")
            heading_level, heading_parts = None, []

        def separate_block() -> None:
            text = "".join(out)
            if text and not text.endswith("\n\n"):
                out.append("\n" if text.endswith("\n") else "\n\n")

        for row in rows:
            if not row:
                close_heading(blank_line=False)
                out.append("\n")
                continue

            body: List[str] = []
            for element in row:
                if isinstance(element, Table):
                    if body:
                        out.append(" ".join(body) + "\n")
                        body = []
                    close_heading(blank_line=True)
                    separate_block()
                    out.append(self.render_table(element))
                    out.append("\n")
                    continue

                text, level = self.render_run(element, base_size)
                if not text:
                    continue
                if level is None:
                    close_heading(blank_line=True)
                    body.append(text)
                    continue

                if body:
                    out.append(" ".join(body) + "\n")
                    body = []
                if level != heading_level:
                    close_heading(blank_line=False)
                    heading_level = level
                heading_parts.append(text)

            if body:
                out.append(" ".join(body) + "\n")

        close_heading(blank_line=False)
        return "".join(out)
