"""
Example: PDF to Markdown
========================
Converts a PDF to markdown, reports recoverable problems, and writes a debug
image of the first page showing ruling lines, table cells and text anchors.

Usage:
    python example.py document.pdf
"""

import logging
import sys
from pathlib import Path

from pdf_stream_markdown import DocumentLoadError, MarkdownConverter

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


def main(pdf_path: str) -> int:
    output_dir = Path("output")
    stem = Path(pdf_path).stem

    try:
        converter = MarkdownConverter(pdf_path)
    except DocumentLoadError as e:
        print(f"Cannot open {pdf_path}: {e}")
        return 1

    with converter:
        # Step 1: Convert and save
        print(f"Step 1: Converting {converter.page_count} page(s)...")
        markdown = converter.save(output_dir / f"{stem}.md")
        print(markdown[:500])

        # Step 2: Report skipped operators and pages
        print(f"\nStep 2: {len(converter.diagnostics)} diagnostic(s)")
        for error in converter.diagnostics[:10]:
            print(f"  - {error}")

        # Step 3: Debug overlay of the first page
        if converter.page_count:
            print("\nStep 3: Writing debug image...")
            converter.create_annotated_image(0, str(output_dir / f"{stem}_page1_debug.png"))

    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(main(sys.argv[1]))
