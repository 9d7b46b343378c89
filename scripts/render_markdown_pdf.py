"""Render a markdown file to PDF with the built-in engine (no external PDF library)."""

from __future__ import annotations

import argparse
from pathlib import Path

from mdpdf.render import render


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", type=Path, help="markdown file (UTF-8)")
    parser.add_argument("output", type=Path, nargs="?", help="PDF path (default: INPUT with .pdf suffix)")
    args = parser.parse_args(argv)

    output = args.output or args.input.with_suffix(".pdf")
    md = args.input.read_text(encoding="utf-8")
    output.write_bytes(render(md))
    print(f"Wrote {output}")


if __name__ == "__main__":
    main()
