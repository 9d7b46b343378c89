"""
Page composition.

Walks the block list top to bottom, places wrapped lines on A4 pages
and records raw PDF text operators per page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from mdpdf.config import (
    BLOCK_GAP,
    BODY_FONT_SIZE,
    BULLET_GLYPH,
    BULLET_INDENT_POINTS,
    CONTENT_WIDTH,
    FONT_BOLD,
    FONT_REGULAR,
    HEADING1_FONT_SIZE,
    HEADING2_FONT_SIZE,
    HEADING3_FONT_SIZE,
    HEADING_GAPS,
    LINE_SPACING_FACTOR,
    LIST_ITEM_GAP,
    MARGIN_BOTTOM,
    MARGIN_HORIZONTAL,
    MARGIN_TOP,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    PARAGRAPH_GAP,
)
from mdpdf.document import Block, BulletList, Heading, Inline, Paragraph, Table
from mdpdf.layout import Line, contains_strong, plain_text, tokenize, wrap_tokens
from mdpdf.metrics import text_width
from mdpdf.writer import escape_pdf_text

logger = logging.getLogger(__name__)

_HEADING_SIZES = {1: HEADING1_FONT_SIZE, 2: HEADING2_FONT_SIZE}


def _fmt_size(size: float) -> str:
    return f"{size:g}"


@dataclass
class PdfPage:
    content: str = ""

    @property
    def content_length(self) -> int:
        """Byte length of the content stream as written to the file."""
        return len(self.content.encode("latin-1"))

    def write_text(self, x: float, y: float, bold: bool, size: float, text: str) -> None:
        if not text:
            return
        font = FONT_BOLD if bold else FONT_REGULAR
        self.content += (
            f"BT /{font} {_fmt_size(size)} Tf 1 0 0 1 {x:.2f} {y:.2f} Tm "
            f"({escape_pdf_text(text)}) Tj ET\n"
        )


class PdfComposer:
    """Holds the finished pages, the page being filled and the vertical cursor."""

    def __init__(self) -> None:
        self.pages: list[PdfPage] = []
        self.current = PdfPage()
        self.cursor_y = PAGE_HEIGHT - MARGIN_TOP

    def render(self, blocks: Iterable[Block]) -> None:
        for block in blocks:
            if isinstance(block, Heading):
                self.render_heading(block.level, block.content)
            elif isinstance(block, Paragraph):
                self.render_paragraph(block.content)
            elif isinstance(block, BulletList):
                self.render_list(block.items)
            elif isinstance(block, Table):
                self.render_table(block.rows)

    # ---- block renderers --------------------------------------------------
    def render_heading(self, level: int, content: Sequence[Inline]) -> None:
        size = _HEADING_SIZES.get(level, HEADING3_FONT_SIZE)
        spacing = size * LINE_SPACING_FACTOR

        self.ensure_space(spacing + 4.0)
        text = plain_text(content)
        if level == 1:
            x = max(MARGIN_HORIZONTAL, (PAGE_WIDTH - text_width(text, size, True)) / 2.0)
        else:
            x = MARGIN_HORIZONTAL
        self.current.write_text(x, self.cursor_y, True, size, text)
        self.cursor_y -= spacing + HEADING_GAPS.get(min(level, 3), HEADING_GAPS[3])

    def render_paragraph(self, content: Sequence[Inline]) -> None:
        lines = wrap_tokens(tokenize(content), CONTENT_WIDTH, BODY_FONT_SIZE)
        if not lines:
            return

        line_height = BODY_FONT_SIZE * LINE_SPACING_FACTOR
        for line in lines:
            self.ensure_space(line_height)
            self.write_line(line, MARGIN_HORIZONTAL, self.cursor_y, BODY_FONT_SIZE)
            self.cursor_y -= line_height
        self.cursor_y -= PARAGRAPH_GAP

    def render_list(self, items: Sequence[Sequence[Inline]]) -> None:
        available = CONTENT_WIDTH - BULLET_INDENT_POINTS
        line_height = BODY_FONT_SIZE * LINE_SPACING_FACTOR

        for item in items:
            lines = wrap_tokens(tokenize(item), available, BODY_FONT_SIZE)
            if not lines:
                continue
            for idx, line in enumerate(lines):
                self.ensure_space(line_height)
                y = self.cursor_y
                if idx == 0:
                    self.current.write_text(MARGIN_HORIZONTAL, y, False, BODY_FONT_SIZE, BULLET_GLYPH)
                self.write_line(line, MARGIN_HORIZONTAL + BULLET_INDENT_POINTS, y, BODY_FONT_SIZE)
                self.cursor_y -= line_height
            self.cursor_y -= LIST_ITEM_GAP
        self.cursor_y -= BLOCK_GAP

    def render_table(self, rows: Sequence[Sequence[Sequence[Inline]]]) -> None:
        """Two-column key/value rows: key left, value right-aligned."""
        if not rows:
            return

        line_height = BODY_FONT_SIZE * LINE_SPACING_FACTOR
        for row in rows:
            if len(row) < 2:
                continue
            left, right = row[0], row[1]
            left_text = plain_text(left)
            right_text = plain_text(right)
            if not left_text.strip() and not right_text.strip():
                continue

            self.ensure_space(line_height)
            y = self.cursor_y
            left_bold = contains_strong(left)
            right_bold = contains_strong(right)

            self.current.write_text(MARGIN_HORIZONTAL, y, left_bold, BODY_FONT_SIZE, left_text)
            right_width = text_width(right_text, BODY_FONT_SIZE, right_bold)
            right_x = max(MARGIN_HORIZONTAL, PAGE_WIDTH - MARGIN_HORIZONTAL - right_width)
            self.current.write_text(right_x, y, right_bold, BODY_FONT_SIZE, right_text)

            self.cursor_y -= line_height
        self.cursor_y -= BLOCK_GAP

    # ---- page handling ----------------------------------------------------
    def ensure_space(self, required: float) -> None:
        if self.cursor_y - required < MARGIN_BOTTOM:
            self.finish_page()

    def write_line(self, line: Line, start_x: float, y: float, size: float) -> None:
        x = start_x
        for segment in line.segments:
            self.current.write_text(x, y, segment.bold, size, segment.text)
            x += text_width(segment.text, size, segment.bold)

    def finish_page(self) -> None:
        self.pages.append(self.current)
        self.current = PdfPage()
        self.cursor_y = PAGE_HEIGHT - MARGIN_TOP
        logger.debug("Page break, %d pages finished", len(self.pages))

    def finish(self) -> list[PdfPage]:
        if self.current.content.strip() or not self.pages:
            self.pages.append(self.current)
        self.current = PdfPage()
        return self.pages
