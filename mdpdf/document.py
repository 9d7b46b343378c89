"""
Document model and compiler.

Folds the markdown event stream into a flat sequence of blocks
(headings, paragraphs, bullet lists, key/value tables) holding
inline trees (text, strong, link, line break).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from mdpdf import events as ev
from mdpdf.events import Event, iter_events

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Inline content
# --------------------------------------------------------------------------- #
@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Strong:
    children: tuple = ()


@dataclass(frozen=True)
class Link:
    children: tuple = ()


@dataclass(frozen=True)
class LineBreak:
    pass


Inline = Union[Text, Strong, Link, LineBreak]


# --------------------------------------------------------------------------- #
# Blocks
# --------------------------------------------------------------------------- #
@dataclass(frozen=True)
class Heading:
    level: int                 # 1..6
    content: tuple = ()


@dataclass(frozen=True)
class Paragraph:
    content: tuple = ()


@dataclass(frozen=True)
class BulletList:
    items: tuple = ()          # tuple of inline tuples


@dataclass(frozen=True)
class Table:
    rows: tuple = ()           # rows -> cells -> inline tuples


Block = Union[Heading, Paragraph, BulletList, Table]


def is_all_whitespace(inlines: Iterable[Inline]) -> bool:
    """True when *inlines* would draw nothing visible."""
    for inline in inlines:
        if isinstance(inline, Text):
            if inline.text.strip():
                return False
        elif isinstance(inline, (Strong, Link)):
            if not is_all_whitespace(inline.children):
                return False
    return True


# --------------------------------------------------------------------------- #
# Parse contexts
# --------------------------------------------------------------------------- #
@dataclass
class _InlineContext:
    tag: str
    level: int = 0
    inlines: list = field(default_factory=list)

    def push(self, inline: Inline) -> None:
        self.inlines.append(inline)

    def push_text(self, text: str) -> None:
        if not text:
            return
        if self.inlines and isinstance(self.inlines[-1], Text):
            self.inlines[-1] = Text(self.inlines[-1].text + text)
        else:
            self.inlines.append(Text(text))


@dataclass
class _ListContext:
    tag: str = ev.LIST
    items: list = field(default_factory=list)


@dataclass
class _TableContext:
    tag: str = ev.TABLE
    rows: list = field(default_factory=list)


@dataclass
class _RowContext:
    tag: str
    cells: list = field(default_factory=list)


@dataclass
class _IgnoredContext:
    tag: Optional[str]


_INLINE_TAGS = (
    ev.PARAGRAPH, ev.HEADING, ev.ITEM, ev.TABLE_CELL,
    ev.STRONG, ev.EMPHASIS, ev.LINK,
)


class DocumentCompiler:
    """
    Event-driven builder keeping one stack of open parse contexts.

    Unbalanced input never raises: an end event that does not match the
    innermost open context discards that context, and an end event with
    nothing open is ignored.
    """

    def __init__(self) -> None:
        self.blocks: list[Block] = []
        self._stack: list = []

    # ---- public API -------------------------------------------------------
    def feed(self, event: Event) -> None:
        kind = event.kind
        if kind == ev.START:
            self._start(event)
        elif kind == ev.END:
            self._end(event)
        elif kind in (ev.TEXT, ev.CODE):
            self._push_text(event.text)
        elif kind == ev.SOFT_BREAK:
            self._push_text(" ")
        elif kind == ev.HARD_BREAK:
            self._push_inline(LineBreak())
        elif kind == ev.RULE:
            self.blocks.append(Paragraph((Text(""),)))
        # html, task markers, footnotes: nothing to draw

    def finish(self) -> list[Block]:
        if self._stack:
            logger.debug("Discarding %d unclosed contexts", len(self._stack))
            self._stack.clear()
        return list(self.blocks)

    # ---- stack helpers ----------------------------------------------------
    def _nearest(self, kind: type):
        for ctx in reversed(self._stack):
            if isinstance(ctx, kind):
                return ctx
        return None

    def _push_text(self, text: str) -> None:
        ctx = self._nearest(_InlineContext)
        if ctx is not None:
            ctx.push_text(text)

    def _push_inline(self, inline: Inline) -> None:
        ctx = self._nearest(_InlineContext)
        if ctx is not None:
            ctx.push(inline)

    # ---- start / end ------------------------------------------------------
    def _start(self, event: Event) -> None:
        tag = event.tag
        if tag in _INLINE_TAGS:
            self._stack.append(_InlineContext(tag, level=event.level))
        elif tag == ev.LIST:
            self._stack.append(_ListContext())
        elif tag == ev.TABLE:
            self._stack.append(_TableContext())
        elif tag in (ev.TABLE_HEAD, ev.TABLE_ROW):
            self._stack.append(_RowContext(tag))
        else:
            self._stack.append(_IgnoredContext(tag))

    def _end(self, event: Event) -> None:
        if not self._stack:
            return
        ctx = self._stack.pop()
        if ctx.tag != event.tag:
            logger.debug("Dropping unbalanced %s context (closed by %s)", ctx.tag, event.tag)
            return

        if isinstance(ctx, _InlineContext):
            self._fold_inline(ctx)
        elif isinstance(ctx, _ListContext):
            if ctx.items:
                self.blocks.append(BulletList(tuple(ctx.items)))
        elif isinstance(ctx, _TableContext):
            if ctx.rows:
                self.blocks.append(Table(tuple(ctx.rows)))
        elif isinstance(ctx, _RowContext):
            table = self._nearest(_TableContext)
            if table is not None and any(not is_all_whitespace(c) for c in ctx.cells):
                table.rows.append(tuple(ctx.cells))

    def _fold_inline(self, ctx: _InlineContext) -> None:
        content = tuple(ctx.inlines)

        if ctx.tag == ev.PARAGRAPH:
            parent = self._nearest(_InlineContext)
            if parent is not None and parent.tag in (ev.ITEM, ev.TABLE_CELL):
                # loose list item / cell: keep the paragraph inside it
                if not is_all_whitespace(parent.inlines):
                    parent.push(LineBreak())
                parent.inlines.extend(content)
            elif not is_all_whitespace(content):
                self.blocks.append(Paragraph(content))

        elif ctx.tag == ev.HEADING:
            self.blocks.append(Heading(ctx.level or 1, content))

        elif ctx.tag == ev.ITEM:
            lst = self._nearest(_ListContext)
            if lst is not None and not is_all_whitespace(content):
                lst.items.append(content)

        elif ctx.tag == ev.TABLE_CELL:
            row = self._nearest(_RowContext)
            if row is not None:
                row.cells.append(content)

        elif ctx.tag in (ev.STRONG, ev.EMPHASIS):
            # emphasis renders as bold; there is no italic face
            if content:
                self._push_inline(Strong(content))

        elif ctx.tag == ev.LINK:
            if content:
                self._push_inline(Link(content))


def compile_events(events: Iterable[Event]) -> list[Block]:
    compiler = DocumentCompiler()
    for event in events:
        compiler.feed(event)
    blocks = compiler.finish()
    logger.debug("Compiled %d blocks", len(blocks))
    return blocks


def compile_markdown(markdown: str) -> list[Block]:
    """Parse *markdown* and fold it into blocks."""
    return compile_events(iter_events(markdown))
