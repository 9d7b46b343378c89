"""
Text layout: flattens inline trees into word tokens and greedily wraps
them into lines of bold/regular segments that fit a given width.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from mdpdf.document import Inline, LineBreak, Link, Strong, Text
from mdpdf.metrics import text_width


# --------------------------------------------------------------------------- #
# Tokens
# --------------------------------------------------------------------------- #
@dataclass(frozen=True)
class Word:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class Space:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


Token = Union[Word, Space, HardBreak]


@dataclass
class Segment:
    text: str
    bold: bool = False


@dataclass
class Line:
    segments: list[Segment] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.segments)

    def width(self, font_size: float) -> float:
        return sum(text_width(s.text, font_size, s.bold) for s in self.segments)


def tokenize(inlines: Iterable[Inline], bold: bool = False) -> list[Token]:
    """
    Flatten *inlines* into words, spaces and hard breaks.

    Text splits on spaces/tabs (one ``Space`` per blank character) and on
    newlines. Everything below a ``Strong`` is bold; links are transparent.
    """
    tokens: list[Token] = []
    _collect_tokens(inlines, bold, tokens)
    return tokens


def _collect_tokens(inlines: Iterable[Inline], bold: bool, tokens: list[Token]) -> None:
    for inline in inlines:
        if isinstance(inline, Text):
            buffer: list[str] = []
            for ch in inline.text:
                if ch in (" ", "\t", "\n"):
                    if buffer:
                        tokens.append(Word("".join(buffer), bold))
                        buffer = []
                    tokens.append(HardBreak() if ch == "\n" else Space())
                else:
                    buffer.append(ch)
            if buffer:
                tokens.append(Word("".join(buffer), bold))
        elif isinstance(inline, Strong):
            _collect_tokens(inline.children, True, tokens)
        elif isinstance(inline, Link):
            _collect_tokens(inline.children, bold, tokens)
        elif isinstance(inline, LineBreak):
            tokens.append(HardBreak())


def _append_segment(segments: list[Segment], text: str, bold: bool) -> None:
    if not text:
        return
    if segments and segments[-1].bold == bold:
        segments[-1].text += text
        return
    segments.append(Segment(text, bold))


def wrap_tokens(tokens: Iterable[Token], max_width: float, font_size: float) -> list[Line]:
    """
    Greedy line filling.

    A word that does not fit starts a new line; a word wider than
    *max_width* on an empty line is kept whole and overflows.
    """
    lines: list[Line] = []
    segments: list[Segment] = []
    width = 0.0
    pending_space = False
    space_width = text_width(" ", font_size)

    for token in tokens:
        if isinstance(token, Space):
            if width > 0:
                pending_space = True
        elif isinstance(token, HardBreak):
            if segments:
                lines.append(Line(segments))
                segments, width = [], 0.0
            pending_space = False
        else:
            word_width = text_width(token.text, font_size, token.bold)
            extra = word_width + (space_width if pending_space else 0.0)
            if width > 0 and width + extra > max_width:
                lines.append(Line(segments))
                segments, width = [], 0.0
                pending_space = False

            if pending_space and segments:
                # the gap joins whatever run precedes it
                _append_segment(segments, " ", segments[-1].bold)
                width += space_width
                pending_space = False

            _append_segment(segments, token.text, token.bold)
            width += word_width

    if segments:
        lines.append(Line(segments))
    return lines


def plain_text(inlines: Iterable[Inline]) -> str:
    parts: list[str] = []
    for inline in inlines:
        if isinstance(inline, Text):
            parts.append(inline.text)
        elif isinstance(inline, (Strong, Link)):
            parts.append(plain_text(inline.children))
        elif isinstance(inline, LineBreak):
            parts.append("\n")
    return "".join(parts)


def contains_strong(inlines: Iterable[Inline]) -> bool:
    for inline in inlines:
        if isinstance(inline, Strong):
            return True
        if isinstance(inline, Link) and contains_strong(inline.children):
            return True
    return False
