"""
Markdown event source.

Flattens markdown-it's block/inline token tree into a linear stream of
start/end/text events that the document compiler folds into blocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from markdown_it import MarkdownIt

# --------------------------------------------------------------------------- #
# Event vocabulary
# --------------------------------------------------------------------------- #
START = "start"
END = "end"
TEXT = "text"
CODE = "code"
SOFT_BREAK = "soft_break"
HARD_BREAK = "hard_break"
RULE = "rule"
HTML = "html"

PARAGRAPH = "paragraph"
HEADING = "heading"
LIST = "list"
ITEM = "item"
TABLE = "table"
TABLE_HEAD = "table_head"
TABLE_BODY = "table_body"
TABLE_ROW = "table_row"
TABLE_CELL = "table_cell"
STRONG = "strong"
EMPHASIS = "emphasis"
LINK = "link"
STRIKETHROUGH = "strikethrough"
BLOCKQUOTE = "blockquote"
CODE_BLOCK = "code_block"
IMAGE = "image"


@dataclass(frozen=True)
class Event:
    kind: str
    tag: Optional[str] = None
    text: str = ""
    level: int = 0             # heading level, 0 otherwise


# markdown-it token type prefix -> event tag
_CONTAINER_TAGS = {
    "paragraph": PARAGRAPH,
    "heading": HEADING,
    "bullet_list": LIST,
    "ordered_list": LIST,
    "list_item": ITEM,
    "table": TABLE,
    "thead": TABLE_HEAD,
    "tbody": TABLE_BODY,
    "tr": TABLE_ROW,
    "th": TABLE_CELL,
    "td": TABLE_CELL,
    "strong": STRONG,
    "em": EMPHASIS,
    "link": LINK,
    "s": STRIKETHROUGH,
    "blockquote": BLOCKQUOTE,
}


def _build_markdown_parser() -> MarkdownIt:
    md = MarkdownIt("commonmark")
    md.enable(["table", "strikethrough"])
    return md


_MD_PARSER: MarkdownIt | None = None


def _get_markdown_parser() -> MarkdownIt:
    global _MD_PARSER
    if _MD_PARSER is None:
        _MD_PARSER = _build_markdown_parser()
    return _MD_PARSER


def _heading_level(tag: str) -> int:
    # "h1".."h6"
    try:
        return int(tag[1:])
    except (TypeError, ValueError):
        return 1


def _container_event(token) -> Optional[Event]:
    if token.type.endswith("_open"):
        kind, name = START, token.type[: -len("_open")]
    elif token.type.endswith("_close"):
        kind, name = END, token.type[: -len("_close")]
    else:
        return None
    tag = _CONTAINER_TAGS.get(name)
    if tag is None:
        return None
    level = _heading_level(token.tag) if tag == HEADING else 0
    return Event(kind, tag, level=level)


def _inline_events(children) -> Iterator[Event]:
    for child in children or []:
        if child.type == "text":
            if child.content:
                yield Event(TEXT, text=child.content)
        elif child.type == "code_inline":
            yield Event(CODE, text=child.content)
        elif child.type == "softbreak":
            yield Event(SOFT_BREAK)
        elif child.type == "hardbreak":
            yield Event(HARD_BREAK)
        elif child.type == "html_inline":
            yield Event(HTML, text=child.content)
        elif child.type == "image":
            yield Event(START, IMAGE)
            yield from _inline_events(child.children)
            yield Event(END, IMAGE)
        else:
            event = _container_event(child)
            if event is not None:
                yield event


def events_from_tokens(tokens) -> Iterator[Event]:
    """Translate a markdown-it block token list into engine events."""
    for token in tokens:
        if token.type == "inline":
            yield from _inline_events(token.children)
        elif token.type in ("fence", "code_block"):
            yield Event(START, CODE_BLOCK)
            yield Event(TEXT, text=token.content)
            yield Event(END, CODE_BLOCK)
        elif token.type == "hr":
            yield Event(RULE)
        elif token.type == "html_block":
            yield Event(HTML, text=token.content)
        elif token.hidden:
            # Tight list items: paragraph wrappers are not rendered
            continue
        else:
            event = _container_event(token)
            if event is not None:
                yield event


def iter_events(markdown: str) -> Iterator[Event]:
    """Parse *markdown* (tables and strikethrough enabled) into events."""
    tokens = _get_markdown_parser().parse(markdown)
    return events_from_tokens(tokens)
