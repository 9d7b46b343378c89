"""
Markdown -> PDF entry points.
"""

from __future__ import annotations

import logging
from typing import Iterable

from mdpdf.composer import PdfComposer
from mdpdf.document import Block, compile_markdown
from mdpdf.writer import write_pdf

logger = logging.getLogger(__name__)


def render_blocks(blocks: Iterable[Block]) -> bytes:
    """Lay out already-compiled blocks and serialize them."""
    composer = PdfComposer()
    composer.render(blocks)
    pages = composer.finish()
    pdf = write_pdf(pages)
    logger.debug("Rendered %d pages (%d bytes)", len(pages), len(pdf))
    return pdf


def render(markdown: str) -> bytes:
    """
    Render *markdown* to a complete PDF 1.4 document.

    Deterministic and side-effect free: identical input gives identical
    bytes, and an empty document still yields one blank page.
    """
    if not isinstance(markdown, str):
        raise TypeError(f"markdown must be str, not {type(markdown).__name__}")
    return render_blocks(compile_markdown(markdown))
