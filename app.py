"""
mdpdf – Markdown to PDF rendering service

A Flask application exposing the rendering engine:
  • Markdown → PDF 1.4 bytes (Helvetica, A4)
  • Compiled block tree inspection
  • Line-wrapping preview for paragraphs and list items
"""

from __future__ import annotations

import dataclasses
import logging
import re

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

# Load local .env before importing modules that read env vars at import time.
load_dotenv()

from mdpdf import config
from mdpdf.document import BulletList, LineBreak, Table, compile_markdown
from mdpdf.layout import tokenize, wrap_tokens
from mdpdf.render import render_blocks

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


class RequestError(ValueError):
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


def _read_markdown(field: str = "markdown") -> str:
    """Pull markdown from a JSON body field or a raw text body."""
    if request.is_json:
        body = request.get_json(silent=True) or {}
        markdown = body.get(field)
    else:
        markdown = request.get_data(as_text=True)

    if not isinstance(markdown, str):
        raise RequestError(f"Provide '{field}' as a string")
    if len(markdown) > config.MAX_MARKDOWN_CHARS:
        raise RequestError(
            f"Markdown exceeds {config.MAX_MARKDOWN_CHARS} characters", status=413
        )
    return markdown


def _safe_filename(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        return "document.pdf"
    cleaned = _FILENAME_RE.sub("_", name.strip()).strip("._") or "document"
    return cleaned if cleaned.lower().endswith(".pdf") else f"{cleaned}.pdf"


def _node_to_dict(node):
    """Tag dataclass nodes with their type so the tree survives JSON."""
    if dataclasses.is_dataclass(node):
        out = {"type": re.sub(r"(?<!^)(?=[A-Z])", "_", type(node).__name__).lower()}
        for f in dataclasses.fields(node):
            out[f.name] = _node_to_dict(getattr(node, f.name))
        return out
    if isinstance(node, (list, tuple)):
        return [_node_to_dict(n) for n in node]
    return node


@app.errorhandler(RequestError)
def _bad_request(exc: RequestError):
    return jsonify({"error": str(exc)}), exc.status


# --------------------------------------------------------------------------- #
# API: Render
# --------------------------------------------------------------------------- #
@app.route("/api/render", methods=["POST"])
def api_render():
    """
    Render markdown to a PDF download.
    Accepts JSON: { "markdown": "# Title ...", "filename": "cv.pdf" }
    or a raw text/markdown body.
    """
    markdown = _read_markdown()
    filename = "document.pdf"
    if request.is_json:
        filename = _safe_filename((request.get_json(silent=True) or {}).get("filename"))
    try:
        pdf = render_blocks(compile_markdown(markdown))
    except Exception as exc:
        logger.exception("Render API error")
        return jsonify({"error": str(exc)}), 500

    logger.info("Rendered %s (%d bytes)", filename, len(pdf))
    return Response(
        pdf,
        mimetype="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# --------------------------------------------------------------------------- #
# API: Document structure
# --------------------------------------------------------------------------- #
@app.route("/api/blocks", methods=["POST"])
def api_blocks():
    """Return the compiled block tree for the posted markdown."""
    markdown = _read_markdown()
    try:
        blocks = compile_markdown(markdown)
    except Exception as exc:
        logger.exception("Blocks API error")
        return jsonify({"error": str(exc)}), 500
    return jsonify({"blocks": _node_to_dict(blocks)})


# --------------------------------------------------------------------------- #
# API: Line wrapping preview
# --------------------------------------------------------------------------- #
@app.route("/api/layout", methods=["POST"])
def api_layout():
    """
    Wrap markdown paragraphs, headings and list items (one run each).
    JSON: { "text": "Some **bold** words", "width": 515, "font_size": 9 }
    """
    body = request.get_json(silent=True) or {}
    text = body.get("text")
    if not isinstance(text, str):
        raise RequestError("Provide 'text' as a string")
    try:
        width = float(body.get("width", config.CONTENT_WIDTH))
        font_size = float(body.get("font_size", config.BODY_FONT_SIZE))
    except (TypeError, ValueError):
        raise RequestError("'width' and 'font_size' must be numbers")
    if width <= 0 or font_size <= 0:
        raise RequestError("'width' and 'font_size' must be positive")

    runs = []
    for block in compile_markdown(text):
        if isinstance(block, Table):
            raise RequestError("Tables are not wrapped; use /api/render")
        if isinstance(block, BulletList):
            runs.extend(block.items)
        else:
            runs.append(block.content)

    inlines = []
    for run in runs:
        if inlines:
            inlines.append(LineBreak())
        inlines.extend(run)
    lines = wrap_tokens(tokenize(inlines), width, font_size)

    return jsonify({
        "width": width,
        "font_size": font_size,
        "lines": [
            {
                "text": line.text,
                "width": round(line.width(font_size), 3),
                "segments": [dataclasses.asdict(s) for s in line.segments],
            }
            for line in lines
        ],
    })


# --------------------------------------------------------------------------- #
# API: Static Reference Data
# --------------------------------------------------------------------------- #
@app.route("/api/reference")
def api_reference():
    """Return page geometry and typography constants."""
    return jsonify({
        "page": {"width": config.PAGE_WIDTH, "height": config.PAGE_HEIGHT},
        "margins": {
            "horizontal": config.MARGIN_HORIZONTAL,
            "top": config.MARGIN_TOP,
            "bottom": config.MARGIN_BOTTOM,
        },
        "content_width": config.CONTENT_WIDTH,
        "font_sizes": {
            "body": config.BODY_FONT_SIZE,
            "h1": config.HEADING1_FONT_SIZE,
            "h2": config.HEADING2_FONT_SIZE,
            "h3": config.HEADING3_FONT_SIZE,
        },
        "line_spacing": config.LINE_SPACING_FACTOR,
        "fonts": config.BASE_FONTS,
        "max_markdown_chars": config.MAX_MARKDOWN_CHARS,
    })


if __name__ == "__main__":
    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)
