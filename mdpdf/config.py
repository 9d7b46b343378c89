"""
Configuration constants for the markdown-to-PDF engine.
All geometry is in PDF points (1/72 inch) on an A4 page.
"""

import os

# --------------------------------------------------------------------------- #
# Page Geometry
# --------------------------------------------------------------------------- #
PAGE_WIDTH = 595.0
PAGE_HEIGHT = 842.0

MARGIN_HORIZONTAL = 40.0
MARGIN_TOP = 50.0
MARGIN_BOTTOM = 40.0

CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN_HORIZONTAL

# --------------------------------------------------------------------------- #
# Typography
# --------------------------------------------------------------------------- #
BODY_FONT_SIZE = 9.0
HEADING1_FONT_SIZE = 16.0
HEADING2_FONT_SIZE = 12.0
HEADING3_FONT_SIZE = 11.0      # levels 3-6

LINE_SPACING_FACTOR = 1.6

# Gap left below a heading, by level (3+ share the last entry)
HEADING_GAPS = {1: 8.0, 2: 4.0, 3: 3.0}

PARAGRAPH_GAP = 8.0
LIST_ITEM_GAP = 2.0
BLOCK_GAP = 8.0                # after lists and tables

BULLET_INDENT_POINTS = 18.0
BULLET_GLYPH = "•"

# --------------------------------------------------------------------------- #
# PDF Resources
# --------------------------------------------------------------------------- #
FONT_REGULAR = "F1"
FONT_BOLD = "F2"

BASE_FONTS = {
    FONT_REGULAR: "Helvetica",
    FONT_BOLD: "Helvetica-Bold",
}

# --------------------------------------------------------------------------- #
# Host settings (HTTP service / scripts)
# --------------------------------------------------------------------------- #
MAX_MARKDOWN_CHARS = int(os.environ.get("MDPDF_MAX_MARKDOWN_CHARS", "500000"))
HOST = os.environ.get("MDPDF_HOST", "0.0.0.0")
PORT = int(os.environ.get("MDPDF_PORT", "5000"))
DEBUG = os.environ.get("MDPDF_DEBUG", "0") == "1"
