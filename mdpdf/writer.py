"""
Minimal PDF 1.4 serializer.

Object layout for N pages:

    1            Catalog
    2            Pages tree
    3 .. N+2     Page dictionaries
    N+3, N+4     Helvetica, Helvetica-Bold
    N+5 .. 2N+4  Content streams, one per page
"""

from __future__ import annotations

from typing import Sequence

from mdpdf.config import BASE_FONTS, BULLET_GLYPH, FONT_BOLD, FONT_REGULAR, PAGE_HEIGHT, PAGE_WIDTH


def escape_pdf_text(text: str) -> str:
    """
    Escape *text* for a PDF literal string.

    The bullet maps to its StandardEncoding code (octal 267); anything
    outside Latin-1 becomes ``?`` since the base-14 fonts have no glyph
    for it.
    """
    out: list[str] = []
    for ch in text:
        if ch in "()\\":
            out.append("\\" + ch)
        elif ch == "\r":
            out.append(" ")
        elif ch == BULLET_GLYPH:
            out.append("\\267")
        elif ord(ch) <= 0xFF:
            out.append(ch)
        else:
            out.append("?")
    return "".join(out)


def _write_object(pdf: bytearray, offsets: list[int], obj_id: int, body: str) -> None:
    offsets[obj_id] = len(pdf)
    pdf.extend(f"{obj_id} 0 obj\n{body}\nendobj\n".encode("latin-1"))


def _write_stream(pdf: bytearray, offsets: list[int], obj_id: int, data: bytes) -> None:
    offsets[obj_id] = len(pdf)
    pdf.extend(f"{obj_id} 0 obj\n<< /Length {len(data)} >>\nstream\n".encode("ascii"))
    pdf.extend(data)
    pdf.extend(b"\nendstream\nendobj\n")


def write_pdf(pages: Sequence) -> bytes:
    """Serialize composed pages (objects with a ``content`` string) to PDF bytes."""
    streams = [page.content.encode("latin-1") for page in pages] or [b""]
    page_count = len(streams)

    font_regular_id = page_count + 3
    font_bold_id = page_count + 4
    content_start_id = page_count + 5
    total_objects = 2 * page_count + 4

    pdf = bytearray(b"%PDF-1.4\n")
    offsets = [0] * (total_objects + 1)

    _write_object(pdf, offsets, 1, "<< /Type /Catalog /Pages 2 0 R >>")

    kids = " ".join(f"{3 + i} 0 R" for i in range(page_count))
    _write_object(pdf, offsets, 2, f"<< /Type /Pages /Count {page_count} /Kids [{kids}] >>")

    for i in range(page_count):
        _write_object(
            pdf, offsets, 3 + i,
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH:.2f} {PAGE_HEIGHT:.2f}] "
            f"/Resources << /Font << /{FONT_REGULAR} {font_regular_id} 0 R "
            f"/{FONT_BOLD} {font_bold_id} 0 R >> >> /Contents {content_start_id + i} 0 R >>",
        )

    for font_id, name in ((font_regular_id, FONT_REGULAR), (font_bold_id, FONT_BOLD)):
        _write_object(
            pdf, offsets, font_id,
            f"<< /Type /Font /Subtype /Type1 /BaseFont /{BASE_FONTS[name]} >>",
        )

    for i, data in enumerate(streams):
        _write_stream(pdf, offsets, content_start_id + i, data)

    xref_start = len(pdf)
    pdf.extend(f"xref\n0 {total_objects + 1}\n".encode("ascii"))
    pdf.extend(b"0000000000 65535 f \n")
    for off in offsets[1:]:
        pdf.extend(f"{off:010d} 00000 n \n".encode("ascii"))

    pdf.extend(
        (
            f"trailer<< /Size {total_objects + 1} /Root 1 0 R >>\n"
            "startxref\n"
            f"{xref_start}\n"
            "%%EOF\n"
        ).encode("ascii")
    )
    return bytes(pdf)
