"""
PDF object builder: wraps page content streams into a minimal PDF 1.4 file.
No timestamps or random ids are written, so equal input gives equal bytes.

Object numbers are fixed: 1 catalog, 2 page tree, 3 font, 4 document info,
then a (content stream, page) pair per page starting at 5.
"""

from __future__ import annotations

from typing import List, Sequence

from invoice_panel.utils.pdf.core import fonts
from invoice_panel.utils.pdf.core.layout_common import PAGE_H, PAGE_W

FIRST_PAGE_OBJ = 5


def _escape_literal(text: str) -> str:
    safe = text.encode("ascii", "ignore").decode("ascii")
    return safe.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _obj(number: int, body: bytes) -> bytes:
    return f"{number} 0 obj ".encode("ascii") + body + b" endobj\n"


def _page_objects(streams: Sequence[bytes], media_box: str) -> tuple[list[bytes], list[int]]:
    objects: list[bytes] = []
    page_numbers: list[int] = []
    for idx, stream in enumerate(streams):
        content_no = FIRST_PAGE_OBJ + 2 * idx
        page_no = content_no + 1
        objects.append(_obj(content_no, f"<< /Length {len(stream)} >> stream\n".encode("ascii") + stream + b"\nendstream"))
        objects.append(
            _obj(
                page_no,
                (
                    f"<< /Type /Page /Parent 2 0 R /MediaBox {media_box} /Contents {content_no} 0 R "
                    f"/Resources << /Font << {fonts.FONT_RESOURCE} 3 0 R >> >> >>"
                ).encode("ascii"),
            )
        )
        page_numbers.append(page_no)
    return objects, page_numbers


def _xref_table(offsets: Sequence[int]) -> bytes:
    rows = [f"xref\n0 {len(offsets) + 1}\n", "0000000000 65535 f \n"]
    rows.extend(f"{offset:010d} 00000 n \n" for offset in offsets)
    return "".join(rows).encode("ascii")


def build_pdf_bytes(content_streams: List[str], page_size=(PAGE_W, PAGE_H), title: str = "") -> bytes:
    """Return the finished PDF for one content stream per page."""
    if not content_streams:
        raise ValueError("PDF needs at least one page")
    media_box = f"[0 0 {page_size[0]:.2f} {page_size[1]:.2f}]"
    page_objs, page_numbers = _page_objects([s.encode("ascii", "ignore") for s in content_streams], media_box)
    kids = " ".join(f"{n} 0 R" for n in page_numbers)

    objects = [
        _obj(1, b"<< /Type /Catalog /Pages 2 0 R >>"),
        _obj(2, f"<< /Type /Pages /Count {len(page_numbers)} /Kids [{kids}] >>".encode("ascii")),
        _obj(3, f"<< /Type /Font /Subtype /Type1 /BaseFont /{fonts.BASE_FONT} /Encoding /WinAnsiEncoding >>".encode("ascii")),
        _obj(4, f"<< /Title ({_escape_literal(title)}) /Producer (invoice_panel) >>".encode("ascii")),
        *page_objs,
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for obj in objects:
        offsets.append(len(out))
        out += obj
    xref_at = len(out)
    out += _xref_table(offsets)
    out += f"trailer << /Size {len(offsets) + 1} /Root 1 0 R /Info 4 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode("ascii")
    return bytes(out)
