"""
Glyph metrics for the built-in Helvetica Type1 font.
Only printable ASCII is needed: text is normalized to ASCII before drawing.
"""

from __future__ import annotations

from invoice_panel.utils.pdf.core.layout_common import MM

FONT_RESOURCE = "/F1"
BASE_FONT = "Helvetica"

# Advance widths in 1/1000 em for characters 32..126 (Helvetica AFM).
_HELVETICA_WIDTHS = (
    278, 278, 355, 556, 556, 889, 667, 191, 333, 333, 389, 584, 278, 333, 278, 278,  # space - /
    556, 556, 556, 556, 556, 556, 556, 556, 556, 556,  # 0 - 9
    278, 278, 584, 584, 584, 556, 1015,  # : - @
    667, 667, 722, 722, 667, 611, 778, 722, 278, 500, 667, 556, 833,  # A - M
    722, 778, 667, 778, 722, 667, 611, 722, 667, 944, 667, 667, 611,  # N - Z
    278, 278, 278, 469, 556, 333,  # [ - `
    556, 556, 500, 556, 556, 278, 556, 556, 222, 222, 500, 222, 833,  # a - m
    556, 556, 556, 556, 333, 500, 278, 556, 500, 722, 500, 500, 500,  # n - z
    334, 260, 334, 584,  # { - ~
)
_FIRST_CHAR = 32
_MISSING_WIDTH = 500


def char_width(ch: str) -> int:
    idx = ord(ch) - _FIRST_CHAR
    if 0 <= idx < len(_HELVETICA_WIDTHS):
        return _HELVETICA_WIDTHS[idx]
    return _MISSING_WIDTH


def text_width_pt(text: str, size: float) -> float:
    return sum(char_width(ch) for ch in text) * size / 1000.0


def text_width_mm(text: str, size: float) -> float:
    return text_width_pt(text, size) / MM
