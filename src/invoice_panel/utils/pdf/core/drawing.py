from __future__ import annotations

import unicodedata
from typing import Callable

from invoice_panel.utils.pdf.core import fonts
from invoice_panel.utils.pdf.core.layout_common import BOTTOM_LIMIT_Y, MM, PAGE_H, TOP_Y, color


def _normalize_ascii(text: str) -> str:
    """Remove diacritics to stay compatible with built-in PDF Type1 fonts."""
    normalized = unicodedata.normalize("NFKD", str(text))
    return normalized.encode("ascii", "ignore").decode("ascii")


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _pt_x(x_mm: float) -> str:
    return f"{x_mm * MM:.2f}"


def _pt_y(y_mm: float) -> str:
    return f"{PAGE_H - y_mm * MM:.2f}"


def _draw_text(text: str, x: float, y: float, size: float, rgb: str) -> str:
    """Text with its baseline at (x, y) mm."""
    safe = _escape_pdf_text(text)
    return f"{rgb} rg BT {fonts.FONT_RESOURCE} {size} Tf {_pt_x(x)} {_pt_y(y)} Td ({safe}) Tj ET\n"


def _draw_rect(x: float, y: float, w: float, h: float, rgb: str) -> str:
    """Filled rectangle whose top-left corner is (x, y) mm."""
    return f"{rgb} rg {_pt_x(x)} {_pt_y(y + h)} {w * MM:.2f} {h * MM:.2f} re f\n"


class Canvas:
    """
    Collects content-stream operators page by page.
    Layout position is not kept here; draw steps pass the cursor explicitly.
    """

    def __init__(self, money: Callable[[float], str]):
        self.money = money
        self._pages: list[list[str]] = [[]]

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def text(self, text: str, x: float, y: float, size: float, color_name: str = "dark") -> None:
        self._pages[-1].append(_draw_text(_normalize_ascii(text), x, y, size, color(color_name)))

    def text_right(self, text: str, right_x: float, y: float, size: float, color_name: str = "dark") -> None:
        ascii_text = _normalize_ascii(text)
        x = right_x - fonts.text_width_mm(ascii_text, size)
        self._pages[-1].append(_draw_text(ascii_text, x, y, size, color(color_name)))

    def fill_rect(self, x: float, y: float, w: float, h: float, color_name: str) -> None:
        self._pages[-1].append(_draw_rect(x, y, w, h, color(color_name)))

    def new_page(self) -> None:
        self._pages.append([])

    def fit(self, y: float) -> float:
        """Return `y`, or the top of a fresh page when `y` is past the bottom margin."""
        if y > BOTTOM_LIMIT_Y:
            self.new_page()
            return TOP_Y
        return y

    def content_streams(self) -> list[str]:
        return ["".join(parts) for parts in self._pages]
