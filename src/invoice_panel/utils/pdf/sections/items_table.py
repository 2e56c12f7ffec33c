from __future__ import annotations

from invoice_panel.core.models.document import InvoiceDocumentModel, LineItem
from invoice_panel.utils.pdf.core.drawing import Canvas
from invoice_panel.utils.pdf.core.layout_common import (
    BODY_SIZE,
    BOTTOM_LIMIT_Y,
    LEFT_X,
    TABLE_COLUMNS,
    TABLE_FIRST_ROW_GAP,
    TABLE_HEADER_BASELINE,
    TABLE_HEADER_HEIGHT,
    TABLE_ROW_PITCH,
    TABLE_WIDTH,
    TOP_Y,
)


def _format_qty(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _draw_table_header(canvas: Canvas, top: float) -> float:
    """Shaded header band; returns the baseline of the first row."""
    canvas.fill_rect(LEFT_X, top, TABLE_WIDTH, TABLE_HEADER_HEIGHT, "header_fill")
    for label, x in TABLE_COLUMNS:
        canvas.text(label, x, top + TABLE_HEADER_BASELINE, BODY_SIZE, "dark")
    return top + TABLE_FIRST_ROW_GAP


def row_cells(item: LineItem, money) -> list[str]:
    return [item.description, _format_qty(item.quantity), money(item.price), money(item.total)]


def draw_items_table(canvas: Canvas, model: InvoiceDocumentModel, y: float) -> float:
    """
    Header plus one row per item. Rows past the bottom margin continue on a new
    page under a repeated header. Returns the baseline below the last row.
    """
    row_y = _draw_table_header(canvas, y)
    for item in model.items:
        if row_y > BOTTOM_LIMIT_Y:
            canvas.new_page()
            row_y = _draw_table_header(canvas, TOP_Y)
        for text, (_, x) in zip(row_cells(item, canvas.money), TABLE_COLUMNS):
            canvas.text(text, x, row_y, BODY_SIZE, "dark")
        row_y += TABLE_ROW_PITCH
    return row_y
