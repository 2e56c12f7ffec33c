from __future__ import annotations

from invoice_panel.core.models.document import InvoiceDocumentModel
from invoice_panel.utils.pdf.core.drawing import Canvas
from invoice_panel.utils.pdf.core.layout_common import (
    BODY_SIZE,
    GRAND_TOTAL_SIZE,
    TOTALS_LABEL_X,
    TOTALS_PITCH,
    TOTALS_VALUE_X,
)


def build_totals_rows(model: InvoiceDocumentModel) -> list[tuple[str, float, int, str]]:
    """(label, amount, font size, color) per line; the tax line only when taxed."""
    rows = [("Subtotal:", model.subtotal, BODY_SIZE, "dark")]
    if model.tax_amount > 0:
        rows.append(("Tax:", model.tax_amount, BODY_SIZE, "dark"))
    rows.append(("Total:", model.total_amount, GRAND_TOTAL_SIZE, "primary"))
    return rows


def draw_totals(canvas: Canvas, model: InvoiceDocumentModel, y: float) -> float:
    for label, amount, size, color_name in build_totals_rows(model):
        y = canvas.fit(y + TOTALS_PITCH)
        canvas.text(label, TOTALS_LABEL_X, y, size, color_name)
        canvas.text(canvas.money(amount), TOTALS_VALUE_X, y, size, color_name)
    return y
