from __future__ import annotations

from invoice_panel.core.models.document import CustomerBlock, InvoiceDocumentModel
from invoice_panel.utils.pdf.core.drawing import Canvas
from invoice_panel.utils.pdf.core.layout_common import (
    BILL_TO_LABEL_SIZE,
    BILL_TO_LABEL_Y,
    BILL_TO_LINES_Y,
    BILL_TO_SIZE,
    LEFT_X,
    TABLE_TOP_Y,
)


def build_customer_lines(customer: CustomerBlock) -> list[tuple[str, float]]:
    """(text, baseline) pairs; each field owns its slot, empty ones are skipped."""
    fields = (customer.name, customer.email, customer.address or "")
    return [(text, line_y) for text, line_y in zip(fields, BILL_TO_LINES_Y) if text]


def draw_bill_to(canvas: Canvas, model: InvoiceDocumentModel, y: float) -> float:
    canvas.text("Bill To:", LEFT_X, BILL_TO_LABEL_Y, BILL_TO_LABEL_SIZE, "dark")
    for line, line_y in build_customer_lines(model.customer):
        canvas.text(line, LEFT_X, line_y, BILL_TO_SIZE, "dark")
    # The item table always starts at a fixed offset.
    return TABLE_TOP_Y
