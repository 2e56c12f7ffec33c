from __future__ import annotations

from invoice_panel.core.models.document import InvoiceDocumentModel
from invoice_panel.utils.pdf.core.drawing import Canvas
from invoice_panel.utils.pdf.core.formatting import format_date
from invoice_panel.utils.pdf.core.layout_common import LEFT_X, META_SIZE, META_Y, TITLE_SIZE, TOP_Y


def build_meta_lines(model: InvoiceDocumentModel) -> list[str]:
    return [
        f"Invoice #: {model.invoice_number}",
        f"Issue Date: {format_date(model.issue_date)}",
        f"Due Date: {format_date(model.due_date)}",
    ]


def draw_header(canvas: Canvas, model: InvoiceDocumentModel, y: float) -> float:
    canvas.text("INVOICE", LEFT_X, TOP_Y, TITLE_SIZE, "primary")
    for line, line_y in zip(build_meta_lines(model), META_Y):
        canvas.text(line, LEFT_X, line_y, META_SIZE, "dark")
    return y
