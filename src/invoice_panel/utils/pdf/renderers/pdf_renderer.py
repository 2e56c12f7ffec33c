from __future__ import annotations

import logging
import math
import re
from datetime import date
from typing import Callable

from invoice_panel.core.errors import RenderError
from invoice_panel.core.models.document import InvoiceDocumentModel
from invoice_panel.utils.pdf.core.builder import build_pdf_bytes
from invoice_panel.utils.pdf.core.drawing import Canvas
from invoice_panel.utils.pdf.core.formatting import CurrencyFormat
from invoice_panel.utils.pdf.core.layout_common import TOP_Y
from invoice_panel.utils.pdf.sections.bill_to import draw_bill_to
from invoice_panel.utils.pdf.sections.company import draw_company
from invoice_panel.utils.pdf.sections.header import draw_header
from invoice_panel.utils.pdf.sections.items_table import draw_items_table
from invoice_panel.utils.pdf.sections.notes import draw_notes, draw_payment_terms
from invoice_panel.utils.pdf.sections.totals import draw_totals

logger = logging.getLogger(__name__)

DrawStep = Callable[[Canvas, InvoiceDocumentModel, float], float]

# Each step draws its block and returns the next vertical cursor (mm from top).
DRAW_STEPS: tuple[DrawStep, ...] = (
    draw_header,
    draw_company,
    draw_bill_to,
    draw_items_table,
    draw_totals,
    draw_notes,
    draw_payment_terms,
)


def invoice_filename(invoice_number: str) -> str:
    safe = re.sub(r'[\\/*?:"<>|\s]+', "-", invoice_number.strip())
    return f"invoice-{safe}.pdf"


def _check_number(value, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RenderError(f"{field} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise RenderError(f"{field} must be a finite non-negative number, got {value!r}")


def validate_model(model: InvoiceDocumentModel) -> None:
    if not isinstance(model, InvoiceDocumentModel):
        raise RenderError(f"Expected an InvoiceDocumentModel, got {type(model).__name__}")
    if not str(model.invoice_number or "").strip():
        raise RenderError("Invoice number is missing")
    for field in ("issue_date", "due_date"):
        if not isinstance(getattr(model, field), date):
            raise RenderError(f"{field} must be a date")
    for field in ("subtotal", "tax_amount", "total_amount"):
        _check_number(getattr(model, field), field)
    if model.customer is None or not model.customer.name:
        raise RenderError("Customer name is missing")
    if model.company is None:
        raise RenderError("Company profile is missing")
    if not model.items:
        raise RenderError("Invoice has no line items")
    for idx, item in enumerate(model.items, start=1):
        for field in ("quantity", "price", "total"):
            _check_number(getattr(item, field, None), f"item {idx} {field}")


def render_invoice_pdf(model: InvoiceDocumentModel, currency: CurrencyFormat | None = None) -> bytes:
    """Lay out the invoice template and return the finished PDF bytes."""
    validate_model(model)
    canvas = Canvas(money=currency or CurrencyFormat())
    try:
        y = TOP_Y
        for step in DRAW_STEPS:
            y = step(canvas, model, y)
        data = build_pdf_bytes(canvas.content_streams(), title=f"Invoice {model.invoice_number}")
    except Exception as exc:
        logger.exception("Rendering invoice %s failed", model.invoice_number)
        raise RenderError(f"Could not render invoice {model.invoice_number}: {exc}") from exc
    logger.debug("Rendered invoice %s: %d page(s), %d bytes", model.invoice_number, canvas.page_count, len(data))
    return data
