from __future__ import annotations

from invoice_panel.core.models.document import InvoiceDocumentModel
from invoice_panel.utils.pdf.core.drawing import Canvas
from invoice_panel.utils.pdf.core.layout_common import (
    BODY_SIZE,
    GRAND_TOTAL_SIZE,
    LEFT_X,
    LINE_HEIGHT_FACTOR,
    MM,
    NOTES_GAP,
    SECTION_TEXT_GAP,
    TERMS_GAP,
)


def _draw_labelled_text(
    canvas: Canvas,
    label: str,
    text: str,
    y: float,
    gap: float,
    size: float = BODY_SIZE,
    color_name: str = "dark",
) -> float:
    y = canvas.fit(y + gap)
    canvas.text(label, LEFT_X, y, size, color_name)
    y = canvas.fit(y + SECTION_TEXT_GAP)
    line_pitch = size * LINE_HEIGHT_FACTOR / MM
    for idx, line in enumerate(text.splitlines() or [text]):
        if idx:
            y = canvas.fit(y + line_pitch)
        canvas.text(line, LEFT_X, y, size, color_name)
    return y


def terms_style(model: InvoiceDocumentModel) -> tuple[float, str]:
    """
    Payment terms directly under the totals keep the grand total's size and
    colour; after a notes block they use the body style.
    """
    if model.notes:
        return BODY_SIZE, "dark"
    return GRAND_TOTAL_SIZE, "primary"


def draw_notes(canvas: Canvas, model: InvoiceDocumentModel, y: float) -> float:
    if not model.notes:
        return y
    return _draw_labelled_text(canvas, "Notes:", model.notes, y, NOTES_GAP)


def draw_payment_terms(canvas: Canvas, model: InvoiceDocumentModel, y: float) -> float:
    if not model.payment_terms:
        return y
    size, color_name = terms_style(model)
    return _draw_labelled_text(canvas, "Payment Terms:", model.payment_terms, y, TERMS_GAP, size, color_name)
