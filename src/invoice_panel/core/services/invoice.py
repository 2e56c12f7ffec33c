from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from invoice_panel.core.calculations.invoice_calculator import (
    compute_invoice_amounts,
    resolve_order_total,
)
from invoice_panel.core.errors import ValidationError
from invoice_panel.core.models.document import (
    CompanyProfile,
    CustomerBlock,
    InvoiceDocumentModel,
    LineItem,
)
from invoice_panel.core.models.invoice import INVOICE_STATUSES, INVOICE_TYPES, Invoice
from invoice_panel.core.models.order import Order
from invoice_panel.core.services.orders import get_order
from invoice_panel.core.services.settings import Settings
from invoice_panel.core.services.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class InvoiceRequest:
    order_id: str
    invoice_type: str = "full"
    downpayment_percentage: float | None = None  # falls back to the order's percentage
    tax_amount: float | None = None  # None = derive from settings.tax_rate
    issue_date: date | None = None
    due_date: date | None = None
    notes: str | None = None
    payment_terms: str | None = None


def order_total(order: Order) -> float:
    return resolve_order_total(order.total_amount, order.service_price)


def create_invoice(store: RecordStore, request: InvoiceRequest, settings: Settings | None = None) -> Invoice:
    """
    Compute amounts for the order and write a new draft invoice.
    Nothing is stored unless the amounts were computed successfully.
    """
    settings = settings or Settings()
    if request.invoice_type not in INVOICE_TYPES:
        raise ValidationError(f"Unknown invoice type: {request.invoice_type!r}")
    order = get_order(store, request.order_id)
    if not order.is_invoiceable:
        raise ValidationError(f"Order {order.id} is {order.status}; only in-progress or completed orders can be invoiced")

    percentage = None
    if request.invoice_type == "downpayment":
        percentage = request.downpayment_percentage or order.downpayment_percentage or None
    amounts = compute_invoice_amounts(
        order_total(order),
        invoice_type=request.invoice_type,
        percentage=percentage,
        tax_amount=request.tax_amount,
        tax_rate=settings.tax_rate,
    )

    issue_date = request.issue_date or date.today()
    due_date = request.due_date or issue_date + timedelta(days=settings.due_days)
    if due_date < issue_date:
        raise ValidationError("Due date must not be before the issue date")

    invoice = Invoice(
        id=None,
        invoice_number=store.generate_invoice_number(settings.invoice_prefix),
        order_id=order.id or request.order_id,
        invoice_type=request.invoice_type,
        downpayment_percentage=percentage,
        subtotal=amounts.subtotal,
        tax_amount=amounts.tax_amount,
        total_amount=amounts.total_amount,
        issue_date=issue_date,
        due_date=due_date,
        notes=(request.notes or "").strip() or None,
        payment_terms=(request.payment_terms or "").strip() or None,
    )
    created = Invoice.from_record(store.insert("invoices", invoice.to_record()))
    logger.info("Invoice %s created for order %s (%s, total %.0f)", created.invoice_number, order.id, created.invoice_type, created.total_amount)
    return created


def apply_downpayment_to_order(store: RecordStore, invoice: Invoice) -> Order | None:
    """
    Record a down payment invoice on its order.
    The remaining amount uses the order's total as it is *now*, which can differ
    from the total used when the order-level down payment was first set.
    That drift is kept. The remaining amount is floored at 0 because order
    records reject negative amounts when parsed: an order whose total was cut
    below an already billed down payment would otherwise become unreadable.
    """
    if not invoice.is_downpayment:
        return None
    order = get_order(store, invoice.order_id)
    remaining = max(0.0, order_total(order) - invoice.subtotal)
    patch = {"downpayment_amount": invoice.subtotal, "remaining_amount": remaining}
    return Order.from_record(store.update("orders", invoice.order_id, patch))


def update_invoice_status(store: RecordStore, invoice_id: str, status: str) -> Invoice:
    if status not in INVOICE_STATUSES:
        raise ValidationError(f"Unknown invoice status: {status!r}")
    return Invoice.from_record(store.update("invoices", invoice_id, {"status": status}))


def get_invoice(store: RecordStore, invoice_id: str) -> Invoice:
    rows = store.query("invoices", {"id": invoice_id})
    if not rows:
        raise ValidationError(f"Unknown invoice: {invoice_id}")
    return Invoice.from_record(rows[0])


def list_invoices(store: RecordStore) -> list[Invoice]:
    return [Invoice.from_record(r) for r in store.query("invoices", order_by="created_at", descending=True)]


def build_document_model(
    store: RecordStore,
    invoice: Invoice,
    company: CompanyProfile,
    settings: Settings | None = None,
) -> InvoiceDocumentModel:
    """Resolve everything the renderer needs into one flat snapshot."""
    settings = settings or Settings()
    order = get_order(store, invoice.order_id)
    description = order.service_name or settings.default_service_name
    if invoice.is_downpayment:
        description = f"{description} (DP)"
    return InvoiceDocumentModel(
        invoice_number=invoice.invoice_number,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        customer=CustomerBlock(name=order.customer_name, email=order.customer_email),
        company=company,
        items=(LineItem(description=description, quantity=1, price=invoice.subtotal, total=invoice.subtotal),),
        subtotal=invoice.subtotal,
        tax_amount=invoice.tax_amount,
        total_amount=invoice.total_amount,
        notes=invoice.notes,
        payment_terms=invoice.payment_terms or settings.default_payment_terms,
    )
