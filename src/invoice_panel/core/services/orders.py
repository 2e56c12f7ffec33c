from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from invoice_panel.core.calculations.invoice_calculator import (
    DownpaymentRequest,
    compute_order_totals,
    resolve_order_total,
)
from invoice_panel.core.errors import ValidationError
from invoice_panel.core.models.order import INVOICEABLE_STATUSES, ORDER_STATUSES, Order
from invoice_panel.core.models.service import Service
from invoice_panel.core.services.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class OrderRequest:
    """Order intake form submission."""

    customer_name: str
    customer_email: str
    service_id: str
    customer_phone: str = ""
    custom_requirements: str = ""
    budget_range: str = ""
    deadline_date: str | None = None
    total_amount: float = 0.0  # 0 = use the service list price
    downpayment_percentage: float | None = None  # None = no down payment


def list_active_services(store: RecordStore) -> list[Service]:
    return [Service.from_record(r) for r in store.query("services", {"is_active": True}, order_by="name")]


def get_service(store: RecordStore, service_id: str) -> Service:
    rows = store.query("services", {"id": service_id})
    if not rows:
        raise ValidationError(f"Unknown service: {service_id}")
    return Service.from_record(rows[0])


def get_order(store: RecordStore, order_id: str) -> Order:
    rows = store.query("orders", {"id": order_id})
    if not rows:
        raise ValidationError(f"Unknown order: {order_id}")
    return Order.from_record(rows[0])


def create_order(store: RecordStore, request: OrderRequest) -> Order:
    if not (request.customer_name.strip() and request.customer_email.strip() and request.service_id):
        raise ValidationError("Customer name, email and service are required")
    service = get_service(store, request.service_id)
    base_price = resolve_order_total(request.total_amount, service.price)
    downpayment = None
    if request.downpayment_percentage:
        downpayment = DownpaymentRequest(request.downpayment_percentage)
    totals = compute_order_totals(base_price, downpayment)

    order = Order(
        id=None,
        customer_name=request.customer_name.strip(),
        customer_email=request.customer_email.strip(),
        customer_phone=request.customer_phone.strip(),
        service_id=service.id,
        service_name=service.name,
        service_price=service.price,
        custom_requirements=request.custom_requirements,
        budget_range=request.budget_range,
        deadline_date=request.deadline_date or None,
        total_amount=totals.total_amount,
        downpayment_percentage=downpayment.percentage if downpayment else 0.0,
        downpayment_amount=totals.downpayment_amount,
        remaining_amount=totals.remaining_amount,
    )
    created = Order.from_record(store.insert("orders", order.to_record()))
    logger.info("Order %s created for %s (total %.0f)", created.id, created.customer_email, created.total_amount)
    return created


def update_order_status(store: RecordStore, order_id: str, status: str) -> Order:
    if status not in ORDER_STATUSES:
        raise ValidationError(f"Unknown order status: {status!r}")
    return Order.from_record(store.update("orders", order_id, {"status": status}))


def update_order_amount(store: RecordStore, order_id: str, total_amount: float | None) -> Order:
    """
    Staff edit of the project total. The down payment split is recomputed with
    the order's own percentage; 0 or None falls back to the service list price.
    Invoices already issued keep their amounts.
    """
    order = get_order(store, order_id)
    base_price = resolve_order_total(total_amount, order.service_price)
    downpayment = DownpaymentRequest(order.downpayment_percentage) if order.has_downpayment else None
    totals = compute_order_totals(base_price, downpayment)
    patch = {
        "total_amount": totals.total_amount,
        "downpayment_amount": totals.downpayment_amount,
        "remaining_amount": totals.remaining_amount,
    }
    updated = Order.from_record(store.update("orders", order_id, patch))
    logger.info("Order %s total changed %.0f -> %.0f", order_id, order.total_amount, updated.total_amount)
    return updated


def list_orders(store: RecordStore, statuses: Iterable[str] | None = None) -> list[Order]:
    filters = {"status": tuple(statuses)} if statuses is not None else None
    rows = store.query("orders", filters, order_by="created_at", descending=True)
    return [Order.from_record(r) for r in rows]


def list_invoiceable_orders(store: RecordStore) -> list[Order]:
    return list_orders(store, INVOICEABLE_STATUSES)
