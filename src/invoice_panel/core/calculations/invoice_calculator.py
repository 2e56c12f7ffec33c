from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from invoice_panel.core.errors import ValidationError

# Percentages offered in the order form; others are accepted proportionally.
STANDARD_DOWNPAYMENT_PERCENTAGES = (20, 30, 40, 50)


@dataclass(frozen=True)
class DownpaymentRequest:
    percentage: float


@dataclass(frozen=True)
class OrderTotals:
    total_amount: float
    downpayment_amount: float
    remaining_amount: float


@dataclass(frozen=True)
class InvoiceAmounts:
    subtotal: float
    tax_amount: float
    total_amount: float
    downpayment_amount: float
    remaining_amount: float


def round_currency(value: float) -> float:
    """Round half-up to whole currency units (no fractional subunits)."""
    return float(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _check_amount(value: float, name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(numeric):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    if numeric < 0:
        raise ValidationError(f"{name} must not be negative, got {value!r}")
    return numeric


def _check_percentage(percentage: float) -> float:
    pct = _check_amount(percentage, "percentage")
    if pct > 100:
        raise ValidationError(f"percentage must be between 0 and 100, got {percentage!r}")
    return pct


def resolve_order_total(override: float | None, list_price: float | None) -> float:
    """Manual total wins over the service list price when present and nonzero."""
    if override:
        return _check_amount(override, "total_amount")
    return _check_amount(list_price or 0.0, "service price")


def compute_order_totals(base_price: float, downpayment: DownpaymentRequest | None = None) -> OrderTotals:
    """
    Split an order total into down payment and remaining balance.
    Without a down payment request the whole total remains open.
    """
    total = _check_amount(base_price, "base_price")
    if downpayment is None:
        return OrderTotals(total_amount=total, downpayment_amount=0.0, remaining_amount=total)
    pct = _check_percentage(downpayment.percentage)
    dp_amount = round_currency(total * pct / 100.0)
    return OrderTotals(total_amount=total, downpayment_amount=dp_amount, remaining_amount=total - dp_amount)


def compute_invoice_totals(subtotal: float, tax_amount: float) -> float:
    return _check_amount(subtotal, "subtotal") + _check_amount(tax_amount, "tax_amount")


def compute_invoice_amounts(
    order_total: float,
    invoice_type: str = "full",
    percentage: float | None = None,
    tax_amount: float | None = None,
    tax_rate: float = 0.0,
) -> InvoiceAmounts:
    """
    Amounts for one invoice-creation event.
    `downpayment` invoices bill only the down payment share of the order total;
    tax is taken as given, or derived from `tax_rate` when not provided.
    """
    if invoice_type == "downpayment":
        if percentage is None:
            raise ValidationError("Down payment invoice requires a percentage")
        split = compute_order_totals(order_total, DownpaymentRequest(percentage))
        subtotal = split.downpayment_amount
    elif invoice_type == "full":
        split = compute_order_totals(order_total)
        subtotal = split.total_amount
    else:
        raise ValidationError(f"Unknown invoice type: {invoice_type!r}")

    if tax_amount is None:
        tax = round_currency(subtotal * _check_amount(tax_rate, "tax_rate"))
    else:
        tax = _check_amount(tax_amount, "tax_amount")
    return InvoiceAmounts(
        subtotal=subtotal,
        tax_amount=tax,
        total_amount=compute_invoice_totals(subtotal, tax),
        downpayment_amount=split.downpayment_amount,
        remaining_amount=split.remaining_amount,
    )
