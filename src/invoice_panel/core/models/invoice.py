from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping

from invoice_panel.core.models.fields import (
    as_amount,
    as_choice,
    as_date,
    as_optional_text,
    as_text,
    require,
)

INVOICE_STATUSES = ("draft", "sent", "paid", "overdue")
INVOICE_TYPES = ("full", "downpayment")


@dataclass(frozen=True)
class Invoice:
    """
    Invoice issued for a single order.
    Amounts are fixed when the invoice is created; only `status` changes later.
    """

    id: str | None
    invoice_number: str
    order_id: str
    invoice_type: str
    subtotal: float
    tax_amount: float
    total_amount: float
    issue_date: date
    due_date: date
    downpayment_percentage: float | None = None
    status: str = "draft"
    notes: str | None = None
    payment_terms: str | None = None
    created_at: str | None = None

    @property
    def is_downpayment(self) -> bool:
        return self.invoice_type == "downpayment"

    @classmethod
    def from_record(cls, record: Mapping) -> "Invoice":
        invoice_type = as_choice(record.get("invoice_type"), "invoice_type", INVOICE_TYPES, default="full")
        percentage = record.get("downpayment_percentage")
        return cls(
            id=as_optional_text(record.get("id")),
            invoice_number=as_text(require(record, "invoice_number")),
            order_id=as_text(require(record, "order_id")),
            invoice_type=invoice_type,
            subtotal=as_amount(record.get("subtotal"), "subtotal", default=None),
            tax_amount=as_amount(record.get("tax_amount"), "tax_amount"),
            total_amount=as_amount(record.get("total_amount"), "total_amount", default=None),
            issue_date=as_date(record.get("issue_date"), "issue_date"),
            due_date=as_date(record.get("due_date"), "due_date"),
            downpayment_percentage=(
                as_amount(percentage, "downpayment_percentage") if invoice_type == "downpayment" and percentage is not None else None
            ),
            status=as_choice(record.get("status"), "status", INVOICE_STATUSES, default="draft"),
            notes=as_optional_text(record.get("notes")),
            payment_terms=as_optional_text(record.get("payment_terms")),
            created_at=as_optional_text(record.get("created_at")),
        )

    def to_record(self) -> dict:
        data = {
            "invoice_number": self.invoice_number,
            "order_id": self.order_id,
            "invoice_type": self.invoice_type,
            "downpayment_percentage": self.downpayment_percentage,
            "subtotal": self.subtotal,
            "tax_amount": self.tax_amount,
            "total_amount": self.total_amount,
            "status": self.status,
            "issue_date": self.issue_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "notes": self.notes,
            "payment_terms": self.payment_terms,
        }
        if self.id is not None:
            data["id"] = self.id
        if self.created_at is not None:
            data["created_at"] = self.created_at
        return data
