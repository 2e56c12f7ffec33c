from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Mapping

from invoice_panel.core.models.fields import (
    as_amount,
    as_choice,
    as_optional_text,
    as_text,
    require,
)

ORDER_STATUSES = ("pending", "in_progress", "completed", "cancelled")
# Orders in these states can be invoiced.
INVOICEABLE_STATUSES = ("in_progress", "completed")


@dataclass(frozen=True)
class Order:
    """Customer order as stored in the `orders` table."""

    id: str | None
    customer_name: str
    customer_email: str
    service_id: str
    total_amount: float
    customer_phone: str = ""
    service_name: str = ""
    service_price: float = 0.0
    custom_requirements: str = ""
    budget_range: str = ""
    deadline_date: str | None = None
    downpayment_percentage: float = 0.0
    downpayment_amount: float = 0.0
    remaining_amount: float = 0.0
    status: str = "pending"
    created_at: str | None = None

    @property
    def has_downpayment(self) -> bool:
        return self.downpayment_percentage > 0

    @property
    def is_invoiceable(self) -> bool:
        return self.status in INVOICEABLE_STATUSES

    @classmethod
    def from_record(cls, record: Mapping) -> "Order":
        return cls(
            id=as_optional_text(record.get("id")),
            customer_name=as_text(require(record, "customer_name")),
            customer_email=as_text(require(record, "customer_email")),
            service_id=as_text(require(record, "service_id")),
            total_amount=as_amount(record.get("total_amount"), "total_amount"),
            customer_phone=as_text(record.get("customer_phone")),
            service_name=as_text(record.get("service_name")),
            service_price=as_amount(record.get("service_price"), "service_price"),
            custom_requirements=as_text(record.get("custom_requirements")),
            budget_range=as_text(record.get("budget_range")),
            deadline_date=as_optional_text(record.get("deadline_date")),
            downpayment_percentage=as_amount(record.get("downpayment_percentage"), "downpayment_percentage"),
            downpayment_amount=as_amount(record.get("downpayment_amount"), "downpayment_amount"),
            remaining_amount=as_amount(record.get("remaining_amount"), "remaining_amount"),
            status=as_choice(record.get("status"), "status", ORDER_STATUSES, default="pending"),
            created_at=as_optional_text(record.get("created_at")),
        )

    def to_record(self) -> dict:
        data = asdict(self)
        for key in ("id", "created_at"):
            if data[key] is None:
                data.pop(key)
        return data
