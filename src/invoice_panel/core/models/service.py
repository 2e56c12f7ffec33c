from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from invoice_panel.core.models.fields import as_amount, as_text, require


@dataclass(frozen=True)
class Service:
    """A sellable digital service with its list price."""

    id: str
    name: str
    price: float = 0.0
    is_active: bool = True

    @classmethod
    def from_record(cls, record: Mapping) -> "Service":
        return cls(
            id=as_text(require(record, "id")),
            name=as_text(record.get("name")),
            price=as_amount(record.get("price"), "price"),
            is_active=bool(record.get("is_active", True)),
        )

    def to_record(self) -> dict:
        return {"id": self.id, "name": self.name, "price": self.price, "is_active": self.is_active}
