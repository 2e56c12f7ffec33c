from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class CompanyProfile:
    """Issuer identity printed in the top-right corner of every invoice."""

    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    website: Optional[str] = None
    tax_number: Optional[str] = None


@dataclass(frozen=True)
class CustomerBlock:
    name: str
    email: str
    address: Optional[str] = None


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: int
    price: float
    total: float


@dataclass(frozen=True)
class InvoiceDocumentModel:
    """Self-contained snapshot handed to the PDF renderer."""

    invoice_number: str
    issue_date: date
    due_date: date
    customer: CustomerBlock
    company: CompanyProfile
    items: tuple[LineItem, ...]
    subtotal: float
    tax_amount: float
    total_amount: float
    notes: Optional[str] = None
    payment_terms: Optional[str] = None
