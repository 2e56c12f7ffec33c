import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure `src` is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep settings/company/catalog lookups away from the real data directory."""
    from invoice_panel.core.services.settings import DATA_DIR_ENV

    data = tmp_path / "data"
    monkeypatch.setenv(DATA_DIR_ENV, str(data))
    return data


@pytest.fixture
def store():
    from invoice_panel.core.services.store import JsonRecordStore

    s = JsonRecordStore()
    s.insert("services", {"id": "web-company", "name": "Company Website", "price": 12_000_000, "is_active": True})
    return s


@pytest.fixture
def order_factory(store):
    """Insert an order record directly, bypassing the intake form."""

    def make(**overrides):
        from invoice_panel.core.models.order import Order

        record = {
            "customer_name": "Budi Santoso",
            "customer_email": "budi@example.com",
            "service_id": "web-company",
            "service_name": "Company Website",
            "service_price": 12_000_000,
            "total_amount": 10_000_000,
            "status": "in_progress",
        }
        record.update(overrides)
        return Order.from_record(store.insert("orders", record))

    return make


@pytest.fixture
def company():
    from invoice_panel.core.models.document import CompanyProfile

    return CompanyProfile(
        name="Digital Service Company",
        address="Jl. Digital No. 123, Jakarta",
        phone="+62 21 1234567",
        email="info@digitalservice.com",
        website="www.digitalservice.com",
        tax_number="12.345.678.9-012.345",
    )


@pytest.fixture
def document_model(company):
    from invoice_panel.core.models.document import CustomerBlock, InvoiceDocumentModel, LineItem

    return InvoiceDocumentModel(
        invoice_number="INV-20240115-0001",
        issue_date=date(2024, 1, 15),
        due_date=date(2024, 2, 14),
        customer=CustomerBlock(name="Budi Santoso", email="budi@example.com"),
        company=company,
        items=(LineItem(description="Company Website", quantity=1, price=5_000_000, total=5_000_000),),
        subtotal=5_000_000,
        tax_amount=0,
        total_amount=5_000_000,
        payment_terms="30 days",
    )


class RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def notify_success(self, message: str) -> None:
        self.successes.append(message)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def notifier():
    return RecordingNotifier()
