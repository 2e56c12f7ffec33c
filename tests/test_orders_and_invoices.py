from datetime import date

import pytest

from invoice_panel.core.errors import ValidationError
from invoice_panel.core.services import catalog, orders
from invoice_panel.core.services import invoice as invoices
from invoice_panel.core.services.invoice import InvoiceRequest
from invoice_panel.core.services.orders import OrderRequest
from invoice_panel.core.services.settings import Settings


def _request(**overrides):
    data = {
        "customer_name": "  Siti Rahma ",
        "customer_email": "siti@example.com",
        "service_id": "web-company",
    }
    data.update(overrides)
    return OrderRequest(**data)


def test_create_order_uses_list_price_without_override(store):
    order = orders.create_order(store, _request())

    assert order.id
    assert order.customer_name == "Siti Rahma"
    assert order.status == "pending"
    assert order.service_name == "Company Website"
    assert order.total_amount == 12_000_000
    assert order.downpayment_amount == 0
    assert order.remaining_amount == 12_000_000


def test_create_order_with_override_and_downpayment(store):
    order = orders.create_order(store, _request(total_amount=10_000_000, downpayment_percentage=30))

    assert order.total_amount == 10_000_000
    assert order.has_downpayment
    assert order.downpayment_amount == 3_000_000
    assert order.remaining_amount == 7_000_000


@pytest.mark.parametrize("field", ["customer_name", "customer_email", "service_id"])
def test_create_order_requires_contact_and_service(store, field):
    with pytest.raises(ValidationError):
        orders.create_order(store, _request(**{field: ""}))
    assert store.query("orders") == []


def test_create_order_unknown_service(store):
    with pytest.raises(ValidationError):
        orders.create_order(store, _request(service_id="nope"))


def test_update_order_status_validates_value(store, order_factory):
    order = order_factory(status="pending")

    assert orders.update_order_status(store, order.id, "completed").status == "completed"
    with pytest.raises(ValidationError):
        orders.update_order_status(store, order.id, "shipped")


def test_invoiceable_orders_are_in_progress_or_completed(store, order_factory):
    for status in ("pending", "in_progress", "completed", "cancelled"):
        order_factory(status=status)

    statuses = {o.status for o in orders.list_invoiceable_orders(store)}

    assert statuses == {"in_progress", "completed"}


def test_full_invoice_uses_override_total(store, order_factory):
    order = order_factory(total_amount=15_000_000, service_price=12_000_000)

    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id, issue_date=date(2024, 1, 15)))

    assert created.subtotal == 15_000_000
    assert created.total_amount == 15_000_000
    assert created.status == "draft"
    assert created.due_date == date(2024, 2, 14)
    assert created.invoice_number.startswith("INV-")


def test_full_invoice_falls_back_to_service_price(store, order_factory):
    order = order_factory(total_amount=0, service_price=12_000_000)

    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id, tax_amount=1_200_000))

    assert created.subtotal == 12_000_000
    assert created.total_amount == 13_200_000


def test_tax_rate_setting_applies_when_tax_not_given(store, order_factory):
    order = order_factory(total_amount=1_000_000)

    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id), Settings(tax_rate=0.11))

    assert created.tax_amount == 110_000
    assert created.total_amount == 1_110_000


def test_pending_order_cannot_be_invoiced(store, order_factory):
    order = order_factory(status="pending")

    with pytest.raises(ValidationError):
        invoices.create_invoice(store, InvoiceRequest(order_id=order.id))
    assert store.query("invoices") == []


def test_due_date_before_issue_date_is_rejected(store, order_factory):
    order = order_factory()
    request = InvoiceRequest(order_id=order.id, issue_date=date(2024, 2, 1), due_date=date(2024, 1, 1))

    with pytest.raises(ValidationError):
        invoices.create_invoice(store, request)
    assert store.query("invoices") == []


def test_downpayment_invoice_uses_order_percentage_and_updates_order(store, order_factory):
    order = order_factory(total_amount=10_000_000, downpayment_percentage=30)

    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id, invoice_type="downpayment"))
    updated = invoices.apply_downpayment_to_order(store, created)

    assert created.downpayment_percentage == 30
    assert created.subtotal == 3_000_000
    assert updated.downpayment_amount == 3_000_000
    assert updated.remaining_amount == 7_000_000


def test_downpayment_update_uses_current_order_total(store, order_factory):
    order = order_factory(total_amount=10_000_000, downpayment_percentage=30)
    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id, invoice_type="downpayment"))
    store.update("orders", order.id, {"total_amount": 12_000_000})

    updated = invoices.apply_downpayment_to_order(store, created)

    assert updated.downpayment_amount == 3_000_000
    assert updated.remaining_amount == 9_000_000


def test_downpayment_invoice_without_any_percentage_is_rejected(store, order_factory):
    order = order_factory()

    with pytest.raises(ValidationError):
        invoices.create_invoice(store, InvoiceRequest(order_id=order.id, invoice_type="downpayment"))


def test_full_invoice_leaves_order_untouched(store, order_factory):
    order = order_factory()
    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id))

    assert invoices.apply_downpayment_to_order(store, created) is None
    assert orders.get_order(store, order.id) == order


def test_update_invoice_status(store, order_factory):
    created = invoices.create_invoice(store, InvoiceRequest(order_id=order_factory().id))

    assert invoices.update_invoice_status(store, created.id, "paid").status == "paid"
    with pytest.raises(ValidationError):
        invoices.update_invoice_status(store, created.id, "void")


def test_document_model_for_downpayment_invoice(store, order_factory, company):
    order = order_factory(total_amount=10_000_000, downpayment_percentage=30)
    created = invoices.create_invoice(
        store, InvoiceRequest(order_id=order.id, invoice_type="downpayment", notes="Thanks!")
    )

    model = invoices.build_document_model(store, created, company)

    assert model.invoice_number == created.invoice_number
    assert model.customer.name == "Budi Santoso"
    assert model.customer.address is None
    assert len(model.items) == 1
    item = model.items[0]
    assert item.description == "Company Website (DP)"
    assert (item.quantity, item.price, item.total) == (1, 3_000_000, 3_000_000)
    assert model.notes == "Thanks!"
    assert model.payment_terms == "30 days"


def test_document_model_default_service_name(store, order_factory, company):
    order = order_factory(service_name="")
    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id, payment_terms="Net 14"))

    model = invoices.build_document_model(store, created, company)

    assert model.items[0].description == "Digital Service"
    assert model.payment_terms == "Net 14"


def test_list_invoices_newest_first(store, order_factory):
    order = order_factory()
    first = invoices.create_invoice(store, InvoiceRequest(order_id=order.id))
    second = invoices.create_invoice(store, InvoiceRequest(order_id=order.id))

    assert [i.id for i in invoices.list_invoices(store)] == [second.id, first.id]


def test_catalog_seeds_only_empty_store(tmp_path):
    from invoice_panel.core.services.store import JsonRecordStore

    path = tmp_path / "services.json"
    path.write_text(
        '{"services": [{"id": "seo", "name": "SEO", "price": 3000000}, {"id": "app", "name": "App", "price": 1, "is_active": false}]}',
        encoding="utf-8",
    )
    services = catalog.load_service_catalog(path)
    store = JsonRecordStore()

    assert catalog.seed_services(store, services) == 2
    assert catalog.seed_services(store, services) == 0
    assert [s.name for s in orders.list_active_services(store)] == ["SEO"]


def test_missing_catalog_is_empty(tmp_path):
    assert catalog.load_service_catalog(tmp_path / "none.json") == []


def test_update_order_amount_recomputes_split(store, order_factory):
    order = order_factory(total_amount=10_000_000, downpayment_percentage=30, downpayment_amount=3_000_000, remaining_amount=7_000_000)

    updated = orders.update_order_amount(store, order.id, 12_000_000)

    assert updated.total_amount == 12_000_000
    assert updated.downpayment_amount == 3_600_000
    assert updated.remaining_amount == 8_400_000
    assert updated.downpayment_amount + updated.remaining_amount == updated.total_amount


def test_update_order_amount_without_override_uses_service_price(store, order_factory):
    order = order_factory(total_amount=10_000_000, service_price=12_000_000)

    updated = orders.update_order_amount(store, order.id, None)

    assert updated.total_amount == 12_000_000
    assert updated.downpayment_amount == 0
    assert updated.remaining_amount == 12_000_000


def test_update_order_amount_rejects_negative(store, order_factory):
    order = order_factory()

    with pytest.raises(ValidationError):
        orders.update_order_amount(store, order.id, -5)
    assert orders.get_order(store, order.id) == order


def test_amount_edit_after_downpayment_invoice_drifts(store, order_factory):
    order = order_factory(total_amount=10_000_000, downpayment_percentage=30)
    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id, invoice_type="downpayment"))
    edited = orders.update_order_amount(store, order.id, 12_000_000)
    assert edited.downpayment_amount == 3_600_000

    updated = invoices.apply_downpayment_to_order(store, created)

    # The invoice billed 30% of the old total; the balance uses the new one.
    assert updated.downpayment_amount == 3_000_000
    assert updated.remaining_amount == 9_000_000
    assert (updated.downpayment_amount, updated.remaining_amount) != (edited.downpayment_amount, edited.remaining_amount)


def test_remaining_amount_floors_at_zero_when_total_cut_below_billed(store, order_factory):
    order = order_factory(total_amount=10_000_000, downpayment_percentage=50)
    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id, invoice_type="downpayment"))
    orders.update_order_amount(store, order.id, 2_000_000)

    updated = invoices.apply_downpayment_to_order(store, created)

    assert updated.downpayment_amount == 5_000_000
    assert updated.remaining_amount == 0


def test_invoice_number_uses_configured_prefix(store, order_factory):
    order = order_factory()

    created = invoices.create_invoice(store, InvoiceRequest(order_id=order.id), Settings(invoice_prefix="DS-"))

    assert created.invoice_number.startswith("DS-")
    assert created.invoice_number.endswith("-0001")
