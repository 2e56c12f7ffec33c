import dataclasses
import math

import pytest

from invoice_panel.core.errors import RenderError
from invoice_panel.core.models.document import CustomerBlock, LineItem
from invoice_panel.utils.pdf.core import fonts
from invoice_panel.utils.pdf.core.builder import build_pdf_bytes
from invoice_panel.utils.pdf.core.drawing import _pt_x, _pt_y
from invoice_panel.utils.pdf.core.formatting import CurrencyFormat, format_date
from invoice_panel.utils.pdf.core.layout_common import BILL_TO_LINES_Y, LEFT_X, RIGHT_EDGE_X, TOP_Y, color
from invoice_panel.utils.pdf.exports.invoice import export_invoice_pdf
from invoice_panel.utils.pdf.renderers.pdf_renderer import invoice_filename, render_invoice_pdf
from invoice_panel.utils.pdf.sections.items_table import _format_qty


def _startxref_points_at_xref(data: bytes) -> bool:
    startxref = int(data.split(b"startxref\n")[1].split(b"\n")[0])
    return data[startxref : startxref + 4] == b"xref"


def test_render_produces_valid_pdf(document_model):
    data = render_invoice_pdf(document_model)

    assert data.startswith(b"%PDF-1.4")
    assert data.rstrip().endswith(b"%%EOF")
    assert _startxref_points_at_xref(data)
    assert b"/Count 1" in data
    assert b"/BaseFont /Helvetica" in data


def test_render_is_deterministic(document_model):
    assert render_invoice_pdf(document_model) == render_invoice_pdf(document_model)


def test_header_and_customer_block(document_model):
    data = render_invoice_pdf(document_model)

    assert b"(INVOICE) Tj" in data
    assert b"(Invoice #: INV-20240115-0001) Tj" in data
    assert b"(Issue Date: 15/1/2024) Tj" in data
    assert b"(Due Date: 14/2/2024) Tj" in data
    assert b"(Bill To:) Tj" in data
    assert b"(Budi Santoso) Tj" in data
    assert b"(budi@example.com) Tj" in data
    assert f"{color('primary')} rg".encode() in data


def test_untaxed_invoice_has_no_tax_row(document_model):
    data = render_invoice_pdf(document_model)

    assert b"(Subtotal:) Tj" in data
    assert b"(Tax:) Tj" not in data
    assert b"(Total:) Tj" in data
    assert b"(Rp 5.000.000) Tj" in data


def test_taxed_invoice_shows_three_total_lines(document_model):
    model = dataclasses.replace(
        document_model,
        items=(LineItem(description="Company Website", quantity=1, price=8_000_000, total=8_000_000),),
        subtotal=8_000_000,
        tax_amount=800_000,
        total_amount=8_800_000,
    )
    data = render_invoice_pdf(model)

    assert b"(Subtotal:) Tj" in data
    assert b"(Tax:) Tj" in data
    assert b"(Rp 800.000) Tj" in data
    assert b"(Rp 8.800.000) Tj" in data


def test_optional_blocks_are_omitted(document_model):
    bare = dataclasses.replace(document_model, notes=None, payment_terms=None)
    data = render_invoice_pdf(bare)
    assert b"(Notes:)" not in data
    assert b"(Payment Terms:)" not in data
    assert f"{_pt_y(BILL_TO_LINES_Y[2])} Td".encode() not in data

    full = dataclasses.replace(
        document_model,
        notes="Thank you\nfor your business",
        customer=CustomerBlock(name="Budi Santoso", email="budi@example.com", address="Jl. Mawar 5"),
    )
    data = render_invoice_pdf(full)
    assert b"(Notes:) Tj" in data
    assert b"(Thank you) Tj" in data
    assert b"(for your business) Tj" in data
    assert b"(Payment Terms:) Tj" in data
    assert b"(30 days) Tj" in data
    assert b"(Jl. Mawar 5) Tj" in data


def test_company_block_is_right_aligned(document_model):
    data = render_invoice_pdf(document_model)
    name = document_model.company.name
    x = _pt_x(RIGHT_EDGE_X - fonts.text_width_mm(name, 10))

    assert f"{x} {_pt_y(TOP_Y)} Td ({name}) Tj".encode() in data
    assert b"(NPWP: 12.345.678.9-012.345) Tj" in data


def test_company_without_website_and_tax_number(document_model):
    company = dataclasses.replace(document_model.company, website=None, tax_number=None)
    data = render_invoice_pdf(dataclasses.replace(document_model, company=company))

    assert b"NPWP" not in data
    assert b"www.digitalservice.com" not in data


def test_long_item_list_continues_on_next_page(document_model):
    items = tuple(LineItem(description=f"Item {i}", quantity=1, price=100_000, total=100_000) for i in range(20))
    model = dataclasses.replace(document_model, items=items, subtotal=2_000_000, total_amount=2_000_000)

    data = render_invoice_pdf(model)

    assert b"/Count 2" in data
    assert data.count(b"(Description) Tj") == 2
    assert b"(Item 19) Tj" in data
    assert _startxref_points_at_xref(data)


def test_text_is_escaped_and_ascii_normalized(document_model):
    model = dataclasses.replace(
        document_model,
        items=(LineItem(description="Café (phase 1)", quantity=1, price=5_000_000, total=5_000_000),),
    )
    data = render_invoice_pdf(model)

    assert b"(Cafe \\(phase 1\\)) Tj" in data


def test_custom_currency_format(document_model):
    data = render_invoice_pdf(document_model, CurrencyFormat(prefix="IDR", thousands_separator=","))
    assert b"(IDR 5,000,000) Tj" in data


@pytest.mark.parametrize(
    "changes",
    [
        {"total_amount": math.nan},
        {"subtotal": -1},
        {"tax_amount": "0"},
        {"items": ()},
        {"invoice_number": " "},
        {"issue_date": "2024-01-15"},
    ],
)
def test_invalid_model_raises_render_error_and_writes_nothing(document_model, tmp_path, changes):
    model = dataclasses.replace(document_model, **changes)
    target = tmp_path / "out.pdf"

    with pytest.raises(RenderError):
        export_invoice_pdf(target, model)
    assert not target.exists()


def test_export_to_directory_uses_invoice_filename(document_model, tmp_path):
    written = export_invoice_pdf(tmp_path, document_model)

    assert written == tmp_path / "invoice-INV-20240115-0001.pdf"
    assert written.read_bytes() == render_invoice_pdf(document_model)


def test_invoice_filename_sanitizes_separators():
    assert invoice_filename("INV-1") == "invoice-INV-1.pdf"
    assert invoice_filename("INV/2024 01") == "invoice-INV-2024-01.pdf"


def test_builder_requires_a_page():
    with pytest.raises(ValueError):
        build_pdf_bytes([])


def test_formatting_helpers():
    from datetime import date

    assert CurrencyFormat()(1_234_567.5) == "Rp 1.234.568"
    assert CurrencyFormat(prefix="")(0) == "0"
    assert format_date(date(2026, 10, 5)) == "5/10/2026"
    assert _format_qty(3) == "3"
    assert _format_qty(2.5) == "2.5"


def test_address_keeps_its_own_slot_when_email_is_blank(document_model):
    customer = CustomerBlock(name="Budi Santoso", email="", address="Jl. Mawar 5")
    data = render_invoice_pdf(dataclasses.replace(document_model, customer=customer))

    assert f"{_pt_x(LEFT_X)} {_pt_y(BILL_TO_LINES_Y[2])} Td (Jl. Mawar 5) Tj".encode() in data
    assert f"{_pt_y(BILL_TO_LINES_Y[1])} Td".encode() not in data


def test_payment_terms_without_notes_take_grand_total_style(document_model):
    data = render_invoice_pdf(dataclasses.replace(document_model, notes=None))
    primary = color("primary")

    terms = data.split(b"(Payment Terms:) Tj")[0].rsplit(b"\n", 1)[-1]
    assert terms.startswith(f"{primary} rg BT /F1 12 Tf".encode())
    value = data.split(b"(30 days) Tj")[0].rsplit(b"\n", 1)[-1]
    assert value.startswith(f"{primary} rg BT /F1 12 Tf".encode())


def test_payment_terms_after_notes_use_body_style(document_model):
    data = render_invoice_pdf(dataclasses.replace(document_model, notes="Thanks"))
    dark = color("dark")

    terms = data.split(b"(Payment Terms:) Tj")[0].rsplit(b"\n", 1)[-1]
    assert terms.startswith(f"{dark} rg BT /F1 10 Tf".encode())
