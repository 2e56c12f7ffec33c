from __future__ import annotations

import logging
from pathlib import Path

from invoice_panel.core.errors import InvoicePanelError, StoreError, ValidationError
from invoice_panel.core.models.document import CompanyProfile
from invoice_panel.core.models.invoice import Invoice
from invoice_panel.core.models.order import Order
from invoice_panel.core.models.service import Service
from invoice_panel.core.services import invoice as invoice_service
from invoice_panel.core.services import orders as order_service
from invoice_panel.core.services.company import load_company, save_company
from invoice_panel.core.services.notifications import Notifier
from invoice_panel.core.services.settings import Settings, save_settings, validate_settings
from invoice_panel.core.services.store import RecordStore
from invoice_panel.utils.pdf.core.formatting import CurrencyFormat
from invoice_panel.utils.pdf.exports.invoice import export_invoice_pdf
from invoice_panel.utils.pdf.renderers.pdf_renderer import invoice_filename

logger = logging.getLogger(__name__)


class InvoiceController:
    """
    Runs the panel actions (order intake, invoicing, status changes, PDF
    download) and reports every outcome through the notifier. Core errors are
    turned into notifications here and never reach the UI event loop.
    """

    def __init__(
        self,
        store: RecordStore,
        notifier: Notifier,
        settings: Settings | None = None,
        company: CompanyProfile | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.settings = settings or Settings()
        self.company = company or load_company()
        self.currency = CurrencyFormat(self.settings.currency_prefix, self.settings.thousands_separator)

    # --- queries ---
    def services(self) -> list[Service]:
        return self._safe_list(order_service.list_active_services, "services")

    def orders(self) -> list[Order]:
        return self._safe_list(order_service.list_orders, "orders")

    def invoiceable_orders(self) -> list[Order]:
        return self._safe_list(order_service.list_invoiceable_orders, "orders")

    def invoices(self) -> list[Invoice]:
        return self._safe_list(invoice_service.list_invoices, "invoices")

    def _safe_list(self, loader, what: str) -> list:
        try:
            return loader(self.store)
        except InvoicePanelError as exc:
            logger.error("Loading %s failed: %s", what, exc)
            self.notifier.notify_error(f"Could not load {what}: {exc}")
            return []

    # --- actions ---
    def submit_order(self, request: order_service.OrderRequest) -> Order | None:
        try:
            order = order_service.create_order(self.store, request)
        except ValidationError as exc:
            self.notifier.notify_error(f"Please check the order form: {exc}")
            return None
        except InvoicePanelError as exc:
            logger.error("Order submission failed: %s", exc)
            self.notifier.notify_error("Failed to submit the order. Please try again.")
            return None
        self.notifier.notify_success("Order submitted. We will contact you shortly.")
        return order

    def change_order_status(self, order_id: str, status: str) -> Order | None:
        try:
            order = order_service.update_order_status(self.store, order_id, status)
        except InvoicePanelError as exc:
            logger.error("Order %s status change failed: %s", order_id, exc)
            self.notifier.notify_error(f"Failed to update order status: {exc}")
            return None
        self.notifier.notify_success("Order status updated")
        return order

    def change_order_amount(self, order_id: str, total_amount: float | None) -> Order | None:
        try:
            order = order_service.update_order_amount(self.store, order_id, total_amount)
        except InvoicePanelError as exc:
            logger.error("Order %s total change failed: %s", order_id, exc)
            self.notifier.notify_error(f"Failed to update order total: {exc}")
            return None
        self.notifier.notify_success("Order total updated")
        return order

    def create_invoice(self, request: invoice_service.InvoiceRequest) -> Invoice | None:
        try:
            created = invoice_service.create_invoice(self.store, request, self.settings)
        except InvoicePanelError as exc:
            logger.error("Invoice creation for order %s failed: %s", request.order_id, exc)
            self.notifier.notify_error(f"Failed to create invoice: {exc}")
            return None
        try:
            invoice_service.apply_downpayment_to_order(self.store, created)
        except (StoreError, ValidationError) as exc:
            # The invoice stays; only the order's balance update is reported.
            logger.error("Invoice %s created but order %s was not updated: %s", created.invoice_number, created.order_id, exc)
            self.notifier.notify_error(f"Invoice {created.invoice_number} created, but the order balance was not updated: {exc}")
            return created
        self.notifier.notify_success(f"Invoice {created.invoice_number} created")
        return created

    def change_invoice_status(self, invoice_id: str, status: str) -> Invoice | None:
        try:
            updated = invoice_service.update_invoice_status(self.store, invoice_id, status)
        except InvoicePanelError as exc:
            logger.error("Invoice %s status change failed: %s", invoice_id, exc)
            self.notifier.notify_error(f"Failed to update invoice status: {exc}")
            return None
        self.notifier.notify_success("Invoice status updated")
        return updated

    def default_filename(self, invoice: Invoice) -> str:
        return invoice_filename(invoice.invoice_number)

    def download_pdf(self, invoice: Invoice, target: Path) -> Path | None:
        try:
            model = invoice_service.build_document_model(self.store, invoice, self.company, self.settings)
            written = export_invoice_pdf(target, model, self.currency)
        except InvoicePanelError as exc:
            logger.error("PDF for invoice %s failed: %s", invoice.invoice_number, exc)
            self.notifier.notify_error(f"Failed to download invoice PDF: {exc}")
            return None
        self.notifier.notify_success(f"Invoice PDF saved: {written.name}")
        return written

    # --- preferences ---
    def next_invoice_sequence(self) -> int:
        return self.store.next_invoice_sequence

    def save_preferences(
        self,
        company: CompanyProfile,
        settings: Settings,
        next_sequence: int | None = None,
    ) -> bool:
        """Persist the company profile and settings; optionally move the invoice counter forward."""
        try:
            validate_settings(settings)
            if not company.name.strip():
                raise ValidationError("Company name is required")
            if next_sequence is not None and next_sequence != self.store.next_invoice_sequence:
                self.store.set_next_invoice_sequence(next_sequence)
            save_settings(settings)
            save_company(company)
        except InvoicePanelError as exc:
            logger.error("Saving preferences failed: %s", exc)
            self.notifier.notify_error(f"Failed to save settings: {exc}")
            return False
        except OSError as exc:
            logger.error("Writing preferences failed: %s", exc)
            self.notifier.notify_error(f"Failed to save settings: {exc}")
            return False
        self.settings = settings
        self.company = company
        self.currency = CurrencyFormat(settings.currency_prefix, settings.thousands_separator)
        self.notifier.notify_success("Settings saved")
        return True
