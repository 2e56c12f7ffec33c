from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog

import customtkinter as ctk

from invoice_panel.core.errors import ValidationError
from invoice_panel.core.models.invoice import INVOICE_STATUSES, Invoice
from invoice_panel.core.models.order import ORDER_STATUSES, Order
from invoice_panel.ui.components.fields import parse_amount
from invoice_panel.ui.components.invoice_form_dialog import InvoiceFormDialog
from invoice_panel.ui.components.order_form_dialog import OrderFormDialog
from invoice_panel.ui.components.settings_dialog import SettingsDialog
from invoice_panel.ui.controllers.invoice_controller import InvoiceController
from invoice_panel.ui.styles import theme


class MainWindow(ctk.CTk):
    def __init__(self, controller: InvoiceController):
        super().__init__()
        self._palette = theme.apply_theme(self, "light")
        self.title("Invoice Panel")
        self.geometry("1000x680")
        self.minsize(800, 560)
        self._controller = controller
        self._money = controller.currency

        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 0))
        ctk.CTkLabel(bar, text="Orders & invoices", font=("Segoe UI", 16, "bold")).pack(side="left")
        ctk.CTkButton(bar, text="Settings", width=90, command=self._open_settings_dialog).pack(side="right")
        ctk.CTkButton(bar, text="Refresh", width=90, command=self.refresh).pack(side="right", padx=(6, 0))
        ctk.CTkButton(bar, text="New invoice", width=110, command=self._open_invoice_dialog).pack(side="right", padx=6)
        ctk.CTkButton(bar, text="New order", width=110, command=self._open_order_dialog).pack(side="right")

        tabs = ctk.CTkTabview(self)
        tabs.grid(row=1, column=0, sticky="nsew", padx=12, pady=12)
        self._orders_frame = ctk.CTkScrollableFrame(tabs.add("Orders"), fg_color="transparent")
        self._orders_frame.pack(fill="both", expand=True)
        self._invoices_frame = ctk.CTkScrollableFrame(tabs.add("Invoices"), fg_color="transparent")
        self._invoices_frame.pack(fill="both", expand=True)

        self.refresh()

    # --- rendering ---
    def refresh(self) -> None:
        orders = self._controller.orders()
        self._render_orders(orders)
        self._render_invoices(self._controller.invoices(), {o.id: o for o in orders})

    @staticmethod
    def _clear(frame: tk.Misc) -> None:
        for child in frame.winfo_children():
            child.destroy()

    def _render_orders(self, orders: list[Order]) -> None:
        self._clear(self._orders_frame)
        if not orders:
            ctk.CTkLabel(self._orders_frame, text="No orders yet", text_color=self._palette["muted"]).pack(pady=40)
            return
        for order in orders:
            row = ctk.CTkFrame(self._orders_frame, fg_color=self._palette["surface"], border_color=self._palette["border"], border_width=1)
            row.pack(fill="x", pady=4)
            row.columnconfigure(0, weight=1)
            title = f"{order.customer_name} <{order.customer_email}>"
            ctk.CTkLabel(row, text=title, font=("Segoe UI", 12, "bold")).grid(row=0, column=0, sticky="w", padx=10, pady=(6, 0))
            details = f"{order.service_name} | Total {self._money(order.total_amount)}"
            if order.has_downpayment:
                details += f" | DP {order.downpayment_percentage:g}%: {self._money(order.downpayment_amount)} | Remaining {self._money(order.remaining_amount)}"
            ctk.CTkLabel(row, text=details, text_color=self._palette["muted"]).grid(row=1, column=0, sticky="w", padx=10, pady=(0, 6))
            status_var = tk.StringVar(value=order.status)
            ctk.CTkOptionMenu(
                row,
                values=list(ORDER_STATUSES),
                variable=status_var,
                width=130,
                fg_color=theme.status_color(order.status),
                command=lambda value, oid=order.id: self._change_order_status(oid, value),
            ).grid(row=0, column=1, rowspan=2, padx=(10, 4))
            ctk.CTkButton(row, text="Edit total", width=90, command=lambda o=order: self._edit_total(o)).grid(
                row=0, column=2, rowspan=2, padx=(4, 10)
            )

    def _render_invoices(self, invoices: list[Invoice], orders: dict) -> None:
        self._clear(self._invoices_frame)
        if not invoices:
            ctk.CTkLabel(self._invoices_frame, text="No invoices yet", text_color=self._palette["muted"]).pack(pady=40)
            return
        for invoice in invoices:
            order = orders.get(invoice.order_id)
            row = ctk.CTkFrame(self._invoices_frame, fg_color=self._palette["surface"], border_color=self._palette["border"], border_width=1)
            row.pack(fill="x", pady=4)
            row.columnconfigure(0, weight=1)
            title = invoice.invoice_number
            if invoice.is_downpayment:
                title += f"  [DP {invoice.downpayment_percentage or 0:g}%]"
            ctk.CTkLabel(row, text=title, font=("Segoe UI", 12, "bold")).grid(row=0, column=0, sticky="w", padx=10, pady=(6, 0))
            customer = order.customer_name if order else "-"
            details = f"{customer} | Due {invoice.due_date.isoformat()} | Total {self._money(invoice.total_amount)}"
            if invoice.is_downpayment and order and order.remaining_amount:
                details += f" | Remaining {self._money(order.remaining_amount)}"
            ctk.CTkLabel(row, text=details, text_color=self._palette["muted"]).grid(row=1, column=0, sticky="w", padx=10, pady=(0, 6))
            status_var = tk.StringVar(value=invoice.status)
            ctk.CTkOptionMenu(
                row,
                values=list(INVOICE_STATUSES),
                variable=status_var,
                width=110,
                fg_color=theme.status_color(invoice.status),
                command=lambda value, iid=invoice.id: self._change_invoice_status(iid, value),
            ).grid(row=0, column=1, rowspan=2, padx=(10, 4))
            ctk.CTkButton(row, text="Download PDF", width=120, command=lambda inv=invoice: self._download(inv)).grid(
                row=0, column=2, rowspan=2, padx=(4, 10)
            )

    # --- actions ---
    def _change_order_status(self, order_id: str, status: str) -> None:
        self._controller.change_order_status(order_id, status)
        self.refresh()

    def _change_invoice_status(self, invoice_id: str, status: str) -> None:
        self._controller.change_invoice_status(invoice_id, status)
        self.refresh()

    def _download(self, invoice: Invoice) -> None:
        path = filedialog.asksaveasfilename(
            defaultextension=".pdf",
            filetypes=[("PDF", "*.pdf"), ("All files", "*.*")],
            title="Save invoice",
            initialfile=self._controller.default_filename(invoice),
        )
        if not path:
            return
        self._controller.download_pdf(invoice, Path(path))

    def _open_order_dialog(self) -> None:
        def submit(request):
            order = self._controller.submit_order(request)
            if order is not None:
                self.refresh()
            return order

        OrderFormDialog(
            self,
            self._controller.services(),
            on_submit=submit,
            on_error=self._controller.notifier.notify_error,
            money=self._money,
        )

    def _open_invoice_dialog(self) -> None:
        def submit(request):
            invoice = self._controller.create_invoice(request)
            if invoice is not None:
                self.refresh()
            return invoice

        InvoiceFormDialog(
            self,
            self._controller.invoiceable_orders(),
            on_submit=submit,
            on_error=self._controller.notifier.notify_error,
            money=self._money,
            default_terms=self._controller.settings.default_payment_terms,
        )

    def _edit_total(self, order: Order) -> None:
        dialog = ctk.CTkInputDialog(
            title="Edit order total",
            text=f"New total for {order.customer_name} (current {self._money(order.total_amount)}).\nLeave empty to use the service price.",
        )
        text = dialog.get_input()
        if text is None:
            return
        try:
            total = parse_amount(text, "Project total")
        except ValidationError as exc:
            self._controller.notifier.notify_error(str(exc))
            return
        if self._controller.change_order_amount(order.id, total) is not None:
            self.refresh()

    def _open_settings_dialog(self) -> None:
        def save(company, settings, next_sequence):
            saved = self._controller.save_preferences(company, settings, next_sequence)
            if saved:
                self._money = self._controller.currency
                self.refresh()
            return saved

        SettingsDialog(
            self,
            self._controller.company,
            self._controller.settings,
            self._controller.next_invoice_sequence(),
            on_save=save,
            on_error=self._controller.notifier.notify_error,
        )
