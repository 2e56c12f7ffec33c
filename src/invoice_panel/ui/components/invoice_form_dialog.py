from __future__ import annotations

import tkinter as tk
from typing import Callable

import customtkinter as ctk

from invoice_panel.core.calculations.invoice_calculator import STANDARD_DOWNPAYMENT_PERCENTAGES
from invoice_panel.core.errors import ValidationError
from invoice_panel.core.models.invoice import Invoice
from invoice_panel.core.models.order import Order
from invoice_panel.core.services.invoice import InvoiceRequest
from invoice_panel.ui.components.fields import parse_amount, parse_date
from invoice_panel.ui.styles import theme

TYPE_LABELS = {"Full payment": "full", "Down payment": "downpayment"}


class InvoiceFormDialog(ctk.CTkToplevel):
    """Create an invoice for an in-progress or completed order."""

    def __init__(
        self,
        master: tk.Misc,
        orders: list[Order],
        on_submit: Callable[[InvoiceRequest], Invoice | None],
        on_error: Callable[[str], None],
        money: Callable[[float], str],
        default_terms: str = "",
    ):
        super().__init__(master)
        self.title("New invoice")
        self.transient(master)
        self.grab_set()
        self.geometry("500x520")
        self.minsize(440, 480)
        self._orders = {f"{o.customer_name} - {o.service_name} ({money(o.total_amount)})": o for o in orders}
        self._on_submit = on_submit
        self._on_error = on_error

        self._order_var = tk.StringVar(value=next(iter(self._orders), ""))
        self._type_var = tk.StringVar(value="Full payment")
        self._dp_var = tk.StringVar(value=str(STANDARD_DOWNPAYMENT_PERCENTAGES[0]))
        self._tax_var = tk.StringVar()
        self._due_var = tk.StringVar()
        self._terms_var = tk.StringVar(value=default_terms)

        body = ctk.CTkFrame(self, fg_color="transparent")
        body.pack(fill="both", expand=True, padx=12, pady=12)
        body.columnconfigure(1, weight=1)

        ctk.CTkLabel(body, text="Order *").grid(row=0, column=0, sticky="w", pady=4)
        ctk.CTkOptionMenu(
            body,
            values=list(self._orders) or ["No invoiceable orders"],
            variable=self._order_var,
            command=lambda _val: self._sync_percentage(),
        ).grid(row=0, column=1, sticky="ew", pady=4)

        ctk.CTkLabel(body, text="Invoice type").grid(row=1, column=0, sticky="w", pady=4)
        ctk.CTkSegmentedButton(body, values=list(TYPE_LABELS), variable=self._type_var).grid(row=1, column=1, sticky="w", pady=4)

        ctk.CTkLabel(body, text="Down payment (%)").grid(row=2, column=0, sticky="w", pady=4)
        ctk.CTkOptionMenu(body, values=[str(p) for p in STANDARD_DOWNPAYMENT_PERCENTAGES], variable=self._dp_var).grid(
            row=2, column=1, sticky="w", pady=4
        )

        ctk.CTkLabel(body, text="Tax amount").grid(row=3, column=0, sticky="w", pady=4)
        ctk.CTkEntry(body, textvariable=self._tax_var).grid(row=3, column=1, sticky="ew", pady=4)
        ctk.CTkLabel(body, text="Due date (YYYY-MM-DD)").grid(row=4, column=0, sticky="w", pady=4)
        ctk.CTkEntry(body, textvariable=self._due_var).grid(row=4, column=1, sticky="ew", pady=4)
        ctk.CTkLabel(body, text="Payment terms").grid(row=5, column=0, sticky="w", pady=4)
        ctk.CTkEntry(body, textvariable=self._terms_var).grid(row=5, column=1, sticky="ew", pady=4)

        ctk.CTkLabel(body, text="Notes").grid(row=6, column=0, sticky="nw", pady=4)
        self._notes = ctk.CTkTextbox(body, height=110)
        self._notes.grid(row=6, column=1, sticky="ew", pady=4)

        btns = ctk.CTkFrame(self, fg_color="transparent")
        btns.pack(fill="x", padx=12, pady=(0, 12))
        ctk.CTkButton(btns, text="Cancel", command=self.destroy).pack(side="right", padx=(6, 0))
        ctk.CTkButton(
            btns,
            text="Create invoice",
            command=self._handle_submit,
            fg_color=theme.PALETTE["accent"],
            hover_color=theme.PALETTE["accent_dim"],
            text_color="#ffffff",
        ).pack(side="right")
        self._sync_percentage()

    def _selected_order(self) -> Order | None:
        return self._orders.get(self._order_var.get())

    def _sync_percentage(self) -> None:
        order = self._selected_order()
        if order is not None and order.has_downpayment:
            self._dp_var.set(f"{order.downpayment_percentage:g}")
            self._type_var.set("Down payment")

    def _handle_submit(self) -> None:
        order = self._selected_order()
        if order is None or order.id is None:
            self._on_error("Select an order to invoice")
            return
        invoice_type = TYPE_LABELS[self._type_var.get()]
        try:
            request = InvoiceRequest(
                order_id=order.id,
                invoice_type=invoice_type,
                downpayment_percentage=float(self._dp_var.get()) if invoice_type == "downpayment" else None,
                tax_amount=parse_amount(self._tax_var.get(), "Tax amount"),
                due_date=parse_date(self._due_var.get(), "Due date"),
                notes=self._notes.get("1.0", "end").strip() or None,
                payment_terms=self._terms_var.get().strip() or None,
            )
        except ValidationError as exc:
            self._on_error(str(exc))
            return
        if self._on_submit(request) is not None:
            self.destroy()
