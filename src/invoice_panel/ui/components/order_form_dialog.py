from __future__ import annotations

import tkinter as tk
from typing import Callable

import customtkinter as ctk

from invoice_panel.core.calculations.invoice_calculator import (
    STANDARD_DOWNPAYMENT_PERCENTAGES,
    DownpaymentRequest,
    compute_order_totals,
    resolve_order_total,
)
from invoice_panel.core.errors import ValidationError
from invoice_panel.core.models.order import Order
from invoice_panel.core.models.service import Service
from invoice_panel.core.services.orders import OrderRequest
from invoice_panel.ui.components.fields import parse_amount
from invoice_panel.ui.styles import theme


class OrderFormDialog(ctk.CTkToplevel):
    """
    Order intake form. Shows the down payment split live while typing.
    `on_submit` returns the created order, or None to keep the dialog open.
    """

    def __init__(
        self,
        master: tk.Misc,
        services: list[Service],
        on_submit: Callable[[OrderRequest], Order | None],
        on_error: Callable[[str], None],
        money: Callable[[float], str],
    ):
        super().__init__(master)
        self.title("New order")
        self.transient(master)
        self.grab_set()
        self.geometry("520x620")
        self.minsize(460, 560)
        self._services = {f"{s.name} - {money(s.price)}": s for s in services}
        self._on_submit = on_submit
        self._on_error = on_error
        self._money = money

        self._vars = {key: tk.StringVar() for key in ("name", "email", "phone", "total", "budget", "deadline")}
        self._service_var = tk.StringVar(value=next(iter(self._services), ""))
        self._dp_enabled = tk.BooleanVar(value=False)
        self._dp_var = tk.StringVar(value=str(STANDARD_DOWNPAYMENT_PERCENTAGES[0]))
        self._preview_var = tk.StringVar(value="")

        body = ctk.CTkScrollableFrame(self, fg_color="transparent")
        body.pack(fill="both", expand=True, padx=12, pady=12)
        body.columnconfigure(1, weight=1)

        rows = (
            ("Full name *", "name"),
            ("Email *", "email"),
            ("Phone", "phone"),
        )
        for idx, (label, key) in enumerate(rows):
            ctk.CTkLabel(body, text=label).grid(row=idx, column=0, sticky="w", pady=4)
            ctk.CTkEntry(body, textvariable=self._vars[key]).grid(row=idx, column=1, sticky="ew", pady=4)

        ctk.CTkLabel(body, text="Service *").grid(row=3, column=0, sticky="w", pady=4)
        ctk.CTkOptionMenu(
            body,
            values=list(self._services) or ["-"],
            variable=self._service_var,
            command=lambda _val: self._refresh_preview(),
        ).grid(row=3, column=1, sticky="ew", pady=4)

        ctk.CTkLabel(body, text="Project total").grid(row=4, column=0, sticky="w", pady=4)
        ctk.CTkEntry(body, textvariable=self._vars["total"], placeholder_text="Leave empty to use the service price").grid(
            row=4, column=1, sticky="ew", pady=4
        )

        ctk.CTkCheckBox(
            body,
            text="Use down payment",
            variable=self._dp_enabled,
            command=self._refresh_preview,
        ).grid(row=5, column=0, sticky="w", pady=(10, 4))
        ctk.CTkOptionMenu(
            body,
            values=[str(p) for p in STANDARD_DOWNPAYMENT_PERCENTAGES],
            variable=self._dp_var,
            command=lambda _val: self._refresh_preview(),
        ).grid(row=5, column=1, sticky="w", pady=(10, 4))
        ctk.CTkLabel(body, textvariable=self._preview_var, text_color=theme.PALETTE["accent_dim"], justify="left").grid(
            row=6, column=0, columnspan=2, sticky="w"
        )

        ctk.CTkLabel(body, text="Budget range").grid(row=7, column=0, sticky="w", pady=4)
        ctk.CTkEntry(body, textvariable=self._vars["budget"]).grid(row=7, column=1, sticky="ew", pady=4)
        ctk.CTkLabel(body, text="Deadline (YYYY-MM-DD)").grid(row=8, column=0, sticky="w", pady=4)
        ctk.CTkEntry(body, textvariable=self._vars["deadline"]).grid(row=8, column=1, sticky="ew", pady=4)

        ctk.CTkLabel(body, text="Requirements").grid(row=9, column=0, sticky="nw", pady=4)
        self._requirements = ctk.CTkTextbox(body, height=100)
        self._requirements.grid(row=9, column=1, sticky="ew", pady=4)

        btns = ctk.CTkFrame(self, fg_color="transparent")
        btns.pack(fill="x", padx=12, pady=(0, 12))
        ctk.CTkButton(btns, text="Cancel", command=self.destroy).pack(side="right", padx=(6, 0))
        ctk.CTkButton(
            btns,
            text="Submit order",
            command=self._handle_submit,
            fg_color=theme.PALETTE["accent"],
            hover_color=theme.PALETTE["accent_dim"],
            text_color="#ffffff",
        ).pack(side="right")

        self._vars["total"].trace_add("write", lambda *_: self._refresh_preview())
        self._refresh_preview()

    def _selected_service(self) -> Service | None:
        return self._services.get(self._service_var.get())

    def _downpayment(self) -> DownpaymentRequest | None:
        if not self._dp_enabled.get():
            return None
        return DownpaymentRequest(float(self._dp_var.get()))

    def _refresh_preview(self) -> None:
        service = self._selected_service()
        try:
            base = resolve_order_total(parse_amount(self._vars["total"].get(), "Project total"), service.price if service else 0.0)
            totals = compute_order_totals(base, self._downpayment())
        except ValidationError:
            self._preview_var.set("")
            return
        if totals.downpayment_amount and totals.total_amount:
            pct = self._dp_var.get()
            self._preview_var.set(
                f"DP ({pct}%): {self._money(totals.downpayment_amount)}\nRemaining: {self._money(totals.remaining_amount)}"
            )
        else:
            self._preview_var.set(f"Total: {self._money(totals.total_amount)}")

    def _handle_submit(self) -> None:
        service = self._selected_service()
        try:
            total = parse_amount(self._vars["total"].get(), "Project total") or 0.0
        except ValidationError as exc:
            self._on_error(str(exc))
            return
        dp = self._downpayment()
        request = OrderRequest(
            customer_name=self._vars["name"].get(),
            customer_email=self._vars["email"].get(),
            customer_phone=self._vars["phone"].get(),
            service_id=service.id if service else "",
            custom_requirements=self._requirements.get("1.0", "end").strip(),
            budget_range=self._vars["budget"].get().strip(),
            deadline_date=self._vars["deadline"].get().strip() or None,
            total_amount=total,
            downpayment_percentage=dp.percentage if dp else None,
        )
        if self._on_submit(request) is not None:
            self.destroy()
