from __future__ import annotations

import dataclasses
import tkinter as tk
from typing import Callable

import customtkinter as ctk

from invoice_panel.core.errors import ValidationError
from invoice_panel.core.models.document import CompanyProfile
from invoice_panel.core.services.settings import Settings
from invoice_panel.ui.components.fields import parse_count, parse_percent
from invoice_panel.ui.styles import theme

COMPANY_FIELDS = (
    ("name", "Company name *"),
    ("address", "Address"),
    ("phone", "Phone"),
    ("email", "Email"),
    ("website", "Website"),
    ("tax_number", "Tax number (NPWP)"),
)


class SettingsDialog(ctk.CTkToplevel):
    """
    Company profile printed on invoices plus invoicing defaults.
    `on_save(company, settings, next_sequence)` returns True when stored.
    """

    def __init__(
        self,
        master: tk.Misc,
        company: CompanyProfile,
        settings: Settings,
        next_sequence: int,
        on_save: Callable[[CompanyProfile, Settings, int], bool],
        on_error: Callable[[str], None],
    ):
        super().__init__(master)
        self.title("Settings")
        self.transient(master)
        self.grab_set()
        self.geometry("560x640")
        self.minsize(480, 560)
        self._settings = settings
        self._on_save = on_save
        self._on_error = on_error

        self._company_vars = {key: tk.StringVar(value=getattr(company, key) or "") for key, _ in COMPANY_FIELDS}
        self._currency_var = tk.StringVar(value=settings.currency_prefix)
        self._tax_var = tk.StringVar(value=f"{settings.tax_rate * 100:g}")
        self._due_var = tk.StringVar(value=str(settings.due_days))
        self._terms_var = tk.StringVar(value=settings.default_payment_terms)
        self._prefix_var = tk.StringVar(value=settings.invoice_prefix)
        self._sequence_var = tk.StringVar(value=str(next_sequence))

        body = ctk.CTkScrollableFrame(self, fg_color="transparent")
        body.pack(fill="both", expand=True, padx=12, pady=12)
        body.columnconfigure(1, weight=1)

        ctk.CTkLabel(body, text="Company", font=("Segoe UI", 13, "bold")).grid(row=0, column=0, sticky="w", pady=(0, 6))
        row = 1
        for key, label in COMPANY_FIELDS:
            ctk.CTkLabel(body, text=label).grid(row=row, column=0, sticky="w", pady=4)
            ctk.CTkEntry(body, textvariable=self._company_vars[key]).grid(row=row, column=1, sticky="ew", pady=4)
            row += 1

        ctk.CTkLabel(body, text="Invoices", font=("Segoe UI", 13, "bold")).grid(row=row, column=0, sticky="w", pady=(14, 6))
        row += 1
        invoice_rows = (
            ("Currency prefix", self._currency_var),
            ("Tax rate (%)", self._tax_var),
            ("Due after (days)", self._due_var),
            ("Default payment terms", self._terms_var),
            ("Invoice prefix", self._prefix_var),
            ("Next invoice number", self._sequence_var),
        )
        for label, var in invoice_rows:
            ctk.CTkLabel(body, text=label).grid(row=row, column=0, sticky="w", pady=4)
            ctk.CTkEntry(body, textvariable=var).grid(row=row, column=1, sticky="ew", pady=4)
            row += 1
        ctk.CTkLabel(
            body,
            text=f"Numbers below {next_sequence} are already used.",
            text_color=theme.PALETTE["muted"],
        ).grid(row=row, column=0, columnspan=2, sticky="w")

        btns = ctk.CTkFrame(self, fg_color="transparent")
        btns.pack(fill="x", padx=12, pady=(0, 12))
        ctk.CTkButton(btns, text="Cancel", command=self.destroy).pack(side="right", padx=(6, 0))
        ctk.CTkButton(
            btns,
            text="Save",
            command=self._handle_save,
            fg_color=theme.PALETTE["accent"],
            hover_color=theme.PALETTE["accent_dim"],
            text_color="#ffffff",
        ).pack(side="right")

    def _handle_save(self) -> None:
        values = {key: var.get().strip() for key, var in self._company_vars.items()}
        company = CompanyProfile(
            name=values["name"],
            address=values["address"],
            phone=values["phone"],
            email=values["email"],
            website=values["website"] or None,
            tax_number=values["tax_number"] or None,
        )
        try:
            settings = dataclasses.replace(
                self._settings,
                currency_prefix=self._currency_var.get().strip(),
                tax_rate=parse_percent(self._tax_var.get(), "Tax rate"),
                due_days=parse_count(self._due_var.get(), "Due after"),
                default_payment_terms=self._terms_var.get().strip(),
                invoice_prefix=self._prefix_var.get().strip(),
            )
            next_sequence = parse_count(self._sequence_var.get(), "Next invoice number")
        except ValidationError as exc:
            self._on_error(str(exc))
            return
        if self._on_save(company, settings, next_sequence):
            self.destroy()
