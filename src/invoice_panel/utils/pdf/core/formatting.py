from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from invoice_panel.core.calculations.invoice_calculator import round_currency


@dataclass(frozen=True)
class CurrencyFormat:
    """Whole-unit amounts grouped by thousands, e.g. `Rp 1.250.000`."""

    prefix: str = "Rp"
    thousands_separator: str = "."

    def __call__(self, value: float) -> str:
        grouped = f"{int(round_currency(value)):,}".replace(",", self.thousands_separator)
        return f"{self.prefix} {grouped}" if self.prefix else grouped


def format_date(value: date) -> str:
    """Day/month/year without zero padding (19/10/2026, 5/1/2024)."""
    return f"{value.day}/{value.month}/{value.year}"
