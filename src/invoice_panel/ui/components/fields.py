from __future__ import annotations

from datetime import date

from invoice_panel.core.errors import ValidationError


def parse_amount(text: str, field: str) -> float | None:
    """Entry text to a number; empty means "not given". Accepts 1.250.000 / 1,250,000."""
    cleaned = (text or "").strip().replace(" ", "")
    if not cleaned:
        return None
    cleaned = cleaned.replace(".", "").replace(",", "")
    try:
        return float(cleaned)
    except ValueError:
        raise ValidationError(f"{field} must be a whole number") from None


def parse_date(text: str, field: str) -> date | None:
    cleaned = (text or "").strip()
    if not cleaned:
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        raise ValidationError(f"{field} must be YYYY-MM-DD") from None


def parse_count(text: str, field: str) -> int:
    cleaned = (text or "").strip()
    try:
        value = int(cleaned)
    except ValueError:
        raise ValidationError(f"{field} must be a whole number") from None
    if value < 0:
        raise ValidationError(f"{field} must not be negative")
    return value


def parse_percent(text: str, field: str) -> float:
    """Percent entry ("11", "11%", "2,5") to a rate (0.11, 0.025)."""
    cleaned = (text or "").strip().rstrip("%").strip().replace(",", ".")
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        raise ValidationError(f"{field} must be a number") from None
    if not 0 <= value <= 100:
        raise ValidationError(f"{field} must be between 0 and 100")
    return value / 100.0
