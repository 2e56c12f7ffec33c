"""
Parsing helpers shared by the record dataclasses.
Records come back from the store as loose dicts; every numeric or text field is
coerced here once so the rest of the code can rely on real types.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Mapping

from invoice_panel.core.errors import ValidationError


def require(record: Mapping, key: str) -> Any:
    value = record.get(key)
    if value is None or value == "":
        raise ValidationError(f"Missing required field: {key}")
    return value


def as_amount(value: Any, field: str, default: float | None = 0.0) -> float:
    """Coerce a money/percentage value; must be finite and non-negative."""
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"Missing required field: {field}")
        return float(default)
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number, got {value!r}") from None
    if not math.isfinite(numeric):
        raise ValidationError(f"{field} must be finite, got {value!r}")
    if numeric < 0:
        raise ValidationError(f"{field} must not be negative, got {value!r}")
    return numeric


def as_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def as_optional_text(value: Any) -> str | None:
    text = as_text(value)
    return text or None


def as_date(value: Any, field: str) -> date:
    if isinstance(value, date):
        return value
    text = as_text(value)
    if not text:
        raise ValidationError(f"Missing required field: {field}")
    try:
        # Store keeps ISO strings; timestamps carry a time part we don't need.
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"{field} is not an ISO date: {value!r}") from None


def as_choice(value: Any, field: str, choices: tuple[str, ...], default: str | None = None) -> str:
    text = as_text(value) or (default or "")
    if text not in choices:
        raise ValidationError(f"{field} must be one of {', '.join(choices)}, got {value!r}")
    return text
