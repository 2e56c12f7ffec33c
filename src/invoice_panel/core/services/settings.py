from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from invoice_panel.core.errors import ValidationError

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "INVOICE_PANEL_DATA_DIR"
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[4] / "data"


@dataclass(frozen=True)
class Settings:
    """Application settings stored in `settings.json`."""

    currency_prefix: str = "Rp"
    thousands_separator: str = "."
    tax_rate: float = 0.0
    due_days: int = 30
    default_payment_terms: str = "30 days"
    default_service_name: str = "Digital Service"
    invoice_prefix: str = "INV-"
    records_file: str = "records.json"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else DEFAULT_DATA_DIR


def settings_path() -> Path:
    return data_dir() / "settings.json"


def load_settings(path: Path | None = None) -> Settings:
    target = path or settings_path()
    if not target.exists():
        return Settings()
    try:
        raw = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", target, exc)
        return Settings()
    if not isinstance(raw, dict):
        logger.warning("Ignoring settings file %s: expected an object", target)
        return Settings()
    values = {}
    defaults = Settings()
    for key in (f.name for f in fields(Settings)):
        if key not in raw:
            continue
        default = getattr(defaults, key)
        try:
            values[key] = type(default)(raw[key])
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid setting %s=%r", key, raw[key])
    return Settings(**values)


def validate_settings(settings: Settings) -> Settings:
    """Reject values the calculator and renderer cannot use."""
    if not math.isfinite(settings.tax_rate) or not 0 <= settings.tax_rate <= 1:
        raise ValidationError(f"Tax rate must be between 0 and 1, got {settings.tax_rate!r}")
    if settings.due_days < 0:
        raise ValidationError(f"Due days must not be negative, got {settings.due_days!r}")
    if not settings.records_file.strip():
        raise ValidationError("Records file name is required")
    return settings


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    target = path or settings_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(asdict(settings), ensure_ascii=False, indent=2), encoding="utf-8")
    return target


def records_path(settings: Settings) -> Path:
    return data_dir() / settings.records_file
