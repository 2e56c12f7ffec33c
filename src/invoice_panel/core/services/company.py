from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

from invoice_panel.core.models.document import CompanyProfile
from invoice_panel.core.services.settings import data_dir

logger = logging.getLogger(__name__)

DEFAULT_COMPANY = {
    "name": "Digital Service Company",
    "address": "Jl. Digital No. 123, Jakarta",
    "phone": "+62 21 1234567",
    "email": "info@digitalservice.com",
    "website": "www.digitalservice.com",
    "tax_number": "12.345.678.9-012.345",
}


def company_path() -> Path:
    return data_dir() / "company.json"


def load_company(path: Path | None = None) -> CompanyProfile:
    target = path or company_path()
    data = dict(DEFAULT_COMPANY)
    if target.exists():
        try:
            raw = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable company profile %s: %s", target, exc)
            raw = {}
        if isinstance(raw, dict):
            # Older files used the settings-table column names.
            for key in DEFAULT_COMPANY:
                value = raw.get(key, raw.get(f"company_{key}"))
                if value is not None:
                    data[key] = str(value).strip()
    return CompanyProfile(
        name=data["name"],
        address=data["address"],
        phone=data["phone"],
        email=data["email"],
        website=data.get("website") or None,
        tax_number=data.get("tax_number") or None,
    )


def save_company(company: CompanyProfile, path: Path | None = None) -> Path:
    target = path or company_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {k: (v or "") for k, v in asdict(company).items()}
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return target
