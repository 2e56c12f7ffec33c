from __future__ import annotations

import json
import logging
from pathlib import Path

from invoice_panel.core.errors import ValidationError
from invoice_panel.core.models.service import Service
from invoice_panel.core.services.settings import data_dir
from invoice_panel.core.services.store import RecordStore

logger = logging.getLogger(__name__)


def catalog_path() -> Path:
    return data_dir() / "services.json"


def load_service_catalog(path: Path | None = None) -> list[Service]:
    """
    Read the offered services from JSON. Accepts either a bare list or
    {"services": [...]}. A missing file means an empty catalog.
    """
    target = path or catalog_path()
    if not target.exists():
        logger.info("No service catalog at %s", target)
        return []
    data = json.loads(target.read_text(encoding="utf-8"))
    raw = data.get("services", []) if isinstance(data, dict) else data
    services: list[Service] = []
    for item in raw:
        item = dict(item)
        item.setdefault("id", item.get("code") or item.get("name"))
        services.append(Service.from_record(item))
    return services


def seed_services(store: RecordStore, services: list[Service]) -> int:
    """Insert the catalog into an empty services table. Returns how many were added."""
    if store.query("services"):
        return 0
    seen: set[str] = set()
    for service in services:
        if service.id in seen:
            raise ValidationError(f"Duplicate service id in catalog: {service.id}")
        seen.add(service.id)
        store.insert("services", service.to_record())
    logger.info("Seeded %d services", len(services))
    return len(services)
