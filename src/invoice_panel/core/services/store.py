"""
Record store boundary.

The admin panel only needs generic table operations plus the invoice number
generator. `JsonRecordStore` keeps tables in memory and, when given a path,
writes them to a JSON file after every mutation. A mutation works on copies
and only replaces the in-memory state once the write has succeeded.
"""

from __future__ import annotations

import copy
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol

from invoice_panel.core.errors import StoreError
from invoice_panel.utils.invoice_number import DEFAULT_PREFIX, format_invoice_number

logger = logging.getLogger(__name__)

TABLES = ("services", "orders", "invoices")


class RecordStore(Protocol):
    def insert(self, table: str, record: Mapping) -> dict: ...

    def update(self, table: str, record_id: str, patch: Mapping) -> dict: ...

    def delete(self, table: str, record_id: str) -> None: ...

    def query(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]: ...

    @property
    def next_invoice_sequence(self) -> int: ...

    def set_next_invoice_sequence(self, value: int) -> None: ...

    def generate_invoice_number(self, prefix: str = DEFAULT_PREFIX) -> str: ...


def _matches(record: Mapping, filters: Mapping[str, Any]) -> bool:
    for key, expected in filters.items():
        value = record.get(key)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


def _sort_key(value: Any) -> tuple:
    return (value is not None, value if value is not None else "")


class JsonRecordStore:
    def __init__(self, path: Path | None = None, tables: Iterable[str] = TABLES):
        self.path = path
        self._tables: dict[str, list[dict]] = {name: [] for name in tables}
        self._sequences: dict[str, int] = {"invoice_number": 0}
        if path is not None and path.exists():
            self._load(path)

    # --- persistence ---
    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read record store {path}: {exc}") from exc
        for name, rows in (data.get("tables") or {}).items():
            if name in self._tables and isinstance(rows, list):
                self._tables[name] = [dict(r) for r in rows if isinstance(r, dict)]
        for name, value in (data.get("sequences") or {}).items():
            self._sequences[name] = int(value)
        logger.debug("Loaded record store from %s", path)

    def _write(self, tables: dict[str, list[dict]], sequences: dict[str, int]) -> None:
        if self.path is None:
            return
        payload = {"tables": tables, "sequences": sequences}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Cannot write record store {self.path}: {exc}") from exc

    def _staged(self) -> tuple[dict[str, list[dict]], dict[str, int]]:
        """Working copies for one mutation; the live state changes only in `_commit`."""
        return copy.deepcopy(self._tables), dict(self._sequences)

    def _commit(self, tables: dict[str, list[dict]], sequences: dict[str, int]) -> None:
        self._write(tables, sequences)
        self._tables, self._sequences = tables, sequences

    @staticmethod
    def _table(tables: dict[str, list[dict]], table: str) -> list[dict]:
        try:
            return tables[table]
        except KeyError:
            raise StoreError(f"Unknown table: {table}") from None

    @classmethod
    def _find(cls, tables: dict[str, list[dict]], table: str, record_id: str) -> dict:
        for row in cls._table(tables, table):
            if row.get("id") == record_id:
                return row
        raise StoreError(f"No record {record_id!r} in {table}")

    # --- operations ---
    def insert(self, table: str, record: Mapping) -> dict:
        tables, sequences = self._staged()
        rows = self._table(tables, table)
        row = copy.deepcopy(dict(record))
        row.setdefault("id", uuid.uuid4().hex)
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        if any(r.get("id") == row["id"] for r in rows):
            raise StoreError(f"Duplicate id {row['id']!r} in {table}")
        rows.append(row)
        self._commit(tables, sequences)
        logger.info("Inserted %s record %s", table, row["id"])
        return copy.deepcopy(row)

    def update(self, table: str, record_id: str, patch: Mapping) -> dict:
        tables, sequences = self._staged()
        row = self._find(tables, table, record_id)
        changes = {k: v for k, v in patch.items() if k != "id"}
        row.update(copy.deepcopy(changes))
        self._commit(tables, sequences)
        logger.info("Updated %s record %s: %s", table, record_id, ", ".join(sorted(changes)))
        return copy.deepcopy(row)

    def delete(self, table: str, record_id: str) -> None:
        tables, sequences = self._staged()
        rows = self._table(tables, table)
        rows.remove(self._find(tables, table, record_id))
        self._commit(tables, sequences)
        logger.info("Deleted %s record %s", table, record_id)

    def query(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        rows = self._table(self._tables, table)
        indexed = [(idx, row) for idx, row in enumerate(rows) if _matches(row, filters or {})]
        if order_by:
            # Insertion position breaks ties so "newest first" stays stable.
            indexed.sort(key=lambda pair: (_sort_key(pair[1].get(order_by)), pair[0]), reverse=descending)
        return [copy.deepcopy(row) for _, row in indexed]

    # --- invoice numbering ---
    @property
    def next_invoice_sequence(self) -> int:
        return self._sequences.get("invoice_number", 0) + 1

    def set_next_invoice_sequence(self, value: int) -> None:
        """
        Move the counter forward so the next invoice gets `value`.
        Going back would hand out numbers that may already be printed.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise StoreError(f"Invoice sequence must be a whole number, got {value!r}")
        if value < self.next_invoice_sequence:
            raise StoreError(f"Next invoice number must be at least {self.next_invoice_sequence}, got {value}")
        tables, sequences = self._staged()
        sequences["invoice_number"] = value - 1
        self._commit(tables, sequences)
        logger.info("Next invoice sequence set to %d", value)

    def generate_invoice_number(self, prefix: str = DEFAULT_PREFIX) -> str:
        tables, sequences = self._staged()
        sequences["invoice_number"] = sequences.get("invoice_number", 0) + 1
        self._commit(tables, sequences)
        return format_invoice_number(sequences["invoice_number"], prefix)
