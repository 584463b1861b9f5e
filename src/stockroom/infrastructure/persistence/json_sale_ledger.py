"""JSON-file-backed implementation of SaleLedger."""

from __future__ import annotations

import dataclasses
import json
import threading
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockroom.domain.exceptions import StorageError
from stockroom.domain.model.product import Unit
from stockroom.domain.model.sale import Sale
from stockroom.domain.model.value_objects import Money
from stockroom.domain.repository.sale_ledger import SaleLedger


class JsonSaleLedger(SaleLedger):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- SaleLedger interface -------------------------------------------------

    def append(self, sale: Sale) -> Sale:
        recorded = dataclasses.replace(sale, id=uuid.uuid4().hex)
        with self._lock:
            records = self._load_raw()
            records.append(self._to_raw(recorded))
            self._persist_raw(records)
        return recorded

    def list_all(self) -> list[Sale]:
        with self._lock:
            return [self._to_domain(raw) for raw in self._load_raw()]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "product_id": sale.product_id,
            "product_name": sale.product_name,
            "quantity": sale.quantity,
            "unit": sale.unit.value,
            "sell_price": str(sale.sell_price.amount),
            "cost_price": str(sale.cost_price.amount),
            "total": str(sale.total.amount),
            "profit": str(sale.profit),
            "timestamp": sale.timestamp.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sale:
        return Sale(
            id=raw["id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            quantity=raw["quantity"],
            unit=Unit(raw["unit"]),
            sell_price=Money(Decimal(raw["sell_price"])),
            cost_price=Money(Decimal(raw["cost_price"])),
            total=Money(Decimal(raw["total"])),
            profit=Decimal(raw["profit"]),
            timestamp=datetime.fromisoformat(raw["timestamp"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read sales from {self._file_path}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StorageError(f"Cannot write sales to {self._file_path}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
