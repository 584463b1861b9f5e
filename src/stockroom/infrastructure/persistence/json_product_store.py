"""JSON-file-backed implementation of ProductStore.

Every operation loads and rewrites the whole file under one lock, which
makes ``conditional_decrement`` atomic for all threads of this process.
"""

from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockroom.domain.exceptions import EntityNotFoundError, StorageError
from stockroom.domain.model.product import Product, ProductDraft, Unit
from stockroom.domain.model.value_objects import Money
from stockroom.domain.repository.product_store import ProductStore


class JsonProductStore(ProductStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- ProductStore interface -----------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        with self._lock:
            return list(self._load().values())

    def create(self, draft: ProductDraft, now: datetime) -> Product:
        product = Product.create(uuid.uuid4().hex, draft, now)
        with self._lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)
        return product

    def update(self, product_id: str, draft: ProductDraft, now: datetime) -> Product:
        with self._lock:
            products = self._load()
            product = self._require(products, product_id)
            product.apply(draft, now)
            self._persist(products)
        return product

    def conditional_decrement(self, product_id: str, amount: int, now: datetime) -> Product:
        with self._lock:
            products = self._load()
            product = self._require(products, product_id)
            product.remove_stock(amount, now)
            self._persist(products)
        return product

    def delete(self, product_id: str) -> None:
        with self._lock:
            products = self._load()
            self._require(products, product_id)
            del products[product_id]
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _require(products: dict[str, Product], product_id: str) -> Product:
        product = products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    @staticmethod
    def _to_raw(p: Product) -> dict:
        return {
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "barcode": p.barcode,
            "unit": p.unit.value,
            "cost_price": str(p.cost_price.amount),
            "sell_price": str(p.sell_price.amount),
            "stock": p.stock,
            "low_stock_limit": p.low_stock_limit,
            "created_at": p.created_at.isoformat(),
            "updated_at": p.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=raw["category"],
            barcode=raw.get("barcode"),
            unit=Unit(raw["unit"]),
            cost_price=Money(Decimal(raw["cost_price"])),
            sell_price=Money(Decimal(raw["sell_price"])),
            stock=raw["stock"],
            low_stock_limit=raw["low_stock_limit"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read products from {self._file_path}") from exc
        return {item["id"]: self._to_domain(item) for item in raw}

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [self._to_raw(p) for p in products.values()]
        try:
            self._file_path.write_text(
                json.dumps(raw, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StorageError(f"Cannot write products to {self._file_path}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
