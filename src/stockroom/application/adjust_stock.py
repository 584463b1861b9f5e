"""Application service: Adjust Stock use case."""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.service.inventory_engine import InventoryEngine


class AdjustStockHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str, delta: int) -> ProductDTO:
        return ProductDTO.from_product(self._engine.adjust_stock(product_id, delta))
