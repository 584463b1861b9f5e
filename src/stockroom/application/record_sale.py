"""Application service: Record Sale use case."""

from __future__ import annotations

from stockroom.application.dto import SaleDTO
from stockroom.domain.service.inventory_engine import InventoryEngine


class RecordSaleHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str, quantity: int) -> SaleDTO:
        """Sell ``quantity`` units; the engine guarantees all-or-nothing."""
        return SaleDTO.from_sale(self._engine.record_sale(product_id, quantity))
