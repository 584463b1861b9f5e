"""Application service: Delete Product use case."""

from __future__ import annotations

from stockroom.domain.service.inventory_engine import InventoryEngine


class DeleteProductHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str) -> None:
        """Remove a product from the catalogue.

        Existing sales are left as they are; they carry their own copy of
        the product name and prices.
        """
        self._engine.delete_product(product_id)
