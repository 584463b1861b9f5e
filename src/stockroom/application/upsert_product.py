"""Application service: create or edit a product."""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.model.product import ProductDraft
from stockroom.domain.service.inventory_engine import InventoryEngine


class UpsertProductHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    def handle(self, draft: ProductDraft, product_id: str | None = None) -> ProductDTO:
        """Create a product, or patch ``product_id`` with the supplied fields."""
        product = self._engine.upsert_product(draft, existing_id=product_id)
        return ProductDTO.from_product(product)
