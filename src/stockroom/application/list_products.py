"""Application service: List Products use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.application.dto import ProductDTO
from stockroom.domain.repository.product_store import ProductStore
from stockroom.domain.service.aggregation import (
    InventoryTotals,
    categories,
    available_products,
    inventory_totals,
    search_products,
)


@dataclass(frozen=True)
class ProductListDTO:
    products: list[ProductDTO]
    totals: InventoryTotals
    categories: list[str]


class ListProductsHandler:

    def __init__(self, product_store: ProductStore) -> None:
        self._product_store = product_store

    def handle(
        self,
        query: str = "",
        category: str | None = None,
        available: bool = False,
    ) -> ProductListDTO:
        """Filter the catalogue; totals always cover the whole catalogue.

        With ``available`` only sellable products are listed, by name, as
        on the sale screen.
        """
        products = self._product_store.list_all()
        search = available_products if available else search_products
        matches = search(products, query=query, category=category)
        return ProductListDTO(
            products=[ProductDTO.from_product(p) for p in matches],
            totals=inventory_totals(products),
            categories=categories(products),
        )
