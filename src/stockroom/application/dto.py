"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Amounts are plain
decimal strings; presentation (currency symbols, grouping) is the
caller's business.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.model.product import Product
from stockroom.domain.model.sale import Sale
from stockroom.domain.service.aggregation import classify_stock


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    barcode: str | None
    unit: str
    cost_price: str
    sell_price: str
    stock: int
    low_stock_limit: int
    stock_level: str
    updated_at: str

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            category=product.category,
            barcode=product.barcode,
            unit=product.unit.value,
            cost_price=str(product.cost_price),
            sell_price=str(product.sell_price),
            stock=product.stock,
            low_stock_limit=product.low_stock_limit,
            stock_level=classify_stock(product).value,
            updated_at=product.updated_at.isoformat(timespec="seconds"),
        )


@dataclass(frozen=True)
class SaleDTO:
    id: str
    product_name: str
    quantity: int
    unit: str
    sell_price: str
    total: str
    profit: str
    timestamp: str

    @staticmethod
    def from_sale(sale: Sale) -> SaleDTO:
        return SaleDTO(
            id=sale.id,  # type: ignore[arg-type]
            product_name=sale.product_name,
            quantity=sale.quantity,
            unit=sale.unit.value,
            sell_price=str(sale.sell_price),
            total=str(sale.total),
            profit=str(sale.profit),
            timestamp=sale.timestamp.isoformat(timespec="seconds"),
        )
