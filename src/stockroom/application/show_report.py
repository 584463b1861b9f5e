"""Application service: sales and stock reports (queries)."""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.service.aggregation import (
    AggregationEngine,
    ProductSales,
    SalesReport,
)


class ShowReportHandler:

    def __init__(self, engine: AggregationEngine) -> None:
        self._engine = engine

    def sales(self) -> SalesReport:
        return self._engine.sales_report()

    def top(self, n: int) -> list[ProductSales]:
        return self._engine.top_products(n)

    def low_stock(self) -> list[ProductDTO]:
        return [ProductDTO.from_product(p) for p in self._engine.low_stock()]
