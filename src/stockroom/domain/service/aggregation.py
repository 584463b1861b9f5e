"""Domain service: read-side aggregation.

Pure functions over snapshots of products and sales, plus a thin
``AggregationEngine`` that takes those snapshots from the stores. Nothing
here mutates state, so any number of readers may run alongside writers.
Figures are advisory: they reflect whatever the stores return at the
moment of the read.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from stockroom.domain.clock import Clock, SystemClock
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.product import Product
from stockroom.domain.model.report_window import ReportWindow
from stockroom.domain.model.sale import Sale
from stockroom.domain.repository.product_store import ProductStore
from stockroom.domain.repository.sale_ledger import SaleLedger

TOP_PRODUCTS_LIMIT = 10


class StockLevel(Enum):
    NORMAL = "normal"
    LOW = "low"
    CRITICAL = "critical"


@dataclass(frozen=True)
class WindowStats:
    total_revenue: Decimal
    total_profit: Decimal
    total_items: int


@dataclass(frozen=True)
class ProductSales:
    """Sales of one product name summed over the whole ledger."""

    product_name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True)
class InventoryTotals:
    items: int
    stock_total: int
    low: int


@dataclass(frozen=True)
class SalesReport:
    generated_at: datetime
    today: WindowStats
    week: WindowStats
    month: WindowStats
    top_products: list[ProductSales]


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------


def classify_stock(product: Product) -> StockLevel:
    """Critical is checked first: its threshold never exceeds the low limit."""
    critical_threshold = max(1, product.low_stock_limit // 2)
    if product.stock <= critical_threshold:
        return StockLevel.CRITICAL
    if product.stock <= product.low_stock_limit:
        return StockLevel.LOW
    return StockLevel.NORMAL


def window_stats(sales: Iterable[Sale], window_start: datetime) -> WindowStats:
    """Sum revenue, profit and units for sales at or after ``window_start``."""
    revenue = Decimal("0")
    profit = Decimal("0")
    items = 0
    for sale in sales:
        if sale.timestamp < window_start:
            continue
        revenue += sale.total.amount
        profit += sale.profit
        items += sale.quantity
    return WindowStats(total_revenue=revenue, total_profit=profit, total_items=items)


def top_products(sales: Iterable[Sale], n: int = TOP_PRODUCTS_LIMIT) -> list[ProductSales]:
    """Rank product names by units sold.

    Grouping is by the name recorded on the sale, not the product id, so
    sales of a deleted product still count under their old name. Equal
    quantities keep the order in which the names were first seen.
    """
    if n < 1:
        raise ValidationError(f"Top products limit must be at least 1, got {n}")
    groups: dict[str, list] = {}
    for sale in sales:
        entry = groups.setdefault(sale.product_name, [0, Decimal("0")])
        entry[0] += sale.quantity
        entry[1] += sale.total.amount

    ranked = sorted(groups.items(), key=lambda item: -item[1][0])
    return [
        ProductSales(product_name=name, quantity=qty, revenue=revenue)
        for name, (qty, revenue) in ranked[:n]
    ]


def low_stock_report(products: Iterable[Product]) -> list[Product]:
    """Products needing replenishment, critical ones first."""
    flagged = [
        (classify_stock(p), p)
        for p in products
        if classify_stock(p) is not StockLevel.NORMAL
    ]
    flagged.sort(key=lambda pair: 0 if pair[0] is StockLevel.CRITICAL else 1)
    return [p for _, p in flagged]


def inventory_totals(products: Iterable[Product]) -> InventoryTotals:
    items = 0
    stock_total = 0
    low = 0
    for p in products:
        items += 1
        stock_total += p.stock
        if classify_stock(p) is not StockLevel.NORMAL:
            low += 1
    return InventoryTotals(items=items, stock_total=stock_total, low=low)


def categories(products: Iterable[Product]) -> list[str]:
    return sorted({p.category.strip() for p in products if p.category.strip()})


def search_products(
    products: Iterable[Product],
    query: str = "",
    category: str | None = None,
) -> list[Product]:
    """Case-insensitive match on name, barcode or category.

    Results are ordered by most recently updated first.
    """
    matches = [p for p in products if _matches(p, query.strip().lower(), category)]
    matches.sort(key=lambda p: p.updated_at, reverse=True)
    return matches


def available_products(
    products: Iterable[Product],
    query: str = "",
    category: str | None = None,
) -> list[Product]:
    """Products that can be sold right now (stock above zero), by name."""
    q = query.strip().lower()
    matches = [p for p in products if p.stock > 0 and _matches(p, q, category)]
    matches.sort(key=lambda p: p.name.lower())
    return matches


def _matches(product: Product, q: str, category: str | None) -> bool:
    if category is not None and product.category != category:
        return False
    if not q:
        return True
    return (
        q in product.name.lower()
        or (product.barcode is not None and q in product.barcode.lower())
        or q in product.category.lower()
    )


# ---------------------------------------------------------------------------
# Store-backed facade
# ---------------------------------------------------------------------------


class AggregationEngine:

    def __init__(
        self,
        product_store: ProductStore,
        sale_ledger: SaleLedger,
        clock: Clock | None = None,
    ) -> None:
        self._product_store = product_store
        self._sale_ledger = sale_ledger
        self._clock = clock or SystemClock()

    def window(self, window: ReportWindow) -> WindowStats:
        return window_stats(self._sale_ledger.list_all(), window.start(self._clock.now()))

    def top_products(self, n: int = TOP_PRODUCTS_LIMIT) -> list[ProductSales]:
        return top_products(self._sale_ledger.list_all(), n)

    def low_stock(self) -> list[Product]:
        return low_stock_report(self._product_store.list_all())

    def sales_report(self) -> SalesReport:
        """Today, this week, this month and the top sellers in one pass.

        The ledger is read once and every window boundary is derived from
        the same ``now``.
        """
        now = self._clock.now()
        sales = self._sale_ledger.list_all()
        return SalesReport(
            generated_at=now,
            today=window_stats(sales, ReportWindow.TODAY.start(now)),
            week=window_stats(sales, ReportWindow.WEEK.start(now)),
            month=window_stats(sales, ReportWindow.MONTH.start(now)),
            top_products=top_products(sales),
        )
