"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockroom.domain.clock import SystemClock
from stockroom.domain.service.aggregation import AggregationEngine
from stockroom.domain.service.inventory_engine import InventoryEngine
from stockroom.domain.service.stock_locks import ProductLocks
from stockroom.infrastructure.config import Settings
from stockroom.infrastructure.persistence.json_product_store import JsonProductStore
from stockroom.infrastructure.persistence.json_sale_ledger import JsonSaleLedger

# Shared so every engine built in this process serializes on the same locks.
_LOCKS = ProductLocks()


def product_store(settings: Settings) -> JsonProductStore:
    return JsonProductStore(settings.products_file)


def sale_ledger(settings: Settings) -> JsonSaleLedger:
    return JsonSaleLedger(settings.sales_file)


def inventory_engine(settings: Settings) -> InventoryEngine:
    return InventoryEngine(
        product_store=product_store(settings),
        sale_ledger=sale_ledger(settings),
        clock=SystemClock(settings.timezone),
        locks=_LOCKS,
    )


def aggregation_engine(settings: Settings) -> AggregationEngine:
    return AggregationEngine(
        product_store=product_store(settings),
        sale_ledger=sale_ledger(settings),
        clock=SystemClock(settings.timezone),
    )
