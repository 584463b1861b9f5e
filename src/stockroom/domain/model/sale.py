"""Sale record: one completed sale in the append-only ledger.

A sale copies the product's name, unit and prices at the moment of sale
so it stays meaningful after the product is re-priced, renamed or deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from stockroom.domain.model.product import Product, Unit
from stockroom.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Sale:
    """Immutable ledger entry.

    ``total`` and ``profit`` are computed once by ``Sale.record()`` and
    never recomputed. ``profit`` is a signed Decimal: selling below cost
    is allowed and shows up as a loss.
    """

    id: str | None
    product_id: str
    product_name: str
    quantity: int
    unit: Unit
    sell_price: Money  # snapshot at sale time
    cost_price: Money  # snapshot at sale time
    total: Money
    profit: Decimal
    timestamp: datetime

    @staticmethod
    def record(product: Product, quantity: Quantity, timestamp: datetime) -> Sale:
        """Price a sale against the product's current prices.

        The id is left empty; the ledger assigns it on append.
        """
        qty = quantity.value
        return Sale(
            id=None,
            product_id=product.id,
            product_name=product.name,
            quantity=qty,
            unit=product.unit,
            sell_price=product.sell_price,
            cost_price=product.cost_price,
            total=product.sell_price * qty,
            profit=(product.sell_price.amount - product.cost_price.amount) * qty,
            timestamp=timestamp,
        )
