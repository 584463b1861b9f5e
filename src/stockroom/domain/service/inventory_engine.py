"""Domain service: Inventory Engine.

The only writer of stock. It coordinates a read-then-write sequence
across the ProductStore and the SaleLedger for every request and holds
no product state of its own.

Concurrency: every stock mutation runs under the product's lock from
``ProductLocks``, and the sale path additionally goes through the store's
atomic ``conditional_decrement`` so a writer outside this process still
cannot push stock below zero.

Sale protocol:
  1. load the product (EntityNotFoundError if absent)
  2. reject non-positive quantities and oversells
  3. price the sale from the product's current prices
  4. decrement stock through ``conditional_decrement``
  5. append the sale to the ledger; if the append fails the decrement
     is reverted before the error propagates
"""

from __future__ import annotations

from typing import NoReturn

import structlog

from stockroom.domain.clock import Clock, SystemClock
from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from stockroom.domain.model.product import Product, ProductDraft
from stockroom.domain.model.sale import Sale
from stockroom.domain.model.value_objects import Quantity
from stockroom.domain.repository.product_store import ProductStore
from stockroom.domain.repository.sale_ledger import SaleLedger
from stockroom.domain.service.stock_locks import ProductLocks

logger = structlog.get_logger(__name__)


class InventoryEngine:

    def __init__(
        self,
        product_store: ProductStore,
        sale_ledger: SaleLedger,
        clock: Clock | None = None,
        locks: ProductLocks | None = None,
    ) -> None:
        self._product_store = product_store
        self._sale_ledger = sale_ledger
        self._clock = clock or SystemClock()
        self._locks = locks or ProductLocks()

    # --- Sales ----------------------------------------------------------------

    def record_sale(self, product_id: str, quantity: int) -> Sale:
        """Sell ``quantity`` units of a product.

        Returns the appended Sale. On any failure neither the ledger nor
        the stock count is changed.
        """
        with self._locks.hold(product_id):
            product = self._load(product_id)
            qty = Quantity(quantity)
            if qty.value > product.stock:
                logger.warning(
                    "Sale rejected: insufficient stock",
                    product_id=product_id,
                    requested=qty.value,
                    available=product.stock,
                )
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"(need {qty.value}, have {product.stock})"
                )

            now = self._clock.now()
            sale = Sale.record(product, qty, now)

            decremented = self._product_store.conditional_decrement(
                product_id, qty.value, now
            )
            try:
                recorded = self._sale_ledger.append(sale)
            except Exception as append_error:
                self._revert_decrement(decremented, qty.value, append_error)

        logger.info(
            "Sale recorded",
            sale_id=recorded.id,
            product_id=product_id,
            quantity=recorded.quantity,
            total=str(recorded.total),
            stock_left=decremented.stock,
        )
        return recorded

    # --- Stock adjustments ----------------------------------------------------

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Apply a signed manual correction to stock.

        A result below zero is clamped to zero rather than rejected. Manual
        adjustments never produce a ledger entry.
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(
                f"Stock adjustment must be a whole number, got {delta!r}"
            )

        with self._locks.hold(product_id):
            product = self._load(product_id)
            before = product.stock
            now = self._clock.now()
            product.adjust_stock(delta, now)
            updated = self._product_store.update(
                product_id, ProductDraft(stock=product.stock), now
            )

        logger.info(
            "Stock adjusted",
            product_id=product_id,
            delta=delta,
            stock_before=before,
            stock_after=updated.stock,
        )
        return updated

    # --- Catalogue maintenance ------------------------------------------------

    def upsert_product(
        self, draft: ProductDraft, existing_id: str | None = None
    ) -> Product:
        """Create a product, or partially update ``existing_id``.

        On update only the fields present in the draft change.
        """
        now = self._clock.now()
        if existing_id is None:
            product = self._product_store.create(draft, now)
            logger.info("Product created", product_id=product.id, name=product.name)
            return product

        with self._locks.hold(existing_id):
            product = self._product_store.update(existing_id, draft, now)

        logger.info(
            "Product updated",
            product_id=existing_id,
            fields=sorted(draft.supplied()),
        )
        return product

    def delete_product(self, product_id: str) -> None:
        """Remove a product. Recorded sales keep their own snapshot."""
        with self._locks.hold(product_id):
            self._product_store.delete(product_id)
        logger.info("Product deleted", product_id=product_id)

    # --- Internal helpers -----------------------------------------------------

    def _load(self, product_id: str) -> Product:
        product = self._product_store.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def _revert_decrement(
        self, decremented: Product, quantity: int, append_error: Exception
    ) -> NoReturn:
        """Put sold units back after a failed append.

        Always ends by raising ``append_error``; a failure of the restore
        itself is logged and chained as its context.
        """
        logger.error(
            "Ledger append failed, restoring stock",
            product_id=decremented.id,
            quantity=quantity,
        )
        try:
            self._product_store.update(
                decremented.id,
                ProductDraft(stock=decremented.stock + quantity),
                self._clock.now(),
            )
        except Exception:
            logger.exception(
                "Restoring stock failed",
                product_id=decremented.id,
                quantity=quantity,
            )
            raise append_error
        raise append_error
