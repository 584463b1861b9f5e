"""Abstract store for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.

Implementations raise StorageError when the backing medium fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from stockroom.domain.model.product import Product, ProductDraft


class ProductStore(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product."""

    @abstractmethod
    def create(self, draft: ProductDraft, now: datetime) -> Product:
        """Assign a new ID, validate the draft and persist the product."""

    @abstractmethod
    def update(self, product_id: str, draft: ProductDraft, now: datetime) -> Product:
        """Apply a partial update and return the stored result.

        Raises EntityNotFoundError if the product does not exist.
        """

    @abstractmethod
    def conditional_decrement(self, product_id: str, amount: int, now: datetime) -> Product:
        """Atomically take ``amount`` units out of stock if that many exist.

        Raises InsufficientStockError (leaving stock untouched) when
        ``amount`` exceeds the stored stock, EntityNotFoundError when the
        product does not exist.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Raises EntityNotFoundError if absent."""
