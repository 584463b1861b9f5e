"""Abstract append-only ledger for Sale records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.sale import Sale


class SaleLedger(ABC):

    @abstractmethod
    def append(self, sale: Sale) -> Sale:
        """Persist a sale and return it with its assigned ID."""

    @abstractmethod
    def list_all(self) -> list[Sale]:
        """Return every recorded sale, in no particular order."""
