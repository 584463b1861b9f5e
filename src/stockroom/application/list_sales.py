"""Application service: List Sales use case (query)."""

from __future__ import annotations

from stockroom.application.dto import SaleDTO
from stockroom.domain.repository.sale_ledger import SaleLedger


class ListSalesHandler:

    def __init__(self, sale_ledger: SaleLedger) -> None:
        self._sale_ledger = sale_ledger

    def handle(self, limit: int | None = None) -> list[SaleDTO]:
        """Most recent sales first."""
        sales = sorted(
            self._sale_ledger.list_all(), key=lambda s: s.timestamp, reverse=True
        )
        if limit is not None:
            sales = sales[:limit]
        return [SaleDTO.from_sale(s) for s in sales]
