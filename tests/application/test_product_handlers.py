"""Integration tests for the product use cases."""

import pytest

from stockroom.application.adjust_stock import AdjustStockHandler
from stockroom.application.delete_product import DeleteProductHandler
from stockroom.application.list_products import ListProductsHandler
from stockroom.application.upsert_product import UpsertProductHandler
from stockroom.domain.clock import FixedClock
from stockroom.domain.exceptions import EntityNotFoundError, ValidationError
from stockroom.domain.model.product import ProductDraft
from stockroom.domain.service.inventory_engine import InventoryEngine
from tests.fakes import T0, FakeProductStore, FakeSaleLedger


def _setup():
    product_store = FakeProductStore()
    clock = FixedClock(T0)
    engine = InventoryEngine(product_store, FakeSaleLedger(), clock=clock)
    return engine, product_store, clock


class TestUpsertProductHandler:

    def test_create(self):
        engine, product_store, _ = _setup()

        dto = UpsertProductHandler(engine).handle(
            ProductDraft(name="Tea", cost_price=9000, sell_price=12000, stock=4, unit="quti")
        )

        assert dto.name == "Tea"
        assert dto.unit == "box"
        assert dto.stock_level == "low"
        assert product_store.get_by_id(dto.id) is not None

    def test_update(self):
        engine, _, clock = _setup()
        handler = UpsertProductHandler(engine)
        created = handler.handle(ProductDraft(name="Tea", cost_price=1, sell_price=2))
        clock.advance(60)

        updated = handler.handle(ProductDraft(sell_price=3), product_id=created.id)

        assert updated.sell_price == "3"
        assert updated.cost_price == "1"
        assert updated.updated_at > created.updated_at

    def test_invalid_rejected(self):
        engine, _, _ = _setup()
        with pytest.raises(ValidationError):
            UpsertProductHandler(engine).handle(
                ProductDraft(name="Tea", cost_price=-1, sell_price=2)
            )


class TestAdjustAndDelete:

    def test_adjust(self):
        engine, _, _ = _setup()
        created = UpsertProductHandler(engine).handle(
            ProductDraft(name="Tea", cost_price=1, sell_price=2, stock=3)
        )
        dto = AdjustStockHandler(engine).handle(created.id, -5)
        assert dto.stock == 0
        assert dto.stock_level == "critical"

    def test_delete(self):
        engine, product_store, _ = _setup()
        created = UpsertProductHandler(engine).handle(
            ProductDraft(name="Tea", cost_price=1, sell_price=2)
        )
        DeleteProductHandler(engine).handle(created.id)
        assert product_store.list_all() == []

    def test_delete_missing(self):
        engine, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            DeleteProductHandler(engine).handle("nope")


class TestListProductsHandler:

    def test_filters_and_totals(self):
        engine, product_store, clock = _setup()
        handler = UpsertProductHandler(engine)
        handler.handle(ProductDraft(name="Tea", cost_price=1, sell_price=2, stock=3, category="Drinks"))
        clock.advance(60)
        handler.handle(ProductDraft(name="Juice", cost_price=1, sell_price=2, stock=30, category="Drinks"))
        handler.handle(ProductDraft(name="Bread", cost_price=1, sell_price=2, stock=40, category="Bakery"))

        result = ListProductsHandler(product_store).handle(category="Drinks")

        assert [p.name for p in result.products] == ["Juice", "Tea"]
        assert result.totals.items == 3
        assert result.totals.stock_total == 73
        assert result.totals.low == 1
        assert result.categories == ["Bakery", "Drinks"]

    def test_available_only_in_stock_by_name(self):
        engine, product_store, _ = _setup()
        handler = UpsertProductHandler(engine)
        handler.handle(ProductDraft(name="Tea", cost_price=1, sell_price=2, stock=3))
        handler.handle(ProductDraft(name="Eggs", cost_price=1, sell_price=2, stock=0))
        handler.handle(ProductDraft(name="Bread", cost_price=1, sell_price=2, stock=5))

        result = ListProductsHandler(product_store).handle(available=True)

        assert [p.name for p in result.products] == ["Bread", "Tea"]
        assert result.totals.items == 3
