"""Unit tests for the InventoryEngine domain service."""

from datetime import timedelta
from decimal import Decimal

import pytest

from stockroom.domain.clock import FixedClock
from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
    StorageError,
    ValidationError,
)
from stockroom.domain.model.product import ProductDraft
from stockroom.domain.model.value_objects import Money
from stockroom.domain.service.inventory_engine import InventoryEngine
from tests.fakes import T0, FakeProductStore, FakeSaleLedger, make_product


class StaleReadProductStore(FakeProductStore):
    """Reports more stock on reads than the store actually holds."""

    def __init__(self, products, reported_stock):
        super().__init__(products)
        self.reported_stock = reported_stock

    def get_by_id(self, product_id):
        product = super().get_by_id(product_id)
        if product is not None:
            product.stock = self.reported_stock
        return product


class FailingUpdateProductStore(FakeProductStore):

    def update(self, product_id, draft, now):
        raise StorageError("products unavailable")


def _setup(**product_fields):
    product_store = FakeProductStore([make_product(**product_fields)])
    sale_ledger = FakeSaleLedger()
    clock = FixedClock(T0 + timedelta(hours=1))
    engine = InventoryEngine(product_store, sale_ledger, clock=clock)
    return engine, product_store, sale_ledger, clock


class TestRecordSale:

    def test_sale_decrements_stock_and_appends(self):
        engine, products, ledger, clock = _setup(cost_price=1000, sell_price=1500, stock=10)

        sale = engine.record_sale("1", 3)

        assert sale.quantity == 3
        assert sale.total == Money.of(4500)
        assert sale.profit == Decimal("1500")
        assert sale.id is not None
        assert sale.timestamp == clock.now()
        assert products.get_by_id("1").stock == 7
        assert ledger.list_all() == [sale]

    def test_updated_at_refreshed(self):
        engine, products, _, clock = _setup()
        engine.record_sale("1", 1)
        assert products.get_by_id("1").updated_at == clock.now()

    def test_selling_entire_stock_allowed(self):
        engine, products, _, _ = _setup(stock=4)
        engine.record_sale("1", 4)
        assert products.get_by_id("1").stock == 0

    def test_unknown_product_rejected(self):
        engine, _, ledger, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            engine.record_sale("missing", 1)
        assert ledger.list_all() == []

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity_rejected(self, quantity):
        engine, products, ledger, _ = _setup(stock=10)
        with pytest.raises(InvalidQuantityError):
            engine.record_sale("1", quantity)
        assert products.get_by_id("1").stock == 10
        assert ledger.list_all() == []

    def test_oversell_rejected_without_side_effects(self):
        engine, products, ledger, _ = _setup(stock=2)
        with pytest.raises(InsufficientStockError, match="need 3, have 2"):
            engine.record_sale("1", 3)
        product = products.get_by_id("1")
        assert product.stock == 2
        assert product.updated_at == T0
        assert ledger.list_all() == []

    def test_ledger_failure_restores_stock(self):
        engine, products, ledger, _ = _setup(stock=10)
        ledger.fail_appends = True

        with pytest.raises(StorageError):
            engine.record_sale("1", 3)

        assert products.get_by_id("1").stock == 10
        assert ledger.list_all() == []

    def test_stale_read_refused_by_conditional_decrement(self):
        products = StaleReadProductStore([make_product(stock=2)], reported_stock=10)
        ledger = FakeSaleLedger()
        engine = InventoryEngine(products, ledger, clock=FixedClock(T0 + timedelta(hours=1)))

        with pytest.raises(InsufficientStockError, match="need 5, have 2"):
            engine.record_sale("1", 5)

        assert ledger.list_all() == []
        assert products.list_all()[0].stock == 2

    def test_failed_restore_reraises_ledger_error(self):
        products = FailingUpdateProductStore([make_product(stock=10)])
        ledger = FakeSaleLedger()
        ledger.fail_appends = True
        engine = InventoryEngine(products, ledger, clock=FixedClock(T0 + timedelta(hours=1)))

        with pytest.raises(StorageError, match="ledger unavailable") as exc_info:
            engine.record_sale("1", 3)

        assert str(exc_info.value.__context__) == "products unavailable"
        assert ledger.list_all() == []

    def test_sale_keeps_prices_after_repricing(self):
        engine, _, ledger, _ = _setup(cost_price=1000, sell_price=1500)
        engine.record_sale("1", 2)
        engine.upsert_product(ProductDraft(sell_price=2000), existing_id="1")
        assert ledger.list_all()[0].total == Money.of(3000)

    def test_sale_survives_product_deletion(self):
        engine, _, ledger, _ = _setup(name="Tea")
        engine.record_sale("1", 2)
        engine.delete_product("1")
        assert ledger.list_all()[0].product_name == "Tea"


class TestAdjustStock:

    def test_restock(self):
        engine, products, _, _ = _setup(stock=7)
        product = engine.adjust_stock("1", 5)
        assert product.stock == 12
        assert products.get_by_id("1").stock == 12

    def test_quick_decrement(self):
        engine, products, _, _ = _setup(stock=7)
        engine.adjust_stock("1", -1)
        assert products.get_by_id("1").stock == 6

    def test_large_negative_floors_at_zero(self):
        engine, products, _, _ = _setup(stock=7)
        product = engine.adjust_stock("1", -20)
        assert product.stock == 0
        assert products.get_by_id("1").stock == 0

    def test_no_ledger_entry(self):
        engine, _, ledger, _ = _setup(stock=7)
        engine.adjust_stock("1", -3)
        assert ledger.list_all() == []

    def test_updated_at_refreshed(self):
        engine, products, _, clock = _setup()
        engine.adjust_stock("1", 1)
        assert products.get_by_id("1").updated_at == clock.now()

    def test_unknown_product_rejected(self):
        engine, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            engine.adjust_stock("missing", 1)

    def test_non_integer_delta_rejected(self):
        engine, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="whole number"):
            engine.adjust_stock("1", 1.5)


class TestUpsertProduct:

    def test_create_assigns_id(self):
        engine, products, _, clock = _setup()
        product = engine.upsert_product(
            ProductDraft(name="Flour", cost_price=500, sell_price=700, stock=20)
        )
        assert product.id
        assert product.id != "1"
        assert product.created_at == clock.now()
        assert products.get_by_id(product.id).stock == 20

    def test_create_invalid_rejected(self):
        engine, products, _, _ = _setup()
        with pytest.raises(ValidationError, match="at least 2 characters"):
            engine.upsert_product(ProductDraft(name="F", cost_price=1, sell_price=1))
        assert len(products.list_all()) == 1

    def test_stock_only_patch_keeps_prices(self):
        engine, products, _, _ = _setup(cost_price=1000, sell_price=1500, stock=10)
        engine.upsert_product(ProductDraft(stock=25), existing_id="1")
        product = products.get_by_id("1")
        assert product.stock == 25
        assert product.cost_price == Money.of(1000)
        assert product.sell_price == Money.of(1500)

    def test_update_missing_product_rejected(self):
        engine, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            engine.upsert_product(ProductDraft(stock=1), existing_id="missing")

    def test_update_invalid_rejected(self):
        engine, products, _, _ = _setup(stock=10)
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            engine.upsert_product(ProductDraft(stock=-1), existing_id="1")
        assert products.get_by_id("1").stock == 10


class TestDeleteProduct:

    def test_delete(self):
        engine, products, _, _ = _setup()
        engine.delete_product("1")
        assert products.get_by_id("1") is None

    def test_delete_missing_rejected(self):
        engine, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            engine.delete_product("missing")

    def test_sale_after_delete_rejected(self):
        engine, _, _, _ = _setup()
        engine.delete_product("1")
        with pytest.raises(EntityNotFoundError):
            engine.record_sale("1", 1)
