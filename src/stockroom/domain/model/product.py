"""Product aggregate.

Products carry their prices and the current stock count. Stock is the
only field that concurrent requests fight over; the rules that keep it
non-negative live here, the serialization of competing writers lives in
the InventoryEngine and the store.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

from stockroom.domain.exceptions import InsufficientStockError, ValidationError
from stockroom.domain.model.value_objects import Money

DEFAULT_CATEGORY = "General"
DEFAULT_LOW_STOCK_LIMIT = 5
MIN_NAME_LENGTH = 2


class Unit(Enum):
    PIECE = "piece"
    KILOGRAM = "kilogram"
    LITER = "liter"
    BOX = "box"

    @staticmethod
    def parse(raw: str | Unit) -> Unit:
        """Accept an enum member, its value, or a short alias ("kg", "dona")."""
        if isinstance(raw, Unit):
            return raw
        key = raw.strip().lower()
        unit = _UNIT_ALIASES.get(key)
        if unit is None:
            raise ValidationError(f"Unknown unit of measure: {raw!r}")
        return unit


_UNIT_ALIASES = {
    "piece": Unit.PIECE,
    "pcs": Unit.PIECE,
    "dona": Unit.PIECE,
    "kilogram": Unit.KILOGRAM,
    "kg": Unit.KILOGRAM,
    "liter": Unit.LITER,
    "litre": Unit.LITER,
    "l": Unit.LITER,
    "litr": Unit.LITER,
    "box": Unit.BOX,
    "quti": Unit.BOX,
}


@dataclass(frozen=True)
class ProductDraft:
    """A partial set of product fields.

    ``None`` means "not supplied": on create the default (or a validation
    failure for required fields) applies, on update the stored value is kept.
    """

    name: str | None = None
    category: str | None = None
    barcode: str | None = None
    unit: Unit | str | None = None
    cost_price: Decimal | int | str | None = None
    sell_price: Decimal | int | str | None = None
    stock: int | None = None
    low_stock_limit: int | None = None

    def supplied(self) -> dict[str, object]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class Product:
    """A sellable item and its current stock.

    Invariants:
    - ``stock`` is never negative
    - ``updated_at`` never moves backwards
    """

    id: str
    name: str
    category: str
    barcode: str | None
    unit: Unit
    cost_price: Money
    sell_price: Money
    stock: int
    low_stock_limit: int
    created_at: datetime
    updated_at: datetime

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(product_id: str, draft: ProductDraft, now: datetime) -> Product:
        """Build a new product from a draft, enforcing every field rule."""
        if draft.name is None:
            raise ValidationError("Product name is required")
        if draft.cost_price is None:
            raise ValidationError("Cost price is required")
        if draft.sell_price is None:
            raise ValidationError("Sell price is required")

        values = validate_fields(
            name=draft.name,
            cost_price=draft.cost_price,
            sell_price=draft.sell_price,
            stock=draft.stock if draft.stock is not None else 0,
            low_stock_limit=(
                draft.low_stock_limit
                if draft.low_stock_limit is not None
                else DEFAULT_LOW_STOCK_LIMIT
            ),
        )
        return Product(
            id=product_id,
            category=_clean_category(draft.category),
            barcode=_clean_barcode(draft.barcode),
            unit=Unit.parse(draft.unit) if draft.unit is not None else Unit.PIECE,
            created_at=now,
            updated_at=now,
            **values,
        )

    # --- Mutations ------------------------------------------------------------

    def apply(self, draft: ProductDraft, now: datetime) -> None:
        """Apply a partial update; omitted fields keep their current value.

        The merged record is validated before anything is assigned, so a
        rejected draft leaves the product untouched.
        """
        values = validate_fields(
            name=draft.name if draft.name is not None else self.name,
            cost_price=(
                draft.cost_price if draft.cost_price is not None else self.cost_price.amount
            ),
            sell_price=(
                draft.sell_price if draft.sell_price is not None else self.sell_price.amount
            ),
            stock=draft.stock if draft.stock is not None else self.stock,
            low_stock_limit=(
                draft.low_stock_limit
                if draft.low_stock_limit is not None
                else self.low_stock_limit
            ),
        )
        unit = Unit.parse(draft.unit) if draft.unit is not None else self.unit

        for key, value in values.items():
            setattr(self, key, value)
        self.unit = unit
        if draft.category is not None:
            self.category = _clean_category(draft.category)
        if draft.barcode is not None:
            self.barcode = _clean_barcode(draft.barcode)
        self.touch(now)

    def adjust_stock(self, delta: int, now: datetime) -> None:
        """Apply a manual correction; the result floors at zero."""
        self.stock = max(0, self.stock + delta)
        self.touch(now)

    def remove_stock(self, quantity: int, now: datetime) -> None:
        """Take sold units out of stock. Overselling is never allowed."""
        if quantity > self.stock:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.stock})"
            )
        self.stock -= quantity
        self.touch(now)

    def touch(self, now: datetime) -> None:
        self.updated_at = max(now, self.updated_at)


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------


def validate_fields(
    name: str,
    cost_price: Decimal | int | str,
    sell_price: Decimal | int | str,
    stock: int,
    low_stock_limit: int,
) -> dict[str, object]:
    """Check the product rules in order and return normalized values.

    Raises ValidationError naming the first rule that fails.
    """
    clean_name = name.strip()
    if len(clean_name) < MIN_NAME_LENGTH:
        raise ValidationError(
            f"Product name must be at least {MIN_NAME_LENGTH} characters"
        )

    cost = _to_decimal(cost_price, "Cost price")
    if cost < 0:
        raise ValidationError("Cost price cannot be negative")

    sell = _to_decimal(sell_price, "Sell price")
    if sell < 0:
        raise ValidationError("Sell price cannot be negative")

    if not _is_int(stock):
        raise ValidationError("Stock must be a whole number")
    if stock < 0:
        raise ValidationError("Stock cannot be negative")

    if not _is_int(low_stock_limit):
        raise ValidationError("Low-stock limit must be a whole number")
    if low_stock_limit < 0:
        raise ValidationError("Low-stock limit cannot be negative")

    return {
        "name": clean_name,
        "cost_price": Money(cost),
        "sell_price": Money(sell),
        "stock": stock,
        "low_stock_limit": low_stock_limit,
    }


def _to_decimal(value: Decimal | int | str, label: str) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{label} is not a number: {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"{label} is not a number: {value!r}")
    return amount


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _clean_category(raw: str | None) -> str:
    if raw is None or not raw.strip():
        return DEFAULT_CATEGORY
    return raw.strip()


def _clean_barcode(raw: str | None) -> str | None:
    if raw is None or not raw.strip():
        return None
    return raw.strip()
