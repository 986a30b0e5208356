"""Unit tests for the Product aggregate."""

import pytest

from orderdesk.domain.exceptions import (
    InsufficientStockError,
    ProductUnavailableError,
    ValidationError,
)
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money


def _product(stock: int = 5, available: bool = True) -> Product:
    return Product.create(name="Widget", price=Money.of("10.00"), stock=stock, available=available)


class TestProductCreation:

    def test_happy_path(self):
        p = Product.create(
            name="  Widget ",
            price=Money.of("10.00"),
            stock=5,
            description="A widget",
            category="Tools",
        )
        assert p.id is None
        assert p.name == "Widget"
        assert p.stock == 5
        assert p.available
        assert p.category == "Tools"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create(name="  ", price=Money.of("1"))

    def test_long_name_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed 100"):
            Product.create(name="x" * 101, price=Money.of("1"))

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Product.create(name="Widget", price=Money.zero())

    def test_price_above_maximum_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            Product.create(name="Widget", price=Money.of("100000.00"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create(name="Widget", price=Money.of("1"), stock=-1)

    def test_initial_stock_capped(self):
        with pytest.raises(ValidationError, match="cannot exceed 1000"):
            Product.create(name="Widget", price=Money.of("1"), stock=1001)

    def test_long_description_rejected(self):
        with pytest.raises(ValidationError, match="Description"):
            Product.create(name="Widget", price=Money.of("1"), description="d" * 301)

    def test_empty_category_stored_as_none(self):
        p = Product.create(name="Widget", price=Money.of("1"), category="")
        assert p.category is None


class TestProductSupply:

    def test_can_supply_up_to_stock(self):
        _product(stock=5).ensure_can_supply(5)

    def test_insufficient_stock_message(self):
        with pytest.raises(InsufficientStockError) as exc:
            _product(stock=2).ensure_can_supply(3)
        assert str(exc.value) == "Insufficient stock for Widget (need 3, have 2 available)"

    def test_unavailable_product_cannot_supply(self):
        with pytest.raises(ProductUnavailableError):
            _product(available=False).ensure_can_supply(1)

    def test_is_orderable(self):
        assert _product(stock=1).is_orderable
        assert not _product(stock=0).is_orderable
        assert not _product(available=False).is_orderable

    def test_has_stock_for(self):
        p = _product(stock=3)
        assert p.has_stock_for(3)
        assert not p.has_stock_for(4)
