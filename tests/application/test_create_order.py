"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no database.
"""

import pytest

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import OrderItemSpec
from orderdesk.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ProductUnavailableError,
)
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.user import Role, User
from orderdesk.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork


def _setup(products: list[Product] | None = None) -> tuple[CreateOrderHandler, FakeUnitOfWork]:
    """Build handler with a fake unit of work holding one customer (#1)."""
    if products is None:
        products = [
            Product.create(name="Widget", price=Money.of("15.00"), stock=10),
            Product.create(name="Gadget", price=Money.of("25.00"), stock=10),
            Product.create(name="CheapItem", price=Money.of("5.00"), stock=1),
        ]
    uow = FakeUnitOfWork(
        products=products,
        users=[User.create("Alice", "alice@example.com", "secret1", Role.CUSTOMER)],
    )
    return CreateOrderHandler(uow), uow


class TestCreateOrderHappyPath:

    def test_creates_empty_pending_order(self):
        handler, uow = _setup()
        dto = handler.handle(1)
        assert dto.status == "Pending"
        assert dto.total == "$0.00"
        assert dto.items == []
        assert dto.customer_name == "Alice"
        assert uow.commits == 1

    def test_creates_order_with_initial_items(self):
        handler, uow = _setup()
        dto = handler.handle(1, [OrderItemSpec(1, 3), OrderItemSpec(2, 5)])
        assert dto.total == "$170.00"
        assert [i.product_name for i in dto.items] == ["Widget", "Gadget"]
        assert uow.products.get_by_id(1).stock == 7
        assert uow.products.get_by_id(2).stock == 5

    def test_same_product_twice_makes_two_lines(self):
        handler, uow = _setup()
        dto = handler.handle(1, [OrderItemSpec(1, 1), OrderItemSpec(1, 2)])
        assert len(dto.items) == 2
        assert uow.products.get_by_id(1).stock == 7

    def test_sequential_ids(self):
        handler, _ = _setup()
        assert handler.handle(1).id == 1
        assert handler.handle(1).id == 2

    def test_persists_order(self):
        handler, uow = _setup()
        dto = handler.handle(1, [OrderItemSpec(3, 1)])
        saved = uow.orders.get_by_id(dto.id, include_items=True)
        assert saved.customer_id == 1
        assert saved.is_settled


class TestCreateOrderValidation:

    def test_unknown_customer(self):
        handler, uow = _setup()
        with pytest.raises(EntityNotFoundError, match="Customer #9"):
            handler.handle(9)
        assert uow.orders.list_all() == []

    def test_unknown_product_rolls_back_whole_order(self):
        handler, uow = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(1, [OrderItemSpec(1, 2), OrderItemSpec(99, 1)])
        assert uow.orders.list_all() == []
        assert uow.products.get_by_id(1).stock == 10

    def test_insufficient_stock_rolls_back_whole_order(self):
        handler, uow = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle(1, [OrderItemSpec(1, 2), OrderItemSpec(3, 2)])
        assert uow.orders.list_all() == []
        assert uow.products.get_by_id(1).stock == 10

    def test_unavailable_product(self):
        product = Product.create(name="Retired", price=Money.of("1.00"), stock=3, available=False)
        handler, _ = _setup([product])
        with pytest.raises(ProductUnavailableError):
            handler.handle(1, [OrderItemSpec(1, 1)])
