"""Tests for the Add / Update / Remove line item handlers.

Business outcomes come back as ``Success`` / ``Failure`` values; the
fake unit of work lets us check that a failure leaves nothing behind.
"""

import pytest
from returns.pipeline import is_successful
from returns.result import Failure, Success

from orderdesk.application.line_items import (
    AddLineItemHandler,
    RemoveLineItemHandler,
    UpdateLineItemHandler,
)
from orderdesk.domain.exceptions import (
    ConcurrencyConflictError,
    InsufficientStockError,
    LineItemNotFoundError,
    OrderNotFoundError,
    ValidationError,
)
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork


def _setup(stock: int = 5) -> FakeUnitOfWork:
    """One product (#1, $10.00) and one order (#1) for customer #1."""
    uow = FakeUnitOfWork(
        products=[Product.create(name="Widget", price=Money.of("10.00"), stock=stock)]
    )
    uow.orders.add(Order.create(customer_id=1))
    return uow


class TestAddLineItem:

    def test_success_carries_dto(self):
        uow = _setup()
        result = AddLineItemHandler(uow).handle(1, 1, 3)

        assert is_successful(result)
        dto = result.unwrap()
        assert dto.quantity == 3
        assert dto.subtotal == "$30.00"
        assert dto.product_name == "Widget"
        assert dto.unit_price == "$10.00"
        assert uow.commits == 1

    def test_insufficient_stock_is_a_failure_value(self):
        uow = _setup(stock=2)
        result = AddLineItemHandler(uow).handle(1, 1, 3)

        assert not is_successful(result)
        assert isinstance(result.failure(), InsufficientStockError)
        assert uow.commits == 0
        assert uow.products.get_by_id(1).stock == 2

    def test_invalid_quantity_is_a_failure_value(self):
        result = AddLineItemHandler(_setup()).handle(1, 1, 0)
        assert isinstance(result.failure(), ValidationError)

    def test_conflict_rolls_back_the_item_and_stock(self):
        uow = _setup()
        uow.orders.simulate_concurrent_write(1)

        result = AddLineItemHandler(uow).handle(1, 1, 2)

        assert isinstance(result.failure(), ConcurrencyConflictError)
        assert uow.line_items.list_for_order(1) == []
        assert uow.products.get_by_id(1).stock == 5
        assert uow.orders.get_by_id(1).total == Money.zero()

    def test_retry_after_conflict_succeeds(self):
        uow = _setup()
        uow.products.simulate_concurrent_write(1)
        handler = AddLineItemHandler(uow)

        assert isinstance(handler.handle(1, 1, 2).failure(), ConcurrencyConflictError)
        assert is_successful(handler.handle(1, 1, 2))
        assert uow.products.get_by_id(1).stock == 3

    def test_customer_cannot_touch_other_customers_order(self):
        uow = _setup()
        result = AddLineItemHandler(uow, customer_id=2).handle(1, 1, 1)
        assert isinstance(result.failure(), OrderNotFoundError)
        assert uow.products.get_by_id(1).stock == 5

    def test_customer_can_add_to_own_order(self):
        result = AddLineItemHandler(_setup(), customer_id=1).handle(1, 1, 1)
        assert is_successful(result)

    def test_infrastructure_errors_propagate(self):
        uow = _setup()

        def broken(*args, **kwargs):
            raise OSError("disk on fire")

        uow.line_items.add = broken
        with pytest.raises(OSError):
            AddLineItemHandler(uow).handle(1, 1, 1)
        assert uow.products.get_by_id(1).stock == 5


class TestUpdateLineItem:

    def test_scenario_update_to_five(self):
        uow = _setup()
        item = AddLineItemHandler(uow).handle(1, 1, 3).unwrap()

        result = UpdateLineItemHandler(uow).handle(item.id, 5)

        assert result == Success(result.unwrap())
        assert result.unwrap().subtotal == "$50.00"
        assert uow.products.get_by_id(1).stock == 0
        assert uow.orders.get_by_id(1).total == Money.of("50.00")

    def test_increase_beyond_stock_fails_without_mutation(self):
        uow = _setup()
        item = AddLineItemHandler(uow).handle(1, 1, 3).unwrap()

        result = UpdateLineItemHandler(uow).handle(item.id, 6)

        assert isinstance(result.failure(), InsufficientStockError)
        assert uow.line_items.get_by_id(item.id).quantity.value == 3
        assert uow.products.get_by_id(1).stock == 2
        assert uow.orders.get_by_id(1).total == Money.of("30.00")

    def test_conflict_on_order_rolls_back_item_and_stock(self):
        uow = _setup()
        item = AddLineItemHandler(uow).handle(1, 1, 1).unwrap()
        uow.orders.simulate_concurrent_write(1)

        result = UpdateLineItemHandler(uow).handle(item.id, 4)

        assert isinstance(result.failure(), ConcurrencyConflictError)
        assert uow.line_items.get_by_id(item.id).quantity.value == 1
        assert uow.products.get_by_id(1).stock == 4

    def test_missing_item(self):
        result = UpdateLineItemHandler(_setup()).handle(99, 1)
        assert isinstance(result.failure(), LineItemNotFoundError)

    def test_other_customers_item_reported_missing(self):
        uow = _setup()
        item = AddLineItemHandler(uow).handle(1, 1, 1).unwrap()
        result = UpdateLineItemHandler(uow, customer_id=2).handle(item.id, 2)
        assert isinstance(result.failure(), LineItemNotFoundError)


class TestRemoveLineItem:

    def test_restores_stock_and_total(self):
        uow = _setup()
        item = AddLineItemHandler(uow).handle(1, 1, 3).unwrap()

        result = RemoveLineItemHandler(uow).handle(item.id)

        assert result.unwrap().id == item.id
        assert uow.products.get_by_id(1).stock == 5
        assert uow.orders.get_by_id(1).total == Money.zero()

    def test_second_remove_is_a_failure(self):
        uow = _setup()
        item = AddLineItemHandler(uow).handle(1, 1, 3).unwrap()
        RemoveLineItemHandler(uow).handle(item.id)

        result = RemoveLineItemHandler(uow).handle(item.id)

        assert result == Failure(result.failure())
        assert isinstance(result.failure(), LineItemNotFoundError)
