"""Abstract repository for the Order aggregate (the order aggregate store)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from orderdesk.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int, include_items: bool = False) -> Order | None:
        """Return an order by its ID, or None if not found.

        ``items`` is only populated when ``include_items`` is true.
        """

    @abstractmethod
    def list_all(self, customer_id: int | None = None) -> list[Order]:
        """Return orders (without items), optionally for one customer."""

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Insert a new order and return it with its assigned ID."""

    @abstractmethod
    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_version: int | None = None,
    ) -> Order:
        """Set the order status (OrderNotFoundError, ConcurrencyConflictError)."""

    @abstractmethod
    def adjust_total(
        self,
        order_id: int,
        delta: Decimal,
        expected_version: int | None = None,
    ) -> Order:
        """Add ``delta`` (may be negative) to the order total.

        Raises OrderNotFoundError, ConcurrencyConflictError, or
        InvalidStateError if the total would become negative.
        """

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Delete an order that has no items.

        Raises OrderNotFoundError, or OrderHasItemsError while items remain.
        """
