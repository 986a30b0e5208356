"""Abstract repository for order line items."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.order import LineItem
from orderdesk.domain.model.value_objects import Money, Quantity


class LineItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, line_item_id: int) -> LineItem | None:
        """Return a line item by its ID, or None if not found."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[LineItem]:
        """Return the items of one order, ordered by ID."""

    @abstractmethod
    def exists_for_product(self, product_id: int) -> bool:
        """True if any line item references the product."""

    @abstractmethod
    def add(self, item: LineItem) -> LineItem:
        """Insert a new line item and return it with its assigned ID."""

    @abstractmethod
    def update_quantity(
        self,
        line_item_id: int,
        quantity: Quantity,
        subtotal: Money,
        expected_version: int | None = None,
    ) -> LineItem:
        """Write quantity and subtotal.

        Raises LineItemNotFoundError if the row is gone and
        ConcurrencyConflictError if its version moved on.
        """

    @abstractmethod
    def delete(self, line_item_id: int, expected_version: int | None = None) -> None:
        """Delete a line item (LineItemNotFoundError, ConcurrencyConflictError)."""
