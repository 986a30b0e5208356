"""Abstract unit of work: one store transaction spanning every repository.

Usage::

    with uow:
        ...  # reads and writes through uow.products / uow.orders / ...
        uow.commit()

Leaving the block without ``commit()`` (or by an exception) rolls back
every write made inside it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.repository.line_item_repository import LineItemRepository
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    line_items: LineItemRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # No-op once committed; otherwise discards everything.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write since ``__enter__`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write."""
