"""Application services: Add / Update / Remove Line Item use cases.

Each handler runs one reconciliation operation inside its own unit of
work.  Business outcomes are never raised: the handler returns
``Success(LineItemDTO)`` or ``Failure(DomainException)``, the exception
type being the discriminant (``InsufficientStockError``,
``ConcurrencyConflictError`` ...).  Anything else, such as the database
being unreachable, propagates after the unit of work has rolled back.

There are no retries here; a caller that wants to retry on
``ConcurrencyConflictError`` simply calls the handler again, which
re-reads the current rows.
"""

from __future__ import annotations

import logging
from typing import Callable

from returns.result import Failure, Result, Success

from orderdesk.application.dto import LineItemDTO
from orderdesk.domain.exceptions import (
    DomainException,
    LineItemNotFoundError,
    OrderNotFoundError,
)
from orderdesk.domain.model.order import LineItem
from orderdesk.domain.repository.unit_of_work import UnitOfWork
from orderdesk.domain.service.line_item_reconciliation_service import (
    LineItemReconciliationService,
)

logger = logging.getLogger(__name__)

LineItemResult = Result[LineItemDTO, DomainException]


class _LineItemHandler:
    """Shared transaction and outcome plumbing.

    When ``customer_id`` is given the handler only touches that customer's
    orders; any other order is reported as not found.
    """

    def __init__(self, uow: UnitOfWork, customer_id: int | None = None) -> None:
        self._uow = uow
        self._customer_id = customer_id

    def _run(
        self,
        description: str,
        operation: Callable[[UnitOfWork, LineItemReconciliationService], LineItem],
    ) -> LineItemResult:
        logger.info(f"{description}: starting")
        try:
            with self._uow as uow:
                svc = LineItemReconciliationService(
                    uow.products, uow.orders, uow.line_items
                )
                item = operation(uow, svc)
                product = uow.products.get_by_id(item.product_id)
                uow.commit()
        except DomainException as exc:
            logger.warning(f"{description}: rejected ({type(exc).__name__}: {exc})")
            return Failure(exc)
        except Exception:
            logger.exception(f"{description}: failed, transaction rolled back")
            raise

        logger.info(
            f"{description}: committed (item #{item.id}, order #{item.order_id}, "
            f"quantity {item.quantity}, subtotal {item.subtotal})"
        )
        return Success(LineItemDTO.from_domain(item, product))

    def _check_order_scope(self, uow: UnitOfWork, order_id: int) -> None:
        if self._customer_id is None:
            return
        order = uow.orders.get_by_id(order_id)
        if order is None or order.customer_id != self._customer_id:
            raise OrderNotFoundError(f"Order #{order_id} not found")

    def _check_item_scope(self, uow: UnitOfWork, line_item_id: int) -> None:
        if self._customer_id is None:
            return
        item = uow.line_items.get_by_id(line_item_id)
        if item is None:
            raise LineItemNotFoundError(f"Line item #{line_item_id} not found")
        try:
            self._check_order_scope(uow, item.order_id)
        except OrderNotFoundError:
            raise LineItemNotFoundError(
                f"Line item #{line_item_id} not found"
            ) from None


class AddLineItemHandler(_LineItemHandler):

    def handle(self, order_id: int, product_id: int, quantity: int) -> LineItemResult:
        """Add ``quantity`` units of a product to an order."""

        def operation(uow: UnitOfWork, svc: LineItemReconciliationService) -> LineItem:
            self._check_order_scope(uow, order_id)
            return svc.add(order_id, product_id, quantity)

        return self._run(
            f"Add line item (order #{order_id}, product #{product_id}, qty {quantity})",
            operation,
        )


class UpdateLineItemHandler(_LineItemHandler):

    def handle(self, line_item_id: int, new_quantity: int) -> LineItemResult:
        """Change the quantity of an existing line item."""

        def operation(uow: UnitOfWork, svc: LineItemReconciliationService) -> LineItem:
            self._check_item_scope(uow, line_item_id)
            return svc.update(line_item_id, new_quantity)

        return self._run(
            f"Update line item #{line_item_id} (qty {new_quantity})", operation
        )


class RemoveLineItemHandler(_LineItemHandler):

    def handle(self, line_item_id: int) -> LineItemResult:
        """Remove a line item; the returned DTO describes the removed row."""

        def operation(uow: UnitOfWork, svc: LineItemReconciliationService) -> LineItem:
            self._check_item_scope(uow, line_item_id)
            return svc.remove(line_item_id)

        return self._run(f"Remove line item #{line_item_id}", operation)
