"""Application service: Delete Order use case.

An order that still has line items cannot be deleted; removing the items
first (through the reconciliation service) returns their stock.
"""

from __future__ import annotations

from orderdesk.domain.exceptions import OrderNotFoundError
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, include_items=True)
            if order is None:
                raise OrderNotFoundError(f"Order #{order_id} not found")

            order.ensure_deletable()
            uow.orders.delete(order_id)
            uow.commit()
