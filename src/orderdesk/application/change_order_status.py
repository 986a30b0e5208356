"""Application service: Change Order Status use case."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO
from orderdesk.domain.exceptions import OrderNotFoundError
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class ChangeOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        status: OrderStatus,
        customer_id: int | None = None,
    ) -> OrderDTO:
        """Move an order to ``status``.

        Status is bookkeeping only; it never touches stock or totals.
        """
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None or (
                customer_id is not None and order.customer_id != customer_id
            ):
                raise OrderNotFoundError(f"Order #{order_id} not found")

            order.change_status(status)
            order = uow.orders.update_status(
                order.id, order.status, expected_version=order.version  # type: ignore[arg-type]
            )
            uow.commit()

        return OrderDTO.from_domain(order)
