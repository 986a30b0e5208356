"""Application service: Create Order use case.

Creates an empty pending order for a customer.  Initial items, if any,
are added through the line-item reconciliation service inside the same
unit of work, so either the order is created with all of its items
(stock consumed, total settled) or nothing is written at all.
"""

from __future__ import annotations

import logging

from orderdesk.application.dto import LineItemDTO, OrderDTO, OrderItemSpec
from orderdesk.domain.exceptions import UserNotFoundError
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.unit_of_work import UnitOfWork
from orderdesk.domain.service.line_item_reconciliation_service import (
    LineItemReconciliationService,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        customer_id: int,
        item_specs: list[OrderItemSpec] | None = None,
    ) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Resolve the customer (fail if not found).
        2. Insert a Pending order with a zero total.
        3. Add each requested item through the reconciliation service.
        4. Commit and return a DTO of the settled order.
        """
        order = Order.create(customer_id)

        with self._uow as uow:
            customer = uow.users.get_by_id(customer_id)
            if customer is None:
                raise UserNotFoundError(f"Customer #{customer_id} not found")

            order = uow.orders.add(order)
            svc = LineItemReconciliationService(uow.products, uow.orders, uow.line_items)
            for spec in item_specs or []:
                svc.add(order.id, spec.product_id, spec.quantity)  # type: ignore[arg-type]

            order = uow.orders.get_by_id(order.id, include_items=True)  # type: ignore[arg-type,assignment]
            items = [
                LineItemDTO.from_domain(item, uow.products.get_by_id(item.product_id))
                for item in order.items
            ]
            uow.commit()

        logger.info(
            f"Order #{order.id} created for customer #{customer_id} "
            f"with {len(items)} item(s), total {order.total}"
        )
        return OrderDTO.from_domain(order, items, customer_name=customer.name)
