"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from orderdesk.application.dto import LineItemDTO, OrderDTO
from orderdesk.domain.exceptions import OrderNotFoundError
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, customer_id: int | None = None) -> OrderDTO:
        """Return one order with its items.

        When ``customer_id`` is given, orders of other customers are
        reported as not found.
        """
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, include_items=True)
            if order is None or (
                customer_id is not None and order.customer_id != customer_id
            ):
                raise OrderNotFoundError(f"Order #{order_id} not found")

            items = [
                LineItemDTO.from_domain(item, uow.products.get_by_id(item.product_id))
                for item in order.items
            ]
            customer = uow.users.get_by_id(order.customer_id)

        return OrderDTO.from_domain(
            order, items, customer_name=customer.name if customer else ""
        )


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, customer_id: int | None = None) -> list[OrderDTO]:
        """List orders (without items), optionally for a single customer."""
        with self._uow as uow:
            orders = uow.orders.list_all(customer_id=customer_id)
            names = {u.id: u.name for u in uow.users.list_all()}

        return [
            OrderDTO.from_domain(order, customer_name=names.get(order.customer_id, ""))
            for order in orders
        ]
