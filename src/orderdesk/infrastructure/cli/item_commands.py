"""CLI commands for order line items.

Every command here goes through the line-item reconciliation, so the
product's stock and the order's total move together with the item.
"""

from __future__ import annotations

import click

from orderdesk.application.authorization import Permission, order_scope
from orderdesk.application.dto import LineItemDTO
from orderdesk.application.line_items import (
    AddLineItemHandler,
    RemoveLineItemHandler,
    UpdateLineItemHandler,
)
from orderdesk.domain.model.user import Role
from orderdesk.infrastructure.bootstrap import unit_of_work
from orderdesk.infrastructure.cli.context import require, unwrap


def _scope() -> int | None:
    user = require(Permission.ORDERS_EDIT)
    return order_scope(Role.parse(user.role), user.id)


def _echo_item(verb: str, item: LineItemDTO) -> None:
    name = item.product_name or f"product #{item.product_id}"
    click.echo(
        f"{verb} item #{item.id} on order #{item.order_id}: "
        f"{item.quantity} x {name} = {item.subtotal}"
    )


@click.command("add")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Quantity (1-1000).")
def item_add(order_id: int, product_id: int, quantity: int) -> None:
    """Add a product to an order."""
    handler = AddLineItemHandler(uow=unit_of_work(), customer_id=_scope())
    _echo_item("Added", unwrap(handler.handle(order_id, product_id, quantity)))


@click.command("update")
@click.option("--id", "line_item_id", required=True, type=int, help="Line item ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (1-1000).")
def item_update(line_item_id: int, quantity: int) -> None:
    """Change the quantity of a line item."""
    handler = UpdateLineItemHandler(uow=unit_of_work(), customer_id=_scope())
    _echo_item("Updated", unwrap(handler.handle(line_item_id, quantity)))


@click.command("remove")
@click.option("--id", "line_item_id", required=True, type=int, help="Line item ID.")
def item_remove(line_item_id: int) -> None:
    """Remove a line item, returning its units to stock."""
    handler = RemoveLineItemHandler(uow=unit_of_work(), customer_id=_scope())
    _echo_item("Removed", unwrap(handler.handle(line_item_id)))
