"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderdesk.application.authorization import Permission, order_scope
from orderdesk.application.change_order_status import ChangeOrderStatusHandler
from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.delete_order import DeleteOrderHandler
from orderdesk.application.dto import OrderDTO, OrderItemSpec
from orderdesk.application.show_order import ListOrdersHandler, ShowOrderHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.model.user import Role
from orderdesk.infrastructure.bootstrap import unit_of_work
from orderdesk.infrastructure.cli.context import require


def _parse_item(raw: str) -> OrderItemSpec:
    """Parse '3:2' (product ID 3, quantity 2) into an OrderItemSpec."""
    if ":" not in raw:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'ProductID:Quantity'."
        )
    product_str, qty_str = raw.split(":", 1)
    try:
        return OrderItemSpec(product_id=int(product_str), quantity=int(qty_str))
    except ValueError:
        raise click.BadParameter(
            f"Invalid item '{raw}': product ID and quantity must be integers."
        )


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name or '#' + str(dto.customer_id)}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()

    if not dto.items:
        click.echo("  (no items)")
    else:
        click.echo(f"  {'Item':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
        click.echo(f"  {'-'*55}")
        for item in dto.items:
            click.echo(
                f"  {item.id:<6} {item.product_name:<20} {item.quantity:>5} "
                f"{item.unit_price:>10} {item.subtotal:>10}"
            )
        click.echo(f"  {'-'*55}")

    click.echo(f"  {'Order Total':<33} {dto.total:>20}")


@click.command("create")
@click.option("--customer", "customer_id", type=int, default=None, help="Customer user ID (staff only; defaults to you).")
@click.option("--item", "items", multiple=True, help="Item as 'ProductID:Qty'; repeatable.")
def order_create(customer_id: int | None, items: tuple[str, ...]) -> None:
    """Create a new order, optionally with initial items."""
    user = require(Permission.ORDERS_CREATE)
    scope = order_scope(Role.parse(user.role), user.id)
    if customer_id is None:
        customer_id = user.id
    elif scope is not None and customer_id != scope:
        raise click.ClickException("Customers can only create orders for themselves.")

    specs = [_parse_item(raw) for raw in items]
    handler = CreateOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(customer_id=customer_id, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("list")
def order_list() -> None:
    """List orders; customers see only their own."""
    user = require(Permission.ORDERS_VIEW)
    scope = order_scope(Role.parse(user.role), user.id)
    orders = ListOrdersHandler(uow=unit_of_work()).handle(customer_id=scope)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<20} {'Status':<10} {'Total':>12}  Created")
    click.echo("-" * 70)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.customer_name:<20} {o.status:<10} {o.total:>12}  {o.created_at}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    user = require(Permission.ORDERS_VIEW)
    scope = order_scope(Role.parse(user.role), user.id)

    try:
        dto = ShowOrderHandler(uow=unit_of_work()).handle(order_id, customer_id=scope)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.argument("status")
def order_status(order_id: int, status: str) -> None:
    """Set an order's STATUS (Pending, InProcess, Shipped, Delivered, Cancelled)."""
    user = require(Permission.ORDERS_STATUS)
    scope = order_scope(Role.parse(user.role), user.id)

    try:
        dto = ChangeOrderStatusHandler(uow=unit_of_work()).handle(
            order_id, OrderStatus.parse(status), customer_id=scope
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
def order_delete(order_id: int) -> None:
    """Delete an order.  Its items must be removed first."""
    require(Permission.ORDERS_DELETE)

    try:
        DeleteOrderHandler(uow=unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")
