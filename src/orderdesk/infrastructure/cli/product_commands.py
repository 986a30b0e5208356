"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.authorization import Permission
from orderdesk.application.delete_product import DeleteProductHandler
from orderdesk.application.dto import ProductDTO
from orderdesk.application.list_products import ListProductsHandler, ShowProductHandler
from orderdesk.application.update_product import UpdateProductHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.user import Role
from orderdesk.infrastructure.bootstrap import unit_of_work
from orderdesk.infrastructure.cli.context import require


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--category", default=None, help="Category label.")
@click.option("--unavailable", is_flag=True, default=False, help="Add as not for sale.")
def product_add(
    name: str,
    price: str,
    stock: int,
    description: str | None,
    category: str | None,
    unavailable: bool,
) -> None:
    """Add a new product to the catalog."""
    require(Permission.PRODUCTS_CREATE)
    handler = AddProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            available=not unavailable,
            description=description,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.option("--orderable", is_flag=True, default=False, help="Only products that can be ordered now.")
def product_list(orderable: bool) -> None:
    """List products in the catalog.

    Customers only ever see products that are for sale and in stock.
    """
    user = require(Permission.PRODUCTS_VIEW)
    orderable_only = orderable or user.role == Role.CUSTOMER.value
    products = ListProductsHandler(uow=unit_of_work()).handle(orderable_only=orderable_only)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<14} {'Price':>10} {'Stock':>6}  Status")
    click.echo("-" * 72)
    for p in products:
        status = "available" if p.available else "unavailable"
        click.echo(
            f"{p.id:<6} {p.name:<24} {p.category:<14} {p.price:>10} {p.stock:>6}  {status}"
        )


def _display_product(p: ProductDTO) -> None:
    click.echo(f"Product #{p.id}: {p.name}")
    click.echo(f"  Price:       {p.price}")
    click.echo(f"  Stock:       {p.stock}")
    click.echo(f"  Available:   {'yes' if p.available else 'no'}")
    click.echo(f"  Category:    {p.category or '-'}")
    click.echo(f"  Description: {p.description or '-'}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show one product."""
    require(Permission.PRODUCTS_VIEW)

    try:
        product = ShowProductHandler(uow=unit_of_work()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description.")
@click.option("--category", default=None, help="New category.")
@click.option("--available/--unavailable", default=None, help="Put on or take off sale.")
def product_update(
    product_id: int,
    name: str | None,
    price: str | None,
    description: str | None,
    category: str | None,
    available: bool | None,
) -> None:
    """Update a product's details.  Stock is not editable here."""
    require(Permission.PRODUCTS_EDIT)
    handler = UpdateProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            price=price,
            available=available,
            description=description,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated.")
    _display_product(product)


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(product_id: int) -> None:
    """Delete a product that no order line refers to."""
    require(Permission.PRODUCTS_DELETE)

    try:
        DeleteProductHandler(uow=unit_of_work()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
