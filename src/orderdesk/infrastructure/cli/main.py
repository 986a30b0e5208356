import click

from orderdesk.infrastructure.cli.auth_commands import auth_login, auth_logout, auth_whoami
from orderdesk.infrastructure.cli.db_commands import db_init
from orderdesk.infrastructure.cli.item_commands import item_add, item_remove, item_update
from orderdesk.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
)
from orderdesk.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from orderdesk.infrastructure.cli.user_commands import (
    user_add,
    user_delete,
    user_list,
    user_update,
)
from orderdesk.infrastructure.config import get_settings
from orderdesk.infrastructure.logging_config import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """orderdesk: orders, products and stock"""
    configure_logging("DEBUG" if verbose else get_settings().LOG_LEVEL)


@cli.group()
def db() -> None:
    """Set up the database."""


@cli.group()
def auth() -> None:
    """Log in and out."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def item() -> None:
    """Manage order line items."""


@cli.group()
def user() -> None:
    """Manage user accounts."""


# Register subcommands
db.add_command(db_init)
auth.add_command(auth_login)
auth.add_command(auth_logout)
auth.add_command(auth_whoami)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
item.add_command(item_add)
item.add_command(item_remove)
item.add_command(item_update)
user.add_command(user_add)
user.add_command(user_delete)
user.add_command(user_list)
user.add_command(user_update)
