"""CLI commands for database setup."""

from __future__ import annotations

import click

from orderdesk.application.create_user import CreateUserHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.user import Role
from orderdesk.infrastructure.bootstrap import engine, unit_of_work
from orderdesk.infrastructure.persistence.database import init_db


@click.command("init")
@click.option("--admin-email", default=None, help="Create an admin with this email.")
@click.option("--admin-name", default="Administrator", show_default=True, help="Admin display name.")
@click.option("--admin-password", default=None, help="Admin password (prompted if omitted).")
def db_init(admin_email: str | None, admin_name: str, admin_password: str | None) -> None:
    """Create the tables, and optionally a first admin account."""
    init_db(engine())
    click.echo("Database initialised.")

    if admin_email is None:
        return
    if admin_password is None:
        admin_password = click.prompt("Admin password", hide_input=True, confirmation_prompt=True)

    handler = CreateUserHandler(uow=unit_of_work())
    try:
        user = handler.handle(
            name=admin_name,
            email=admin_email,
            password=admin_password,
            role=Role.ADMIN.value,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Admin #{user.id} <{user.email}> created.")
