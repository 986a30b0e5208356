"""CLI commands for user accounts (admin only)."""

from __future__ import annotations

import click

from orderdesk.application.authorization import Permission
from orderdesk.application.create_user import CreateUserHandler
from orderdesk.application.delete_user import DeleteUserHandler
from orderdesk.application.list_users import ListUsersHandler
from orderdesk.application.update_user import UpdateUserHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.user import Role
from orderdesk.infrastructure.bootstrap import unit_of_work
from orderdesk.infrastructure.cli.context import require

_ROLE_CHOICE = click.Choice([r.value for r in Role], case_sensitive=False)


@click.command("add")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="Login email (unique).")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password (6-100 characters).")
@click.option("--role", type=_ROLE_CHOICE, default=Role.CUSTOMER.value, show_default=True, help="User role.")
def user_add(name: str, email: str, password: str, role: str) -> None:
    """Create a user account."""
    require(Permission.USERS_MANAGE)

    try:
        user = CreateUserHandler(uow=unit_of_work()).handle(
            name=name, email=email, password=password, role=role
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} <{user.email}> created ({user.role}).")


@click.command("list")
def user_list() -> None:
    """List all users."""
    require(Permission.USERS_MANAGE)
    users = ListUsersHandler(uow=unit_of_work()).handle()

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Email':<30} Role")
    click.echo("-" * 72)
    for u in users:
        click.echo(f"{u.id:<6} {u.name:<24} {u.email:<30} {u.role}")


@click.command("update")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
@click.option("--name", default=None, help="New display name.")
@click.option("--email", default=None, help="New email.")
@click.option("--password", default=None, help="New password.")
@click.option("--role", type=_ROLE_CHOICE, default=None, help="New role.")
def user_update(
    user_id: int,
    name: str | None,
    email: str | None,
    password: str | None,
    role: str | None,
) -> None:
    """Update a user account."""
    require(Permission.USERS_MANAGE)

    try:
        user = UpdateUserHandler(uow=unit_of_work()).handle(
            user_id, name=name, email=email, password=password, role=role
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} updated: {user.name} <{user.email}> ({user.role}).")


@click.command("delete")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
def user_delete(user_id: int) -> None:
    """Delete a user who has no orders."""
    admin = require(Permission.USERS_MANAGE)
    if admin.id == user_id:
        raise click.ClickException("You cannot delete your own account.")

    try:
        DeleteUserHandler(uow=unit_of_work()).handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user_id} deleted.")
