"""CLI commands for logging in and out."""

from __future__ import annotations

import click

from orderdesk.application.authenticate import AuthenticateHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import session_store, unit_of_work
from orderdesk.infrastructure.cli.context import current_user


@click.command("login")
@click.option("--email", required=True, help="Account email.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
def auth_login(email: str, password: str) -> None:
    """Log in and start a session."""
    handler = AuthenticateHandler(uow=unit_of_work())

    try:
        user = handler.handle(email=email, password=password)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    session = session_store().save(user.id)
    click.echo(
        f"Welcome, {user.name} ({user.role}). "
        f"Session valid until {session.expires_at:%Y-%m-%d %H:%M} UTC."
    )


@click.command("logout")
def auth_logout() -> None:
    """End the current session."""
    if session_store().clear():
        click.echo("Logged out.")
    else:
        click.echo("No active session.")


@click.command("whoami")
def auth_whoami() -> None:
    """Show the logged-in user."""
    user = current_user()
    click.echo(f"#{user.id} {user.name} <{user.email}> ({user.role})")
