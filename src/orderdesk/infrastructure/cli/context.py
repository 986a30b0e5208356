"""Helpers shared by the command modules: who is calling, and may they."""

from __future__ import annotations

import click
from returns.pipeline import is_successful

from orderdesk.application.authorization import Permission, authorize
from orderdesk.application.dto import LineItemDTO, UserDTO
from orderdesk.application.line_items import LineItemResult
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.user import Role
from orderdesk.infrastructure.bootstrap import session_store, unit_of_work


def current_user() -> UserDTO:
    """The logged-in user, re-read from the database."""
    session = session_store().load()
    if session is None:
        raise click.ClickException("Not logged in. Run 'orderdesk auth login' first.")

    with unit_of_work() as uow:
        user = uow.users.get_by_id(session.user_id)
    if user is None:
        session_store().clear()
        raise click.ClickException("Not logged in. Run 'orderdesk auth login' first.")
    return UserDTO.from_domain(user)


def require(permission: Permission) -> UserDTO:
    """Return the current user if their role holds ``permission``."""
    user = current_user()
    try:
        authorize(Role.parse(user.role), permission)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    return user


def unwrap(result: LineItemResult) -> LineItemDTO:
    """Turn a line-item result into its DTO, or into a CLI error."""
    if is_successful(result):
        return result.unwrap()
    raise click.ClickException(str(result.failure()))
