"""Application service: Update User use case."""

from __future__ import annotations

from orderdesk.application.dto import UserDTO
from orderdesk.domain.exceptions import UserNotFoundError, ValidationError
from orderdesk.domain.model.user import Role
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class UpdateUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        role: str | None = None,
    ) -> UserDTO:
        """Update a user; ``None`` leaves a field unchanged."""
        with self._uow as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError(f"User #{user_id} not found")

            if name is not None:
                user.rename(name)
            if email is not None:
                user.change_email(email)
                clash = uow.users.get_by_email(user.email)
                if clash is not None and clash.id != user.id:
                    raise ValidationError(f"Email '{user.email}' is already registered")
            if password:
                user.set_password(password)
            if role is not None:
                user.role = Role.parse(role)

            user = uow.users.update(user)
            uow.commit()

        return UserDTO.from_domain(user)
