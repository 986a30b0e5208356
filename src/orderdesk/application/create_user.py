"""Application service: Create User use case."""

from __future__ import annotations

from orderdesk.application.dto import UserDTO
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.user import Role, User
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class CreateUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, email: str, password: str, role: str) -> UserDTO:
        """Register a user; emails are unique regardless of case."""
        user = User.create(name=name, email=email, password=password, role=Role.parse(role))

        with self._uow as uow:
            if uow.users.get_by_email(user.email) is not None:
                raise ValidationError(f"Email '{user.email}' is already registered")
            user = uow.users.add(user)
            uow.commit()

        return UserDTO.from_domain(user)
