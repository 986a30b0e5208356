"""Application service: Authenticate use case (login)."""

from __future__ import annotations

import logging

from orderdesk.application.dto import UserDTO
from orderdesk.domain.exceptions import AuthenticationError
from orderdesk.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AuthenticateHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, email: str, password: str) -> UserDTO:
        """Check credentials and return the user.

        The error message never says whether the email or the password was
        wrong.
        """
        with self._uow as uow:
            user = uow.users.get_by_email(email.strip())

        if user is None or not user.check_password(password):
            logger.warning(f"Failed login attempt for '{email}'")
            raise AuthenticationError("Invalid credentials. Please try again.")

        logger.info(f"User #{user.id} logged in ({user.role.value})")
        return UserDTO.from_domain(user)
