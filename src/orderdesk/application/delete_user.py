"""Application service: Delete User use case."""

from __future__ import annotations

from orderdesk.domain.repository.unit_of_work import UnitOfWork


class DeleteUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> None:
        """Delete a user who has no orders (ConflictError otherwise)."""
        with self._uow as uow:
            uow.users.delete(user_id)
            uow.commit()
