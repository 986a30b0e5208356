"""Application service: List Users use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import UserDTO
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class ListUsersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[UserDTO]:
        with self._uow as uow:
            users = uow.users.list_all()
        return [UserDTO.from_domain(u) for u in users]
