"""Abstract repository for the User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by email (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user, ordered by ID."""

    @abstractmethod
    def add(self, user: User) -> User:
        """Insert a new user and return it with its assigned ID."""

    @abstractmethod
    def update(self, user: User) -> User:
        """Persist name, email, password hash and role of an existing user."""

    @abstractmethod
    def delete(self, user_id: int) -> None:
        """Delete a user (UserNotFoundError, ConflictError if they have orders)."""
