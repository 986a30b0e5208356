"""SQLAlchemy-backed implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from orderdesk.domain.exceptions import (
    ConcurrencyConflictError,
    ConflictError,
    UserNotFoundError,
)
from orderdesk.domain.model.user import Role, User
from orderdesk.domain.repository.user_repository import UserRepository
from orderdesk.infrastructure.persistence.database import versioned_update
from orderdesk.infrastructure.persistence.tables import OrderRow, UserRow


class SqlUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: int) -> User | None:
        row = self._session.get(UserRow, user_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        stmt = select(UserRow).where(func.lower(UserRow.email) == email.strip().lower())
        row = self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[User]:
        stmt = select(UserRow).order_by(UserRow.id)
        rows = self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalars()
        return [self._to_domain(row) for row in rows]

    def add(self, user: User) -> User:
        row = UserRow(
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
            version=1,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_domain(row)

    def update(self, user: User) -> User:
        updated = versioned_update(
            self._session,
            UserRow,
            user.id,  # type: ignore[arg-type]
            user.version,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
        )
        if not updated:
            if self._session.get(UserRow, user.id) is None:
                raise UserNotFoundError(f"User #{user.id} not found")
            raise ConcurrencyConflictError(f"User #{user.id} was modified by another user")
        return self.get_by_id(user.id)  # type: ignore[arg-type,return-value]

    def delete(self, user_id: int) -> None:
        if self._session.get(UserRow, user_id) is None:
            raise UserNotFoundError(f"User #{user_id} not found")

        has_orders = self._session.execute(
            select(OrderRow.id).where(OrderRow.customer_id == user_id).limit(1)
        ).first()
        if has_orders is not None:
            raise ConflictError(
                f"User #{user_id} has orders and cannot be deleted"
            )
        self._session.execute(delete(UserRow).where(UserRow.id == user_id))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: UserRow) -> User:
        return User(
            id=row.id,
            name=row.name,
            email=row.email,
            password_hash=row.password_hash,
            role=Role(row.role),
            version=row.version,
        )
