"""SQLAlchemy implementation of the UnitOfWork: one Session, one transaction."""

from __future__ import annotations

import logging

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from orderdesk.domain.exceptions import ConcurrencyConflictError
from orderdesk.domain.repository.unit_of_work import UnitOfWork
from orderdesk.infrastructure.persistence.sql_line_item_repository import (
    SqlLineItemRepository,
)
from orderdesk.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from orderdesk.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from orderdesk.infrastructure.persistence.sql_user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


def _is_lock_timeout(exc: BaseException | None) -> bool:
    """True for SQLite giving up on a write lock held by another connection."""
    return isinstance(exc, OperationalError) and "database is locked" in str(exc.orig)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        self.line_items = SqlLineItemRepository(self._session)
        self.users = SqlUserRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()  # type: ignore[union-attr]
            self._session = None
        if _is_lock_timeout(exc):
            logger.warning(f"Write lock timeout, transaction rolled back: {exc.orig}")
            raise ConcurrencyConflictError(
                "The database is busy with another change; try again"
            ) from exc

    def commit(self) -> None:
        self._session.commit()  # type: ignore[union-attr]

    def rollback(self) -> None:
        self._session.rollback()  # type: ignore[union-attr]
