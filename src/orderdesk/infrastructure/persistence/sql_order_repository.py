"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import timezone
from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from orderdesk.domain.exceptions import (
    ConcurrencyConflictError,
    InvalidStateError,
    OrderHasItemsError,
    OrderNotFoundError,
)
from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.infrastructure.persistence.database import versioned_update
from orderdesk.infrastructure.persistence.sql_line_item_repository import (
    SqlLineItemRepository,
)
from orderdesk.infrastructure.persistence.tables import LineItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int, include_items: bool = False) -> Order | None:
        row = self._load(order_id)
        if row is None:
            return None
        order = self._to_domain(row)
        if include_items:
            order.items = SqlLineItemRepository(self._session).list_for_order(order_id)
        return order

    def list_all(self, customer_id: int | None = None) -> list[Order]:
        stmt = select(OrderRow).order_by(OrderRow.id)
        if customer_id is not None:
            stmt = stmt.where(OrderRow.customer_id == customer_id)
        rows = self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalars()
        return [self._to_domain(row) for row in rows]

    def add(self, order: Order) -> Order:
        row = OrderRow(
            customer_id=order.customer_id,
            created_at=order.created_at,
            status=order.status.value,
            total=order.total.amount,
            version=1,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_domain(row)

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_version: int | None = None,
    ) -> Order:
        row = self._require(order_id, expected_version)
        if not versioned_update(
            self._session, OrderRow, order_id, row.version, status=status.value
        ):
            raise self._missing_or_conflict(order_id)
        return self.get_by_id(order_id)  # type: ignore[return-value]

    def adjust_total(
        self,
        order_id: int,
        delta: Decimal,
        expected_version: int | None = None,
    ) -> Order:
        row = self._require(order_id, expected_version)

        new_total = row.total + Decimal(delta)
        if new_total < 0:
            raise InvalidStateError(
                f"Total of order #{order_id} cannot go below zero "
                f"(have {row.total}, change {delta})"
            )
        if not versioned_update(
            self._session, OrderRow, order_id, row.version, total=new_total
        ):
            raise self._missing_or_conflict(order_id)
        return self.get_by_id(order_id)  # type: ignore[return-value]

    def delete(self, order_id: int) -> None:
        if self._load(order_id) is None:
            raise OrderNotFoundError(f"Order #{order_id} not found")

        item_count = self._session.execute(
            select(func.count(LineItemRow.id)).where(LineItemRow.order_id == order_id)
        ).scalar_one()
        if item_count:
            raise OrderHasItemsError(
                f"Order #{order_id} still has {item_count} item(s); "
                f"remove them before deleting the order"
            )
        self._session.execute(delete(OrderRow).where(OrderRow.id == order_id))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        created_at = row.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=row.id,
            customer_id=row.customer_id,
            total=Money(row.total),
            status=OrderStatus(row.status),
            created_at=created_at,
            version=row.version,
        )

    # --- Query helpers --------------------------------------------------------

    def _load(self, order_id: int) -> OrderRow | None:
        stmt = select(OrderRow).where(OrderRow.id == order_id)
        return self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def _require(self, order_id: int, expected_version: int | None) -> OrderRow:
        row = self._load(order_id)
        if row is None:
            raise OrderNotFoundError(f"Order #{order_id} not found")
        if expected_version is not None and row.version != expected_version:
            raise ConcurrencyConflictError(
                f"Order #{order_id} was modified by another user"
            )
        return row

    def _missing_or_conflict(self, order_id: int) -> Exception:
        if self._load(order_id) is None:
            return OrderNotFoundError(f"Order #{order_id} not found")
        return ConcurrencyConflictError(f"Order #{order_id} was modified by another user")
