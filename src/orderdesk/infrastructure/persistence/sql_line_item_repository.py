"""SQLAlchemy-backed implementation of LineItemRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from orderdesk.domain.exceptions import ConcurrencyConflictError, LineItemNotFoundError
from orderdesk.domain.model.order import LineItem
from orderdesk.domain.model.value_objects import Money, Quantity
from orderdesk.domain.repository.line_item_repository import LineItemRepository
from orderdesk.infrastructure.persistence.database import versioned_update
from orderdesk.infrastructure.persistence.tables import LineItemRow


class SqlLineItemRepository(LineItemRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- LineItemRepository interface -----------------------------------------

    def get_by_id(self, line_item_id: int) -> LineItem | None:
        row = self._load(line_item_id)
        return self._to_domain(row) if row is not None else None

    def list_for_order(self, order_id: int) -> list[LineItem]:
        stmt = (
            select(LineItemRow)
            .where(LineItemRow.order_id == order_id)
            .order_by(LineItemRow.id)
        )
        rows = self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalars()
        return [self._to_domain(row) for row in rows]

    def exists_for_product(self, product_id: int) -> bool:
        stmt = select(LineItemRow.id).where(LineItemRow.product_id == product_id).limit(1)
        return self._session.execute(stmt).first() is not None

    def add(self, item: LineItem) -> LineItem:
        row = LineItemRow(
            order_id=item.order_id,
            product_id=item.product_id,
            quantity=item.quantity.value,
            subtotal=item.subtotal.amount,
            version=1,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_domain(row)

    def update_quantity(
        self,
        line_item_id: int,
        quantity: Quantity,
        subtotal: Money,
        expected_version: int | None = None,
    ) -> LineItem:
        row = self._require(line_item_id, expected_version)
        if not versioned_update(
            self._session,
            LineItemRow,
            line_item_id,
            row.version,
            quantity=quantity.value,
            subtotal=subtotal.amount,
        ):
            raise self._missing_or_conflict(line_item_id)
        return self.get_by_id(line_item_id)  # type: ignore[return-value]

    def delete(self, line_item_id: int, expected_version: int | None = None) -> None:
        row = self._require(line_item_id, expected_version)
        result = self._session.execute(
            delete(LineItemRow).where(
                LineItemRow.id == line_item_id,
                LineItemRow.version == row.version,
            )
        )
        if result.rowcount != 1:
            raise self._missing_or_conflict(line_item_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: LineItemRow) -> LineItem:
        return LineItem(
            id=row.id,
            order_id=row.order_id,
            product_id=row.product_id,
            quantity=Quantity(row.quantity),
            subtotal=Money(row.subtotal),
            version=row.version,
        )

    # --- Query helpers --------------------------------------------------------

    def _load(self, line_item_id: int) -> LineItemRow | None:
        stmt = select(LineItemRow).where(LineItemRow.id == line_item_id)
        return self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def _require(self, line_item_id: int, expected_version: int | None) -> LineItemRow:
        row = self._load(line_item_id)
        if row is None:
            raise LineItemNotFoundError(f"Line item #{line_item_id} not found")
        if expected_version is not None and row.version != expected_version:
            raise ConcurrencyConflictError(
                f"Line item #{line_item_id} was modified by another user"
            )
        return row

    def _missing_or_conflict(self, line_item_id: int) -> Exception:
        if self._load(line_item_id) is None:
            return LineItemNotFoundError(f"Line item #{line_item_id} not found")
        return ConcurrencyConflictError(
            f"Line item #{line_item_id} was modified by another user"
        )
