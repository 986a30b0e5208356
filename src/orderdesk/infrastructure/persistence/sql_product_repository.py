"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from orderdesk.domain.exceptions import (
    ConcurrencyConflictError,
    InvalidStateError,
    ProductInUseError,
    ProductNotFoundError,
)
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.infrastructure.persistence.database import versioned_update
from orderdesk.infrastructure.persistence.sql_line_item_repository import (
    SqlLineItemRepository,
)
from orderdesk.infrastructure.persistence.tables import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._load(product_id)
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Product | None:
        stmt = select(ProductRow).where(
            func.lower(ProductRow.name) == name.strip().lower()
        )
        row = self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        stmt = select(ProductRow).order_by(ProductRow.id)
        return self._fetch(stmt)

    def list_orderable(self) -> list[Product]:
        stmt = (
            select(ProductRow)
            .where(ProductRow.available.is_(True), ProductRow.stock > 0)
            .order_by(ProductRow.name)
        )
        return self._fetch(stmt)

    def add(self, product: Product) -> Product:
        row = ProductRow(
            name=product.name,
            description=product.description,
            category=product.category,
            price=product.price.amount,
            stock=product.stock,
            available=product.available,
            version=1,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_domain(row)

    def update_details(self, product: Product) -> Product:
        updated = versioned_update(
            self._session,
            ProductRow,
            product.id,  # type: ignore[arg-type]
            product.version,
            name=product.name,
            description=product.description,
            category=product.category,
            price=product.price.amount,
            available=product.available,
        )
        if not updated:
            raise self._missing_or_conflict(product.id)  # type: ignore[arg-type]
        return self.get_by_id(product.id)  # type: ignore[arg-type,return-value]

    def adjust_stock(
        self,
        product_id: int,
        delta: int,
        expected_version: int | None = None,
    ) -> Product:
        row = self._load(product_id)
        if row is None:
            raise ProductNotFoundError(f"Product #{product_id} not found")
        if expected_version is not None and row.version != expected_version:
            raise ConcurrencyConflictError(
                f"Product #{product_id} was modified by another user"
            )

        new_stock = row.stock + delta
        if new_stock < 0:
            raise InvalidStateError(
                f"Stock of product #{product_id} cannot go below zero "
                f"(have {row.stock}, change {delta})"
            )
        if not versioned_update(
            self._session, ProductRow, product_id, row.version, stock=new_stock
        ):
            raise self._missing_or_conflict(product_id)
        return self.get_by_id(product_id)  # type: ignore[return-value]

    def delete(self, product_id: int) -> None:
        if self._load(product_id) is None:
            raise ProductNotFoundError(f"Product #{product_id} not found")

        if SqlLineItemRepository(self._session).exists_for_product(product_id):
            raise ProductInUseError(
                f"Product #{product_id} is part of existing orders and cannot be deleted"
            )
        self._session.execute(delete(ProductRow).where(ProductRow.id == product_id))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money(row.price),
            stock=row.stock,
            available=row.available,
            description=row.description,
            category=row.category,
            version=row.version,
        )

    # --- Query helpers --------------------------------------------------------

    def _load(self, product_id: int) -> ProductRow | None:
        stmt = select(ProductRow).where(ProductRow.id == product_id)
        return self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def _fetch(self, stmt) -> list[Product]:
        rows = self._session.execute(
            stmt.execution_options(populate_existing=True)
        ).scalars()
        return [self._to_domain(row) for row in rows]

    def _missing_or_conflict(self, product_id: int) -> Exception:
        if self._load(product_id) is None:
            return ProductNotFoundError(f"Product #{product_id} not found")
        return ConcurrencyConflictError(
            f"Product #{product_id} was modified by another user"
        )
