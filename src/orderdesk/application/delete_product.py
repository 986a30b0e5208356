"""Application service: Delete Product use case."""

from __future__ import annotations

from orderdesk.domain.repository.unit_of_work import UnitOfWork


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> None:
        """Delete a product that no line item references.

        Raises ProductInUseError otherwise; the line items must be removed
        first so their stock and totals are reconciled.
        """
        with self._uow as uow:
            uow.products.delete(product_id)
            uow.commit()
