"""Application service: List / Show Products use cases (queries)."""

from __future__ import annotations

from orderdesk.application.dto import ProductDTO
from orderdesk.domain.exceptions import ProductNotFoundError
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, orderable_only: bool = False) -> list[ProductDTO]:
        """List the catalog.

        With ``orderable_only`` only products that can be added to an order
        right now (available, stock left) are returned.
        """
        with self._uow as uow:
            if orderable_only:
                products = uow.products.list_orderable()
            else:
                products = uow.products.list_all()
        return [ProductDTO.from_domain(p) for p in products]


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> ProductDTO:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_domain(product)
