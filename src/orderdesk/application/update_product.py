"""Application service: Update Product use case.

Edits catalog details only.  Stock is deliberately absent: after creation
it moves exclusively through line-item reconciliation.
"""

from __future__ import annotations

from orderdesk.application.dto import ProductDTO
from orderdesk.domain.exceptions import ProductNotFoundError, ValidationError
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: int,
        name: str | None = None,
        price: str | None = None,
        available: bool | None = None,
        description: str | None = None,
        category: str | None = None,
    ) -> ProductDTO:
        """Update a product's details; ``None`` leaves a field unchanged.

        This does NOT affect existing line items; their subtotals were
        computed when they were added or last edited.
        """
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

            if name is not None:
                product.rename(name)
                clash = uow.products.get_by_name(product.name)
                if clash is not None and clash.id != product.id:
                    raise ValidationError(f"Product '{product.name}' already exists")
            if price is not None:
                product.update_price(Money.of(price))
            if available is not None:
                product.available = available
            product.describe(
                product.description if description is None else description,
                product.category if category is None else category,
            )

            product = uow.products.update_details(product)
            uow.commit()

        return ProductDTO.from_domain(product)
