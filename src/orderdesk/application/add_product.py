"""Application service: Add Product use case."""

from __future__ import annotations

from orderdesk.application.dto import ProductDTO
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        available: bool = True,
        description: str | None = None,
        category: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog with its initial stock."""
        product = Product.create(
            name=name,
            price=Money.of(price),
            stock=stock,
            available=available,
            description=description,
            category=category,
        )

        with self._uow as uow:
            if uow.products.get_by_name(product.name) is not None:
                raise ValidationError(f"Product '{product.name}' already exists")
            product = uow.products.add(product)
            uow.commit()

        return ProductDTO.from_domain(product)
