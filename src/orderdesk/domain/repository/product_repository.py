"""Abstract repository for the Product aggregate (the product inventory store).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.

Every write is an explicit-field update: ``adjust_stock`` touches only
``stock`` and ``update_details`` never touches it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by ID."""

    @abstractmethod
    def list_orderable(self) -> list[Product]:
        """Return products that are available and have stock left."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and return it with its assigned ID."""

    @abstractmethod
    def update_details(self, product: Product) -> Product:
        """Write name, description, category, price and availability.

        Checks ``product.version`` against the stored row; raises
        ProductNotFoundError or ConcurrencyConflictError.
        """

    @abstractmethod
    def adjust_stock(
        self,
        product_id: int,
        delta: int,
        expected_version: int | None = None,
    ) -> Product:
        """Add ``delta`` (may be negative) to the product's stock.

        Raises ProductNotFoundError if the product is missing,
        ConcurrencyConflictError if ``expected_version`` no longer matches,
        and InvalidStateError if the stock would drop below zero.
        """

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Delete a product.

        Raises ProductNotFoundError, or ProductInUseError while any line
        item still references it.
        """
