"""Product aggregate.

Products live independently of orders. Their ``stock`` is the pool that
line items draw from; only the line-item reconciliation service moves it
after the product has been created.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from orderdesk.domain.exceptions import (
    InsufficientStockError,
    ProductUnavailableError,
    ValidationError,
)
from orderdesk.domain.model.value_objects import Money

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 300
MAX_CATEGORY_LENGTH = 50
MAX_PRICE = Money(Decimal("99999.99"))
MAX_INITIAL_STOCK = 1000


@dataclass
class Product:
    """A product in the catalog.

    The ``__init__`` does not validate so repositories can reconstitute
    stored rows; new products go through ``Product.create()``.
    """

    id: int | None
    name: str
    price: Money
    stock: int = 0
    available: bool = True
    description: str | None = None
    category: str | None = None
    version: int = 1

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock: int = 0,
        available: bool = True,
        description: str | None = None,
        category: str | None = None,
    ) -> Product:
        if not isinstance(stock, int) or stock < 0:
            raise ValidationError("Stock cannot be negative")
        if stock > MAX_INITIAL_STOCK:
            raise ValidationError(f"Stock cannot exceed {MAX_INITIAL_STOCK} units")

        product = Product(id=None, name="", price=Money.zero(), stock=stock)
        product.rename(name)
        product.update_price(price)
        product.describe(description, category)
        product.available = available
        return product

    # --- Mutations on catalog details -----------------------------------------

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
            )
        self.name = name.strip()

    def update_price(self, new_price: Money) -> None:
        """Change the unit price.

        Existing line items keep the subtotal computed when they were last
        written; only later adds and edits use the new price.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if new_price > MAX_PRICE:
            raise ValidationError(f"Product price cannot exceed {MAX_PRICE}")
        self.price = new_price

    def describe(self, description: str | None, category: str | None) -> None:
        if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
            )
        if category is not None and len(category) > MAX_CATEGORY_LENGTH:
            raise ValidationError(
                f"Category cannot exceed {MAX_CATEGORY_LENGTH} characters"
            )
        self.description = description or None
        self.category = category or None

    # --- Inventory queries ----------------------------------------------------

    @property
    def is_orderable(self) -> bool:
        """True if the product can currently appear in a selection list."""
        return self.available and self.stock > 0

    def has_stock_for(self, quantity: int) -> bool:
        return self.available and self.stock >= quantity

    def ensure_can_supply(self, quantity: int) -> None:
        """Raise unless ``quantity`` more units may be allocated right now."""
        if not self.available:
            raise ProductUnavailableError(
                f"Product '{self.name}' is not available for sale"
            )
        if quantity > self.stock:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.stock} available)"
            )
