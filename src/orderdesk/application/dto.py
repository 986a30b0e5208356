"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.model.order import LineItem, Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.user import User


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line item as displayed to the user."""

    id: int
    order_id: int
    product_id: int
    quantity: int
    subtotal: str  # formatted, e.g. "$15.00"
    product_name: str = ""
    unit_price: str = ""

    @staticmethod
    def from_domain(item: LineItem, product: Product | None = None) -> LineItemDTO:
        return LineItemDTO(
            id=item.id,  # type: ignore[arg-type]
            order_id=item.order_id,
            product_id=item.product_id,
            quantity=item.quantity.value,
            subtotal=str(item.subtotal),
            product_name=product.name if product else "",
            unit_price=str(product.price) if product else "",
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_id: int
    status: str
    items: list[LineItemDTO]
    total: str
    created_at: str
    customer_name: str = ""

    @staticmethod
    def from_domain(
        order: Order,
        items: list[LineItemDTO] | None = None,
        customer_name: str = "",
    ) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_id=order.customer_id,
            status=order.status.value,
            items=items or [],
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            customer_name=customer_name,
        )


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    price: str
    stock: int
    available: bool
    description: str
    category: str

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            price=str(product.price),
            stock=product.stock,
            available=product.available,
            description=product.description or "",
            category=product.category or "",
        )


@dataclass(frozen=True)
class UserDTO:
    """Output: a user without credentials."""

    id: int
    name: str
    email: str
    role: str

    @staticmethod
    def from_domain(user: User) -> UserDTO:
        return UserDTO(
            id=user.id,  # type: ignore[arg-type]
            name=user.name,
            email=user.email,
            role=user.role.value,
        )
