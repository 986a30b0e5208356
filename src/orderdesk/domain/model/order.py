"""Order aggregate and its line items.

The Order owns its line items; deleting an order takes its items with it,
but an order that still has items may not be deleted directly. The running
``total`` is stored rather than derived so it can be adjusted with a single
version-checked write whenever a line item changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from orderdesk.domain.exceptions import OrderHasItemsError, ValidationError
from orderdesk.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "Pending"
    IN_PROCESS = "InProcess"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        normalized = raw.replace("_", "").replace(" ", "").lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        choices = ", ".join(s.value for s in cls)
        raise ValidationError(f"Unknown order status '{raw}' (expected one of {choices})")


@dataclass
class LineItem:
    """A (product, quantity) allocation within an order.

    ``subtotal`` is always ``product.price * quantity`` as computed by the
    reconciliation service at the time of the last add or edit.
    """

    id: int | None
    order_id: int
    product_id: int
    quantity: Quantity
    subtotal: Money
    version: int = 1


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted orders
    without re-validating.
    """

    id: int | None
    customer_id: int
    total: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.PENDING
    items: list[LineItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(customer_id: int) -> Order:
        """Create an empty pending order; items are added one by one."""
        if not isinstance(customer_id, int) or customer_id <= 0:
            raise ValidationError("A valid customer is required")
        return Order(id=None, customer_id=customer_id)

    # --- State transitions ----------------------------------------------------

    def change_status(self, status: OrderStatus) -> None:
        if not isinstance(status, OrderStatus):
            raise ValidationError(f"Invalid order status: {status!r}")
        self.status = status

    def ensure_deletable(self) -> None:
        """An order with line items must be emptied before it is deleted."""
        if self.items:
            raise OrderHasItemsError(
                f"Order #{self.id} still has {len(self.items)} item(s); "
                f"remove them before deleting the order"
            )

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        """Sum of the loaded items' subtotals (only meaningful when loaded)."""
        result = Money(Decimal("0.00"))
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def is_settled(self) -> bool:
        """True if the stored total matches the loaded items."""
        return self.total == self.items_total
