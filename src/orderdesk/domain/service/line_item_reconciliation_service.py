"""Domain service: Line Item Reconciliation.

Adding, editing or removing a line item touches three aggregates at once:
the line item row, the product's ``stock`` and the order's ``total``. This
service is the only writer of ``stock`` and ``total`` after creation, and
keeps them consistent with the set of active line items:

    order.total == sum(item.subtotal for item in order.items)
    product.stock == initial stock - sum(quantities allocated to its items)

Every operation is two-phase:
  Phase 1, load and validate: read the current rows (with their version
            tokens) and check every business rule.  Fails before any write.
  Phase 2, mutate: explicit-field, version-checked writes through the
            repositories.

The caller is expected to run each operation inside a single unit of work
so a failure in phase 2 rolls back the writes already made.
"""

from __future__ import annotations

import logging

from orderdesk.domain.exceptions import (
    LineItemNotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
    ProductUnavailableError,
)
from orderdesk.domain.model.order import LineItem, Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Quantity
from orderdesk.domain.repository.line_item_repository import LineItemRepository
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class LineItemReconciliationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        line_item_repo: LineItemRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._line_item_repo = line_item_repo

    def add(self, order_id: int, product_id: int, quantity: int) -> LineItem:
        """Allocate ``quantity`` units of a product to an order.

        Absent -> Active.  Consumes stock and grows the order total by the
        new item's subtotal.
        """
        # Phase 1: load and validate
        qty = Quantity(quantity)
        order = self._require_order(order_id)
        product = self._require_product(product_id)
        product.ensure_can_supply(qty.value)

        subtotal = product.price * qty.value

        # Phase 2: mutate
        item = self._line_item_repo.add(
            LineItem(
                id=None,
                order_id=order.id,  # type: ignore[arg-type]
                product_id=product.id,  # type: ignore[arg-type]
                quantity=qty,
                subtotal=subtotal,
            )
        )
        self._product_repo.adjust_stock(
            product.id, -qty.value, expected_version=product.version
        )
        self._order_repo.adjust_total(
            order.id, subtotal.amount, expected_version=order.version
        )
        logger.debug(
            f"Allocated {qty} x product #{product.id} to order #{order.id} "
            f"(subtotal {subtotal}, stock left {product.stock - qty.value})"
        )
        return item

    def update(self, line_item_id: int, new_quantity: int) -> LineItem:
        """Change a line item's quantity.

        Active -> Active.  The pre-edit quantity and subtotal are re-read
        from the store here, never taken from the caller.  Only the
        *increase* is checked against the product's current stock; the
        units already held by the item are not re-validated.
        """
        # Phase 1: load and validate
        qty = Quantity(new_quantity)
        item = self._require_line_item(line_item_id)
        product = self._require_product(item.product_id)
        if not product.available:
            raise ProductUnavailableError(
                f"Product '{product.name}' is not available for sale"
            )

        diff = qty.value - item.quantity.value
        if diff > 0:
            product.ensure_can_supply(diff)

        new_subtotal = product.price * qty.value
        total_delta = item.subtotal.delta_to(new_subtotal)
        order = self._require_order(item.order_id)

        # Phase 2: mutate
        updated = self._line_item_repo.update_quantity(
            item.id,
            qty,
            new_subtotal,
            expected_version=item.version,
        )
        if diff != 0:
            self._product_repo.adjust_stock(
                product.id, -diff, expected_version=product.version
            )
        if total_delta != 0:
            self._order_repo.adjust_total(
                order.id, total_delta, expected_version=order.version
            )
        logger.debug(
            f"Line item #{item.id}: quantity {item.quantity} -> {qty}, "
            f"stock delta {-diff}, total delta {total_delta}"
        )
        return updated

    def remove(self, line_item_id: int) -> LineItem:
        """Delete a line item, returning its units and subtotal.

        Active -> Absent.  Not idempotent: removing an item twice fails
        with LineItemNotFoundError the second time.
        """
        # Phase 1: load and validate
        item = self._require_line_item(line_item_id)
        product = self._require_product(item.product_id)
        order = self._require_order(item.order_id)

        # Phase 2: mutate
        self._line_item_repo.delete(item.id, expected_version=item.version)
        self._product_repo.adjust_stock(
            product.id, item.quantity.value, expected_version=product.version
        )
        self._order_repo.adjust_total(
            order.id, -item.subtotal.amount, expected_version=order.version
        )
        logger.debug(
            f"Removed line item #{item.id}: restored {item.quantity} x product "
            f"#{product.id}, order #{order.id} total -{item.subtotal}"
        )
        return item

    # --- Internal helpers -----------------------------------------------------

    def _require_order(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order #{order_id} not found")
        return order

    def _require_product(self, product_id: int) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product #{product_id} not found")
        return product

    def _require_line_item(self, line_item_id: int) -> LineItem:
        item = self._line_item_repo.get_by_id(line_item_id)
        if item is None:
            raise LineItemNotFoundError(f"Line item #{line_item_id} not found")
        return item
