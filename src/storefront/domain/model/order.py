"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its items.  Status changes do not
touch stock themselves; ``stock_effect_of`` tells the application layer which
stock reconciliation a transition requires so it can run it *before* the new
status is applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ConflictError, FieldViolation, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class StockEffect(Enum):
    NONE = "NONE"
    RESTORE = "RESTORE"  # put the items back on the shelf
    RESERVE = "RESERVE"  # take the items off the shelf again


@dataclass(frozen=True)
class OrderItem:
    """Captures the price of a product at order-creation time.

    Immutable once created; owned exclusively by its Order.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    discount: Money
    tax: Money
    shipping: Money
    total: Money


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    user_id: str
    items: list[OrderItem]
    totals: OrderTotals
    shipping_address: str
    payment_method: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    offer_id: str | None = None
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        user_id: str,
        items: list[OrderItem],
        totals: OrderTotals,
        shipping_address: str,
        payment_method: str,
        offer_id: str | None = None,
        notes: str = "",
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        violations: list[FieldViolation] = []
        if not items:
            violations.append(
                FieldViolation("items", "Order must contain at least one item")
            )
        elif len(items) > MAX_LINE_ITEMS:
            violations.append(
                FieldViolation("items", f"Maximum {MAX_LINE_ITEMS} items per order")
            )
        if not shipping_address or not shipping_address.strip():
            violations.append(
                FieldViolation("shipping_address", "Shipping address is required")
            )
        if not payment_method or not payment_method.strip():
            violations.append(
                FieldViolation("payment_method", "Payment method is required")
            )
        if violations:
            raise ValidationError("Invalid order", violations)

        return Order(
            id=None,
            order_number=order_number,
            user_id=user_id,
            items=list(items),
            totals=totals,
            shipping_address=shipping_address.strip(),
            payment_method=payment_method.strip(),
            offer_id=offer_id,
            notes=notes,
        )

    # --- State transitions ----------------------------------------------------

    def stock_effect_of(self, new_status: OrderStatus) -> StockEffect:
        """Which stock reconciliation moving to *new_status* requires.

        Only the edges into and out of CANCELLED move stock; repeating a
        status (including a second cancel) moves nothing.
        """
        if new_status == self.status:
            return StockEffect.NONE
        if new_status == OrderStatus.CANCELLED:
            return StockEffect.RESTORE
        if self.status == OrderStatus.CANCELLED:
            return StockEffect.RESERVE
        return StockEffect.NONE

    def move_to(self, new_status: OrderStatus) -> OrderStatus:
        """Apply a status change and return the previous status."""
        previous = self.status
        self.status = new_status
        return previous

    def update_payment_status(self, payment_status: PaymentStatus) -> None:
        self.payment_status = payment_status

    def ensure_deletable(self) -> None:
        if self.status != OrderStatus.CANCELLED:
            raise ConflictError("Only cancelled orders can be deleted")

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        return self.totals.total

    def references_product(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.items)
