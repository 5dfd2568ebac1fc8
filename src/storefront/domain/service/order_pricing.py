"""Domain service: order total calculation.

Tax is charged on the subtotal *before* any discount, and shipping is free
only when the subtotal is strictly above the threshold.
"""

from __future__ import annotations

from decimal import Decimal

from storefront.domain.model.order import OrderTotals
from storefront.domain.model.value_objects import Money

TAX_RATE = Decimal("0.10")
FREE_SHIPPING_THRESHOLD = Money(Decimal("50.00"))
FLAT_SHIPPING_FEE = Money(Decimal("5.99"))


def shipping_for(subtotal: Money) -> Money:
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return Money.zero()
    return FLAT_SHIPPING_FEE


def calculate_totals(subtotal: Money, discount: Money | None = None) -> OrderTotals:
    discount = discount if discount is not None else Money.zero()
    tax = (subtotal * TAX_RATE).rounded()
    shipping = shipping_for(subtotal)
    total = (subtotal - discount) + tax + shipping
    return OrderTotals(
        subtotal=subtotal,
        discount=discount,
        tax=tax,
        shipping=shipping,
        total=total,
    )
