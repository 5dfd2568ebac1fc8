"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import ceil
from typing import Generic, TypeVar

from storefront.domain.model.order import Order

T = TypeVar("T")


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    user_id: str
    status: str
    payment_status: str
    items: list[OrderItemDTO]
    subtotal: str
    discount: str
    tax: str
    shipping: str
    total: str
    offer_id: str | None
    created_at: str
    offer_outcome: str | None = None
    offer_message: str = ""

    @staticmethod
    def from_order(
        order: Order,
        offer_outcome: str | None = None,
        offer_message: str = "",
    ) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            user_id=order.user_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            subtotal=str(order.totals.subtotal),
            discount=str(order.totals.discount),
            tax=str(order.totals.tax),
            shipping=str(order.totals.shipping),
            total=str(order.totals.total),
            offer_id=order.offer_id,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            offer_outcome=offer_outcome,
            offer_message=offer_message,
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """Output: one page of a listing plus the numbers needed to page on."""

    items: list[T]
    page: int
    limit: int
    total: int
    pages: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pages", ceil(self.total / self.limit) if self.limit else 0)

    @staticmethod
    def slice(rows: list[T], page: int, limit: int) -> Page[T]:
        start = (page - 1) * limit
        return Page(items=rows[start:start + limit], page=page, limit=limit, total=len(rows))
