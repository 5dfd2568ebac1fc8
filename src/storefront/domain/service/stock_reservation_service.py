"""Domain service: Stock Reservation.

Coordinates the cross-aggregate work of taking an order's items off the
shelf and putting them back.

Reservation is two-phase so a failing product never leaves stock partially
reserved:
  Phase 1: load and validate every product before any mutation.
  Phase 2: decrement through the repository's conditional primitive.  If a
            decrement is still refused (someone took the stock in between),
            the decrements already applied are given back.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.model.order import OrderItem
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def _quantities(items: list[OrderItem]) -> dict[str, int]:
    result: dict[str, int] = {}
    for item in items:
        result[item.product_id] = result.get(item.product_id, 0) + item.quantity.value
    return result


def _names(items: list[OrderItem]) -> dict[str, str]:
    return {item.product_id: item.product_name for item in items}


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_available(self, items: list[OrderItem]) -> None:
        """Phase 1: fail if any product is missing or short on stock."""
        names = _names(items)
        for product_id, qty in _quantities(items).items():
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product '{names[product_id]}' no longer exists"
                )
            if not product.has_stock(qty):
                raise ConflictError(
                    f"Insufficient stock for {product.name} "
                    f"(need {qty}, have {product.stock})"
                )

    def reserve(self, items: list[OrderItem]) -> None:
        """Take every item off the shelf, or none of them."""
        self.check_available(items)

        names = _names(items)
        reserved: list[tuple[str, int]] = []
        for product_id, qty in _quantities(items).items():
            if not self._product_repo.decrement_stock_if_available(product_id, qty):
                logger.warning(
                    "Stock for product %s changed during reservation; "
                    "releasing %d already reserved line(s)",
                    product_id,
                    len(reserved),
                )
                self._give_back(reserved)
                raise ConflictError(f"Insufficient stock for {names[product_id]}")
            reserved.append((product_id, qty))

    def restore(self, items: list[OrderItem]) -> None:
        """Put every item back on the shelf."""
        for product_id, qty in _quantities(items).items():
            self._product_repo.increment_stock(product_id, qty)

    def _give_back(self, reserved: list[tuple[str, int]]) -> None:
        for product_id, qty in reserved:
            self._product_repo.increment_stock(product_id, qty)
