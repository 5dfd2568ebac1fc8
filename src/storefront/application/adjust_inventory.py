"""Application service: Adjust Inventory use case (admin only).

Manual stock corrections.  ``subtract`` and ``set`` clamp at zero rather
than failing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    FieldViolation,
    ValidationError,
)
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class InventoryOperation(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    SET = "set"


@dataclass(frozen=True)
class InventoryAdjustment:
    product_id: str
    operation: str
    quantity: int
    previous_stock: int
    new_stock: int
    reason: str = ""


class AdjustInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        product_id: str,
        operation: InventoryOperation,
        quantity: int,
        reason: str = "",
    ) -> InventoryAdjustment:
        require_admin(principal)

        if operation is not InventoryOperation.SET and quantity <= 0:
            raise ValidationError(
                "Validation failed",
                [FieldViolation("quantity", "Quantity must be positive")],
            )

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        previous = product.stock
        if operation is InventoryOperation.ADD:
            self._product_repo.increment_stock(product_id, quantity)
        elif operation is InventoryOperation.SUBTRACT:
            taken = min(quantity, previous)
            if taken and not self._product_repo.decrement_stock_if_available(
                product_id, taken
            ):
                raise ConflictError(
                    f"Stock for {product.name} changed during the adjustment"
                )
        else:
            product.set_stock(quantity)
            self._product_repo.set_stock(product_id, product.stock)

        current = self._product_repo.get_by_id(product_id)
        logger.info(
            "Stock for product %s: %s %d (%d -> %d) %s",
            product_id,
            operation.value,
            quantity,
            previous,
            current.stock,
            reason,
        )
        return InventoryAdjustment(
            product_id=product_id,
            operation=operation.value,
            quantity=quantity,
            previous_stock=previous,
            new_stock=current.stock,
            reason=reason,
        )
