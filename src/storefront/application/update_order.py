"""Application service: Update Order use case (admin only).

Changes status, payment status and notes.  Stock follows the status only on
the edges into and out of CANCELLED:

- cancelling puts every item back on the shelf, once, and cancelling an
  already-cancelled order leaves stock alone;
- reinstating a cancelled order takes the items off the shelf again, but
  only if *every* item is still in stock; otherwise nothing changes.

Stock is reconciled before the new status is persisted; if persisting fails
the stock change is reversed so a retry starts from the stored state.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from storefront.application.auth import Principal, require_admin
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    PersistenceError,
)
from storefront.domain.model.order import (
    Order,
    OrderStatus,
    PaymentStatus,
    StockEffect,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        order_id: int,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        require_admin(principal)

        stored = self._order_repo.get_by_id(order_id)
        if stored is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        order = replace(stored)

        svc = StockReservationService(self._product_repo)
        effect = StockEffect.NONE
        if status is not None:
            effect = order.stock_effect_of(status)
            if effect is StockEffect.RESTORE:
                svc.restore(order.items)
            elif effect is StockEffect.RESERVE:
                svc.reserve(order.items)
            previous = order.move_to(status)
            if previous != status:
                logger.info(
                    "Order %s moved from %s to %s (stock %s)",
                    order.order_number,
                    previous.value,
                    status.value,
                    effect.value,
                )

        if payment_status is not None:
            order.update_payment_status(payment_status)
        if notes is not None:
            order.notes = notes

        try:
            self._order_repo.save(order)
        except DomainException:
            self._undo(svc, effect, order)
            raise
        except Exception as exc:
            logger.exception("Failed to persist order %s", order.order_number)
            self._undo(svc, effect, order)
            raise PersistenceError("Failed to update order") from exc
        return OrderDTO.from_order(order)

    @staticmethod
    def _undo(svc: StockReservationService, effect: StockEffect, order: Order) -> None:
        """Reverse a stock effect whose status change was never stored."""
        if effect is StockEffect.RESTORE:
            try:
                svc.reserve(order.items)
            except ConflictError:
                logger.error(
                    "Order %s: restored stock was sold before it could be taken back",
                    order.order_number,
                )
        elif effect is StockEffect.RESERVE:
            svc.restore(order.items)
