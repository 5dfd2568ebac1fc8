"""Application service: Delete Order use case (admin only).

Only cancelled orders can be deleted, so their stock has already been
returned.  Deleting an order removes its items with it.
"""

from __future__ import annotations

import logging

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, order_id: int) -> None:
        require_admin(principal)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.ensure_deletable()
        self._order_repo.delete(order_id)
        logger.info("Order %s deleted", order.order_number)
