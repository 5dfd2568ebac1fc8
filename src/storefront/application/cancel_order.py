"""Application service: Cancel Order use case.

A shortcut for moving an order to CANCELLED; the stock reconciliation rules
live in UpdateOrderHandler.
"""

from __future__ import annotations

from storefront.application.auth import Principal
from storefront.application.dto import OrderDTO
from storefront.application.update_order import UpdateOrderHandler
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._update = UpdateOrderHandler(order_repo, product_repo)

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        return self._update.handle(principal, order_id, status=OrderStatus.CANCELLED)
