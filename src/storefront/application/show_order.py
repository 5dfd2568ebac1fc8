"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.auth import Principal, require_owner_or_admin
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        require_owner_or_admin(principal, order.user_id)
        return OrderDTO.from_order(order)
