"""Application service: List Orders use case (query).

Customers only ever see their own orders; admins see everyone's and may
narrow the listing to one user.
"""

from __future__ import annotations

from storefront.application.auth import Principal
from storefront.application.dto import OrderDTO, Page
from storefront.application.paging import check_paging
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        principal: Principal,
        page: int = 1,
        limit: int = 10,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
        user_id: str | None = None,
    ) -> Page[OrderDTO]:
        check_paging(page, limit)

        owner = principal.id if not principal.is_admin else user_id

        orders = [
            order
            for order in self._order_repo.list_all()
            if (owner is None or order.user_id == owner)
            and (status is None or order.status == status)
            and (payment_status is None or order.payment_status == payment_status)
        ]
        orders.sort(key=lambda o: o.created_at, reverse=True)

        return Page.slice([OrderDTO.from_order(o) for o in orders], page, limit)
