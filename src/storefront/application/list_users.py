"""Application service: List Users use case (admin query).

Users carry no creation time; the repository keeps them in registration
order, so the listing reverses it to show the newest accounts first.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.auth import Principal, require_admin
from storefront.application.dto import Page
from storefront.application.paging import check_paging
from storefront.domain.model.user import Role
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.repository.user_repository import UserRepository


@dataclass(frozen=True)
class UserSummary:
    """Output: one row of the user listing."""

    id: str
    email: str
    name: str
    role: str
    order_count: int
    review_count: int


class ListUsersHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        order_repo: OrderRepository,
        review_repo: ReviewRepository,
    ) -> None:
        self._user_repo = user_repo
        self._order_repo = order_repo
        self._review_repo = review_repo

    def handle(
        self,
        principal: Principal,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        role: Role | None = None,
    ) -> Page[UserSummary]:
        require_admin(principal)
        check_paging(page, limit)

        needle = search.strip().lower() if search else ""
        users = [
            user
            for user in reversed(self._user_repo.list_all())
            if (not needle or needle in user.name.lower() or needle in user.email)
            and (role is None or user.role == role)
        ]

        window = Page.slice(users, page, limit)
        orders = self._order_repo.list_all()
        reviews = self._review_repo.list_all()
        return Page(
            items=[
                UserSummary(
                    id=user.id,
                    email=user.email,
                    name=user.name,
                    role=user.role.value,
                    order_count=sum(1 for o in orders if o.user_id == user.id),
                    review_count=sum(1 for r in reviews if r.user_id == user.id),
                )
                for user in window.items
            ],
            page=window.page,
            limit=window.limit,
            total=window.total,
        )
