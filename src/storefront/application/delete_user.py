"""Application service: Delete User use case (admin only)."""

from __future__ import annotations

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.user_repository import UserRepository


class DeleteUserHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._user_repo = user_repo
        self._order_repo = order_repo

    def handle(self, principal: Principal, user_id: str) -> None:
        require_admin(principal)

        if self._user_repo.get_by_id(user_id) is None:
            raise EntityNotFoundError(f"User with ID '{user_id}' not found")

        if any(o.user_id == user_id for o in self._order_repo.list_all()):
            raise ConflictError("Cannot delete user with existing orders")

        self._user_repo.delete(user_id)
