"""Application service: Delete Category use case."""

from __future__ import annotations

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository


class DeleteCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, principal: Principal, category_id: str) -> None:
        require_admin(principal)

        if self._category_repo.get_by_id(category_id) is None:
            raise EntityNotFoundError(f"Category with ID '{category_id}' not found")

        if any(p.category_id == category_id for p in self._product_repo.list_all()):
            raise ConflictError("Cannot delete category with existing products")

        self._category_repo.delete(category_id)
