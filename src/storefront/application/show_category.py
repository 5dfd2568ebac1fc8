"""Application service: Show Category use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.category import Category
from storefront.domain.model.product import Product
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class CategoryDetail:
    """A category together with the products currently on sale in it."""

    category: Category
    products: list[Product]


class ShowCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, category_id: str) -> CategoryDetail:
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category with ID '{category_id}' not found")

        products = [
            p
            for p in self._product_repo.list_all()
            if p.category_id == category_id and p.is_active
        ]
        return CategoryDetail(category=category, products=products)
