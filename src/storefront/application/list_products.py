"""Application service: List Products use case (query).

Shoppers see active products only; ``include_inactive`` is the catalogue
view an administrator works from.
"""

from __future__ import annotations

from storefront.application.dto import Page
from storefront.application.paging import check_paging
from storefront.domain.model.product import Product
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        page: int = 1,
        limit: int = 10,
        category_slug: str | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> Page[Product]:
        check_paging(page, limit)

        category_id = None
        if category_slug:
            category = self._category_repo.get_by_slug(category_slug.strip())
            if category is None:
                return Page(items=[], page=page, limit=limit, total=0)
            category_id = category.id

        needle = search.strip().lower() if search else ""
        products = [
            product
            for product in reversed(self._product_repo.list_all())
            if (include_inactive or product.is_active)
            and (category_id is None or product.category_id == category_id)
            and needle in product.name.lower()
        ]
        return Page.slice(products, page, limit)
