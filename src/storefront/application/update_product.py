"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        product_id: str,
        new_price: str | None = None,
        is_active: bool | None = None,
    ) -> Product:
        """Update a product's price or availability.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        require_admin(principal)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if new_price is not None:
            product.update_price(Money.of(new_price))
        if is_active is True:
            product.activate()
        elif is_active is False:
            product.deactivate()

        self._product_repo.save(product)
        return product
