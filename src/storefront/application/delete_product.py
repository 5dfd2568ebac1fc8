"""Application service: Delete Product use case.

A product that any order refers to is deactivated instead of removed so the
order history stays intact.
"""

from __future__ import annotations

import logging

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, principal: Principal, product_id: str) -> bool:
        """Return True if the product was deleted, False if deactivated."""
        require_admin(principal)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if any(o.references_product(product_id) for o in self._order_repo.list_all()):
            product.deactivate()
            self._product_repo.save(product)
            logger.info("Product %s deactivated: it has existing orders", product_id)
            return False

        self._product_repo.delete(product_id)
        logger.info("Product %s deleted", product_id)
        return True
