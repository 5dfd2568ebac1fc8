"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    FieldViolation,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        principal: Principal,
        name: str,
        slug: str,
        price: str,
        category_id: str,
        stock: int = 0,
        is_active: bool = True,
    ) -> Product:
        """Add a new product to the catalog."""
        require_admin(principal)

        violations: list[FieldViolation] = []
        if not name or not name.strip():
            violations.append(FieldViolation("name", "Product name is required"))
        if not slug or not slug.strip():
            violations.append(FieldViolation("slug", "Slug is required"))
        if stock < 0:
            violations.append(FieldViolation("stock", "Stock cannot be negative"))
        if violations:
            raise ValidationError("Validation failed", violations)

        amount = Money.of(price)
        if amount.is_zero():
            raise ValidationError(
                "Validation failed",
                [FieldViolation("price", "Product price must be greater than zero")],
            )

        if self._product_repo.get_by_slug(slug.strip()) is not None:
            raise ConflictError(f"Product with slug '{slug}' already exists")
        if self._category_repo.get_by_id(category_id) is None:
            raise EntityNotFoundError(f"Category with ID '{category_id}' not found")

        product = Product(
            id=self._product_repo.next_id(),
            name=name.strip(),
            slug=slug.strip(),
            price=amount,
            category_id=category_id,
            stock=stock,
            is_active=is_active,
        )
        self._product_repo.save(product)
        logger.info("Product %s '%s' added", product.id, product.name)
        return product
