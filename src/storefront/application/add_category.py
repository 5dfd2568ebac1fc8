"""Application service: Add Category use case."""

from __future__ import annotations

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import ConflictError, FieldViolation, ValidationError
from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository


class AddCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        principal: Principal,
        name: str,
        slug: str,
        description: str = "",
    ) -> Category:
        require_admin(principal)

        violations: list[FieldViolation] = []
        if not name or not name.strip():
            violations.append(FieldViolation("name", "Category name is required"))
        if not slug or not slug.strip():
            violations.append(FieldViolation("slug", "Slug is required"))
        if violations:
            raise ValidationError("Validation failed", violations)

        if self._category_repo.get_by_slug(slug.strip()) is not None:
            raise ConflictError(f"Category with slug '{slug}' already exists")

        category = Category(
            id=self._category_repo.next_id(),
            name=name.strip(),
            slug=slug.strip(),
            description=description,
        )
        self._category_repo.save(category)
        return category
