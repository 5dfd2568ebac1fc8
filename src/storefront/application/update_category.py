"""Application service: Update Category use case (admin only)."""

from __future__ import annotations

from dataclasses import replace

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    FieldViolation,
    ValidationError,
)
from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository


class UpdateCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        principal: Principal,
        category_id: str,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> Category:
        require_admin(principal)

        existing = self._category_repo.get_by_id(category_id)
        if existing is None:
            raise EntityNotFoundError(f"Category with ID '{category_id}' not found")

        violations: list[FieldViolation] = []
        if name is not None and not name.strip():
            violations.append(FieldViolation("name", "Category name cannot be empty"))
        if slug is not None and not slug.strip():
            violations.append(FieldViolation("slug", "Slug cannot be empty"))
        if violations:
            raise ValidationError("Validation failed", violations)

        changes: dict = {}
        if name is not None:
            changes["name"] = name.strip()
        if slug is not None:
            changes["slug"] = slug.strip()
            duplicate = self._category_repo.get_by_slug(changes["slug"])
            if duplicate is not None and duplicate.id != category_id:
                raise ConflictError(
                    f"Category with slug '{changes['slug']}' already exists"
                )
        if description is not None:
            changes["description"] = description
        if is_active is not None:
            changes["is_active"] = is_active

        updated = replace(existing, **changes)
        self._category_repo.save(updated)
        return updated
