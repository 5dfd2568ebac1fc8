"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def next_id(self) -> str:
        return str(self._file.next_numeric_id())

    def get_by_id(self, category_id: str) -> Category | None:
        raw = self._file.find(lambda r: r["id"] == category_id)
        return Category(**raw) if raw is not None else None

    def get_by_slug(self, slug: str) -> Category | None:
        raw = self._file.find(lambda r: r["slug"] == slug)
        return Category(**raw) if raw is not None else None

    def list_all(self) -> list[Category]:
        return [Category(**raw) for raw in self._file.load()]

    def save(self, category: Category) -> None:
        self._file.upsert(
            {
                "id": category.id,
                "name": category.name,
                "slug": category.slug,
                "description": category.description,
                "is_active": category.is_active,
            }
        )

    def delete(self, category_id: str) -> None:
        self._file.remove(category_id)
