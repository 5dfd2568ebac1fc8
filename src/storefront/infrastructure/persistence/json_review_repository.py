"""JSON-file-backed implementation of ReviewRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.review import Review
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonReviewRepository(ReviewRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def next_id(self) -> str:
        return str(self._file.next_numeric_id())

    def get_by_id(self, review_id: str) -> Review | None:
        raw = self._file.find(lambda r: r["id"] == review_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_user_and_product(self, user_id: str, product_id: str) -> Review | None:
        raw = self._file.find(
            lambda r: r["user_id"] == user_id and r["product_id"] == product_id
        )
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Review]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def list_for_product(self, product_id: str) -> list[Review]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["product_id"] == product_id
        ]

    def save(self, review: Review) -> None:
        self._file.upsert(
            {
                "id": review.id,
                "user_id": review.user_id,
                "product_id": review.product_id,
                "rating": review.rating,
                "comment": review.comment,
                "is_active": review.is_active,
                "created_at": review.created_at.isoformat(),
            }
        )

    @staticmethod
    def _to_domain(raw: dict) -> Review:
        return Review(
            id=raw["id"],
            user_id=raw["user_id"],
            product_id=raw["product_id"],
            rating=raw["rating"],
            comment=raw.get("comment", ""),
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
