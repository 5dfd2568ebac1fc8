"""Abstract repository for Review aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.review import Review


class ReviewRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique review ID."""

    @abstractmethod
    def get_by_id(self, review_id: str) -> Review | None:
        """Return a review by its ID, or None."""

    @abstractmethod
    def get_by_user_and_product(self, user_id: str, product_id: str) -> Review | None:
        """Return the review a user wrote for a product, or None."""

    @abstractmethod
    def list_all(self) -> list[Review]:
        """Return every review, oldest first."""

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[Review]:
        """Return every review of a product, active or not."""

    @abstractmethod
    def save(self, review: Review) -> None:
        """Persist a new or updated review."""
