"""Application service: List Reviews use case (query).

Every filter is optional; ``is_active=None`` returns hidden reviews too.
"""

from __future__ import annotations

from storefront.application.dto import Page
from storefront.application.paging import check_paging
from storefront.domain.model.review import Review
from storefront.domain.repository.review_repository import ReviewRepository


class ListReviewsHandler:

    def __init__(self, review_repo: ReviewRepository) -> None:
        self._review_repo = review_repo

    def handle(
        self,
        page: int = 1,
        limit: int = 10,
        product_id: str | None = None,
        user_id: str | None = None,
        rating: int | None = None,
        is_active: bool | None = None,
    ) -> Page[Review]:
        check_paging(page, limit)

        reviews = [
            review
            for review in self._review_repo.list_all()
            if (product_id is None or review.product_id == product_id)
            and (user_id is None or review.user_id == user_id)
            and (rating is None or review.rating == rating)
            and (is_active is None or review.is_active == is_active)
        ]
        reviews.sort(key=lambda r: r.created_at, reverse=True)

        return Page.slice(reviews, page, limit)
