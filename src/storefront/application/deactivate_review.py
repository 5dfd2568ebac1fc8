"""Application service: Deactivate Review use case."""

from __future__ import annotations

from storefront.application.auth import Principal, require_owner_or_admin
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.review import Review
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.rating_aggregator import RatingAggregator


class DeactivateReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo

    def handle(self, principal: Principal, review_id: str) -> Review:
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review with ID '{review_id}' not found")
        require_owner_or_admin(principal, review.user_id)

        if review.is_active:
            review.deactivate()
            self._review_repo.save(review)
            RatingAggregator(self._product_repo, self._review_repo).recompute(
                review.product_id
            )
        return review
