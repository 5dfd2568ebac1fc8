"""Application service: Create Review use case.

A user may review a product once.  A duplicate is rejected before anything
is written, so the product's rating is only recomputed for reviews that
were actually stored.
"""

from __future__ import annotations

from storefront.application.auth import Principal
from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.model.review import Review
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.rating_aggregator import RatingAggregator


class CreateReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        product_id: str,
        rating: int,
        comment: str = "",
    ) -> Review:
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if self._review_repo.get_by_user_and_product(principal.id, product_id) is not None:
            raise ConflictError("You have already reviewed this product")

        review = Review.create(
            id=self._review_repo.next_id(),
            user_id=principal.id,
            product_id=product_id,
            rating=rating,
            comment=comment,
        )
        self._review_repo.save(review)

        RatingAggregator(self._product_repo, self._review_repo).recompute(product_id)
        return review
