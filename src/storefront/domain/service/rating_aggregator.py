"""Domain service: product rating aggregation.

Recomputes a product's rating from scratch over its active reviews on every
review write and stores the mean rounded half-up to two places.  Saving
the product leaves its stored stock alone.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository

RATING_STEP = Decimal("0.01")


class RatingAggregator:

    def __init__(
        self,
        product_repo: ProductRepository,
        review_repo: ReviewRepository,
    ) -> None:
        self._product_repo = product_repo
        self._review_repo = review_repo

    def recompute(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        ratings = [
            review.rating
            for review in self._review_repo.list_for_product(product_id)
            if review.is_active
        ]
        average = Decimal("0")
        if ratings:
            average = (Decimal(sum(ratings)) / len(ratings)).quantize(
                RATING_STEP, rounding=ROUND_HALF_UP
            )

        product.update_rating(average, len(ratings))
        self._product_repo.save(product)
        return product
