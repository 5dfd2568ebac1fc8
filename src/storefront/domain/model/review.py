"""Review aggregate: one customer's rating of one product."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import FieldViolation, ValidationError

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class Review:
    """A product review.

    At most one review exists per ``(user_id, product_id)`` pair; the
    handler checks this before inserting.
    """

    id: str
    user_id: str
    product_id: str
    rating: int
    comment: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        id: str,
        user_id: str,
        product_id: str,
        rating: int,
        comment: str = "",
    ) -> Review:
        if (
            isinstance(rating, bool)
            or not isinstance(rating, int)
            or not MIN_RATING <= rating <= MAX_RATING
        ):
            raise ValidationError(
                "Invalid review",
                [
                    FieldViolation(
                        "rating",
                        f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}",
                    )
                ],
            )
        return Review(
            id=id,
            user_id=user_id,
            product_id=product_id,
            rating=rating,
            comment=comment.strip(),
        )

    def deactivate(self) -> None:
        self.is_active = False
