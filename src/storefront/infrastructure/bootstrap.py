"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.auth import Principal
from storefront.domain.exceptions import ForbiddenError
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from storefront.infrastructure.persistence.json_offer_repository import (
    JsonOfferRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_review_repository import (
    JsonReviewRepository,
)
from storefront.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


def settings() -> Settings:
    return Settings.from_env()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def category_repository() -> JsonCategoryRepository:
    return JsonCategoryRepository(settings().data_dir / "categories.json")


def offer_repository() -> JsonOfferRepository:
    return JsonOfferRepository(settings().data_dir / "offers.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def review_repository() -> JsonReviewRepository:
    return JsonReviewRepository(settings().data_dir / "reviews.json")


def user_repository() -> JsonUserRepository:
    return JsonUserRepository(settings().data_dir / "users.json")


def resolve_principal(email: str | None) -> Principal:
    """Stand-in for the authentication collaborator: look the caller up by email."""
    if not email:
        raise ForbiddenError("Authentication required (pass --as EMAIL)")
    user = user_repository().get_by_email(email)
    if user is None:
        raise ForbiddenError(f"Unknown user '{email}'")
    return Principal.of(user)
