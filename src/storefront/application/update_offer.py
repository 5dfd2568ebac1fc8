"""Application service: Update Offer use case (admin only).

Only the fields passed in change.  Passing ``product_ids`` replaces the
offer's product scope; an empty list makes it apply to any cart.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.model.offer import Offer, OfferType, normalize_code
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.offer_repository import OfferRepository
from storefront.domain.repository.product_repository import ProductRepository


class UpdateOfferHandler:

    def __init__(
        self,
        offer_repo: OfferRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._offer_repo = offer_repo
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        offer_id: str,
        title: str | None = None,
        code: str | None = None,
        type: OfferType | None = None,
        value: Decimal | None = None,
        starts_at: datetime | None = None,
        ends_at: datetime | None = None,
        min_amount: str | None = None,
        max_uses: int | None = None,
        is_active: bool | None = None,
        description: str | None = None,
        product_ids: list[str] | None = None,
    ) -> Offer:
        require_admin(principal)

        existing = self._offer_repo.get_by_id(offer_id)
        if existing is None:
            raise EntityNotFoundError(f"Offer with ID '{offer_id}' not found")

        changes: dict = {}
        if title is not None:
            changes["title"] = title.strip()
        if code is not None:
            changes["code"] = normalize_code(code)
            duplicate = self._offer_repo.get_by_code(changes["code"])
            if duplicate is not None and duplicate.id != offer_id:
                raise ConflictError(
                    f"Offer with code '{changes['code']}' already exists"
                )
        if type is not None:
            changes["type"] = type
        if value is not None:
            changes["value"] = value
        if starts_at is not None:
            changes["starts_at"] = starts_at
        if ends_at is not None:
            changes["ends_at"] = ends_at
        if min_amount is not None:
            changes["min_amount"] = Money.of(min_amount)
        if max_uses is not None:
            changes["max_uses"] = max_uses
        if is_active is not None:
            changes["is_active"] = is_active
        if description is not None:
            changes["description"] = description
        if product_ids is not None:
            for product_id in product_ids:
                if self._product_repo.get_by_id(product_id) is None:
                    raise EntityNotFoundError(
                        f"Product with ID '{product_id}' not found"
                    )
            changes["product_ids"] = frozenset(product_ids)

        updated = replace(existing, **changes)
        updated.validate()
        self._offer_repo.save(updated)
        return updated
