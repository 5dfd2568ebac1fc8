"""Application service: Create Offer use case (admin only)."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.model.offer import Offer, OfferType
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.offer_repository import OfferRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateOfferHandler:

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
        title: str,
        code: str,
        type: OfferType,
        value: Decimal,
        starts_at: datetime,
        ends_at: datetime,
        min_amount: str | None = None,
        max_uses: int | None = None,
        is_active: bool = True,
        description: str = "",
        product_ids: list[str] | None = None,
    ) -> Offer:
        require_admin(principal)

        offer = Offer.create(
            id=self._offer_repo.next_id(),
            title=title,
            code=code,
            type=type,
            value=value,
            starts_at=starts_at,
            ends_at=ends_at,
            min_amount=Money.of(min_amount) if min_amount is not None else None,
            max_uses=max_uses,
            is_active=is_active,
            description=description,
            product_ids=product_ids or [],
        )

        if self._offer_repo.get_by_code(offer.code) is not None:
            raise ConflictError(f"Offer with code '{offer.code}' already exists")
        for product_id in offer.product_ids:
            if self._product_repo.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        self._offer_repo.save(offer)
        logger.info("Offer %s created (%s %s)", offer.code, offer.type.value, offer.value)
        return offer
