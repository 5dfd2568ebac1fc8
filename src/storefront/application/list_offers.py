"""Application service: offer listings (queries).

``ListOffersHandler`` is the admin catalogue of every offer;
``ListActiveOffersHandler`` shows only what a shopper could redeem now.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from storefront.application.auth import Principal, require_admin
from storefront.application.dto import Page
from storefront.application.paging import check_paging
from storefront.domain.model.offer import Offer, normalize_code
from storefront.domain.repository.offer_repository import OfferRepository


class ListOffersHandler:

    def __init__(self, offer_repo: OfferRepository) -> None:
        self._offer_repo = offer_repo

    def handle(
        self,
        principal: Principal,
        page: int = 1,
        limit: int = 10,
        is_active: bool | None = None,
        code: str | None = None,
    ) -> Page[Offer]:
        require_admin(principal)
        check_paging(page, limit)

        fragment = normalize_code(code) if code else ""
        offers = [
            offer
            for offer in reversed(self._offer_repo.list_all())
            if (is_active is None or offer.is_active == is_active)
            and fragment in offer.code
        ]
        return Page.slice(offers, page, limit)


class ListActiveOffersHandler:

    def __init__(
        self,
        offer_repo: OfferRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._offer_repo = offer_repo
        self._clock = clock

    def handle(self) -> list[Offer]:
        now = self._clock()
        return [
            offer
            for offer in self._offer_repo.list_all()
            if offer.is_active and offer.is_running(now)
        ]
