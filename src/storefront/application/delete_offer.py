"""Application service: Delete Offer use case (admin only).

An offer that any order used is deactivated instead of removed.
"""

from __future__ import annotations

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.offer_repository import OfferRepository
from storefront.domain.repository.order_repository import OrderRepository


class DeleteOfferHandler:

    def __init__(
        self,
        offer_repo: OfferRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._offer_repo = offer_repo
        self._order_repo = order_repo

    def handle(self, principal: Principal, offer_id: str) -> bool:
        """Return True if the offer was deleted, False if deactivated."""
        require_admin(principal)

        offer = self._offer_repo.get_by_id(offer_id)
        if offer is None:
            raise EntityNotFoundError(f"Offer with ID '{offer_id}' not found")

        if any(o.offer_id == offer_id for o in self._order_repo.list_all()):
            offer.is_active = False
            self._offer_repo.save(offer)
            return False

        self._offer_repo.delete(offer_id)
        return True
