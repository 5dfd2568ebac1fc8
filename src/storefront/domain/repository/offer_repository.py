"""Abstract repository for Offer aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.offer import Offer


class OfferRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique offer ID."""

    @abstractmethod
    def get_by_id(self, offer_id: str) -> Offer | None:
        """Return an offer by its ID, or None."""

    @abstractmethod
    def get_by_code(self, code: str) -> Offer | None:
        """Return the offer whose code matches case-insensitively, or None."""

    @abstractmethod
    def list_all(self) -> list[Offer]:
        """Return every offer."""

    @abstractmethod
    def save(self, offer: Offer) -> None:
        """Persist a new or updated offer.

        An update never lowers the stored ``used_count``; uses claimed since
        the offer was read are kept.
        """

    @abstractmethod
    def delete(self, offer_id: str) -> None:
        """Remove an offer."""

    @abstractmethod
    def claim_usage(self, offer_id: str) -> bool:
        """Atomically increment ``used_count`` unless ``max_uses`` is reached.

        Returns False, leaving the counter untouched, when the cap is hit.
        """
