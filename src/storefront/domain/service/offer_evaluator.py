"""Domain service: Offer Evaluation.

Decides whether a promo code applies to a cart and how much it takes off.
An unknown or inapplicable code is not an error: the cart simply keeps its
subtotal, and the outcome says which of the two happened.

Evaluation never mutates the offer.  Recording a use is a separate step the
order handler performs only after the order's stock has been reserved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.model.offer import Offer
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.offer_repository import OfferRepository

logger = logging.getLogger(__name__)


class OfferOutcome(Enum):
    NOT_FOUND = "NOT_FOUND"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    APPLIED = "APPLIED"


@dataclass(frozen=True)
class OfferEvaluation:
    outcome: OfferOutcome
    discount: Money
    final_price: Money
    offer: Offer | None = None
    reason: str = ""

    @property
    def applied(self) -> bool:
        return self.outcome is OfferOutcome.APPLIED

    @staticmethod
    def no_discount(subtotal: Money, outcome: OfferOutcome, reason: str) -> OfferEvaluation:
        return OfferEvaluation(
            outcome=outcome,
            discount=Money.zero(),
            final_price=subtotal,
            reason=reason,
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OfferEvaluator:

    def __init__(
        self,
        offer_repo: OfferRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._offer_repo = offer_repo
        self._clock = clock

    def evaluate(
        self,
        code: str,
        subtotal: Money,
        product_ids: Iterable[str] = (),
    ) -> OfferEvaluation:
        offer = self._offer_repo.get_by_code(code) if code and code.strip() else None
        if offer is None:
            logger.info("Offer code %r not found", code)
            return OfferEvaluation.no_discount(
                subtotal, OfferOutcome.NOT_FOUND, f"Offer code '{code}' not found"
            )

        reason = offer.ineligibility_reason(subtotal, set(product_ids), self._clock())
        if reason is not None:
            logger.info("Offer %s not applied: %s", offer.code, reason)
            return OfferEvaluation.no_discount(subtotal, OfferOutcome.NOT_ELIGIBLE, reason)

        discount = offer.discount_for(subtotal)
        logger.info("Offer %s applied: %s off %s", offer.code, discount, subtotal)
        return OfferEvaluation(
            outcome=OfferOutcome.APPLIED,
            discount=discount,
            final_price=subtotal - discount,
            offer=offer,
        )
