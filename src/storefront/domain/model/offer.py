"""Offer aggregate: a promotional code with eligibility rules.

An offer knows whether it can be redeemed right now and how much it takes
off a cart subtotal.  Looking it up by code and deciding what to do with the
answer is the job of the OfferEvaluator domain service.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import FieldViolation, ValidationError
from storefront.domain.model.value_objects import Money

MAX_PERCENTAGE = Decimal("100")


class OfferType(Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"
    FREE_SHIPPING = "FREE_SHIPPING"


def normalize_code(code: str) -> str:
    return code.strip().upper()


@dataclass
class Offer:
    """Aggregate root for discount offers.

    Invariants:
    - ``code`` is stored upper-case so lookups are case-insensitive
    - ``used_count`` only grows and never passes ``max_uses``
    - the activity window is half-open: ``[starts_at, ends_at)``
    """

    id: str
    title: str
    code: str
    type: OfferType
    value: Decimal
    starts_at: datetime
    ends_at: datetime
    min_amount: Money | None = None
    max_uses: int | None = None
    used_count: int = 0
    is_active: bool = True
    description: str = ""
    product_ids: frozenset[str] = field(default_factory=frozenset)

    # --- Factory (used for NEW offers only) -----------------------------------

    @staticmethod
    def create(
        id: str,
        title: str,
        code: str,
        type: OfferType,
        value: Decimal,
        starts_at: datetime,
        ends_at: datetime,
        min_amount: Money | None = None,
        max_uses: int | None = None,
        is_active: bool = True,
        description: str = "",
        product_ids: Iterable[str] = (),
    ) -> Offer:
        offer = Offer(
            id=id,
            title=title.strip() if title else "",
            code=normalize_code(code or ""),
            type=type,
            value=value,
            starts_at=starts_at,
            ends_at=ends_at,
            min_amount=min_amount,
            max_uses=max_uses,
            is_active=is_active,
            description=description,
            product_ids=frozenset(product_ids),
        )
        offer.validate()
        return offer

    def validate(self) -> None:
        """Check the rules an offer must satisfy whenever it is written."""
        violations: list[FieldViolation] = []
        if not self.title:
            violations.append(FieldViolation("title", "Title is required"))
        if not self.code:
            violations.append(FieldViolation("code", "Code is required"))
        if not self.value.is_finite():
            violations.append(FieldViolation("value", "Value must be a finite number"))
        elif self.value <= 0:
            violations.append(FieldViolation("value", "Value must be positive"))
        elif self.type is OfferType.PERCENTAGE and self.value > MAX_PERCENTAGE:
            violations.append(
                FieldViolation("value", "Percentage offers cannot exceed 100")
            )
        if self.min_amount is not None and self.min_amount.is_zero():
            violations.append(
                FieldViolation("min_amount", "Minimum amount must be positive")
            )
        if self.max_uses is not None and self.max_uses <= 0:
            violations.append(FieldViolation("max_uses", "Max uses must be positive"))
        elif self.max_uses is not None and self.max_uses < self.used_count:
            violations.append(
                FieldViolation(
                    "max_uses",
                    f"Max uses cannot be below the {self.used_count} uses already made",
                )
            )
        if self.ends_at <= self.starts_at:
            violations.append(
                FieldViolation("ends_at", "End date must be after start date")
            )
        if violations:
            raise ValidationError("Invalid offer", violations)

    # --- Eligibility ----------------------------------------------------------

    @property
    def usage_exhausted(self) -> bool:
        return self.max_uses is not None and self.used_count >= self.max_uses

    def is_running(self, now: datetime) -> bool:
        return self.starts_at <= now < self.ends_at

    def applies_to(self, product_ids: Iterable[str]) -> bool:
        """An unscoped offer applies to any cart."""
        if not self.product_ids:
            return True
        return not self.product_ids.isdisjoint(product_ids)

    def ineligibility_reason(
        self,
        subtotal: Money,
        product_ids: Iterable[str],
        now: datetime,
    ) -> str | None:
        """Return why the offer cannot be applied, or None if it can."""
        if not self.is_active:
            return f"Offer {self.code} is not active"
        if not self.is_running(now):
            return f"Offer {self.code} is outside its activity window"
        if self.usage_exhausted:
            return f"Offer {self.code} has reached its usage limit"
        if self.min_amount is not None and subtotal < self.min_amount:
            return f"Offer {self.code} requires a minimum of {self.min_amount}"
        if not self.applies_to(product_ids):
            return f"Offer {self.code} does not apply to any product in the cart"
        return None

    # --- Discount -------------------------------------------------------------

    def discount_for(self, subtotal: Money) -> Money:
        """Discount on ``subtotal``, rounded to cents and never above it."""
        if self.type is OfferType.PERCENTAGE:
            discount = (subtotal * (self.value / Decimal("100"))).rounded()
        elif self.type is OfferType.FIXED_AMOUNT:
            discount = Money(self.value, subtotal.currency).rounded()
        else:
            # FREE_SHIPPING takes nothing off the subtotal.
            discount = Money.zero()
        return discount if discount <= subtotal else subtotal

