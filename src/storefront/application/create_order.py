"""Application service: Create Order use case.

Orchestrates product lookup, offer evaluation, pricing, stock reservation,
offer usage and persistence.  Everything that can be rejected is checked
before the first mutation; once stock has been reserved, any later failure
gives the stock back before the error propagates.  Offer usage is never
given back.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable

from storefront.application.auth import Principal
from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    FieldViolation,
    PersistenceError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.offer_repository import OfferRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.offer_evaluator import OfferEvaluation, OfferEvaluator
from storefront.domain.service.order_pricing import calculate_totals
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 5


def generate_order_number() -> str:
    return f"ORD{int(time.time() * 1000)}{random.randint(0, 999)}"


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        offer_repo: OfferRepository,
        offer_evaluator: OfferEvaluator | None = None,
        order_number_factory: Callable[[], str] = generate_order_number,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._offer_repo = offer_repo
        self._offer_evaluator = offer_evaluator or OfferEvaluator(offer_repo)
        self._order_number_factory = order_number_factory

    def handle(
        self,
        principal: Principal,
        item_specs: list[OrderItemSpec],
        shipping_address: str,
        payment_method: str,
        offer_code: str | None = None,
        notes: str = "",
    ) -> OrderDTO:
        """Place a new order for *principal*.

        Steps:
        1. Validate the request shape (per-field violations).
        2. Resolve products, snapshot their prices, check stock.
        3. Evaluate the offer code and compute totals.
        4. Reserve stock, claim one offer use, persist.
        """
        self._validate_request(item_specs, shipping_address, payment_method)

        items = self._build_items(item_specs)
        subtotal = Money.zero()
        for item in items:
            subtotal = subtotal + item.line_total

        evaluation: OfferEvaluation | None = None
        discount = Money.zero()
        if offer_code:
            evaluation = self._offer_evaluator.evaluate(
                offer_code, subtotal, [item.product_id for item in items]
            )
            discount = evaluation.discount
        offer = evaluation.offer if evaluation is not None else None

        order = Order.create(
            order_number=self._unique_order_number(),
            user_id=principal.id,
            items=items,
            totals=calculate_totals(subtotal, discount),
            shipping_address=shipping_address,
            payment_method=payment_method,
            offer_id=offer.id if offer is not None else None,
            notes=notes,
        )

        reservation = StockReservationService(self._product_repo)
        reservation.reserve(order.items)

        if offer is not None and not self._offer_repo.claim_usage(offer.id):
            reservation.restore(order.items)
            logger.warning("Offer %s ran out of uses while placing order", offer.code)
            raise ConflictError(f"Offer {offer.code} has reached its usage limit")

        try:
            self._order_repo.save(order)
        except DomainException:
            reservation.restore(order.items)
            raise
        except Exception as exc:
            logger.exception("Failed to persist order %s", order.order_number)
            reservation.restore(order.items)
            raise PersistenceError("Failed to create order") from exc

        logger.info(
            "Order %s created for user %s: total %s",
            order.order_number,
            principal.id,
            order.total,
        )
        if evaluation is None:
            return OrderDTO.from_order(order)
        return OrderDTO.from_order(
            order,
            offer_outcome=evaluation.outcome.value,
            offer_message=evaluation.reason,
        )

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _validate_request(
        item_specs: list[OrderItemSpec],
        shipping_address: str,
        payment_method: str,
    ) -> None:
        violations: list[FieldViolation] = []
        if not item_specs:
            violations.append(
                FieldViolation("items", "Order must contain at least one item")
            )
        for index, spec in enumerate(item_specs):
            if not spec.product_id or not spec.product_id.strip():
                violations.append(
                    FieldViolation(f"items[{index}].product_id", "Product ID is required")
                )
            if (
                isinstance(spec.quantity, bool)
                or not isinstance(spec.quantity, int)
                or spec.quantity <= 0
            ):
                violations.append(
                    FieldViolation(
                        f"items[{index}].quantity", "Quantity must be a positive integer"
                    )
                )
        if not shipping_address or not shipping_address.strip():
            violations.append(
                FieldViolation("shipping_address", "Shipping address is required")
            )
        if not payment_method or not payment_method.strip():
            violations.append(
                FieldViolation("payment_method", "Payment method is required")
            )
        if violations:
            raise ValidationError("Validation failed", violations)

    def _build_items(self, item_specs: list[OrderItemSpec]) -> list[OrderItem]:
        items: list[OrderItem] = []
        requested: dict[str, int] = {}

        for spec in item_specs:
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")
            if not product.is_active:
                raise ValidationError(f"Product '{product.name}' is not available")

            requested[product.id] = requested.get(product.id, 0) + spec.quantity
            if not product.has_stock(requested[product.id]):
                raise ConflictError(
                    f"Insufficient stock for {product.name} "
                    f"(need {requested[product.id]}, have {product.stock})"
                )

            items.append(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=Quantity(spec.quantity),
                    unit_price=product.price,  # <-- price snapshot
                )
            )
        return items

    def _unique_order_number(self) -> str:
        for _ in range(ORDER_NUMBER_ATTEMPTS):
            candidate = self._order_number_factory()
            if self._order_repo.get_by_order_number(candidate) is None:
                return candidate
        raise PersistenceError("Could not generate a unique order number")
