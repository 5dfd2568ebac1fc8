"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from storefront.application.create_order import CreateOrderHandler, generate_order_number
from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)
from storefront.domain.model.offer import Offer
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.offer_evaluator import OfferEvaluator
from tests.fakes import (
    ALICE,
    NOW,
    FakeOfferRepository,
    FakeOrderRepository,
    FakeProductRepository,
    make_offer,
    make_product,
)


def _setup(
    products: list[Product] | None = None,
    offers: list[Offer] | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository, FakeOfferRepository]:
    """Build handler with fake repos, optionally pre-loaded with products."""
    if products is None:
        products = [
            make_product("1", "Widget", price="15.00", stock=100),
            make_product("2", "Gadget", price="25.00", stock=50),
            make_product("3", "Lamp", price="100.00", stock=5),
        ]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    offer_repo = FakeOfferRepository(offers or [])
    handler = CreateOrderHandler(
        order_repo,
        product_repo,
        offer_repo,
        offer_evaluator=OfferEvaluator(offer_repo, clock=lambda: NOW),
    )
    return handler, order_repo, product_repo, offer_repo


def _place(handler: CreateOrderHandler, *specs: tuple[str, int], code: str | None = None):
    return handler.handle(
        ALICE,
        [OrderItemSpec(pid, qty) for pid, qty in specs],
        shipping_address="1 Main St",
        payment_method="card",
        offer_code=code,
    )


class TestCreateOrderHappyPath:

    def test_totals_without_offer(self):
        handler, _, _, _ = _setup()
        dto = _place(handler, ("1", 2), ("2", 1))
        assert dto.subtotal == "$55.00"
        assert dto.tax == "$5.50"
        assert dto.shipping == "$0.00"
        assert dto.total == "$60.50"
        assert dto.status == "PENDING"
        assert dto.payment_status == "PENDING"
        assert dto.user_id == ALICE.id
        assert dto.offer_outcome is None

    def test_persists_and_assigns_id(self):
        handler, order_repo, _, _ = _setup()
        dto = _place(handler, ("1", 1))
        assert dto.id == 1
        assert order_repo.get_by_id(1).order_number == dto.order_number

    def test_reserves_stock(self):
        handler, _, product_repo, _ = _setup()
        _place(handler, ("1", 3), ("1", 2))
        assert product_repo.get_by_id("1").stock == 95

    def test_price_snapshot_at_creation(self):
        handler, order_repo, product_repo, _ = _setup()
        dto = _place(handler, ("1", 1))

        widget = product_repo.get_by_id("1")
        widget.update_price(Money.of("99.99"))

        saved = order_repo.get_by_id(dto.id)
        assert str(saved.items[0].unit_price) == "$15.00"

    def test_order_number_format(self):
        number = generate_order_number()
        assert number.startswith("ORD")
        assert number[3:].isdigit()


class TestCreateOrderWithOffer:

    def test_offer_applied_and_use_recorded(self):
        handler, order_repo, _, offer_repo = _setup(offers=[make_offer()])
        dto = _place(handler, ("3", 1), code="summer20")
        assert dto.discount == "$20.00"
        assert dto.tax == "$10.00"
        assert dto.total == "$90.00"
        assert dto.offer_outcome == "APPLIED"
        assert dto.offer_id == "o1"
        assert offer_repo.get_by_id("o1").used_count == 1
        assert order_repo.get_by_id(dto.id).offer_id == "o1"

    def test_below_minimum_places_order_without_discount(self):
        handler, _, _, offer_repo = _setup(
            products=[make_product("1", "Book", price="40.00")],
            offers=[make_offer()],
        )
        dto = _place(handler, ("1", 1), code="SUMMER20")
        assert dto.discount == "$0.00"
        assert dto.total == "$49.99"
        assert dto.offer_outcome == "NOT_ELIGIBLE"
        assert dto.offer_id is None
        assert offer_repo.get_by_id("o1").used_count == 0

    def test_unknown_code_is_not_an_error(self):
        handler, _, _, _ = _setup()
        dto = _place(handler, ("1", 1), code="BOGUS")
        assert dto.offer_outcome == "NOT_FOUND"
        assert "BOGUS" in dto.offer_message

    def test_last_use_is_claimed_once(self):
        handler, _, _, offer_repo = _setup(offers=[make_offer(max_uses=1)])
        _place(handler, ("3", 1), code="SUMMER20")
        second = _place(handler, ("3", 1), code="SUMMER20")
        assert second.offer_outcome == "NOT_ELIGIBLE"
        assert offer_repo.get_by_id("o1").used_count == 1

    def test_lost_usage_race_gives_stock_back(self):
        handler, _, product_repo, offer_repo = _setup(offers=[make_offer(max_uses=1)])
        offer_repo.claim_usage = lambda offer_id: False
        with pytest.raises(ConflictError, match="usage limit"):
            _place(handler, ("3", 2), code="SUMMER20")
        assert product_repo.get_by_id("3").stock == 5


class TestCreateOrderStock:

    def test_second_order_exceeding_stock_is_rejected(self):
        handler, order_repo, product_repo, _ = _setup()
        _place(handler, ("3", 3))
        with pytest.raises(ConflictError, match="Insufficient stock for Lamp"):
            _place(handler, ("3", 3))
        assert product_repo.get_by_id("3").stock == 2
        assert len(order_repo.list_all()) == 1

    def test_shortage_on_one_line_reserves_nothing(self):
        handler, _, product_repo, _ = _setup()
        with pytest.raises(ConflictError):
            _place(handler, ("1", 1), ("3", 6))
        assert product_repo.get_by_id("1").stock == 100

    def test_save_failure_gives_stock_back(self):
        handler, order_repo, product_repo, _ = _setup()

        def broken_save(order):
            raise OSError("disk full")

        order_repo.save = broken_save
        with pytest.raises(PersistenceError, match="Failed to create order"):
            _place(handler, ("1", 4))
        assert product_repo.get_by_id("1").stock == 100


class TestCreateOrderValidation:

    def test_empty_order_rejected(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(ALICE, [], shipping_address="", payment_method="card")
        fields = [v.field for v in exc_info.value.violations]
        assert fields == ["items", "shipping_address"]

    def test_bad_quantity_reported_by_index(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            _place(handler, ("1", 1), ("2", 0))
        assert exc_info.value.violations[0].field == "items[1].quantity"

    def test_unknown_product(self):
        handler, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            _place(handler, ("99", 1))

    def test_inactive_product(self):
        handler, _, _, _ = _setup(
            products=[make_product("1", "Old", is_active=False)],
        )
        with pytest.raises(ValidationError, match="not available"):
            _place(handler, ("1", 1))
