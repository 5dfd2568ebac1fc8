"""Tests for the JSON-file-backed repositories, using a temporary directory."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.review import Review
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.order_pricing import calculate_totals
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
from tests.fakes import make_offer, make_product


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        JsonProductRepository(tmp_path / "products.json")
        assert json.loads((tmp_path / "products.json").read_text()) == []

    def test_save_and_reload(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = make_product(price="19.99", stock=4)
        product.update_rating(Decimal("4.5"), 2)
        repo.save(product)

        loaded = JsonProductRepository(tmp_path / "products.json").get_by_slug("widget")
        assert loaded == product
        assert repo.next_id() == "2"

    def test_conditional_decrement(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(stock=3))

        assert repo.decrement_stock_if_available("1", 2) is True
        assert repo.decrement_stock_if_available("1", 2) is False
        assert repo.get_by_id("1").stock == 1

        repo.increment_stock("1", 4)
        assert repo.get_by_id("1").stock == 5

    def test_save_keeps_stock_moved_since_read(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(stock=10))
        stale = repo.get_by_id("1")

        repo.decrement_stock_if_available("1", 3)
        stale.update_rating(Decimal("4.00"), 1)
        repo.save(stale)

        stored = repo.get_by_id("1")
        assert stored.stock == 7
        assert stored.rating == Decimal("4.00")

    def test_set_stock(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(stock=10))
        repo.set_stock("1", 2)
        assert repo.get_by_id("1").stock == 2

    def test_stock_change_on_missing_product(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        with pytest.raises(EntityNotFoundError):
            repo.increment_stock("9", 1)

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product())
        repo.delete("1")
        assert repo.list_all() == []


class TestJsonOfferRepository:

    def test_round_trip_keeps_scope_and_window(self, tmp_path):
        repo = JsonOfferRepository(tmp_path / "offers.json")
        offer = make_offer(product_ids=frozenset({"2", "1"}), max_uses=10)
        repo.save(offer)
        assert repo.get_by_code("summer20") == offer

    def test_claim_usage_respects_cap(self, tmp_path):
        repo = JsonOfferRepository(tmp_path / "offers.json")
        repo.save(make_offer(max_uses=2, used_count=1))

        assert repo.claim_usage("o1") is True
        assert repo.claim_usage("o1") is False
        assert repo.get_by_id("o1").used_count == 2

    def test_save_keeps_uses_claimed_since_read(self, tmp_path):
        repo = JsonOfferRepository(tmp_path / "offers.json")
        repo.save(make_offer(max_uses=10))
        stale = repo.get_by_id("o1")

        repo.claim_usage("o1")
        repo.claim_usage("o1")
        stale.title = "Summer sale"
        repo.save(stale)

        stored = repo.get_by_id("o1")
        assert stored.used_count == 2
        assert stored.title == "Summer sale"

    def test_uncapped_offer_always_claims(self, tmp_path):
        repo = JsonOfferRepository(tmp_path / "offers.json")
        repo.save(make_offer())
        for _ in range(3):
            assert repo.claim_usage("o1")
        assert repo.get_by_id("o1").used_count == 3


class TestJsonOrderRepository:

    def _order(self) -> Order:
        return Order(
            id=None,
            order_number="ORD123",
            user_id="u1",
            items=[OrderItem("1", "Widget", Quantity(2), Money.of("15.00"))],
            totals=calculate_totals(Money.of("30.00")),
            shipping_address="1 Main St",
            payment_method="card",
            created_at=datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc),
        )

    def test_save_assigns_sequential_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = self._order(), self._order()
        repo.save(first)
        repo.save(second)
        assert (first.id, second.id) == (1, 2)

    def test_items_and_totals_survive_reload(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        repo.save(order)

        loaded = repo.get_by_order_number("ORD123")
        assert loaded.items == order.items
        assert loaded.totals == order.totals
        assert loaded.created_at == order.created_at

    def test_update_in_place(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        repo.save(order)
        order.move_to(OrderStatus.CANCELLED)
        repo.save(order)
        assert len(repo.list_all()) == 1
        assert repo.get_by_id(order.id).status == OrderStatus.CANCELLED


class TestJsonReviewAndUserRepositories:

    def test_review_lookup_by_user_and_product(self, tmp_path):
        repo = JsonReviewRepository(tmp_path / "reviews.json")
        repo.save(Review(id="1", user_id="u1", product_id="p1", rating=4))
        assert repo.get_by_user_and_product("u1", "p1").rating == 4
        assert repo.get_by_user_and_product("u2", "p1") is None

    def test_list_all_reviews(self, tmp_path):
        repo = JsonReviewRepository(tmp_path / "reviews.json")
        repo.save(Review(id="1", user_id="u1", product_id="p1", rating=4))
        repo.save(Review(id="2", user_id="u2", product_id="p2", rating=2))
        assert [r.id for r in repo.list_all()] == ["1", "2"]

    def test_user_email_lookup_is_case_insensitive(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        repo.save(User(id="1", email="admin@example.com", name="Admin", role=Role.ADMIN))
        user = repo.get_by_email("ADMIN@example.com")
        assert user.role == Role.ADMIN
