"""Integration tests for order status updates, cancellation and deletion."""

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.application.update_order import UpdateOrderHandler
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForbiddenError,
    PersistenceError,
)
from storefront.domain.model.order import OrderStatus, PaymentStatus
from tests.fakes import (
    ADMIN,
    ALICE,
    FakeOfferRepository,
    FakeOrderRepository,
    FakeProductRepository,
    make_product,
)


def _setup_with_order():
    """Place a two-item order: 2 Widgets and 1 Gadget."""
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository([
        make_product("1", "Widget", stock=10),
        make_product("2", "Gadget", stock=4),
    ])
    dto = CreateOrderHandler(order_repo, product_repo, FakeOfferRepository()).handle(
        ALICE,
        [OrderItemSpec("1", 2), OrderItemSpec("2", 1)],
        shipping_address="1 Main St",
        payment_method="card",
    )
    return UpdateOrderHandler(order_repo, product_repo), order_repo, product_repo, dto.id


class TestCancel:

    def test_cancelling_restores_every_item(self):
        handler, _, product_repo, order_id = _setup_with_order()
        assert product_repo.get_by_id("1").stock == 8

        dto = handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)

        assert dto.status == "CANCELLED"
        assert product_repo.get_by_id("1").stock == 10
        assert product_repo.get_by_id("2").stock == 4

    def test_second_cancel_leaves_stock_alone(self):
        handler, _, product_repo, order_id = _setup_with_order()
        handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)
        handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)
        assert product_repo.get_by_id("1").stock == 10
        assert product_repo.get_by_id("2").stock == 4

    def test_cancel_handler_delegates(self):
        _, order_repo, product_repo, order_id = _setup_with_order()
        dto = CancelOrderHandler(order_repo, product_repo).handle(ADMIN, order_id)
        assert dto.status == "CANCELLED"
        assert product_repo.get_by_id("2").stock == 4


class TestReinstate:

    def test_reinstating_takes_stock_again(self):
        handler, _, product_repo, order_id = _setup_with_order()
        handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)
        dto = handler.handle(ADMIN, order_id, status=OrderStatus.PROCESSING)
        assert dto.status == "PROCESSING"
        assert product_repo.get_by_id("1").stock == 8
        assert product_repo.get_by_id("2").stock == 3

    def test_reinstating_without_stock_changes_nothing(self):
        handler, order_repo, product_repo, order_id = _setup_with_order()
        handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)
        product_repo.get_by_id("2").set_stock(0)

        with pytest.raises(ConflictError, match="Insufficient stock for Gadget"):
            handler.handle(ADMIN, order_id, status=OrderStatus.PENDING)

        assert order_repo.get_by_id(order_id).status == OrderStatus.CANCELLED
        assert product_repo.get_by_id("1").stock == 10


class TestOtherUpdates:

    def test_forward_transition_moves_no_stock(self):
        handler, _, product_repo, order_id = _setup_with_order()
        handler.handle(ADMIN, order_id, status=OrderStatus.SHIPPED)
        assert product_repo.get_by_id("1").stock == 8

    def test_payment_only_update_moves_no_stock(self):
        handler, order_repo, product_repo, order_id = _setup_with_order()
        dto = handler.handle(ADMIN, order_id, payment_status=PaymentStatus.PAID, notes="paid")
        assert dto.payment_status == "PAID"
        assert dto.status == "PENDING"
        assert order_repo.get_by_id(order_id).notes == "paid"
        assert product_repo.get_by_id("1").stock == 8

    def test_customer_cannot_update(self):
        handler, _, _, order_id = _setup_with_order()
        with pytest.raises(ForbiddenError):
            handler.handle(ALICE, order_id, status=OrderStatus.CANCELLED)

    def test_unknown_order(self):
        handler, _, _, _ = _setup_with_order()
        with pytest.raises(EntityNotFoundError, match="#42"):
            handler.handle(ADMIN, 42, status=OrderStatus.SHIPPED)


class TestDelete:

    def test_only_cancelled_orders_are_deleted(self):
        handler, order_repo, _, order_id = _setup_with_order()
        delete = DeleteOrderHandler(order_repo)

        with pytest.raises(ConflictError):
            delete.handle(ADMIN, order_id)

        handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)
        delete.handle(ADMIN, order_id)
        assert order_repo.get_by_id(order_id) is None

    def test_customer_cannot_delete(self):
        _, order_repo, _, order_id = _setup_with_order()
        with pytest.raises(ForbiddenError):
            DeleteOrderHandler(order_repo).handle(ALICE, order_id)


class TestFailedSave:

    def test_failed_cancel_puts_stock_back_and_can_be_retried(self, monkeypatch):
        handler, order_repo, product_repo, order_id = _setup_with_order()
        working_save = order_repo.save

        def broken_save(order):
            raise OSError("disk full")

        monkeypatch.setattr(order_repo, "save", broken_save)
        with pytest.raises(PersistenceError):
            handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)
        assert product_repo.get_by_id("1").stock == 8
        assert product_repo.get_by_id("2").stock == 3

        monkeypatch.setattr(order_repo, "save", working_save)
        handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)
        assert product_repo.get_by_id("1").stock == 10
        assert product_repo.get_by_id("2").stock == 4

    def test_failed_reinstate_releases_stock_again(self, monkeypatch):
        handler, order_repo, product_repo, order_id = _setup_with_order()
        handler.handle(ADMIN, order_id, status=OrderStatus.CANCELLED)

        def broken_save(order):
            raise OSError("disk full")

        monkeypatch.setattr(order_repo, "save", broken_save)
        with pytest.raises(PersistenceError):
            handler.handle(ADMIN, order_id, status=OrderStatus.PROCESSING)
        assert product_repo.get_by_id("1").stock == 10
        assert product_repo.get_by_id("2").stock == 4
