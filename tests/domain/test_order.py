"""Unit tests for the Order aggregate."""

import pytest

from storefront.domain.exceptions import ConflictError, ValidationError
from storefront.domain.model.order import (
    MAX_LINE_ITEMS,
    Order,
    OrderItem,
    OrderStatus,
    StockEffect,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.order_pricing import calculate_totals


def _item(product_id: str = "1", qty: int = 2, price: str = "10.00") -> OrderItem:
    return OrderItem(
        product_id=product_id,
        product_name=f"Product {product_id}",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _order(*items: OrderItem, status: OrderStatus = OrderStatus.PENDING) -> Order:
    items = list(items) or [_item()]
    order = Order.create(
        order_number="ORD1",
        user_id="u1",
        items=items,
        totals=calculate_totals(Money.of("20")),
        shipping_address="1 Main St",
        payment_method="card",
    )
    order.status = status
    return order


class TestOrderCreate:

    def test_defaults(self):
        order = _order()
        assert order.id is None
        assert order.status == OrderStatus.PENDING
        assert order.payment_status.value == "PENDING"

    def test_missing_fields_reported_per_field(self):
        with pytest.raises(ValidationError) as exc_info:
            Order.create(
                order_number="ORD1",
                user_id="u1",
                items=[],
                totals=calculate_totals(Money.zero()),
                shipping_address="  ",
                payment_method="",
            )
        fields = [v.field for v in exc_info.value.violations]
        assert fields == ["items", "shipping_address", "payment_method"]

    def test_too_many_items(self):
        items = [_item(str(i), 1) for i in range(MAX_LINE_ITEMS + 1)]
        with pytest.raises(ValidationError, match="Invalid order"):
            _order(*items)

    def test_line_total(self):
        assert _item(qty=3, price="7.50").line_total == Money.of("22.50")


class TestStockEffect:

    def test_cancelling_restores(self):
        assert _order().stock_effect_of(OrderStatus.CANCELLED) is StockEffect.RESTORE

    def test_second_cancel_moves_nothing(self):
        order = _order(status=OrderStatus.CANCELLED)
        assert order.stock_effect_of(OrderStatus.CANCELLED) is StockEffect.NONE

    def test_reinstating_reserves(self):
        order = _order(status=OrderStatus.CANCELLED)
        assert order.stock_effect_of(OrderStatus.PROCESSING) is StockEffect.RESERVE

    def test_forward_transitions_move_nothing(self):
        order = _order()
        assert order.stock_effect_of(OrderStatus.SHIPPED) is StockEffect.NONE

    def test_move_to_returns_previous(self):
        order = _order()
        assert order.move_to(OrderStatus.SHIPPED) == OrderStatus.PENDING
        assert order.status == OrderStatus.SHIPPED


class TestOrderQueries:

    def test_references_product(self):
        order = _order(_item("7", 1))
        assert order.references_product("7")
        assert not order.references_product("8")

    def test_only_cancelled_orders_are_deletable(self):
        with pytest.raises(ConflictError, match="Only cancelled"):
            _order().ensure_deletable()
        _order(status=OrderStatus.CANCELLED).ensure_deletable()
