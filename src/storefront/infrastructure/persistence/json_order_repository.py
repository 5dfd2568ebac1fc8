"""JSON-file-backed implementation of OrderRepository.

Items are stored inside their order's record, so saving an order writes
its items in the same call and deleting it removes them.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    OrderTotals,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


def _money(raw: str, currency: str) -> Money:
    return Money(Decimal(raw), currency)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._file.next_numeric_id()

    def get_by_id(self, order_id: int) -> Order | None:
        raw = self._file.find(lambda r: r["id"] == order_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_order_number(self, order_number: str) -> Order | None:
        raw = self._file.find(lambda r: r["order_number"] == order_number)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        with self._file.editing() as records:
            if order.id is None:
                order.id = max((r["id"] for r in records), default=0) + 1
            record = self._to_raw(order)
            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(records):
                if raw["id"] == order.id:
                    records[i] = record
                    break
            else:
                records.append(record)

    def delete(self, order_id: int) -> None:
        self._file.remove(order_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        totals = order.totals
        return {
            "id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "currency": totals.total.currency,
            "subtotal": str(totals.subtotal.amount),
            "discount": str(totals.discount.amount),
            "tax": str(totals.tax.amount),
            "shipping": str(totals.shipping.amount),
            "total": str(totals.total.amount),
            "offer_id": order.offer_id,
            "shipping_address": order.shipping_address,
            "payment_method": order.payment_method,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=_money(i["unit_price"], i.get("currency", currency)),
            )
            for i in raw["items"]
        ]
        totals = OrderTotals(
            subtotal=_money(raw["subtotal"], currency),
            discount=_money(raw["discount"], currency),
            tax=_money(raw["tax"], currency),
            shipping=_money(raw["shipping"], currency),
            total=_money(raw["total"], currency),
        )
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            user_id=raw["user_id"],
            items=items,
            totals=totals,
            shipping_address=raw["shipping_address"],
            payment_method=raw["payment_method"],
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            offer_id=raw.get("offer_id"),
            notes=raw.get("notes", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
