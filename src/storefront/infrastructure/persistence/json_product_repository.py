"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


def _keep_stored_stock(stored: dict, record: dict) -> None:
    record["stock"] = stored["stock"]


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return str(self._file.next_numeric_id())

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._file.find(lambda r: r["id"] == product_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_slug(self, slug: str) -> Product | None:
        raw = self._file.find(lambda r: r["slug"] == slug)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        self._file.upsert(self._to_raw(product), merge=_keep_stored_stock)

    def delete(self, product_id: str) -> None:
        self._file.remove(product_id)

    def increment_stock(self, product_id: str, quantity: int) -> None:
        with self._file.editing() as records:
            raw = self._locate(records, product_id)
            raw["stock"] += quantity

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        with self._file.editing() as records:
            raw = self._locate(records, product_id)
            if raw["stock"] < quantity:
                return False
            raw["stock"] -= quantity
            return True

    def set_stock(self, product_id: str, quantity: int) -> None:
        with self._file.editing() as records:
            raw = self._locate(records, product_id)
            raw["stock"] = quantity

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _locate(records: list[dict], product_id: str) -> dict:
        for raw in records:
            if raw["id"] == product_id:
                return raw
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "slug": product.slug,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "category_id": product.category_id,
            "stock": product.stock,
            "is_active": product.is_active,
            "rating": str(product.rating),
            "review_count": product.review_count,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            slug=raw["slug"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            category_id=raw["category_id"],
            stock=raw["stock"],
            is_active=raw.get("is_active", True),
            rating=Decimal(raw.get("rating", "0")),
            review_count=raw.get("review_count", 0),
        )
