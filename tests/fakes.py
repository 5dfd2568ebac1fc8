"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal

from storefront.application.auth import Principal
from storefront.domain.model.category import Category
from storefront.domain.model.offer import Offer, OfferType, normalize_code
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.offer_repository import OfferRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.repository.user_repository import UserRepository

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

ADMIN = Principal(id="admin", email="admin@example.com", role=Role.ADMIN)
ALICE = Principal(id="u1", email="alice@example.com")
BOB = Principal(id="u2", email="bob@example.com")


def _next(store: dict) -> str:
    return str(max((int(k) for k in store if str(k).isdigit()), default=0) + 1)


def make_product(
    id: str = "1",
    name: str = "Widget",
    price: str = "15.00",
    stock: int = 100,
    is_active: bool = True,
    category_id: str = "c1",
) -> Product:
    return Product(
        id=id,
        name=name,
        slug=name.lower(),
        price=Money.of(price),
        category_id=category_id,
        stock=stock,
        is_active=is_active,
    )


def make_offer(
    code: str = "SUMMER20",
    type: OfferType = OfferType.PERCENTAGE,
    value: str = "20",
    min_amount: str | None = "50",
    max_uses: int | None = None,
    used_count: int = 0,
    is_active: bool = True,
    starts_at: datetime = datetime(2024, 6, 1, tzinfo=timezone.utc),
    ends_at: datetime = datetime(2024, 7, 1, tzinfo=timezone.utc),
    product_ids: frozenset[str] = frozenset(),
    id: str = "o1",
) -> Offer:
    return Offer(
        id=id,
        title=f"{code} promo",
        code=code,
        type=type,
        value=Decimal(value),
        starts_at=starts_at,
        ends_at=ends_at,
        min_amount=Money.of(min_amount) if min_amount is not None else None,
        max_uses=max_uses,
        used_count=used_count,
        is_active=is_active,
        product_ids=product_ids,
    )


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def get_by_order_number(self, order_number: str) -> Order | None:
        for order in self._store.values():
            if order.order_number == order_number:
                return order
        return None

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order

    def delete(self, order_id: int) -> None:
        self._store.pop(order_id, None)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p
        self.refuse_decrements_for: set[str] = set()

    def next_id(self) -> str:
        return _next(self._store)

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_slug(self, slug: str) -> Product | None:
        for p in self._store.values():
            if p.slug == slug:
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        stored = self._store.get(product.id)
        if stored is not None and stored is not product:
            product = replace(product, stock=stored.stock)
        self._store[product.id] = product

    def delete(self, product_id: str) -> None:
        self._store.pop(product_id, None)

    def increment_stock(self, product_id: str, quantity: int) -> None:
        self._store[product_id].stock += quantity

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        product = self._store[product_id]
        if product_id in self.refuse_decrements_for or product.stock < quantity:
            return False
        product.stock -= quantity
        return True

    def set_stock(self, product_id: str, quantity: int) -> None:
        self._store[product_id].stock = quantity


class FakeOfferRepository(OfferRepository):

    def __init__(self, offers: list[Offer] | None = None) -> None:
        self._store: dict[str, Offer] = {}
        for o in offers or []:
            self._store[o.id] = o

    def next_id(self) -> str:
        return _next(self._store)

    def get_by_id(self, offer_id: str) -> Offer | None:
        return self._store.get(offer_id)

    def get_by_code(self, code: str) -> Offer | None:
        for o in self._store.values():
            if o.code.upper() == normalize_code(code):
                return o
        return None

    def list_all(self) -> list[Offer]:
        return list(self._store.values())

    def save(self, offer: Offer) -> None:
        stored = self._store.get(offer.id)
        if stored is not None and stored is not offer:
            offer = replace(offer, used_count=max(stored.used_count, offer.used_count))
        self._store[offer.id] = offer

    def delete(self, offer_id: str) -> None:
        self._store.pop(offer_id, None)

    def claim_usage(self, offer_id: str) -> bool:
        offer = self._store[offer_id]
        if offer.usage_exhausted:
            return False
        offer.used_count += 1
        return True


class FakeCategoryRepository(CategoryRepository):

    def __init__(self, categories: list[Category] | None = None) -> None:
        self._store: dict[str, Category] = {}
        for c in categories or []:
            self._store[c.id] = c

    def next_id(self) -> str:
        return _next(self._store)

    def get_by_id(self, category_id: str) -> Category | None:
        return self._store.get(category_id)

    def get_by_slug(self, slug: str) -> Category | None:
        for c in self._store.values():
            if c.slug == slug:
                return c
        return None

    def list_all(self) -> list[Category]:
        return list(self._store.values())

    def save(self, category: Category) -> None:
        self._store[category.id] = category

    def delete(self, category_id: str) -> None:
        self._store.pop(category_id, None)


class FakeReviewRepository(ReviewRepository):

    def __init__(self, reviews: list[Review] | None = None) -> None:
        self._store: dict[str, Review] = {}
        for r in reviews or []:
            self._store[r.id] = r

    def next_id(self) -> str:
        return _next(self._store)

    def get_by_id(self, review_id: str) -> Review | None:
        return self._store.get(review_id)

    def get_by_user_and_product(self, user_id: str, product_id: str) -> Review | None:
        for r in self._store.values():
            if r.user_id == user_id and r.product_id == product_id:
                return r
        return None

    def list_all(self) -> list[Review]:
        return list(self._store.values())

    def list_for_product(self, product_id: str) -> list[Review]:
        return [r for r in self._store.values() if r.product_id == product_id]

    def save(self, review: Review) -> None:
        self._store[review.id] = review


class FakeUserRepository(UserRepository):

    def __init__(self, users: list[User] | None = None) -> None:
        self._store: dict[str, User] = {}
        for u in users or []:
            self._store[u.id] = u

    def next_id(self) -> str:
        return _next(self._store)

    def get_by_id(self, user_id: str) -> User | None:
        return self._store.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        for u in self._store.values():
            if u.email == email.strip().lower():
                return u
        return None

    def list_all(self) -> list[User]:
        return list(self._store.values())

    def save(self, user: User) -> None:
        self._store[user.id] = user

    def delete(self, user_id: str) -> None:
        self._store.pop(user_id, None)
