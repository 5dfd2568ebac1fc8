"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.

Stock is mutated only through the atomic primitives.  ``save`` writes an
existing product's stock back unchanged, so a stale read can never
overwrite a newer count.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Product | None:
        """Return a product by its unique slug, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new product, or update one while keeping its stored stock."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product."""

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> None:
        """Atomically add *quantity* to the product's stock."""

    @abstractmethod
    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        """Atomically subtract *quantity* only if stock stays >= 0.

        Returns False, leaving stock untouched, when there is not enough.
        """

    @abstractmethod
    def set_stock(self, product_id: str, quantity: int) -> None:
        """Overwrite the product's stock with *quantity*."""
