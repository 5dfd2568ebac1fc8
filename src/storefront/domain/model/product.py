"""Product aggregate.

Products live independently of orders. Prices change, stock moves with the
order lifecycle and manual inventory work, and products referenced by an
order are deactivated rather than removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

LOW_STOCK_THRESHOLD = 10


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.
    """

    id: str
    name: str
    slug: str
    price: Money
    category_id: str
    stock: int = 0
    is_active: bool = True
    rating: Decimal = Decimal("0")
    review_count: int = 0

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock for {self.name} cannot be negative")

    # --- Catalog --------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders keep the unit price captured at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    # --- Stock ----------------------------------------------------------------

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def set_stock(self, quantity: int) -> None:
        """Manual overwrite; clamps at zero instead of failing."""
        self.stock = max(0, quantity)

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.stock <= LOW_STOCK_THRESHOLD

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock == 0

    # --- Reviews --------------------------------------------------------------

    def update_rating(self, rating: Decimal, review_count: int) -> None:
        self.rating = rating
        self.review_count = review_count
