"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    stock: int
    is_active: bool
    low_stock: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        low_stock: bool = False,
        out_of_stock: bool = False,
        category_id: str | None = None,
    ) -> list[InventoryLineDTO]:
        products = self._product_repo.list_all()
        if low_stock:
            products = [p for p in products if p.is_low_stock]
        if out_of_stock:
            products = [p for p in products if p.is_out_of_stock]
        if category_id is not None:
            products = [p for p in products if p.category_id == category_id]

        products.sort(key=lambda p: (p.stock, p.name))
        return [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                stock=p.stock,
                is_active=p.is_active,
                low_stock=p.is_low_stock,
            )
            for p in products
        ]
