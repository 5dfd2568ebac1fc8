"""CLI commands for the Product and Category aggregates."""

from __future__ import annotations

import click

from storefront.application.add_category import AddCategoryHandler
from storefront.application.add_product import AddProductHandler
from storefront.application.delete_category import DeleteCategoryHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.show_category import ShowCategoryHandler
from storefront.application.update_category import UpdateCategoryHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    category_repository,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.context import CliContext


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--slug", required=True, help="Unique URL slug.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--category", "category_id", required=True, help="Category ID.")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.pass_obj
def product_add(
    obj: CliContext,
    name: str,
    slug: str,
    price: str,
    category_id: str,
    stock: int,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
    )

    try:
        product = handler.handle(
            obj.principal(),
            name=name,
            slug=slug,
            price=price,
            category_id=category_id,
            stock=stock,
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(
        product,
        lambda: click.echo(f"Product #{product.id} '{product.name}' added at {product.price}"),
    )


def _product_table(products) -> None:
    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>6} {'Rating':>7}")
    click.echo("-" * 53)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {str(p.price):>10} {p.stock:>6} "
            f"{p.rating:>7.2f}"
        )


@click.command("list")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--category", "category_slug", default=None, help="Category slug.")
@click.option("--search", default=None, help="Part of the product name.")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive products.")
@click.pass_obj
def product_list(
    obj: CliContext,
    page: int,
    limit: int,
    category_slug: str | None,
    search: str | None,
    include_inactive: bool,
) -> None:
    """List products in the catalog, newest first."""
    handler = ListProductsHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
    )

    try:
        result = handler.handle(
            page=page,
            limit=limit,
            category_slug=category_slug,
            search=search,
            include_inactive=include_inactive,
        )
    except DomainException as exc:
        raise obj.error(exc)

    def render() -> None:
        if not result.items:
            click.echo("No products found.")
            return
        _product_table(result.items)
        click.echo(f"Page {result.page}/{result.pages} ({result.total} products)")

    obj.emit(result, render)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--active/--inactive", "is_active", default=None, help="Availability.")
@click.pass_obj
def product_update(
    obj: CliContext,
    product_id: str,
    price: str | None,
    is_active: bool | None,
) -> None:
    """Update a product's price or availability."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            obj.principal(), product_id=product_id, new_price=price, is_active=is_active
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(product, lambda: click.echo(f"Product #{product_id} updated."))


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(obj: CliContext, product_id: str) -> None:
    """Delete a product, or deactivate it if orders refer to it."""
    handler = DeleteProductHandler(
        product_repo=product_repository(),
        order_repo=order_repository(),
    )

    try:
        deleted = handler.handle(obj.principal(), product_id)
    except DomainException as exc:
        raise obj.error(exc)

    message = (
        "Product deleted successfully"
        if deleted
        else "Product deactivated because it has existing orders"
    )
    obj.emit({"message": message}, lambda: click.echo(message))


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.option("--slug", required=True, help="Unique URL slug.")
@click.option("--description", default="", help="Description.")
@click.pass_obj
def category_add(obj: CliContext, name: str, slug: str, description: str) -> None:
    """Add a category."""
    handler = AddCategoryHandler(category_repo=category_repository())

    try:
        category = handler.handle(
            obj.principal(), name=name, slug=slug, description=description
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(
        category,
        lambda: click.echo(f"Category #{category.id} '{category.name}' added"),
    )


@click.command("list")
@click.pass_obj
def category_list(obj: CliContext) -> None:
    """List categories with their product counts."""
    categories = sorted(category_repository().list_all(), key=lambda c: c.name)
    products = product_repository().list_all()
    rows = [
        {
            "id": c.id,
            "name": c.name,
            "slug": c.slug,
            "product_count": sum(1 for p in products if p.category_id == c.id),
        }
        for c in categories
    ]

    def render() -> None:
        if not rows:
            click.echo("No categories found.")
            return
        click.echo(f"{'ID':<6} {'Name':<20} {'Slug':<20} {'Products':>8}")
        click.echo("-" * 57)
        for row in rows:
            click.echo(
                f"{row['id']:<6} {row['name']:<20} {row['slug']:<20} {row['product_count']:>8}"
            )

    obj.emit(rows, render)


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.pass_obj
def category_delete(obj: CliContext, category_id: str) -> None:
    """Delete a category that no product uses."""
    handler = DeleteCategoryHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(obj.principal(), category_id)
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(
        {"message": "Category deleted successfully"},
        lambda: click.echo(f"Category #{category_id} deleted."),
    )


@click.command("show")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.pass_obj
def category_show(obj: CliContext, category_id: str) -> None:
    """Show a category and its active products."""
    handler = ShowCategoryHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
    )

    try:
        detail = handler.handle(category_id)
    except DomainException as exc:
        raise obj.error(exc)

    def render() -> None:
        category = detail.category
        state = "" if category.is_active else " (inactive)"
        click.echo(f"Category #{category.id} {category.name} [{category.slug}]{state}")
        if category.description:
            click.echo(category.description)
        if not detail.products:
            click.echo("No products in this category.")
            return
        _product_table(detail.products)

    obj.emit(detail, render)


@click.command("update")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default=None)
@click.option("--slug", default=None)
@click.option("--description", default=None)
@click.option("--active/--inactive", "is_active", default=None)
@click.pass_obj
def category_update(
    obj: CliContext,
    category_id: str,
    name: str | None,
    slug: str | None,
    description: str | None,
    is_active: bool | None,
) -> None:
    """Rename, re-slug, describe or (de)activate a category."""
    handler = UpdateCategoryHandler(category_repo=category_repository())

    try:
        category = handler.handle(
            obj.principal(),
            category_id,
            name=name,
            slug=slug,
            description=description,
            is_active=is_active,
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(category, lambda: click.echo(f"Category #{category.id} updated."))
