"""CLI commands for inventory management."""

from __future__ import annotations

import click

from storefront.application.adjust_inventory import (
    AdjustInventoryHandler,
    InventoryOperation,
)
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.cli.context import CliContext


@click.command("adjust")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option(
    "--operation",
    required=True,
    type=click.Choice([op.value for op in InventoryOperation]),
    help="How to apply the quantity.",
)
@click.option("--quantity", required=True, type=int, help="Quantity.")
@click.option("--reason", default="", help="Why the stock changed.")
@click.pass_obj
def inventory_adjust(
    obj: CliContext,
    product_id: str,
    operation: str,
    quantity: int,
    reason: str,
) -> None:
    """Add to, subtract from, or set a product's stock."""
    handler = AdjustInventoryHandler(product_repo=product_repository())

    try:
        result = handler.handle(
            obj.principal(),
            product_id=product_id,
            operation=InventoryOperation(operation),
            quantity=quantity,
            reason=reason,
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(
        result,
        lambda: click.echo(
            f"Stock for product #{product_id}: {result.previous_stock} -> {result.new_stock}"
        ),
    )


@click.command("show")
@click.option("--low-stock", is_flag=True, help="Only products with 1-10 in stock.")
@click.option("--out-of-stock", is_flag=True, help="Only products with no stock.")
@click.option("--category", "category_id", default=None, help="Category ID.")
@click.pass_obj
def inventory_show(
    obj: CliContext,
    low_stock: bool,
    out_of_stock: bool,
    category_id: str | None,
) -> None:
    """Show current stock levels, lowest first."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    lines = handler.handle(
        low_stock=low_stock, out_of_stock=out_of_stock, category_id=category_id
    )

    def render() -> None:
        if not lines:
            click.echo("No products found.")
            return
        click.echo(f"{'ID':<6} {'Product':<20} {'Stock':>8} {'Active':>7}")
        click.echo("-" * 44)
        for line in lines:
            flag = " (low)" if line.low_stock else ""
            click.echo(
                f"{line.product_id:<6} {line.product_name:<20} {line.stock:>8} "
                f"{'yes' if line.is_active else 'no':>7}{flag}"
            )

    obj.emit(lines, render)
