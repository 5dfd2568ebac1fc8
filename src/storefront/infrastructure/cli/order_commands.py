"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order import UpdateOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.infrastructure.bootstrap import (
    offer_repository,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.context import CliContext

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)
PAYMENT_CHOICE = click.Choice([s.value for s in PaymentStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' (product id : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    click.echo(f"  {'Discount':<27} {'-' + dto.discount:>20}")
    click.echo(f"  {'Tax':<27} {dto.tax:>20}")
    click.echo(f"  {'Shipping':<27} {dto.shipping:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")
    if dto.offer_message:
        click.echo(f"Offer: {dto.offer_message}")


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--payment", required=True, help="Payment method.")
@click.option("--offer", "offer_code", default=None, help="Promo code.")
@click.option("--notes", default="", help="Order notes.")
@click.pass_obj
def order_create(
    obj: CliContext,
    items: str,
    address: str,
    payment: str,
    offer_code: str | None,
    notes: str,
) -> None:
    """Place a new order as the acting user."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        offer_repo=offer_repository(),
    )

    try:
        dto = handler.handle(
            obj.principal(),
            item_specs=specs,
            shipping_address=address,
            payment_method=payment,
            offer_code=offer_code,
            notes=notes,
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(dto, lambda: _display_order(dto))


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(obj: CliContext, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(obj.principal(), order_id)
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(dto, lambda: _display_order(dto))


@click.command("list")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--status", type=STATUS_CHOICE, default=None)
@click.option("--payment-status", type=PAYMENT_CHOICE, default=None)
@click.option("--user", "user_id", default=None, help="Filter by user ID (admin only).")
@click.pass_obj
def order_list(
    obj: CliContext,
    page: int,
    limit: int,
    status: str | None,
    payment_status: str | None,
    user_id: str | None,
) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        result = handler.handle(
            obj.principal(),
            page=page,
            limit=limit,
            status=OrderStatus(status.upper()) if status else None,
            payment_status=PaymentStatus(payment_status.upper()) if payment_status else None,
            user_id=user_id,
        )
    except DomainException as exc:
        raise obj.error(exc)

    def render() -> None:
        if not result.items:
            click.echo("No orders found.")
            return
        click.echo(f"{'ID':<6} {'Number':<22} {'Status':<12} {'Total':>10}")
        click.echo("-" * 53)
        for dto in result.items:
            click.echo(f"{dto.id:<6} {dto.order_number:<22} {dto.status:<12} {dto.total:>10}")
        click.echo(f"Page {result.page}/{result.pages} ({result.total} orders)")

    obj.emit(result, render)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", type=STATUS_CHOICE, default=None)
@click.option("--payment-status", type=PAYMENT_CHOICE, default=None)
@click.option("--notes", default=None)
@click.pass_obj
def order_update(
    obj: CliContext,
    order_id: int,
    status: str | None,
    payment_status: str | None,
    notes: str | None,
) -> None:
    """Change an order's status (admin only); stock follows cancellations."""
    handler = UpdateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(
            obj.principal(),
            order_id,
            status=OrderStatus(status.upper()) if status else None,
            payment_status=PaymentStatus(payment_status.upper()) if payment_status else None,
            notes=notes,
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(dto, lambda: click.echo(f"Order #{order_id} updated  (status={dto.status})"))


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(obj: CliContext, order_id: int) -> None:
    """Cancel an order (admin only); returns its items to stock."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(obj.principal(), order_id)
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(dto, lambda: click.echo(f"Order #{order_id} cancelled."))


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(obj: CliContext, order_id: int) -> None:
    """Delete a cancelled order (admin only)."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(obj.principal(), order_id)
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(
        {"message": "Order deleted successfully"},
        lambda: click.echo(f"Order #{order_id} deleted."),
    )
