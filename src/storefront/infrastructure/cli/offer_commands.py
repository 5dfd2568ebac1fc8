"""CLI commands for the Offer aggregate."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

import click

from storefront.application.create_offer import CreateOfferHandler
from storefront.application.delete_offer import DeleteOfferHandler
from storefront.application.list_offers import (
    ListActiveOffersHandler,
    ListOffersHandler,
)
from storefront.application.update_offer import UpdateOfferHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.offer import OfferType
from storefront.infrastructure.bootstrap import (
    offer_repository,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.context import CliContext

TYPE_CHOICE = click.Choice([t.value for t in OfferType], case_sensitive=False)


def _utc(value: datetime | None) -> datetime | None:
    """click.DateTime yields naive datetimes; offers are compared in UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _decimal(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid number '{raw}'.")
    if not value.is_finite():
        raise click.BadParameter(f"Invalid number '{raw}'.")
    return value


def _product_ids(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    return [p.strip() for p in raw.split(",") if p.strip()]


@click.command("create")
@click.option("--title", required=True)
@click.option("--code", required=True, help="Promo code (case-insensitive).")
@click.option("--type", "offer_type", required=True, type=TYPE_CHOICE)
@click.option("--value", required=True, help="Percent or amount off.")
@click.option("--starts", required=True, type=click.DateTime(), help="Start (UTC).")
@click.option("--ends", required=True, type=click.DateTime(), help="End (UTC, exclusive).")
@click.option("--min-amount", default=None, help="Minimum cart subtotal.")
@click.option("--max-uses", default=None, type=int, help="Usage cap.")
@click.option("--products", default=None, help="Comma-separated product IDs.")
@click.option("--description", default="")
@click.pass_obj
def offer_create(
    obj: CliContext,
    title: str,
    code: str,
    offer_type: str,
    value: str,
    starts: datetime,
    ends: datetime,
    min_amount: str | None,
    max_uses: int | None,
    products: str | None,
    description: str,
) -> None:
    """Create a promo offer."""
    handler = CreateOfferHandler(
        offer_repo=offer_repository(),
        product_repo=product_repository(),
    )

    try:
        offer = handler.handle(
            obj.principal(),
            title=title,
            code=code,
            type=OfferType(offer_type.upper()),
            value=_decimal(value),
            starts_at=_utc(starts),
            ends_at=_utc(ends),
            min_amount=min_amount,
            max_uses=max_uses,
            description=description,
            product_ids=_product_ids(products),
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(offer, lambda: click.echo(f"Offer #{offer.id} {offer.code} created"))


def _offer_table(offers) -> None:
    click.echo(f"{'ID':<6} {'Code':<14} {'Type':<14} {'Value':>8} {'Used':>10}")
    click.echo("-" * 56)
    for o in offers:
        cap = f"/{o.max_uses}" if o.max_uses is not None else ""
        click.echo(
            f"{o.id:<6} {o.code:<14} {o.type.value:<14} {o.value:>8} "
            f"{str(o.used_count) + cap:>10}"
        )


@click.command("list")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--active/--inactive", "is_active", default=None, help="Filter by activity flag.")
@click.option("--code", default=None, help="Part of the offer code.")
@click.pass_obj
def offer_list(
    obj: CliContext,
    page: int,
    limit: int,
    is_active: bool | None,
    code: str | None,
) -> None:
    """List every offer, newest first (admin only)."""
    handler = ListOffersHandler(offer_repo=offer_repository())

    try:
        result = handler.handle(
            obj.principal(), page=page, limit=limit, is_active=is_active, code=code
        )
    except DomainException as exc:
        raise obj.error(exc)

    def render() -> None:
        if not result.items:
            click.echo("No offers found.")
            return
        _offer_table(result.items)
        click.echo(f"Page {result.page}/{result.pages} ({result.total} offers)")

    obj.emit(result, render)


@click.command("active")
@click.pass_obj
def offer_active(obj: CliContext) -> None:
    """List offers that can be redeemed right now."""
    offers = ListActiveOffersHandler(offer_repo=offer_repository()).handle()

    def render() -> None:
        if not offers:
            click.echo("No active offers.")
            return
        _offer_table(offers)

    obj.emit(offers, render)


@click.command("update")
@click.option("--id", "offer_id", required=True)
@click.option("--title", default=None)
@click.option("--code", default=None)
@click.option("--type", "offer_type", default=None, type=TYPE_CHOICE)
@click.option("--value", default=None)
@click.option("--starts", default=None, type=click.DateTime())
@click.option("--ends", default=None, type=click.DateTime())
@click.option("--min-amount", default=None)
@click.option("--max-uses", default=None, type=int)
@click.option("--active/--inactive", "is_active", default=None)
@click.option("--products", default=None, help="Comma-separated product IDs; '' clears.")
@click.pass_obj
def offer_update(
    obj: CliContext,
    offer_id: str,
    title: str | None,
    code: str | None,
    offer_type: str | None,
    value: str | None,
    starts: datetime | None,
    ends: datetime | None,
    min_amount: str | None,
    max_uses: int | None,
    is_active: bool | None,
    products: str | None,
) -> None:
    """Update an offer."""
    handler = UpdateOfferHandler(
        offer_repo=offer_repository(),
        product_repo=product_repository(),
    )

    try:
        offer = handler.handle(
            obj.principal(),
            offer_id,
            title=title,
            code=code,
            type=OfferType(offer_type.upper()) if offer_type else None,
            value=_decimal(value),
            starts_at=_utc(starts),
            ends_at=_utc(ends),
            min_amount=min_amount,
            max_uses=max_uses,
            is_active=is_active,
            product_ids=_product_ids(products),
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(offer, lambda: click.echo(f"Offer #{offer.id} {offer.code} updated"))


@click.command("delete")
@click.option("--id", "offer_id", required=True)
@click.pass_obj
def offer_delete(obj: CliContext, offer_id: str) -> None:
    """Delete an offer, or deactivate it if orders used it."""
    handler = DeleteOfferHandler(
        offer_repo=offer_repository(),
        order_repo=order_repository(),
    )

    try:
        deleted = handler.handle(obj.principal(), offer_id)
    except DomainException as exc:
        raise obj.error(exc)

    message = (
        "Offer deleted successfully"
        if deleted
        else "Offer deactivated because it has existing orders"
    )
    obj.emit({"message": message}, lambda: click.echo(message))
