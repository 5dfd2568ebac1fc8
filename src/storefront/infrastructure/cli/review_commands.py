"""CLI commands for reviews."""

from __future__ import annotations

import click

from storefront.application.create_review import CreateReviewHandler
from storefront.application.deactivate_review import DeactivateReviewHandler
from storefront.application.list_reviews import ListReviewsHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository, review_repository
from storefront.infrastructure.cli.context import CliContext


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--rating", required=True, type=int, help="1 to 5.")
@click.option("--comment", default="")
@click.pass_obj
def review_add(obj: CliContext, product_id: str, rating: int, comment: str) -> None:
    """Review a product as the acting user."""
    handler = CreateReviewHandler(
        review_repo=review_repository(),
        product_repo=product_repository(),
    )

    try:
        review = handler.handle(
            obj.principal(), product_id=product_id, rating=rating, comment=comment
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(review, lambda: click.echo(f"Review #{review.id} added."))


@click.command("deactivate")
@click.option("--id", "review_id", required=True, help="Review ID.")
@click.pass_obj
def review_deactivate(obj: CliContext, review_id: str) -> None:
    """Hide a review and recompute the product rating."""
    handler = DeactivateReviewHandler(
        review_repo=review_repository(),
        product_repo=product_repository(),
    )

    try:
        review = handler.handle(obj.principal(), review_id)
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(review, lambda: click.echo(f"Review #{review.id} deactivated."))


@click.command("list")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--product", "product_id", default=None, help="Product ID.")
@click.option("--user", "user_id", default=None, help="Author's user ID.")
@click.option("--rating", default=None, type=click.IntRange(1, 5))
@click.option("--active/--inactive", "is_active", default=None, help="Filter by visibility.")
@click.pass_obj
def review_list(
    obj: CliContext,
    page: int,
    limit: int,
    product_id: str | None,
    user_id: str | None,
    rating: int | None,
    is_active: bool | None,
) -> None:
    """List reviews, newest first."""
    handler = ListReviewsHandler(review_repo=review_repository())

    try:
        result = handler.handle(
            page=page,
            limit=limit,
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            is_active=is_active,
        )
    except DomainException as exc:
        raise obj.error(exc)

    def render() -> None:
        if not result.items:
            click.echo("No reviews found.")
            return
        click.echo(f"{'ID':<6} {'Product':<8} {'User':<8} {'Rating':>6}  Comment")
        click.echo("-" * 50)
        for r in result.items:
            hidden = " (hidden)" if not r.is_active else ""
            click.echo(
                f"{r.id:<6} {r.product_id:<8} {r.user_id:<8} {r.rating:>6}  "
                f"{r.comment}{hidden}"
            )
        click.echo(f"Page {result.page}/{result.pages} ({result.total} reviews)")

    obj.emit(result, render)
