"""CLI commands for users."""

from __future__ import annotations

import click

from storefront.application.delete_user import DeleteUserHandler
from storefront.application.list_users import ListUsersHandler
from storefront.application.register_user import RegisterUserHandler
from storefront.application.update_user import UpdateUserHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.user import Role
from storefront.infrastructure.bootstrap import (
    order_repository,
    review_repository,
    user_repository,
)
from storefront.infrastructure.cli.context import CliContext

ROLE_CHOICE = click.Choice([r.value for r in Role], case_sensitive=False)


@click.command("register")
@click.option("--email", required=True)
@click.option("--name", default="")
@click.option(
    "--role",
    type=ROLE_CHOICE,
    default=Role.USER.value,
    show_default=True,
)
@click.pass_obj
def user_register(obj: CliContext, email: str, name: str, role: str) -> None:
    """Register a user."""
    handler = RegisterUserHandler(user_repo=user_repository())

    try:
        user = handler.handle(email=email, name=name, role=Role(role.upper()))
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(user, lambda: click.echo(f"User #{user.id} {user.email} registered"))


@click.command("delete")
@click.option("--id", "user_id", required=True)
@click.pass_obj
def user_delete(obj: CliContext, user_id: str) -> None:
    """Delete a user without orders (admin only)."""
    handler = DeleteUserHandler(
        user_repo=user_repository(),
        order_repo=order_repository(),
    )

    try:
        handler.handle(obj.principal(), user_id)
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(
        {"message": "User deleted successfully"},
        lambda: click.echo(f"User #{user_id} deleted."),
    )


@click.command("list")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--search", default=None, help="Part of the name or email.")
@click.option("--role", type=ROLE_CHOICE, default=None)
@click.pass_obj
def user_list(
    obj: CliContext,
    page: int,
    limit: int,
    search: str | None,
    role: str | None,
) -> None:
    """List users, newest first (admin only)."""
    handler = ListUsersHandler(
        user_repo=user_repository(),
        order_repo=order_repository(),
        review_repo=review_repository(),
    )

    try:
        result = handler.handle(
            obj.principal(),
            page=page,
            limit=limit,
            search=search,
            role=Role(role.upper()) if role else None,
        )
    except DomainException as exc:
        raise obj.error(exc)

    def render() -> None:
        if not result.items:
            click.echo("No users found.")
            return
        click.echo(f"{'ID':<6} {'Email':<28} {'Role':<6} {'Orders':>6} {'Reviews':>7}")
        click.echo("-" * 57)
        for u in result.items:
            click.echo(
                f"{u.id:<6} {u.email:<28} {u.role:<6} {u.order_count:>6} {u.review_count:>7}"
            )
        click.echo(f"Page {result.page}/{result.pages} ({result.total} users)")

    obj.emit(result, render)


@click.command("update")
@click.option("--id", "user_id", required=True)
@click.option("--name", default=None)
@click.option("--role", type=ROLE_CHOICE, default=None)
@click.pass_obj
def user_update(obj: CliContext, user_id: str, name: str | None, role: str | None) -> None:
    """Change a user's name or role (admin only)."""
    handler = UpdateUserHandler(user_repo=user_repository())

    try:
        user = handler.handle(
            obj.principal(),
            user_id,
            name=name,
            role=Role(role.upper()) if role else None,
        )
    except DomainException as exc:
        raise obj.error(exc)

    obj.emit(user, lambda: click.echo(f"User #{user.id} updated."))
