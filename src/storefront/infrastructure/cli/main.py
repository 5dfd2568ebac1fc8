import click

from storefront.infrastructure.cli.context import CliContext
from storefront.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_show,
)
from storefront.infrastructure.cli.offer_commands import (
    offer_active,
    offer_create,
    offer_delete,
    offer_list,
    offer_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update,
)
from storefront.infrastructure.cli.product_commands import (
    category_add,
    category_delete,
    category_list,
    category_show,
    category_update,
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storefront.infrastructure.cli.review_commands import (
    review_add,
    review_deactivate,
    review_list,
)
from storefront.infrastructure.cli.user_commands import (
    user_delete,
    user_list,
    user_register,
    user_update,
)
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--as", "as_email", envvar="STOREFRONT_USER", default=None, help="Email of the acting user.")
@click.option("--log-level", default=None, help="Override STOREFRONT_LOG_LEVEL.")
@click.option("--json", "json_output", is_flag=True, help="Print results and errors as JSON.")
@click.pass_context
def cli(ctx: click.Context, as_email: str | None, log_level: str | None, json_output: bool) -> None:
    """Storefront: products, offers, orders and reviews"""
    configure_logging((log_level or Settings.from_env().log_level).upper())
    ctx.obj = CliContext(as_email=as_email, json_output=json_output)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def offer() -> None:
    """Manage offers."""


@cli.group()
def review() -> None:
    """Manage reviews."""


@cli.group()
def user() -> None:
    """Manage users."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_show)
category.add_command(category_update)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_show)
offer.add_command(offer_active)
offer.add_command(offer_create)
offer.add_command(offer_delete)
offer.add_command(offer_list)
offer.add_command(offer_update)
review.add_command(review_add)
review.add_command(review_deactivate)
review.add_command(review_list)
user.add_command(user_delete)
user.add_command(user_list)
user.add_command(user_register)
user.add_command(user_update)
