import logging

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.checkout_commands import (
    checkout_method,
    checkout_payment,
    checkout_phone,
    checkout_pickup,
    checkout_place,
    checkout_promo_apply,
    checkout_promo_remove,
    checkout_quarter,
    checkout_schedule,
    checkout_summary,
)
from storefront.infrastructure.cli.context import CliContext
from storefront.infrastructure.cli.delivery_commands import delivery_fee
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_fail,
    order_pay,
    order_show,
)
from storefront.infrastructure.config import Config


@click.group()
@click.option("--data-dir", default=Config.DATA_DIR, show_default=True,
              help="Directory holding the JSON data files.")
@click.option("--session", default="default", show_default=True, help="Browser session key.")
@click.option("--tenant", default="", help="Cook (tenant) whose storefront is used.")
@click.option("--client", default="guest", show_default=True, help="Client placing the order.")
@click.pass_context
def cli(ctx: click.Context, data_dir: str, session: str, tenant: str, client: str) -> None:
    """Storefront: cart and checkout for home cooks"""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliContext(data_dir=data_dir, session=session, tenant=tenant, client=client)


@cli.group()
def cart() -> None:
    """Manage the cart."""


@cli.group()
def checkout() -> None:
    """Walk through checkout."""


@cli.group()
def order() -> None:
    """Inspect and settle placed orders."""


@cli.group()
def delivery() -> None:
    """Delivery information."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_update)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
cart.add_command(cart_show)
checkout.add_command(checkout_method)
checkout.add_command(checkout_quarter)
checkout.add_command(checkout_pickup)
checkout.add_command(checkout_phone)
checkout.add_command(checkout_schedule)
checkout.add_command(checkout_promo_apply)
checkout.add_command(checkout_promo_remove)
checkout.add_command(checkout_summary)
checkout.add_command(checkout_payment)
checkout.add_command(checkout_place)
order.add_command(order_show)
order.add_command(order_pay)
order.add_command(order_fail)
order.add_command(order_cancel)
delivery.add_command(delivery_fee)
