"""CLI commands for placed orders."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderDTO
from storefront.application.record_payment import RecordPaymentHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import order_repository, session_repository
from storefront.infrastructure.cli.context import CliContext, fmt, pass_cli


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    cur = dto.currency
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Handover: {dto.delivery_method}")
    click.echo(f"Phone:    {dto.phone}")
    click.echo(f"Payment:  {dto.payment_provider}")
    if dto.scheduled_for:
        click.echo(f"For:      {dto.scheduled_for}")
    click.echo()

    click.echo(f"  {'Item':<28} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<28} {item.quantity:>5} "
            f"{fmt(item.unit_price, cur):>12} {fmt(item.line_total, cur):>12}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Subtotal':<47} {fmt(dto.subtotal, cur):>12}")
    click.echo(f"  {'Delivery fee':<47} {fmt(dto.delivery_fee, cur):>12}")
    if dto.discount:
        label = f"Discount ({dto.promo_code})"
        click.echo(f"  {label:<47} {'-' + fmt(dto.discount, cur):>12}")
    click.echo(f"  {'Order Total':<47} {fmt(dto.grand_total, cur):>12}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@pass_cli
def order_show(ctx: CliContext, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(ctx.data_dir))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


def _record(ctx: CliContext, order_id: int, succeeded: bool) -> OrderDTO:
    handler = RecordPaymentHandler(
        order_repo=order_repository(ctx.data_dir),
        session_repo=session_repository(ctx.data_dir),
    )
    try:
        return handler.handle(order_id, succeeded, session_key=ctx.session)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("pay")
@click.option("--id", "order_id", required=True, type=int, help="Order ID that was paid.")
@pass_cli
def order_pay(ctx: CliContext, order_id: int) -> None:
    """Record a successful payment (clears the cart)."""
    dto = _record(ctx, order_id, succeeded=True)
    click.echo(f"Order {dto.order_number} paid.")


@click.command("fail")
@click.option("--id", "order_id", required=True, type=int, help="Order ID whose payment failed.")
@pass_cli
def order_fail(ctx: CliContext, order_id: int) -> None:
    """Record a failed payment (the cart is kept for a retry)."""
    dto = _record(ctx, order_id, succeeded=False)
    click.echo(f"Payment for order {dto.order_number} failed.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@pass_cli
def order_cancel(ctx: CliContext, order_id: int) -> None:
    """Cancel an unpaid order."""
    handler = CancelOrderHandler(order_repo=order_repository(ctx.data_dir))

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")
