"""CLI commands for the cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.dto import CartDTO, CartResult
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart import (
    ClearCartHandler,
    RemoveFromCartHandler,
    UpdateCartQuantityHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import component_repository, session_repository
from storefront.infrastructure.cli.context import CliContext, fail, fmt, pass_cli


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for a cart grouped by meal."""
    if not dto.meals:
        click.echo("Your cart is empty.")
        return

    for meal in dto.meals:
        click.echo(f"{meal.meal_name}")
        for line in meal.lines:
            name = f"{line.name} ({line.unit})" if line.unit else line.name
            click.echo(
                f"  {name:<28} {line.quantity:>3} x {fmt(line.unit_price, dto.currency):>12}"
                f" {fmt(line.line_total, dto.currency):>12}"
            )
        click.echo(f"  {'Meal subtotal':<46} {fmt(meal.subtotal, dto.currency):>12}")
    click.echo(f"  {'-'*59}")
    click.echo(f"  {'Subtotal':<46} {fmt(dto.subtotal, dto.currency):>12}")
    click.echo(f"  {dto.item_count} item(s)")


def _finish(result: CartResult) -> None:
    display_cart(result.cart)
    if result.problem is not None:
        fail(result.problem)


@click.command("add")
@click.option("--component", "component_id", required=True, help="Meal component ID.")
@click.option("--qty", "quantity", default=1, show_default=True, type=click.IntRange(min=1))
@pass_cli
def cart_add(ctx: CliContext, component_id: str, quantity: int) -> None:
    """Add a meal component to the cart."""
    handler = AddToCartHandler(
        session_repo=session_repository(ctx.data_dir),
        component_repo=component_repository(ctx.data_dir),
    )

    try:
        result = handler.handle(ctx.session, ctx.tenant, component_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _finish(result)


@click.command("update")
@click.option("--component", "component_id", required=True, help="Meal component ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity; 0 removes the line.")
@pass_cli
def cart_update(ctx: CliContext, component_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartQuantityHandler(session_repo=session_repository(ctx.data_dir))

    try:
        result = handler.handle(ctx.session, ctx.tenant, component_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _finish(result)


@click.command("remove")
@click.option("--component", "component_id", required=True, help="Meal component ID.")
@pass_cli
def cart_remove(ctx: CliContext, component_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveFromCartHandler(session_repo=session_repository(ctx.data_dir))
    _finish(handler.handle(ctx.session, ctx.tenant, component_id))


@click.command("clear")
@pass_cli
def cart_clear(ctx: CliContext) -> None:
    """Empty the cart."""
    handler = ClearCartHandler(session_repo=session_repository(ctx.data_dir))
    handler.handle(ctx.session, ctx.tenant)
    click.echo("Cart cleared.")


@click.command("show")
@pass_cli
def cart_show(ctx: CliContext) -> None:
    """Show the cart grouped by meal."""
    handler = ShowCartHandler(session_repo=session_repository(ctx.data_dir))
    display_cart(handler.handle(ctx.session, ctx.tenant))
