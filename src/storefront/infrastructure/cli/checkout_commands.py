"""CLI commands for the checkout steps."""

from __future__ import annotations

from datetime import datetime

import click

from storefront.application.apply_promo_code import ApplyPromoCodeHandler, RemovePromoCodeHandler
from storefront.application.dto import OrderSummaryDTO, StepResult
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.select_delivery import (
    SelectDeliveryLocationHandler,
    SelectDeliveryMethodHandler,
    SelectPickupLocationHandler,
)
from storefront.application.select_payment import (
    SelectPaymentMethodHandler,
    ShowPaymentOptionsHandler,
)
from storefront.application.set_contact import ScheduleOrderHandler, SetPhoneHandler
from storefront.application.show_order_summary import ShowOrderSummaryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    component_repository,
    order_repository,
    promo_code_repository,
    session_repository,
    tenant_repository,
    wallet_repository,
)
from storefront.infrastructure.cli.context import CliContext, fail, fmt, pass_cli
from storefront.infrastructure.cli.order_commands import display_order
from storefront.infrastructure.config import Config


def display_summary(dto: OrderSummaryDTO) -> None:
    """Shared formatting for the order summary."""
    cur = dto.currency
    for change in dto.price_changes:
        click.echo(
            f"Price changed: {change.name} "
            f"{fmt(change.old_price, cur)} -> {fmt(change.new_price, cur)}"
        )
    for meal in dto.meals:
        click.echo(meal.meal_name)
        for line in meal.lines:
            click.echo(f"  {line.name:<28} {line.quantity:>3} {fmt(line.line_total, cur):>14}")

    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<32} {fmt(dto.subtotal, cur):>14}")
    if dto.delivery_method == "pickup":
        click.echo(f"  {'Pickup':<32} {fmt(0, cur):>14}")
    else:
        click.echo(f"  {'Delivery fee':<32} {fmt(dto.delivery_fee, cur):>14}")
    if dto.discount:
        label = f"Discount ({dto.promo_code})"
        click.echo(f"  {label:<32} {'-' + fmt(dto.discount, cur):>14}")
    click.echo(f"  {'Total':<32} {fmt(dto.grand_total, cur):>14}")
    if dto.below_minimum:
        click.echo(
            f"Minimum order is {fmt(dto.minimum_order_amount, cur)}; "
            f"add {fmt(dto.amount_needed, cur)} more."
        )


def _finish(result: StepResult, success: str) -> None:
    if result.delivery_fee is not None:
        click.echo(result.delivery_fee.display_text)
    if result.problem is not None:
        alternatives = result.alternatives
        if alternatives.get("can_switch_to_pickup"):
            click.echo("Pickup is available instead.")
        contact = alternatives.get("contact")
        if contact:
            click.echo(
                f"Contact {contact['brand_name']}: "
                f"{contact.get('whatsapp') or contact.get('phone')}"
            )
        if alternatives.get("whatsapp_message"):
            click.echo(f"Suggested message: {alternatives['whatsapp_message']}")
        fail(result.problem)
    click.echo(success)


@click.command("method")
@click.option("--method", required=True, type=click.Choice(["delivery", "pickup"]))
@pass_cli
def checkout_method(ctx: CliContext, method: str) -> None:
    """Choose delivery or pickup."""
    handler = SelectDeliveryMethodHandler(
        session_repo=session_repository(ctx.data_dir),
        tenant_repo=tenant_repository(ctx.data_dir),
    )

    try:
        result = handler.handle(ctx.session, ctx.tenant, method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _finish(result, f"Handover method set to {method}.")


@click.command("quarter")
@click.option("--town", "town_id", required=True, help="Town ID.")
@click.option("--quarter", "quarter_id", required=True, help="Quarter ID.")
@click.option("--neighbourhood", default="", help="Street or landmark.")
@pass_cli
def checkout_quarter(ctx: CliContext, town_id: str, quarter_id: str, neighbourhood: str) -> None:
    """Choose the delivery quarter (resolves the delivery fee)."""
    handler = SelectDeliveryLocationHandler(
        session_repo=session_repository(ctx.data_dir),
        tenant_repo=tenant_repository(ctx.data_dir),
    )

    try:
        result = handler.handle(ctx.session, ctx.tenant, town_id, quarter_id, neighbourhood)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _finish(result, "Delivery location saved.")


@click.command("pickup")
@click.option("--location", "location_id", required=True, help="Pickup location ID.")
@pass_cli
def checkout_pickup(ctx: CliContext, location_id: str) -> None:
    """Choose a pickup location."""
    handler = SelectPickupLocationHandler(
        session_repo=session_repository(ctx.data_dir),
        tenant_repo=tenant_repository(ctx.data_dir),
    )

    try:
        result = handler.handle(ctx.session, ctx.tenant, location_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _finish(result, "Pickup location saved.")


@click.command("phone")
@click.option("--phone", required=True, help="Cameroon mobile number.")
@pass_cli
def checkout_phone(ctx: CliContext, phone: str) -> None:
    """Set the contact phone."""
    handler = SetPhoneHandler(session_repo=session_repository(ctx.data_dir))
    _finish(handler.handle(ctx.session, ctx.tenant, phone), "Phone saved.")


@click.command("schedule")
@click.option("--date", "when", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Date the order is for (YYYY-MM-DD); omit to clear.")
@pass_cli
def checkout_schedule(ctx: CliContext, when: datetime | None) -> None:
    """Schedule the order for a later date."""
    handler = ScheduleOrderHandler(session_repo=session_repository(ctx.data_dir))
    scheduled_for = when.date() if when else None
    message = f"Scheduled for {scheduled_for}." if scheduled_for else "Schedule cleared."
    _finish(handler.handle(ctx.session, ctx.tenant, scheduled_for), message)


@click.command("promo-apply")
@click.option("--code", required=True, help="Promo code (case-insensitive).")
@pass_cli
def checkout_promo_apply(ctx: CliContext, code: str) -> None:
    """Apply a promo code, replacing any code already applied."""
    handler = ApplyPromoCodeHandler(
        session_repo=session_repository(ctx.data_dir),
        promo_repo=promo_code_repository(ctx.data_dir),
        component_repo=component_repository(ctx.data_dir),
    )

    try:
        result = handler.handle(ctx.session, ctx.tenant, ctx.client, code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.problem is not None:
        fail(result.problem)
    if result.replaced:
        click.echo(f"Replaced promo code {result.replaced}.")
    click.echo(f"Promo code {result.code} applied: -{fmt(result.discount, Config.CURRENCY)}")


@click.command("promo-remove")
@pass_cli
def checkout_promo_remove(ctx: CliContext) -> None:
    """Remove the applied promo code."""
    RemovePromoCodeHandler(session_repo=session_repository(ctx.data_dir)).handle(
        ctx.session, ctx.tenant
    )
    click.echo("Promo code removed.")


@click.command("summary")
@pass_cli
def checkout_summary(ctx: CliContext) -> None:
    """Show the live order summary."""
    handler = ShowOrderSummaryHandler(
        session_repo=session_repository(ctx.data_dir),
        tenant_repo=tenant_repository(ctx.data_dir),
        component_repo=component_repository(ctx.data_dir),
        promo_repo=promo_code_repository(ctx.data_dir),
    )

    try:
        result = handler.handle(ctx.session, ctx.tenant, ctx.client)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for notice in result.notices:
        click.echo(f"Notice: {notice.message}")
    if result.problem is not None:
        fail(result.problem)
    display_summary(result.summary)


@click.command("payment")
@click.option("--provider", type=click.Choice(["mtn_momo", "orange_money", "wallet"]),
              default=None, help="Payment provider; omit to list the options.")
@click.option("--phone", default=None, help="Mobile money number (defaults to the contact phone).")
@pass_cli
def checkout_payment(ctx: CliContext, provider: str | None, phone: str | None) -> None:
    """List payment options or choose one."""
    repos = dict(
        session_repo=session_repository(ctx.data_dir),
        tenant_repo=tenant_repository(ctx.data_dir),
        component_repo=component_repository(ctx.data_dir),
        promo_repo=promo_code_repository(ctx.data_dir),
        wallet_repo=wallet_repository(ctx.data_dir),
        wallet_enabled=Config.WALLET_ENABLED,
    )

    try:
        if provider is None:
            options = ShowPaymentOptionsHandler(**repos).handle(ctx.session, ctx.tenant, ctx.client)
        else:
            result = SelectPaymentMethodHandler(**repos).handle(
                ctx.session, ctx.tenant, ctx.client, provider, phone
            )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if provider is not None:
        _finish(result, f"Payment method set to {provider}.")
        return

    for provider_id, label in options.providers:
        if provider_id == "wallet":
            state = "" if options.wallet.enabled else "  (insufficient balance)"
            click.echo(
                f"  {provider_id:<14} {label} {fmt(options.wallet.balance, Config.CURRENCY)}{state}"
            )
        else:
            click.echo(f"  {provider_id:<14} {label}")
    click.echo(f"Total: {fmt(options.grand_total, Config.CURRENCY)}")


@click.command("place")
@pass_cli
def checkout_place(ctx: CliContext) -> None:
    """Place the order (re-validates everything)."""
    handler = PlaceOrderHandler(
        session_repo=session_repository(ctx.data_dir),
        tenant_repo=tenant_repository(ctx.data_dir),
        component_repo=component_repository(ctx.data_dir),
        promo_repo=promo_code_repository(ctx.data_dir),
        order_repo=order_repository(ctx.data_dir),
        wallet_repo=wallet_repository(ctx.data_dir),
        wallet_enabled=Config.WALLET_ENABLED,
    )

    try:
        result = handler.handle(ctx.session, ctx.tenant, ctx.client)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.problem is not None:
        if result.summary is not None:
            display_summary(result.summary)
        fail(result.problem)

    click.echo(f"Order {result.order.order_number} placed, awaiting payment.")  # type: ignore[union-attr]
    display_order(result.order)
