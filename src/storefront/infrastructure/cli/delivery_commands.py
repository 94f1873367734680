"""CLI commands for delivery information."""

from __future__ import annotations

import click

from storefront.application.select_delivery import ResolveDeliveryFeeHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import tenant_repository
from storefront.infrastructure.cli.context import CliContext, pass_cli


@click.command("fee")
@click.option("--quarter", "quarter_id", required=True, help="Quarter ID.")
@pass_cli
def delivery_fee(ctx: CliContext, quarter_id: str) -> None:
    """Show the delivery fee to a quarter."""
    handler = ResolveDeliveryFeeHandler(tenant_repo=tenant_repository(ctx.data_dir))

    try:
        dto = handler.handle(ctx.tenant, quarter_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.available:
        raise click.ClickException(dto.display_text)
    click.echo(dto.display_text)
