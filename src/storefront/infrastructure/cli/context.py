"""Shared state and helpers for the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

import click

from storefront.domain.model.problems import Problem


@dataclass
class CliContext:
    """Who is shopping where; filled from the root group's options."""

    data_dir: str
    session: str
    tenant: str
    client: str


pass_cli = click.make_pass_decorator(CliContext)


def fail(problem: Problem) -> None:
    """Report a checkout problem the way click reports errors (exit code 1)."""
    raise click.ClickException(problem.message)


def fmt(amount: int | None, currency: str = "XAF") -> str:
    if amount is None:
        return "n/a"
    return f"{amount:,} {currency}"
