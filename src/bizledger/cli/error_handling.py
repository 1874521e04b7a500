"""CLI error handling helpers."""

import click

from bizledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def format_money(amount) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"
