"""Bank account commands."""

import click
from bizledger.cli.error_handling import format_money, handle_domain_error
from bizledger.domain.errors import DomainError
from bizledger.domain.master import MasterDataService
from bizledger.utils.amount_parser import parse_amount
from bizledger.utils.bank_resolver import resolve_bank


@click.group()
def bank_group():
    """Manage bank accounts."""
    pass


@bank_group.command("add")
@click.argument("bank_name")
@click.option("--account-number", default="", help="Account number")
@click.option("--branch", default="", help="Branch name")
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.pass_context
def add_bank(ctx, bank_name: str, account_number: str, branch: str, balance: str):
    """Add a bank account.

    Examples:
        bizledger bank add "Savings" --account-number 12345678 --balance 2500
    """
    service = MasterDataService(ctx.obj["store"])
    try:
        opening = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        bank = service.add_bank(
            bank_name=bank_name,
            account_number=account_number,
            branch=branch,
            balance=opening,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created bank '{bank.bank_name}' (id: {bank.id})")


@bank_group.command("list")
@click.pass_context
def list_banks(ctx):
    """List all bank accounts."""
    banks = MasterDataService(ctx.obj["store"]).list_banks()
    if not banks:
        click.echo("No banks found.")
        return

    click.echo(f"{'ID':<14} {'Name':<28} {'Account':<12} {'Branch':<12} {'Opening':>14}")
    click.echo("-" * 84)
    for bank in banks:
        click.echo(
            f"{bank.id:<14} {bank.bank_name[:28]:<28} {bank.account_number[:12]:<12} "
            f"{bank.branch[:12]:<12} {format_money(bank.balance):>14}"
        )


@bank_group.command("delete")
@click.argument("bank")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_bank(ctx, bank: str, yes: bool):
    """Delete a bank account by id or name.

    Transactions recorded against the bank are kept.
    """
    service = MasterDataService(ctx.obj["store"])
    try:
        bank_id = resolve_bank(service.list_banks(), bank)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete bank {bank}?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_bank(bank_id)
    click.echo(f"Deleted bank {bank_id}")


def register_commands(cli: click.Group) -> None:
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
