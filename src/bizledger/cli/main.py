"""Main CLI entry point."""

import click
from bizledger.database.factories import create_sqlite_store
from bizledger.domain.reconciler import ReconcilePolicy
from bizledger.logging_config import configure_logging

# Import and register all commands at module level
from bizledger.cli.commands import (
    transaction,
    invoice,
    bank,
    staff,
    inventory,
    summary,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BIZLEDGER_DB_PATH environment variable)",
    envvar="BIZLEDGER_DB_PATH",
)
@click.option(
    "--user",
    default="Admin",
    show_default=True,
    envvar="BIZLEDGER_USER",
    help="Current username, recorded as cashier on new entries",
)
@click.option(
    "--refresh-paid-amount/--keep-paid-amount",
    default=False,
    envvar="BIZLEDGER_REFRESH_PAID_AMOUNT",
    help="Rebuild a paid invoice's income entry when the invoice is edited",
)
@click.option(
    "--retract-on-unpaid/--keep-on-unpaid",
    default=False,
    envvar="BIZLEDGER_RETRACT_ON_UNPAID",
    help="Remove an invoice's income entry when it is no longer marked paid",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="BIZLEDGER_LOG_LEVEL",
    help="Log level for diagnostic output on stderr",
)
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    user: str,
    refresh_paid_amount: bool,
    retract_on_unpaid: bool,
    log_level: str,
):
    """Bizledger - Small business bookkeeping.

    Record cash and bank transactions and client invoices, keep paid invoices
    booked as income, and report on balances and profit.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level.upper())

    ctx.obj["user"] = user
    ctx.obj["policy"] = ReconcilePolicy(
        refresh_paid_amount=refresh_paid_amount,
        retract_on_unpaid=retract_on_unpaid,
    )

    # Initialize the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
transaction.register_commands(cli)
invoice.register_commands(cli)
bank.register_commands(cli)
staff.register_commands(cli)
inventory.register_commands(cli)
summary.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
