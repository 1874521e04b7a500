"""Transaction management commands."""

import click
from bizledger.cli.error_handling import format_money, handle_domain_error
from bizledger.cli.date_filters import resolve_cli_date_range
from bizledger.domain.entities import PaymentMode, TransactionType
from bizledger.domain.errors import DomainError
from bizledger.domain.ledger import bank_label
from bizledger.domain.master import MasterDataService
from bizledger.domain.transaction import TransactionService
from bizledger.utils.amount_parser import parse_amount
from bizledger.utils.bank_resolver import resolve_bank
from bizledger.utils.date_parser import parse_date

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)
MODE_CHOICE = click.Choice([m.value for m in PaymentMode], case_sensitive=False)


@click.group()
def transaction_group():
    """Manage ledger transactions."""
    pass


def _resolve_bank_or_exit(ctx, store, bank: str | None) -> str | None:
    if bank is None:
        return None
    try:
        return resolve_bank(MasterDataService(store).list_banks(), bank)
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Transaction date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--amount", required=True, help="Amount, greater than zero (e.g., 1200 or 1,200.50)")
@click.option("--type", "txn_type", type=TYPE_CHOICE, required=True, help="INCOME or EXPENSE")
@click.option("--category", default="Sales", show_default=True, help="Category name")
@click.option("--description", default="", help="Transaction description")
@click.option("--mode", type=MODE_CHOICE, default="CASH", show_default=True, help="Payment mode")
@click.option("--bank", help="Bank name or ID (required for BANK payments)")
@click.option("--cashier", help="Cashier name (defaults to the current user)")
@click.pass_context
def add_transaction(
    ctx,
    date_str: str,
    amount: str,
    txn_type: str,
    category: str,
    description: str,
    mode: str,
    bank: str | None,
    cashier: str | None,
):
    """Record a transaction.

    Examples:
        bizledger transaction add --amount 1200 --type EXPENSE --category Rent --mode BANK --bank bank1
        bizledger transaction add --amount 5000 --type INCOME --description "Counter sales"
    """
    store = ctx.obj["store"]
    service = TransactionService(store)

    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    bank_id = _resolve_bank_or_exit(ctx, store, bank)

    try:
        txn = service.create_transaction(
            date=txn_date,
            description=description,
            category=category,
            amount=txn_amount,
            type=TransactionType(txn_type.upper()),
            payment_mode=PaymentMode(mode.upper()),
            bank_id=bank_id,
            cashier_name=cashier or ctx.obj["user"],
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_money(txn.amount)} ({txn.type.value})")
    click.echo(f"  Mode: {txn.payment_mode.value}")
    if description:
        click.echo(f"  Description: {description}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--date", "date_str", help="Transaction date")
@click.option("--amount", help="Amount, greater than zero")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="INCOME or EXPENSE")
@click.option("--category", help="Category name")
@click.option("--description", help="Transaction description")
@click.option("--mode", type=MODE_CHOICE, help="Payment mode")
@click.option("--bank", help="Bank name or ID (required when switching to BANK)")
@click.option("--cashier", help="Cashier name")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    date_str: str | None,
    amount: str | None,
    txn_type: str | None,
    category: str | None,
    description: str | None,
    mode: str | None,
    bank: str | None,
    cashier: str | None,
) -> None:
    """Update a transaction.

    The stored transaction is replaced as a whole; options not given keep
    their current values. Switching to CASH drops the bank reference.
    Transactions generated from invoices cannot be edited here.

    Examples:
        bizledger transaction update 3f9c2a1b7d4e --amount 75
        bizledger transaction update 3f9c2a1b7d4e --mode BANK --bank "Main Corporate Account"
    """
    store = ctx.obj["store"]
    service = TransactionService(store)

    changes = {}
    if date_str is not None:
        try:
            changes["date"] = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    if amount is not None:
        try:
            changes["amount"] = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    if txn_type is not None:
        changes["type"] = TransactionType(txn_type.upper())
    if category is not None:
        changes["category"] = category
    if description is not None:
        changes["description"] = description
    if cashier is not None:
        changes["cashier_name"] = cashier
    if mode is not None:
        changes["payment_mode"] = PaymentMode(mode.upper())
        if changes["payment_mode"] == PaymentMode.CASH:
            changes["bank_id"] = None
    if bank is not None:
        changes["bank_id"] = _resolve_bank_or_exit(ctx, store, bank)

    try:
        service.replace_fields(transaction_id, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="Filter to current month")
@click.option("--last-month", is_flag=True, help="Filter to previous month")
@click.option("--this-year", is_flag=True, help="Filter to current year")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
):
    """View transactions with optional date filters."""
    store = ctx.obj["store"]
    service = TransactionService(store)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={"this-month": this_month, "last-month": last_month, "this-year": this_year},
    )

    transactions = service.list_transactions(start_date=start, end_date=end)
    if not transactions:
        click.echo("No transactions found.")
        return

    banks = MasterDataService(store).list_banks()
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<20} {'Date':<12} {'Type':<8} {'Amount':>12}  {'Channel':<24} {'Category':<12} {'Description':<20}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        if txn.payment_mode == PaymentMode.CASH:
            channel = "Cash"
        else:
            channel = bank_label(txn.bank_id, banks)
        click.echo(
            f"{txn.id:<20} {str(txn.date):<12} {txn.type.value:<8} {format_money(txn.amount):>12}  "
            f"{channel[:24]:<24} {txn.category[:12]:<12} {txn.description[:20]:<20}"
        )

    total_income = sum(txn.amount for txn in transactions if txn.type == TransactionType.INCOME)
    total_expense = sum(txn.amount for txn in transactions if txn.type == TransactionType.EXPENSE)
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<20} Income: {format_money(total_income)} | "
        f"Expenses: {format_money(total_expense)} | Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str) -> None:
    """Delete a transaction.

    Deleting an ID that does not exist does nothing.

    Examples:
        bizledger transaction delete 3f9c2a1b7d4e
    """
    store = ctx.obj["store"]
    service = TransactionService(store)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Transaction {transaction_id} not found; nothing to delete.")
        return

    if not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
