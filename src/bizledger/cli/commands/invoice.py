"""Invoice management commands."""

from decimal import Decimal

import click
from bizledger.cli.error_handling import format_money, handle_domain_error
from bizledger.domain.entities import InvoiceItem, InvoiceStatus
from bizledger.domain.errors import DomainError
from bizledger.domain.invoice import InvoiceService, new_item
from bizledger.domain.reconciler import InvoiceReconciler, invoice_cost, invoice_total
from bizledger.utils.amount_parser import parse_amount, parse_quantity
from bizledger.utils.date_parser import parse_date

STATUS_CHOICE = click.Choice([s.value for s in InvoiceStatus], case_sensitive=False)


def _service(ctx) -> InvoiceService:
    return InvoiceService(ctx.obj["store"], InvoiceReconciler(ctx.obj["policy"]))


def parse_item(service: InvoiceService, item_text: str) -> InvoiceItem:
    """Parse an item given as DESCRIPTION:QTY[:PRICE[:COST]].

    Fields are separated by ':', so the description cannot contain one.
    Without a price, the item is priced from the inventory item whose name
    equals the description.

    Raises:
        ValueError: If the item is malformed
        NotFoundError: If no price is given and no inventory item matches
    """
    parts = item_text.split(":")
    if len(parts) < 2 or len(parts) > 4:
        raise ValueError(
            f"Item must look like DESCRIPTION:QTY[:PRICE[:COST]] and the description "
            f"cannot contain ':', got '{item_text}'"
        )

    description = parts[0].strip()
    try:
        quantity = parse_quantity(parts[1])
    except ValueError as e:
        raise ValueError(f"{e} in item '{item_text}' (descriptions cannot contain ':')") from None
    if len(parts) == 2:
        return service.item_from_inventory(description, quantity)

    unit_price = parse_amount(parts[2])
    unit_cost = parse_amount(parts[3]) if len(parts) == 4 else Decimal("0")
    return new_item(description, quantity, unit_price, unit_cost)


def _parse_items(ctx, service: InvoiceService, item_texts) -> list[InvoiceItem]:
    items = []
    for item_text in item_texts:
        try:
            items.append(parse_item(service, item_text))
        except ValueError as e:
            handle_domain_error(ctx, e)
    return items


def _echo_delta(delta) -> None:
    for txn in delta.added:
        click.echo(f"  Booked income {txn.id}: {format_money(txn.amount)}")
    for txn in delta.removed:
        click.echo(f"  Removed income {txn.id}: {format_money(txn.amount)}")


@click.group()
def invoice_group():
    """Manage client invoices."""
    pass


@invoice_group.command("create")
@click.option("--client", "client_name", required=True, help="Client name")
@click.option("--date", "date_str", default="today", show_default=True, help="Invoice date")
@click.option(
    "--item",
    "items",
    multiple=True,
    help=(
        "Line item as DESCRIPTION:QTY:PRICE[:COST], or DESCRIPTION:QTY to price "
        "from inventory. The description cannot contain ':'"
    ),
)
@click.option("--status", type=STATUS_CHOICE, default="PENDING", show_default=True)
@click.option("--cashier", help="Cashier name (defaults to the current user)")
@click.pass_context
def create_invoice(ctx, client_name: str, date_str: str, items, status: str, cashier: str | None):
    """Create an invoice.

    A PAID invoice is booked as cash income straight away.

    Examples:
        bizledger invoice create --client Acme --item "Widget:3:100:60" --status PAID
        bizledger invoice create --client Acme --item "Widget:2"
    """
    service = _service(ctx)
    try:
        invoice_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    parsed = _parse_items(ctx, service, items)
    try:
        invoice, delta = service.create_invoice(
            client_name=client_name,
            date=invoice_date,
            items=parsed,
            status=InvoiceStatus(status.upper()),
            cashier_name=cashier or ctx.obj["user"],
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created invoice {invoice.invoice_number} (id: {invoice.id})")
    click.echo(f"  Total: {format_money(invoice_total(invoice))}")
    _echo_delta(delta)


@invoice_group.command("update")
@click.argument("invoice_ref")
@click.option("--client", "client_name", help="Client name")
@click.option("--date", "date_str", help="Invoice date")
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Replacement line items in the same format as create (replaces the whole item list)",
)
@click.option("--clear-items", is_flag=True, help="Remove every line item")
@click.option("--status", type=STATUS_CHOICE, help="New status")
@click.pass_context
def update_invoice(
    ctx,
    invoice_ref: str,
    client_name: str | None,
    date_str: str | None,
    items,
    clear_items: bool,
    status: str | None,
):
    """Update an invoice by id or invoice number.

    Marking an invoice PAID books its income if it is not booked yet.

    Examples:
        bizledger invoice update INV-123456 --status PAID
    """
    service = _service(ctx)
    try:
        current = service.require_invoice(invoice_ref)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if items and clear_items:
        click.echo("Error: --item cannot be combined with --clear-items.", err=True)
        ctx.exit(1)

    invoice_date = current.date
    if date_str is not None:
        try:
            invoice_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    new_items = list(current.items)
    if items:
        new_items = _parse_items(ctx, service, items)
    elif clear_items:
        new_items = []

    try:
        invoice, delta = service.update_invoice(
            current.id,
            client_name=client_name if client_name is not None else current.client_name,
            date=invoice_date,
            items=new_items,
            status=InvoiceStatus(status.upper()) if status else current.status,
            cashier_name=current.cashier_name,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated invoice {invoice.invoice_number}")
    _echo_delta(delta)


@invoice_group.command("delete")
@click.argument("invoice_ref")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_invoice(ctx, invoice_ref: str, yes: bool):
    """Delete an invoice and its booked income."""
    service = _service(ctx)
    try:
        current = service.require_invoice(invoice_ref)
    except DomainError:
        click.echo(f"Invoice {invoice_ref} not found; nothing to delete.")
        return

    if not yes and not click.confirm(
        f"Are you sure you want to delete invoice {current.invoice_number}?"
    ):
        click.echo("Deletion cancelled.")
        return

    delta = service.delete_invoice(current.id)
    click.echo(f"Deleted invoice {current.invoice_number}")
    _echo_delta(delta)


@invoice_group.command("list")
@click.option("--status", type=STATUS_CHOICE, help="Only show invoices with this status")
@click.pass_context
def list_invoices(ctx, status: str | None):
    """List invoices."""
    service = _service(ctx)
    invoices = service.list_invoices(InvoiceStatus(status.upper()) if status else None)
    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"\nFound {len(invoices)} invoice(s):")
    click.echo("-" * 80)
    click.echo(f"{'Number':<12} {'Date':<12} {'Client':<24} {'Status':<8} {'Total':>14}")
    click.echo("-" * 80)
    for inv in invoices:
        click.echo(
            f"{inv.invoice_number:<12} {str(inv.date):<12} {inv.client_name[:24]:<24} "
            f"{inv.status.value:<8} {format_money(invoice_total(inv)):>14}"
        )


@invoice_group.command("show")
@click.argument("invoice_ref")
@click.pass_context
def show_invoice(ctx, invoice_ref: str):
    """Show an invoice with its line items."""
    service = _service(ctx)
    try:
        inv = service.require_invoice(invoice_ref)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice {inv.invoice_number} (id: {inv.id})")
    click.echo(f"  Client: {inv.client_name}")
    click.echo(f"  Date: {inv.date}")
    click.echo(f"  Status: {inv.status.value}")
    if inv.cashier_name:
        click.echo(f"  Cashier: {inv.cashier_name}")
    click.echo("")
    click.echo(f"  {'Description':<24} {'Qty':>5} {'Price':>12} {'Cost':>12} {'Amount':>14}")
    for item in inv.items:
        click.echo(
            f"  {item.description[:24]:<24} {item.quantity:>5} {format_money(item.unit_price):>12} "
            f"{format_money(item.unit_cost):>12} {format_money(item.revenue):>14}"
        )
    click.echo("")
    revenue = invoice_total(inv)
    cost = invoice_cost(inv)
    click.echo(f"  Total: {format_money(revenue)}")
    click.echo(f"  Cost: {format_money(cost)}")
    click.echo(f"  Profit: {format_money(revenue - cost)}")


def register_commands(cli: click.Group) -> None:
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
