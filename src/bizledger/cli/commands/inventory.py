"""Inventory commands."""

import click
from bizledger.cli.error_handling import format_money, handle_domain_error
from bizledger.domain.errors import DomainError
from bizledger.domain.master import MasterDataService
from bizledger.utils.amount_parser import parse_amount


@click.group()
def inventory_group():
    """Manage inventory items used to price invoices."""
    pass


@inventory_group.command("add")
@click.argument("name")
@click.option("--unit", default="Pcs", show_default=True, help="Unit of measure")
@click.option("--purchase-price", default="0", show_default=True, help="Unit purchase price")
@click.option("--selling-price", default="0", show_default=True, help="Unit selling price")
@click.option("--stock", default="0", show_default=True, help="Quantity in stock")
@click.pass_context
def add_item(ctx, name: str, unit: str, purchase_price: str, selling_price: str, stock: str):
    """Add an inventory item.

    Examples:
        bizledger inventory add Widget --purchase-price 60 --selling-price 100 --stock 25
    """
    service = MasterDataService(ctx.obj["store"])
    try:
        purchase = parse_amount(purchase_price)
        selling = parse_amount(selling_price)
        quantity = parse_amount(stock)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        item = service.add_inventory_item(
            name=name,
            unit=unit,
            purchase_price=purchase,
            selling_price=selling,
            stock=quantity,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added inventory item '{item.name}' (id: {item.id})")


@inventory_group.command("list")
@click.pass_context
def list_items(ctx):
    """List inventory items."""
    items = MasterDataService(ctx.obj["store"]).list_inventory()
    if not items:
        click.echo("No inventory items found.")
        return

    click.echo(f"{'ID':<14} {'Name':<24} {'Unit':<6} {'Purchase':>12} {'Selling':>12} {'Stock':>10}")
    click.echo("-" * 84)
    for item in items:
        click.echo(
            f"{item.id:<14} {item.name[:24]:<24} {item.unit[:6]:<6} "
            f"{format_money(item.purchase_price):>12} {format_money(item.selling_price):>12} "
            f"{item.stock:>10}"
        )


@inventory_group.command("delete")
@click.argument("item_id")
@click.pass_context
def delete_item(ctx, item_id: str):
    """Delete an inventory item by id."""
    if MasterDataService(ctx.obj["store"]).delete_inventory_item(item_id):
        click.echo(f"Deleted inventory item {item_id}")
    else:
        click.echo(f"Inventory item {item_id} not found; nothing to delete.")


def register_commands(cli: click.Group) -> None:
    """Register inventory commands with main CLI."""
    cli.add_command(inventory_group, name="inventory")
