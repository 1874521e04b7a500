"""Staff commands."""

import click
from bizledger.cli.error_handling import format_money, handle_domain_error
from bizledger.domain.errors import DomainError
from bizledger.domain.master import MasterDataService
from bizledger.utils.amount_parser import parse_amount


@click.group()
def staff_group():
    """Manage staff members."""
    pass


@staff_group.command("add")
@click.argument("name")
@click.option("--role", default="", help="Job role")
@click.option("--phone", default="", help="Phone number")
@click.option("--salary", default="0", show_default=True, help="Monthly salary")
@click.pass_context
def add_staff(ctx, name: str, role: str, phone: str, salary: str):
    """Add a staff member."""
    service = MasterDataService(ctx.obj["store"])
    try:
        amount = parse_amount(salary)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        member = service.add_staff(name=name, role=role, phone=phone, salary=amount)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added staff member '{member.name}' (id: {member.id})")


@staff_group.command("list")
@click.pass_context
def list_staff(ctx):
    """List staff members."""
    members = MasterDataService(ctx.obj["store"]).list_staff()
    if not members:
        click.echo("No staff found.")
        return

    click.echo(f"{'ID':<14} {'Name':<24} {'Role':<16} {'Phone':<14} {'Salary':>12}")
    click.echo("-" * 84)
    for member in members:
        click.echo(
            f"{member.id:<14} {member.name[:24]:<24} {member.role[:16]:<16} "
            f"{member.phone[:14]:<14} {format_money(member.salary):>12}"
        )


@staff_group.command("delete")
@click.argument("staff_id")
@click.pass_context
def delete_staff(ctx, staff_id: str):
    """Delete a staff member by id."""
    if MasterDataService(ctx.obj["store"]).delete_staff(staff_id):
        click.echo(f"Deleted staff member {staff_id}")
    else:
        click.echo(f"Staff member {staff_id} not found; nothing to delete.")


def register_commands(cli: click.Group) -> None:
    """Register staff commands with main CLI."""
    cli.add_command(staff_group, name="staff")
