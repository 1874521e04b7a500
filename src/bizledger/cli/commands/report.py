"""Range report command."""

import click
from bizledger.cli.date_filters import resolve_cli_date_range
from bizledger.cli.error_handling import format_money, handle_domain_error
from bizledger.domain.errors import DomainError
from bizledger.domain.reports import ReportService
from bizledger.utils.date_parser import default_report_range


@click.command("report")
@click.option("--start-date", help="Start date (defaults to one month ago)")
@click.option("--end-date", help="End date (defaults to today)")
@click.option("--this-month", is_flag=True, help="Report on the current month")
@click.option("--last-month", is_flag=True, help="Report on the previous month")
@click.option("--this-year", is_flag=True, help="Report on the current year")
@click.option("--last-year", is_flag=True, help="Report on the previous year")
@click.pass_context
def report(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
):
    """Show expenses, invoice profit and item profit for a date range.

    Both ends of the range are inclusive.

    Examples:
        bizledger report --start-date 2024-01-01 --end-date 2024-03-31
        bizledger report --last-month
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "last-month": last_month,
            "this-year": this_year,
            "last-year": last_year,
        },
        default_range=default_report_range(),
    )

    try:
        result = ReportService(ctx.obj["store"]).report(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Report {result.start_date} to {result.end_date}")
    click.echo("=" * 72)
    totals = result.summary
    click.echo(f"{'Revenue':<40} {format_money(totals.total_revenue):>16}")
    click.echo(f"{'Expenses':<40} {format_money(totals.total_expenses):>16}")
    click.echo(f"{'Net profit':<40} {format_money(totals.net_profit):>16}")
    click.echo(f"{'Profit margin':<40} {totals.profit_margin:>15.1f}%")

    click.echo("\nExpenses by category")
    click.echo("-" * 72)
    if not result.expense_by_category:
        click.echo("  No expenses in range.")
    for row in result.expense_by_category:
        click.echo(f"  {row.category[:38]:<38} {format_money(row.amount):>16}")
    click.echo(f"  {'Total':<38} {format_money(result.total_expense):>16}")

    click.echo("\nInvoice profit")
    click.echo("-" * 72)
    if not result.invoice_profit:
        click.echo("  No invoices in range.")
    for row in result.invoice_profit:
        click.echo(
            f"  {row.invoice_number:<12} {row.client_name[:18]:<18} "
            f"{format_money(row.revenue):>12} {format_money(row.profit):>12} {row.margin:>8.1f}%"
        )

    click.echo("\nItem profit")
    click.echo("-" * 72)
    for row in result.item_profit:
        click.echo(
            f"  {row.description[:24]:<24} {row.quantity:>6} "
            f"{format_money(row.revenue):>12} {format_money(row.profit):>12} {row.margin:>8.1f}%"
        )

    if result.profit_trend:
        click.echo("\nDaily net flow")
        click.echo("-" * 72)
        for point in result.profit_trend:
            click.echo(f"  {str(point.date):<38} {format_money(point.net):>16}")


def register_commands(cli: click.Group) -> None:
    """Register report command with main CLI."""
    cli.add_command(report)
