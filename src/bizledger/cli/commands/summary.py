"""Balance and dashboard summary commands."""

import click
from bizledger.cli.error_handling import format_money
from bizledger.domain.entities import PaymentMode
from bizledger.domain.ledger import DEFAULT_TREND_WINDOW
from bizledger.domain.reports import ReportService


@click.command("balance")
@click.pass_context
def balance(ctx):
    """Show cash and bank balances.

    The bank total includes every bank's opening balance.
    """
    service = ReportService(ctx.obj["store"])
    channels = service.channel_balances()

    click.echo(f"{'Cash in hand':<32} {format_money(channels.cash):>16}")
    click.echo(f"{'Bank total':<32} {format_money(channels.bank_total):>16}")
    click.echo("-" * 49)
    for row in service.bank_balances():
        click.echo(f"  {row.label[:30]:<30} {format_money(row.balance):>16}")


@click.command("summary")
@click.option(
    "--window",
    default=DEFAULT_TREND_WINDOW,
    show_default=True,
    type=int,
    help="Number of most recent transactions in the trend",
)
@click.option("--recent", default=6, show_default=True, type=int, help="Recent transactions to show")
@click.option("--prompt", "show_prompt", is_flag=True, help="Print an insight prompt for a language model")
@click.pass_context
def summary(ctx, window: int, recent: int, show_prompt: bool):
    """Show revenue, expenses and profit over all transactions.

    Examples:
        bizledger summary
        bizledger summary --window 30
    """
    service = ReportService(ctx.obj["store"])

    if show_prompt:
        click.echo(service.insight_prompt())
        return

    totals = service.summary()
    click.echo("Financial Summary")
    click.echo("=" * 49)
    click.echo(f"{'Total revenue':<32} {format_money(totals.total_revenue):>16}")
    click.echo(f"{'Total expenses':<32} {format_money(totals.total_expenses):>16}")
    click.echo(f"{'Net profit':<32} {format_money(totals.net_profit):>16}")
    click.echo(f"{'Profit margin':<32} {totals.profit_margin:>15.1f}%")

    points = service.trend(window)
    if points:
        click.echo("")
        click.echo("Net flow trend")
        click.echo("-" * 49)
        for point in points:
            click.echo(f"  {str(point.date):<30} {format_money(point.net):>16}")

    latest = service.recent_transactions(recent)
    if latest:
        click.echo("")
        click.echo("Recent transactions")
        click.echo("-" * 49)
        for txn in latest:
            channel = "Cash" if txn.payment_mode == PaymentMode.CASH else "Bank"
            sign = "+" if txn.signed_amount >= 0 else "-"
            click.echo(
                f"  {str(txn.date):<12} {txn.description[:20]:<20} {channel:<5} "
                f"{sign}{format_money(txn.amount)}"
            )


def register_commands(cli: click.Group) -> None:
    """Register summary commands with main CLI."""
    cli.add_command(balance)
    cli.add_command(summary)
