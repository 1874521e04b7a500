"""Report aggregation over an inclusive date range.

All functions here are pure. Sums are accumulated left to right over the
input order and every sort is stable, so identical inputs always produce
identical reports.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Sequence, TypeVar

from bizledger.domain.entities import (
    BankBalance,
    CategoryTotal,
    ChannelBalances,
    FinancialReport,
    FinancialSummary,
    Invoice,
    InvoiceProfit,
    ItemProfit,
    Transaction,
    TransactionType,
    TrendPoint,
)
from bizledger.domain.errors import ValidationError
from bizledger.domain.insights import InsightGenerator, build_insight_prompt
from bizledger.domain.ledger import (
    DEFAULT_TREND_WINDOW,
    bucket_by_date,
    compute_bank_balances,
    compute_channel_balances,
    compute_trend,
)
from bizledger.domain.reconciler import invoice_cost, invoice_total
from bizledger.domain.summary import compute_summary, margin_percent, recent_transactions

if TYPE_CHECKING:
    from bizledger.database.base import EntityStore

Dated = TypeVar("Dated", Transaction, Invoice)


def filter_by_range(
    collection: Iterable[Dated], start_date: date, end_date: date
) -> list[Dated]:
    """Keep entries dated within [start_date, end_date], both ends inclusive."""
    return [entry for entry in collection if start_date <= entry.date <= end_date]


def expense_by_category(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """Sum expenses per category, largest first.

    Categories with equal totals keep the order they were first seen in.
    """
    totals: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type != TransactionType.EXPENSE:
            continue
        totals[txn.category] = totals.get(txn.category, Decimal("0")) + txn.amount

    rows = [CategoryTotal(category=name, amount=amount) for name, amount in totals.items()]
    return sorted(rows, key=lambda row: row.amount, reverse=True)


def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    total = Decimal("0")
    for txn in transactions:
        if txn.type == TransactionType.EXPENSE:
            total += txn.amount
    return total


def invoice_profit(invoices: Iterable[Invoice]) -> list[InvoiceProfit]:
    """Compute revenue, cost, profit and margin per invoice, most profitable first."""
    rows = []
    for inv in invoices:
        revenue = invoice_total(inv)
        cost = invoice_cost(inv)
        profit = revenue - cost
        rows.append(
            InvoiceProfit(
                invoice_id=inv.id,
                invoice_number=inv.invoice_number,
                client_name=inv.client_name,
                date=inv.date,
                revenue=revenue,
                cost=cost,
                profit=profit,
                margin=margin_percent(profit, revenue),
            )
        )
    return sorted(rows, key=lambda row: row.profit, reverse=True)


def item_profit(invoices: Iterable[Invoice]) -> list[ItemProfit]:
    """Aggregate invoice items by exact description, most profitable first.

    Descriptions are matched case-sensitively. Margin is computed after
    aggregation from the group's totals.
    """
    groups: dict[str, list] = {}
    for inv in invoices:
        for item in inv.items:
            group = groups.setdefault(item.description, [0, Decimal("0"), Decimal("0")])
            group[0] += item.quantity
            group[1] += item.revenue
            group[2] += item.profit

    rows = [
        ItemProfit(
            description=description,
            quantity=quantity,
            revenue=revenue,
            profit=profit,
            margin=margin_percent(profit, revenue),
        )
        for description, (quantity, revenue, profit) in groups.items()
    ]
    return sorted(rows, key=lambda row: row.profit, reverse=True)


def profit_trend(transactions: Iterable[Transaction]) -> list[TrendPoint]:
    """Net signed amount per date over the whole set, in date order."""
    return bucket_by_date(transactions)


def build_report(
    transactions: Sequence[Transaction],
    invoices: Sequence[Invoice],
    start_date: date,
    end_date: date,
) -> FinancialReport:
    """Build every report view for one date range.

    Raises:
        ValidationError: If start_date is after end_date
    """
    if start_date > end_date:
        raise ValidationError(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )

    filtered_transactions = filter_by_range(transactions, start_date, end_date)
    filtered_invoices = filter_by_range(invoices, start_date, end_date)

    return FinancialReport(
        start_date=start_date,
        end_date=end_date,
        expense_by_category=tuple(expense_by_category(filtered_transactions)),
        total_expense=total_expense(filtered_transactions),
        invoice_profit=tuple(invoice_profit(filtered_invoices)),
        item_profit=tuple(item_profit(filtered_invoices)),
        profit_trend=tuple(profit_trend(filtered_transactions)),
        summary=compute_summary(filtered_transactions),
    )


class ReportService:
    """Service computing derived views from the current stored snapshot.

    Nothing is cached: each call loads the collections and recomputes.
    """

    def __init__(self, store: EntityStore):
        """Initialize report service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def channel_balances(self) -> ChannelBalances:
        ledger = self.store.load_ledger()
        return compute_channel_balances(ledger.transactions, ledger.banks)

    def bank_balances(self) -> list[BankBalance]:
        ledger = self.store.load_ledger()
        return compute_bank_balances(ledger.transactions, ledger.banks)

    def summary(self) -> FinancialSummary:
        return compute_summary(self.store.load_ledger().transactions)

    def trend(self, window_size: int = DEFAULT_TREND_WINDOW) -> list[TrendPoint]:
        return compute_trend(self.store.load_ledger().transactions, window_size)

    def recent_transactions(self, limit: int = 6) -> list[Transaction]:
        return recent_transactions(self.store.load_ledger().transactions, limit)

    def report(self, start_date: date, end_date: date) -> FinancialReport:
        """Build the full range report.

        Raises:
            ValidationError: If start_date is after end_date
        """
        ledger = self.store.load_ledger()
        return build_report(ledger.transactions, ledger.invoices, start_date, end_date)

    def insight_prompt(self) -> str:
        """Prompt text for an external insight generator."""
        transactions = self.store.load_ledger().transactions
        return build_insight_prompt(transactions, compute_summary(transactions))

    def insights(self, generator: InsightGenerator) -> str:
        """Ask an external generator for narrative advice on the ledger."""
        transactions = list(self.store.load_ledger().transactions)
        return generator.generate(transactions, compute_summary(transactions))
