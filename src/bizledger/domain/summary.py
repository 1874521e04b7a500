"""Summary calculator."""

from decimal import Decimal
from typing import Iterable, Sequence

from bizledger.domain.entities import FinancialSummary, Transaction, TransactionType

HUNDRED = Decimal("100")


def margin_percent(profit: Decimal, revenue: Decimal) -> Decimal:
    """Profit as a percentage of revenue, or 0 when there is no revenue."""
    if revenue <= 0:
        return Decimal("0")
    return profit / revenue * HUNDRED


def compute_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Compute revenue, expenses, net profit and profit margin."""
    revenue = Decimal("0")
    expenses = Decimal("0")
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            revenue += txn.amount
        else:
            expenses += txn.amount

    net_profit = revenue - expenses
    return FinancialSummary(
        total_revenue=revenue,
        total_expenses=expenses,
        net_profit=net_profit,
        profit_margin=margin_percent(net_profit, revenue),
    )


def recent_transactions(
    transactions: Sequence[Transaction], limit: int = 6
) -> list[Transaction]:
    """Return the newest transactions by date, newest first.

    Transactions on the same date keep their collection order.
    """
    if limit <= 0:
        return []
    return sorted(transactions, key=lambda txn: txn.date, reverse=True)[:limit]
