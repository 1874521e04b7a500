"""Boundary for external narrative insight generators.

The ledger never reads anything back from a generator; the text it returns
is shown to the user as-is.
"""

from typing import Iterable, Protocol

from bizledger.domain.entities import FinancialSummary, Transaction


class InsightGenerator(Protocol):
    """Anything that turns ledger data into free-text advice."""

    def generate(
        self, transactions: list[Transaction], summary: FinancialSummary
    ) -> str: ...


def build_insight_prompt(
    transactions: Iterable[Transaction], summary: FinancialSummary
) -> str:
    """Render ledger data as a plain-text prompt for a language model."""
    lines = [
        "Analyze the following financial data for a business.",
        f"Total Revenue: {summary.total_revenue:,.2f}",
        f"Total Expenses: {summary.total_expenses:,.2f}",
        f"Net Profit: {summary.net_profit:,.2f}",
        f"Profit Margin: {summary.profit_margin:.1f}%",
        "",
        "Transactions:",
    ]
    for txn in transactions:
        lines.append(
            f"- {txn.date.isoformat()}: {txn.description} ({txn.type.value}) - {txn.amount:,.2f}"
        )
    lines.extend(
        [
            "",
            "Provide a professional analysis including:",
            "1. A summary of financial health.",
            "2. Identification of major spending patterns.",
            "3. Three actionable recommendations to increase profit.",
        ]
    )
    return "\n".join(lines)
