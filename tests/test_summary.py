"""Tests for the summary calculator."""

from datetime import date
from decimal import Decimal

from bizledger.domain.entities import TransactionType
from bizledger.domain.summary import compute_summary, margin_percent, recent_transactions


def test_summary_for_cash_income_and_bank_expense(scenario_ledger):
    summary = compute_summary(scenario_ledger.transactions)

    assert summary.total_revenue == Decimal("5000")
    assert summary.total_expenses == Decimal("1200")
    assert summary.net_profit == Decimal("3800")
    assert summary.profit_margin == Decimal("76")


def test_summary_without_revenue_has_zero_margin(make_transaction):
    summary = compute_summary([make_transaction("e", "50", TransactionType.EXPENSE)])

    assert summary.total_revenue == Decimal("0")
    assert summary.net_profit == Decimal("-50")
    assert summary.profit_margin == Decimal("0")


def test_summary_of_nothing():
    summary = compute_summary([])

    assert summary.total_revenue == summary.total_expenses == Decimal("0")
    assert summary.profit_margin == Decimal("0")


def test_margin_percent_guards_zero_revenue():
    assert margin_percent(Decimal("10"), Decimal("0")) == Decimal("0")
    assert margin_percent(Decimal("-10"), Decimal("0")) == Decimal("0")
    assert margin_percent(Decimal("25"), Decimal("100")) == Decimal("25")


def test_recent_transactions_newest_first(make_transaction):
    transactions = [
        make_transaction("old", on=date(2024, 1, 1)),
        make_transaction("new1", on=date(2024, 3, 1)),
        make_transaction("mid", on=date(2024, 2, 1)),
        make_transaction("new2", on=date(2024, 3, 1)),
    ]

    recent = recent_transactions(transactions, limit=3)

    assert [txn.id for txn in recent] == ["new1", "new2", "mid"]


def test_recent_transactions_default_limit(make_transaction):
    transactions = [make_transaction(f"t{i}", on=date(2024, 1, i + 1)) for i in range(10)]

    assert len(recent_transactions(transactions)) == 6
