"""Tests for channel balances and trend series."""

from datetime import date
from decimal import Decimal

import pytest

from bizledger.domain.entities import Bank, PaymentMode, TransactionType
from bizledger.domain.errors import ReferentialWarning
from bizledger.domain.ledger import (
    bank_label,
    compute_bank_balances,
    compute_channel_balances,
    compute_trend,
)


def test_channel_balances_for_cash_income_and_bank_expense(scenario_ledger):
    balances = compute_channel_balances(scenario_ledger.transactions, scenario_ledger.banks)

    assert balances.cash == Decimal("5000")
    assert balances.bank_total == Decimal("13800")


def test_channel_balances_are_repeatable(scenario_ledger):
    first = compute_channel_balances(scenario_ledger.transactions, scenario_ledger.banks)
    second = compute_channel_balances(scenario_ledger.transactions, scenario_ledger.banks)

    assert first == second


def test_channel_balances_match_manual_recomputation(make_transaction, sample_bank):
    transactions = [
        make_transaction("a", "10.50", TransactionType.INCOME, PaymentMode.CASH),
        make_transaction("b", "3.25", TransactionType.EXPENSE, PaymentMode.CASH),
        make_transaction("c", "400", TransactionType.INCOME, PaymentMode.BANK, "bank1"),
        make_transaction("d", "99.99", TransactionType.EXPENSE, PaymentMode.BANK, "bank1"),
    ]

    balances = compute_channel_balances(transactions, [sample_bank])

    assert balances.cash == Decimal("7.25")
    assert balances.bank_total == Decimal("15000") + Decimal("400") - Decimal("99.99")


def test_opening_balances_count_without_transactions(sample_bank):
    other = Bank("b2", "Savings", "1", "Pune", Decimal("250"))

    balances = compute_channel_balances([], [sample_bank, other])

    assert balances.cash == Decimal("0")
    assert balances.bank_total == Decimal("15250")


def test_deleted_bank_opening_balance_drops_out(scenario_ledger):
    balances = compute_channel_balances(scenario_ledger.transactions, [])

    # The expense against the removed bank still counts
    assert balances.bank_total == Decimal("-1200")


def test_bank_balances_per_bank(scenario_ledger):
    rows = compute_bank_balances(scenario_ledger.transactions, scenario_ledger.banks)

    assert len(rows) == 1
    assert rows[0].bank_id == "bank1"
    assert rows[0].label == "Main Corporate Account"
    assert rows[0].balance == Decimal("13800")


def test_bank_balances_collect_unknown_references(make_transaction, sample_bank):
    transactions = [
        make_transaction("a", "100", TransactionType.INCOME, PaymentMode.BANK, "gone"),
        make_transaction("b", "30", TransactionType.EXPENSE, PaymentMode.BANK, "bank1"),
    ]

    rows = compute_bank_balances(transactions, [sample_bank])
    channels = compute_channel_balances(transactions, [sample_bank])

    assert [row.label for row in rows] == ["Main Corporate Account", "Unknown Bank"]
    assert rows[1].bank_id is None
    assert rows[1].balance == Decimal("100")
    assert sum(row.balance for row in rows) == channels.bank_total


def test_bank_label():
    banks = [Bank("bank1", "Main Corporate Account", "", "", Decimal("0"))]

    assert bank_label("bank1", banks) == "Main Corporate Account"
    assert bank_label(None, banks) == "-"


def test_bank_label_warns_for_missing_bank():
    with pytest.warns(ReferentialWarning):
        label = bank_label("gone", [])

    assert label == "Unknown Bank"


def test_trend_buckets_by_date_ascending(make_transaction):
    transactions = [
        make_transaction("a", "100", TransactionType.INCOME, on=date(2024, 1, 3)),
        make_transaction("b", "40", TransactionType.EXPENSE, on=date(2024, 1, 1)),
        make_transaction("c", "25", TransactionType.INCOME, on=date(2024, 1, 3)),
    ]

    points = compute_trend(transactions, window_size=15)

    assert [(p.date, p.net) for p in points] == [
        (date(2024, 1, 1), Decimal("-40")),
        (date(2024, 1, 3), Decimal("125")),
    ]


def test_trend_window_follows_collection_order(make_transaction):
    """The window takes the last entries as stored, not the latest dates."""
    transactions = [
        make_transaction("a", "1", on=date(2024, 3, 1)),
        make_transaction("b", "2", on=date(2024, 1, 1)),
        make_transaction("c", "4", on=date(2024, 2, 1)),
    ]

    points = compute_trend(transactions, window_size=2)

    assert [(p.date, p.net) for p in points] == [
        (date(2024, 1, 1), Decimal("2")),
        (date(2024, 2, 1), Decimal("4")),
    ]


def test_trend_empty_window(make_transaction):
    assert compute_trend([make_transaction()], window_size=0) == []
    assert compute_trend([], window_size=15) == []
