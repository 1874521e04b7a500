"""Ledger engine: channel balances and net-flow trend series."""

import warnings
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from bizledger.domain.entities import (
    UNKNOWN_BANK,
    Bank,
    BankBalance,
    ChannelBalances,
    PaymentMode,
    Transaction,
    TrendPoint,
)
from bizledger.domain.errors import ReferentialWarning
from bizledger.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TREND_WINDOW = 15


def compute_channel_balances(
    transactions: Iterable[Transaction], banks: Iterable[Bank]
) -> ChannelBalances:
    """Compute the cash balance and the aggregate bank balance.

    Every bank's opening balance is added to the bank total whether or not
    any transaction refers to it. Nothing is cached, so a deleted bank's
    opening balance drops out on the next call.
    """
    cash = Decimal("0")
    bank_total = Decimal("0")
    for txn in transactions:
        if txn.payment_mode == PaymentMode.CASH:
            cash += txn.signed_amount
        else:
            bank_total += txn.signed_amount

    for bank in banks:
        bank_total += bank.balance

    return ChannelBalances(cash=cash, bank_total=bank_total)


def compute_bank_balances(
    transactions: Iterable[Transaction], banks: Sequence[Bank]
) -> list[BankBalance]:
    """Compute one balance row per bank.

    BANK transactions whose bank no longer exists are collected into a single
    trailing "Unknown Bank" row so the rows still add up to the bank total.
    """
    movements: dict[Optional[str], Decimal] = defaultdict(Decimal)
    known_ids = {bank.id for bank in banks}
    for txn in transactions:
        if txn.payment_mode != PaymentMode.BANK:
            continue
        key = txn.bank_id if txn.bank_id in known_ids else None
        movements[key] += txn.signed_amount

    rows = [
        BankBalance(
            bank_id=bank.id,
            label=bank.bank_name,
            opening_balance=bank.balance,
            movement=movements.get(bank.id, Decimal("0")),
        )
        for bank in banks
    ]
    if None in movements:
        logger.warning("unresolved_bank_references", amount=str(movements[None]))
        rows.append(
            BankBalance(
                bank_id=None,
                label=UNKNOWN_BANK,
                opening_balance=Decimal("0"),
                movement=movements[None],
            )
        )
    return rows


def bank_label(bank_id: Optional[str], banks: Iterable[Bank]) -> str:
    """Return the display name for a transaction's bank.

    Issues a ``ReferentialWarning`` and returns "Unknown Bank" when the id no
    longer resolves; "-" when there is no bank at all.
    """
    if not bank_id:
        return "-"
    for bank in banks:
        if bank.id == bank_id:
            return bank.bank_name
    warnings.warn(
        f"Transaction refers to missing bank '{bank_id}'",
        ReferentialWarning,
        stacklevel=2,
    )
    return UNKNOWN_BANK


def bucket_by_date(transactions: Iterable[Transaction]) -> list[TrendPoint]:
    """Sum signed amounts per date and return the buckets in date order."""
    daily: dict[date, Decimal] = {}
    for txn in transactions:
        daily[txn.date] = daily.get(txn.date, Decimal("0")) + txn.signed_amount
    return [TrendPoint(date=day, net=daily[day]) for day in sorted(daily)]


def compute_trend(
    transactions: Sequence[Transaction], window_size: int = DEFAULT_TREND_WINDOW
) -> list[TrendPoint]:
    """Bucket the most recent transactions by date.

    "Most recent" follows collection order: the last ``window_size`` entries
    of the sequence are taken before any sorting happens.

    Args:
        transactions: Transactions in collection order
        window_size: Number of trailing transactions to include

    Returns:
        Trend points sorted ascending by date
    """
    if window_size <= 0:
        return []
    return bucket_by_date(transactions[-window_size:])
