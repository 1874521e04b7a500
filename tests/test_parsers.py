"""Tests for amount, quantity and bank parsing helpers."""

from decimal import Decimal

import pytest

from bizledger.domain.entities import Bank
from bizledger.domain.errors import NotFoundError, ValidationError
from bizledger.utils.amount_parser import parse_amount, parse_quantity
from bizledger.utils.bank_resolver import resolve_bank


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("₹1,250", Decimal("1250")),
        ("$ 9.99", Decimal("9.99")),
        ("(40.00)", Decimal("-40.00")),
        ("-7", Decimal("-7")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "NaN", "Infinity"])
def test_parse_amount_rejects(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_quantity():
    assert parse_quantity(" 12 ") == 12
    assert parse_quantity("0") == 0
    for bad in ("-1", "1.5", "two", ""):
        with pytest.raises(ValueError):
            parse_quantity(bad)


BANKS = [
    Bank("bank1", "Main Corporate Account", "88990011", "Mumbai", Decimal("15000")),
    Bank("b2", "Savings", "1", "Pune", Decimal("0")),
    Bank("b3", "Savings", "2", "Delhi", Decimal("0")),
    Bank("Payroll", "Salary Account", "3", "Pune", Decimal("0")),
]


def test_resolve_bank_by_id_or_name():
    assert resolve_bank(BANKS, "bank1") == "bank1"
    assert resolve_bank(BANKS, "Main Corporate Account") == "bank1"
    assert resolve_bank(BANKS, "Payroll") == "Payroll"


def test_resolve_bank_ambiguous_name():
    with pytest.raises(ValidationError, match="ambiguous"):
        resolve_bank(BANKS, "Savings")


def test_resolve_bank_unknown():
    with pytest.raises(NotFoundError):
        resolve_bank(BANKS, "Offshore")
