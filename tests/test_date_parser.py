"""Tests for date parsing and named periods."""

from datetime import date

import pytest

from bizledger.utils.date_parser import default_report_range, get_date_range, parse_date

TODAY = date(2024, 3, 13)  # a Wednesday


def test_parse_iso_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_other_absolute_formats():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", date(2024, 3, 13)),
        ("Yesterday", date(2024, 3, 12)),
        ("this month", date(2024, 3, 1)),
        ("last month", date(2024, 2, 1)),
        ("this year", date(2024, 1, 1)),
        ("last year", date(2023, 1, 1)),
    ],
)
def test_parse_relative_dates(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_last_month_in_january():
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("last invalid")


@pytest.mark.parametrize(
    "period, expected",
    [
        ("this-month", (date(2024, 3, 1), date(2024, 3, 13))),
        ("this-year", (date(2024, 1, 1), date(2024, 3, 13))),
        ("this-week", (date(2024, 3, 11), date(2024, 3, 13))),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
        ("last-week", (date(2024, 3, 4), date(2024, 3, 10))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-month")


def test_default_report_range_is_one_month_back():
    assert default_report_range(today=TODAY) == (date(2024, 2, 13), date(2024, 3, 13))
    assert default_report_range(today=date(2024, 3, 31)) == (
        date(2024, 2, 29),
        date(2024, 3, 31),
    )
