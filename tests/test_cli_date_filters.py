"""Tests for CLI date range resolution."""

from datetime import date

import click
import pytest

from bizledger.cli.date_filters import resolve_cli_date_range
from bizledger.utils.date_parser import get_date_range

DEFAULT_RANGE = (date(2024, 1, 1), date(2024, 1, 31))


def _ctx() -> click.Context:
    return click.Context(click.Command("report"))


def test_multiple_periods_rejected(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={"this-month": True, "last-year": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_period_with_explicit_date_rejected(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date="2024-01-01",
            period_flags={"last-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_period_flag_resolves_range():
    assert resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"this-month": False, "last-year": True},
    ) == get_date_range("last-year")


def test_default_range_used_without_dates():
    assert (
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={},
            default_range=DEFAULT_RANGE,
        )
        == DEFAULT_RANGE
    )


def test_explicit_start_keeps_default_end():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2023-12-15",
        end_date=None,
        period_flags={},
        default_range=DEFAULT_RANGE,
    )

    assert (start, end) == (date(2023, 12, 15), date(2024, 1, 31))


def test_open_range_without_default():
    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={}
    ) == (None, None)


def test_invalid_end_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(), start_date=None, end_date="someday", period_flags={}
        )

    assert "Invalid end date" in capsys.readouterr().err
