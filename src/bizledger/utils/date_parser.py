"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports ISO and other absolute formats handled by dateutil, plus the
    relative forms "today", "yesterday", "this month", "last month",
    "this year" and "last year" (each resolving to the first day of the period).

    Args:
        date_str: Date string
        today: Reference date for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.isoparse(date_str).date()
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from None


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week
        today: Reference date (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)
    week_start = today - timedelta(days=today.weekday())

    if period == "this-month":
        return month_start, today
    if period == "this-year":
        return year_start, today
    if period == "this-week":
        return week_start, today
    if period == "last-month":
        return month_start - relativedelta(months=1), month_start - timedelta(days=1)
    if period == "last-year":
        return year_start - relativedelta(years=1), year_start - timedelta(days=1)
    if period == "last-week":
        start = week_start - timedelta(days=7)
        return start, start + timedelta(days=6)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")


def default_report_range(today: date | None = None) -> tuple[date, date]:
    """Range used by reports when none is given: one month back through today."""
    today = today or date.today()
    return today - relativedelta(months=1), today
