"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from pocketledger.domain.entities import Period, YearMonth
from pocketledger.domain.errors import ValidationError

PERIOD_NAMES = ("this-month", "last-month", "this-quarter", "this-year", "last-year")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", "15/01/2024")
    and the relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string in various formats
        today: Reference date for relative words (defaults to today)

    Returns:
        Date object

    Raises:
        ValidationError: If date string cannot be parsed
    """
    if date_str is None or not date_str.strip():
        raise ValidationError("Empty date string")

    text = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str.strip()}': {e}")


def resolve_period(name: str, today: Optional[date] = None) -> Period:
    """Turn a named period into month buckets.

    Args:
        name: One of this-month, last-month, this-quarter, this-year, last-year

    Returns:
        Period covering the named months

    Raises:
        ValidationError: If the name is not recognized
    """
    name = name.strip().lower()
    today = today or date.today()
    current = YearMonth.of(today)

    if name == "this-month":
        return Period.of(current)
    if name == "last-month":
        return Period.of(YearMonth.of(today - relativedelta(months=1)))
    if name == "this-quarter":
        first_month = 3 * ((today.month - 1) // 3) + 1
        return Period.of(*[(today.year, m) for m in range(first_month, today.month + 1)])
    if name == "this-year":
        return Period.of(*[(today.year, m) for m in range(1, today.month + 1)])
    if name == "last-year":
        return Period.of(*[(today.year - 1, m) for m in range(1, 13)])

    raise ValidationError(
        f"Unknown period: '{name}'. Supported periods: {', '.join(PERIOD_NAMES)}"
    )


def parse_months(values: list[str]) -> Period:
    """Build a period from ``YYYY-MM`` strings."""
    try:
        return Period.of(*[YearMonth.parse(v) for v in values])
    except ValueError as e:
        raise ValidationError(str(e))
