"""Date and payday parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser

from paycycle.domain.entities import LAST_DAY_OF_MONTH
from paycycle.domain.period import validate_payday_day

LAST_DAY_ALIASES = ("last", "eom", "end")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2026-01-25", "January 25, 2026", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_payday(value: str) -> int:
    """Parse a payday given on the command line.

    Accepts a day of month ("1" to "31") or "last" for the last day.

    Raises:
        ValueError: If the value is not a valid payday
    """
    value = value.strip().lower()
    if value in LAST_DAY_ALIASES:
        return LAST_DAY_OF_MONTH
    try:
        payday_day = int(value)
    except ValueError:
        raise ValueError(f"Could not parse payday '{value}': expected 1-31 or 'last'")
    validate_payday_day(payday_day)
    return payday_day
