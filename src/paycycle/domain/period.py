"""Budget period calculation from a member's payday.

A period is never stored. It is recomputed from ``payday_day`` and the
current date on every read, so changing the payday takes effect immediately
and never requires migrating historical data.
"""

import calendar
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from paycycle.database.base import Database
from paycycle.domain.entities import BudgetPeriod, LAST_DAY_OF_MONTH
from paycycle.domain.errors import (
    NotFoundError,
    ValidationError,
    invalid_payday_day,
    member_not_found,
)


def is_valid_payday_day(payday_day: object) -> bool:
    """Return True for 1-31 or the last-day-of-month sentinel."""
    if isinstance(payday_day, bool) or not isinstance(payday_day, int):
        return False
    return payday_day == LAST_DAY_OF_MONTH or 1 <= payday_day <= 31


def validate_payday_day(payday_day: object) -> int:
    """Return payday_day unchanged or raise ValidationError."""
    if not is_valid_payday_day(payday_day):
        raise ValidationError(invalid_payday_day(payday_day))
    return payday_day


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def effective_payday(payday_day: int, year: int, month: int) -> int:
    """Resolve the payday for a month, clamped to the month's last day."""
    last_day = days_in_month(year, month)
    if payday_day == LAST_DAY_OF_MONTH:
        return last_day
    return min(payday_day, last_day)


def _payday_date(payday_day: int, month_start: date) -> date:
    return month_start.replace(day=effective_payday(payday_day, month_start.year, month_start.month))


def compute_period(payday_day: int, today: Optional[date] = None) -> BudgetPeriod:
    """Compute the budget period that contains ``today``.

    The period starts on the effective payday and ends the day before the
    next effective payday. A payday falling on ``today`` starts a new period.

    Args:
        payday_day: Day of month 1-31, or -1 for the last day of the month
        today: Reference date (defaults to date.today())

    Returns:
        BudgetPeriod with start, end, days_remaining and resets_on

    Raises:
        ValidationError: If payday_day is outside the allowed domain
    """
    validate_payday_day(payday_day)
    if today is None:
        today = date.today()

    this_month = today.replace(day=1)
    if today.day >= effective_payday(payday_day, today.year, today.month):
        start = _payday_date(payday_day, this_month)
    else:
        start = _payday_date(payday_day, this_month - relativedelta(months=1))

    resets_on = _payday_date(payday_day, start.replace(day=1) + relativedelta(months=1))
    end = resets_on - timedelta(days=1)

    return BudgetPeriod(
        start=start,
        end=end,
        days_remaining=max(0, (end - today).days),
        resets_on=resets_on,
    )


def period_for_date(payday_day: int, day: date) -> BudgetPeriod:
    """Return the period containing an arbitrary date."""
    return compute_period(payday_day, today=day)


def is_in_period(day: date, payday_day: int, today: Optional[date] = None) -> bool:
    """Check whether ``day`` falls in the period current on ``today``."""
    return compute_period(payday_day, today=today).contains(day)


def payday_display_text(payday_day: int) -> str:
    """Get display text for a payday setting."""
    if payday_day == LAST_DAY_OF_MONTH:
        return "Last day of month"
    return f"Day {payday_day}"


def format_period(period: BudgetPeriod) -> str:
    """Format a period for display (e.g. '25 Jan - 24 Feb')."""
    start = f"{period.start.day} {period.start.strftime('%b')}"
    end = f"{period.end.day} {period.end.strftime('%b')}"
    return f"{start} - {end}"


class PeriodService:
    """Service for resolving members' current budget periods."""

    def __init__(self, db: Database):
        """Initialize period service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_member_period(self, member_id: int, today: Optional[date] = None) -> BudgetPeriod:
        """Compute a member's current budget period.

        Args:
            member_id: Member ID
            today: Reference date (defaults to date.today())

        Returns:
            BudgetPeriod for the member's payday setting

        Raises:
            NotFoundError: If the member does not exist
        """
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        return compute_period(member.payday_day, today=today)
