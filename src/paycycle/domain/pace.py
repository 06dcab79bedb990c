"""Spending pace: is a budget being used faster than the period elapses?"""

from datetime import date
from decimal import Decimal
from typing import Optional

from paycycle.domain.entities import CENT, SpendingPace
from paycycle.domain.errors import ValidationError

STATUS_TOO_FAST = "too-fast"
STATUS_ON_TRACK = "on-track"
STATUS_UNDER_PACE = "under-pace"
STATUS_INSUFFICIENT_DATA = "insufficient-data"

# Tolerance for ordinary day-to-day variation in spending
FAST_PACE_RATIO = 1.15
SLOW_PACE_RATIO = 0.85


def calculate_spending_pace(
    budget_amount: Decimal,
    spent_so_far: Decimal,
    period_start: date,
    period_end: date,
    today: Optional[date] = None,
) -> SpendingPace:
    """Compare budget progress with time progress for a period.

    Args:
        budget_amount: Allocation for the period (must be > 0)
        spent_so_far: Spend recorded so far (must be >= 0)
        period_start: First day of the period
        period_end: Last day of the period
        today: Reference date (defaults to date.today())

    Returns:
        SpendingPace; status is insufficient-data on the first day

    Raises:
        ValidationError: If the budget is not positive or spend is negative
    """
    if budget_amount <= 0:
        raise ValidationError("Budget amount must be greater than 0")
    if spent_so_far < 0:
        raise ValidationError("Spent amount cannot be negative")
    if today is None:
        today = date.today()

    total_days = (period_end - period_start).days
    days_elapsed = max(0, (today - period_start).days)
    days_remaining = max(0, total_days - days_elapsed)
    time_progress = (days_elapsed / total_days) * 100 if total_days > 0 else 0.0

    budget_progress = float(spent_so_far / budget_amount) * 100
    budget_remaining = budget_amount - spent_so_far

    if days_elapsed == 0 or time_progress == 0:
        return SpendingPace(
            total_days=total_days,
            days_elapsed=days_elapsed,
            days_remaining=days_remaining,
            time_progress=time_progress,
            budget_amount=budget_amount,
            spent_so_far=spent_so_far,
            budget_remaining=budget_remaining,
            budget_progress=budget_progress,
            status=STATUS_INSUFFICIENT_DATA,
            recommendation="Need at least 1 day of data to calculate pace",
        )

    pace_ratio = budget_progress / time_progress
    daily_spend_rate = (spent_so_far / days_elapsed).quantize(CENT)

    if pace_ratio > FAST_PACE_RATIO:
        status = STATUS_TOO_FAST
    elif pace_ratio < SLOW_PACE_RATIO:
        status = STATUS_UNDER_PACE
    else:
        status = STATUS_ON_TRACK

    projected_total = (spent_so_far / days_elapsed * total_days).quantize(CENT)
    projected_variance = projected_total - budget_amount
    if days_remaining > 0:
        safe_daily_spend = (budget_remaining / days_remaining).quantize(CENT)
    else:
        safe_daily_spend = Decimal("0.00")

    if days_remaining <= 0:
        recommendation = "Budget period ended"
    elif budget_remaining < 0:
        recommendation = f"You're {abs(budget_remaining):.0f} over budget, avoid new spending"
    elif status == STATUS_TOO_FAST:
        recommendation = f"Spend max {safe_daily_spend:.0f}/day to stay on budget"
    elif status == STATUS_UNDER_PACE:
        recommendation = f"Great pace! You could save {budget_remaining:.0f} this period"
    else:
        recommendation = f"Stay on track with {safe_daily_spend:.0f}/day"

    return SpendingPace(
        total_days=total_days,
        days_elapsed=days_elapsed,
        days_remaining=days_remaining,
        time_progress=time_progress,
        budget_amount=budget_amount,
        spent_so_far=spent_so_far,
        budget_remaining=budget_remaining,
        budget_progress=budget_progress,
        status=status,
        pace_ratio=pace_ratio,
        daily_spend_rate=daily_spend_rate,
        projected_total=projected_total,
        projected_variance=projected_variance,
        safe_daily_spend=safe_daily_spend,
        recommendation=recommendation,
    )
