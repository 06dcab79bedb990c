"""Spend aggregation for a budget period.

Spend is always derived from the transactions themselves. Stored
``spent_amount`` values are outputs of this module, never inputs.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from paycycle.domain.entities import (
    Account,
    CategoryBudget,
    CategorySpend,
    GroupSpend,
    SpendTotals,
    Transaction,
    ZERO,
)

STATUS_ON_TRACK = "on-track"
STATUS_WARNING = "warning"
STATUS_OVER_BUDGET = "over-budget"

WARNING_THRESHOLD = Decimal("0.95")


def determine_budget_status(allocated: Decimal, spent: Decimal) -> str:
    """Classify a category's spend against its allocation."""
    if spent > allocated:
        return STATUS_OVER_BUDGET
    if allocated > 0 and spent >= allocated * WARNING_THRESHOLD:
        return STATUS_WARNING
    return STATUS_ON_TRACK


def spend_by_category(
    period_start: date,
    period_end: date,
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    as_of: Optional[date] = None,
) -> dict[int, Decimal]:
    """Sum raw spend per category for transactions that count in the window.

    A transaction counts when its date is within [period_start, period_end]
    (and not after ``as_of`` when given) and its account is not excluded
    from budget. Expenses are negative amounts, so spend is the negated
    amount; refunds reduce it. The result is not clamped.
    """
    excluded_account_ids = {acc.id for acc in accounts if acc.is_excluded_from_budget}
    totals: dict[int, Decimal] = defaultdict(lambda: ZERO)

    for txn in transactions:
        if txn.category_id is None:
            continue
        if txn.date < period_start or txn.date > period_end:
            continue
        if as_of is not None and txn.date > as_of:
            continue
        if txn.account_id in excluded_account_ids:
            continue
        totals[txn.category_id] += -txn.amount

    return dict(totals)


def recompute_spend(
    period_start: date,
    period_end: date,
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    budgets: Iterable[CategoryBudget],
    as_of: Optional[date] = None,
) -> SpendTotals:
    """Recompute per-category and per-group totals for a period.

    Args:
        period_start: First day of the period (inclusive)
        period_end: Last day of the period (inclusive)
        transactions: Candidate transactions, in any order
        accounts: Accounts the transactions may belong to
        budgets: Category budgets to report on
        as_of: Optional cut-off that drops future-dated transactions

    Returns:
        SpendTotals; each category's spend is clamped to zero or more
    """
    raw = spend_by_category(period_start, period_end, transactions, accounts, as_of=as_of)

    per_category = []
    for budget in sorted(budgets, key=lambda b: b.category_id):
        spent = max(ZERO, raw.get(budget.category_id, ZERO))
        per_category.append(
            CategorySpend(
                category_id=budget.category_id,
                category_group=budget.category_group,
                allocated_amount=budget.allocated_amount,
                spent_amount=spent,
                status=determine_budget_status(budget.allocated_amount, spent),
            )
        )

    grouped: dict[str, list[CategorySpend]] = defaultdict(list)
    for entry in per_category:
        grouped[entry.category_group].append(entry)

    per_group = tuple(
        GroupSpend(
            group_name=group_name,
            category_ids=tuple(entry.category_id for entry in entries),
            allocated_amount=sum((entry.allocated_amount for entry in entries), ZERO),
            spent_amount=sum((entry.spent_amount for entry in entries), ZERO),
        )
        for group_name, entries in sorted(grouped.items())
    )

    return SpendTotals(
        per_category=tuple(per_category),
        per_group=per_group,
        total_allocated=sum((entry.allocated_amount for entry in per_category), ZERO),
        total_spent=sum((entry.spent_amount for entry in per_category), ZERO),
    )
