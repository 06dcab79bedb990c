"""Household debt ledger.

Net debt is folded from the live set of unpaid splits on every call; there
is no running balance field to drift out of sync.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from paycycle.database.base import Database
from paycycle.domain.entities import (
    CENT,
    DebtLine,
    DebtSummary,
    HouseholdDebt,
    MEMBER_ACTIVE,
    Member,
    SharedExpenseSplit,
    UnsettledExpense,
    ZERO,
)
from paycycle.domain.errors import (
    NotFoundError,
    ValidationError,
    household_not_found,
    member_not_found,
)

logger = logging.getLogger(__name__)


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def signed_share(split: SharedExpenseSplit, viewer_id: int) -> Decimal:
    """Return the viewer's signed share of a split.

    Positive when the viewer owes, negative when the viewer is owed.
    """
    if split.ower_member_id == viewer_id:
        return split.split_amount
    if split.owed_to_member_id == viewer_id:
        return -split.split_amount
    raise ValidationError(f"Split {split.id} does not involve member {viewer_id}")


def _between(split: SharedExpenseSplit, viewer_id: int, partner_id: int) -> bool:
    return (split.ower_member_id, split.owed_to_member_id) in (
        (viewer_id, partner_id),
        (partner_id, viewer_id),
    )


def compute_debt(
    splits: Iterable[SharedExpenseSplit], viewer_id: int, partner_id: int
) -> DebtSummary:
    """Compute the signed debt ledger between a viewer and their partner.

    Paid splits and splits not between the two members are ignored.

    Args:
        splits: Candidate splits, in any order
        viewer_id: Member whose perspective the result is in
        partner_id: The other member

    Returns:
        DebtSummary; net_debt > 0 means the viewer is a net debtor
    """
    lines = []
    for split in splits:
        if split.is_paid or not _between(split, viewer_id, partner_id):
            continue
        lines.append(
            DebtLine(
                split_id=split.id,
                transaction_id=split.transaction_id,
                your_share=signed_share(split, viewer_id),
            )
        )

    total_you_owe = sum((line.your_share for line in lines if line.your_share > 0), ZERO)
    total_you_are_owed = sum((-line.your_share for line in lines if line.your_share < 0), ZERO)

    return DebtSummary(
        viewer_id=viewer_id,
        partner_id=partner_id,
        lines=tuple(lines),
        total_you_owe=_round(total_you_owe),
        total_you_are_owed=_round(total_you_are_owed),
        net_debt=_round(total_you_owe - total_you_are_owed),
    )


class DebtService:
    """Service for reading debt between household members."""

    def __init__(self, db: Database):
        """Initialize debt service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_partner(self, household_id: int, viewer_id: int) -> Optional[Member]:
        """Resolve the single other active member of a household.

        Args:
            household_id: Household ID
            viewer_id: Member ID of the viewer

        Returns:
            The other member, or None unless there is exactly one

        Raises:
            NotFoundError: If the household or the viewer does not exist, or
                the viewer is not part of the household
        """
        if self.db.get_household(household_id) is None:
            raise NotFoundError(household_not_found(household_id))
        viewer = self.db.get_member(viewer_id)
        if viewer is None or viewer.household_id != household_id:
            raise NotFoundError(member_not_found(viewer_id))

        others = [
            m for m in self.db.list_members(household_id, status=MEMBER_ACTIVE) if m.id != viewer_id
        ]
        if len(others) != 1:
            return None
        return others[0]

    def calculate_debt_balance(self, viewer_id: int, partner_id: int) -> DebtSummary:
        """Compute the ledger between two members from live unpaid splits."""
        splits = self.db.list_splits(member_ids=[viewer_id, partner_id], is_paid=False)
        return compute_debt(splits, viewer_id, partner_id)

    def calculate_household_debt(self, household_id: int, viewer_id: int) -> Optional[HouseholdDebt]:
        """Compute the viewer's debt with the other household member.

        Returns:
            HouseholdDebt, or None for households without exactly one other
            active member
        """
        partner = self.get_partner(household_id, viewer_id)
        if partner is None:
            logger.debug("No single partner in household %s for member %s", household_id, viewer_id)
            return None

        summary = self.calculate_debt_balance(viewer_id, partner.id)
        return HouseholdDebt(household_id=household_id, partner=partner, summary=summary)

    def get_unsettled_expenses(self, household_id: int, viewer_id: int) -> list[UnsettledExpense]:
        """List the viewer's unsettled shared expenses, newest first.

        Returns an empty list when the household has no single partner.
        """
        household_debt = self.calculate_household_debt(household_id, viewer_id)
        if household_debt is None:
            return []

        categories = {c.id: c for c in self.db.list_categories(household_id)}
        expenses = []
        for line in household_debt.summary.lines:
            txn = self.db.get_transaction(line.transaction_id)
            if txn is None:
                # Orphaned split; its transaction is gone
                continue
            category = categories.get(txn.category_id) if txn.category_id is not None else None
            expenses.append(
                UnsettledExpense(
                    split_id=line.split_id,
                    transaction_id=txn.id,
                    date=txn.date,
                    description=txn.description,
                    category_id=txn.category_id,
                    category_name=category.name if category is not None else None,
                    total_amount=-txn.amount,
                    your_share=line.your_share,
                    paid_by_member_id=txn.member_id,
                )
            )

        expenses.sort(key=lambda e: (e.date, e.split_id), reverse=True)
        return expenses
