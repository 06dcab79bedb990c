"""Budget domain service: allocations and spend recomputation."""

import logging
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Optional

from paycycle.database.base import Database
from paycycle.database.batch import BUDGET_SUMMARIES, CATEGORY_BUDGETS, create, update
from paycycle.domain.entities import (
    BudgetPeriod,
    CategoryBudget,
    Member,
    SpendingPace,
    SpendTotals,
)
from paycycle.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    member_not_found,
)
from paycycle.domain.pace import calculate_spending_pace
from paycycle.domain.period import compute_period
from paycycle.domain.spend import recompute_spend

logger = logging.getLogger(__name__)


class BudgetService:
    """Service for category allocations and period spend totals."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_member(self, member_id: int) -> Member:
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        return member

    def set_allocation(
        self,
        member_id: int,
        category_id: int,
        amount: Decimal,
        today: Optional[date] = None,
    ) -> int:
        """Create or replace a member's allocation for a category.

        Args:
            member_id: Member ID
            category_id: Category ID
            amount: Allocated amount (>= 0)
            today: Reference date for the spend recompute

        Returns:
            CategoryBudget ID

        Raises:
            ValidationError: If amount is negative or the category belongs to
                another household
            NotFoundError: If member or category doesn't exist
        """
        if amount < 0:
            raise ValidationError("Allocated amount cannot be negative")
        member = self._require_member(member_id)
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.household_id != member.household_id:
            raise ValidationError(
                f"Category {category_id} does not belong to household {member.household_id}"
            )

        existing = self.get_budget(member_id, category_id)
        if existing is not None:
            self.db.transact([update(CATEGORY_BUDGETS, existing.id, allocated_amount=amount)])
            budget_id = existing.id
        else:
            created = self.db.transact(
                [
                    create(
                        CATEGORY_BUDGETS,
                        key="budget",
                        member_id=member_id,
                        category_id=category_id,
                        allocated_amount=amount,
                        spent_amount=Decimal("0"),
                    )
                ]
            )
            budget_id = created["budget"]

        self.recalculate_member_spend(member_id, today=today)
        return budget_id

    def get_budget(self, member_id: int, category_id: int) -> Optional[CategoryBudget]:
        """Get a member's budget for one category, or None."""
        for budget in self.db.list_category_budgets(member_id):
            if budget.category_id == category_id:
                return budget
        return None

    def list_budgets(self, member_id: int) -> list[CategoryBudget]:
        """List a member's category budgets with their stored spend."""
        return self.db.list_category_budgets(member_id)

    def _compute(
        self, member: Member, today: Optional[date]
    ) -> tuple[BudgetPeriod, list[CategoryBudget], SpendTotals]:
        as_of = today if today is not None else date.today()
        period = compute_period(member.payday_day, today=as_of)
        budgets = self.db.list_category_budgets(member.id)
        transactions = self.db.list_transactions(
            member_id=member.id, start_date=period.start, end_date=period.end
        )
        accounts = self.db.list_accounts(owner_member_id=member.id)
        totals = recompute_spend(
            period.start, period.end, transactions, accounts, budgets, as_of=as_of
        )
        return period, budgets, totals

    def get_budget_report(
        self, member_id: int, today: Optional[date] = None
    ) -> tuple[BudgetPeriod, SpendTotals]:
        """Recompute a member's spend for the current period without writing.

        Raises:
            NotFoundError: If the member doesn't exist
        """
        member = self._require_member(member_id)
        period, _, totals = self._compute(member, today)
        return period, totals

    def recalculate_member_spend(self, member_id: int, today: Optional[date] = None) -> SpendTotals:
        """Recompute and persist a member's spend for the current period.

        Every stored spent amount and the member's summary totals are
        replaced in a single batch.

        Raises:
            NotFoundError: If the member doesn't exist
            OperationFailedError: If the store rejects the batch
        """
        member = self._require_member(member_id)
        _, budgets, totals = self._compute(member, today)

        budget_ids = {budget.category_id: budget.id for budget in budgets}
        mutations = [
            update(CATEGORY_BUDGETS, budget_ids[entry.category_id], spent_amount=entry.spent_amount)
            for entry in totals.per_category
        ]

        now = datetime.now(UTC)
        summary = self.db.get_budget_summary(member_id)
        if summary is None:
            mutations.append(
                create(
                    BUDGET_SUMMARIES,
                    member_id=member_id,
                    total_allocated=totals.total_allocated,
                    total_spent=totals.total_spent,
                    updated_at=now,
                )
            )
        else:
            mutations.append(
                update(
                    BUDGET_SUMMARIES,
                    summary.id,
                    total_allocated=totals.total_allocated,
                    total_spent=totals.total_spent,
                    updated_at=now,
                )
            )

        self.db.transact(mutations)
        logger.info(
            "Recalculated spend for member %s across %d categories",
            member_id,
            len(totals.per_category),
        )
        return totals

    def get_category_pace(
        self, member_id: int, category_id: int, today: Optional[date] = None
    ) -> SpendingPace:
        """Spending pace of one category in the member's current period.

        Raises:
            NotFoundError: If the member has no budget for the category
            ValidationError: If the allocation is zero
        """
        as_of = today if today is not None else date.today()
        period, totals = self.get_budget_report(member_id, today=as_of)
        entry = totals.for_category(category_id)
        if entry is None:
            raise NotFoundError(f"Member {member_id} has no budget for category {category_id}")
        return calculate_spending_pace(
            entry.allocated_amount, entry.spent_amount, period.start, period.end, today=as_of
        )
