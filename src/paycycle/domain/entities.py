"""Domain model entities for paycycle.

These are pure data classes representing business concepts, independent of
database schema. Stored entities come back from the Database interface;
derived entities (periods, spend totals, debt summaries) are computed on every
read and never persisted.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

LAST_DAY_OF_MONTH = -1

MEMBER_ACTIVE = "active"
MEMBER_INACTIVE = "inactive"

ACCOUNT_CHECKING = "checking"
ACCOUNT_SAVINGS = "savings"
ACCOUNT_CASH = "cash"
ACCOUNT_INVESTMENT = "investment"
ACCOUNT_CREDIT_CARD = "credit card"

ASSET_ACCOUNT_TYPES = (ACCOUNT_CHECKING, ACCOUNT_SAVINGS, ACCOUNT_CASH, ACCOUNT_INVESTMENT)
LIABILITY_ACCOUNT_TYPES = (ACCOUNT_CREDIT_CARD,)
ACCOUNT_TYPES = ASSET_ACCOUNT_TYPES + LIABILITY_ACCOUNT_TYPES

ZERO = Decimal("0")
CENT = Decimal("0.01")


@dataclass(frozen=True)
class Household:
    """Household domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Member:
    """Household member with a personal payday."""

    id: int
    household_id: int
    name: str
    email: Optional[str]
    payday_day: int
    split_percentage: Optional[Decimal]
    status: str
    created_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == MEMBER_ACTIVE


@dataclass(frozen=True)
class Account:
    """Account owned by exactly one member."""

    id: int
    owner_member_id: int
    name: str
    balance: Decimal
    is_excluded_from_budget: bool
    is_primary: bool
    created_at: datetime
    account_type: str = ACCOUNT_CHECKING

    @property
    def is_liability(self) -> bool:
        return self.account_type in LIABILITY_ACCOUNT_TYPES


@dataclass(frozen=True)
class Category:
    """Budget category belonging to a household."""

    id: int
    household_id: int
    name: str
    group_name: str
    created_at: datetime


@dataclass(frozen=True)
class CategoryBudget:
    """A member's allocation for one category."""

    id: int
    member_id: int
    category_id: int
    category_group: str
    allocated_amount: Decimal
    spent_amount: Decimal


@dataclass(frozen=True)
class BudgetSummary:
    """Per-member totals record, replaced on every recompute."""

    id: int
    member_id: int
    total_allocated: Decimal
    total_spent: Decimal
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    Amounts are signed: negative values are money leaving the account.
    ``settlement_id`` is set on the budget expense a settlement records;
    its balance effect belongs to the settlement, not to the transaction.
    """

    id: int
    household_id: int
    member_id: int
    account_id: int
    category_id: Optional[int]
    date: date
    amount: Decimal
    description: Optional[str]
    is_shared: bool
    is_settled: bool
    created_at: datetime
    settlement_id: Optional[int] = None
    recurring_template_id: Optional[int] = None


@dataclass(frozen=True)
class SharedExpenseSplit:
    """One member's owed share of a transaction paid by another member."""

    id: int
    transaction_id: int
    ower_member_id: int
    owed_to_member_id: int
    split_amount: Decimal
    split_percentage: Optional[Decimal]
    is_paid: bool
    settlement_id: Optional[int]
    created_at: datetime

    def involves(self, member_id: int) -> bool:
        return member_id in (self.ower_member_id, self.owed_to_member_id)


@dataclass(frozen=True)
class Settlement:
    """Immutable audit record of a debt resolution."""

    id: int
    household_id: int
    payer_member_id: int
    receiver_member_id: int
    amount: Decimal
    category_id: Optional[int]
    payer_account_id: int
    receiver_account_id: int
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class AccountTransfer:
    """Audit record of money moved between two accounts of one member."""

    id: int
    household_id: int
    member_id: int
    from_account_id: int
    to_account_id: int
    amount: Decimal
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class RecurringTemplate:
    """Template for a transaction that repeats on a day of each month."""

    id: int
    household_id: int
    member_id: int
    account_id: int
    category_id: Optional[int]
    amount: Decimal
    recurring_day: int
    description: Optional[str]
    is_active: bool
    last_created_date: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class BudgetPeriod:
    """A member's current budget cycle, derived from their payday."""

    start: date
    end: date
    days_remaining: int
    resets_on: date

    @property
    def length_days(self) -> int:
        """Number of days in the period, both ends included."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CategorySpend:
    """Recomputed spend for a single category budget."""

    category_id: int
    category_group: str
    allocated_amount: Decimal
    spent_amount: Decimal
    status: str

    @property
    def remaining(self) -> Decimal:
        return self.allocated_amount - self.spent_amount


@dataclass(frozen=True)
class GroupSpend:
    """Spend totals for a category group."""

    group_name: str
    category_ids: tuple[int, ...]
    allocated_amount: Decimal
    spent_amount: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.allocated_amount - self.spent_amount


@dataclass(frozen=True)
class SpendTotals:
    """Result of a spend recomputation for one period."""

    per_category: tuple[CategorySpend, ...]
    per_group: tuple[GroupSpend, ...]
    total_allocated: Decimal
    total_spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.total_allocated - self.total_spent

    def for_category(self, category_id: int) -> Optional[CategorySpend]:
        for entry in self.per_category:
            if entry.category_id == category_id:
                return entry
        return None


@dataclass(frozen=True)
class DebtLine:
    """Viewer's signed share of one unpaid split (positive = viewer owes)."""

    split_id: int
    transaction_id: int
    your_share: Decimal


@dataclass(frozen=True)
class DebtSummary:
    """Net debt between a viewer and their partner."""

    viewer_id: int
    partner_id: int
    lines: tuple[DebtLine, ...] = ()
    total_you_owe: Decimal = ZERO
    total_you_are_owed: Decimal = ZERO
    net_debt: Decimal = ZERO

    @property
    def has_unsettled_expenses(self) -> bool:
        return len(self.lines) > 0

    @property
    def you_owe(self) -> tuple[DebtLine, ...]:
        return tuple(line for line in self.lines if line.your_share > 0)

    @property
    def you_are_owed(self) -> tuple[DebtLine, ...]:
        return tuple(line for line in self.lines if line.your_share < 0)

    @property
    def split_ids(self) -> tuple[int, ...]:
        return tuple(line.split_id for line in self.lines)


@dataclass(frozen=True)
class HouseholdDebt:
    """Debt summary between a viewer and the other household member."""

    household_id: int
    partner: Member
    summary: DebtSummary


@dataclass(frozen=True)
class UnsettledExpense:
    """An unpaid split joined with the transaction it came from."""

    split_id: int
    transaction_id: int
    date: date
    description: Optional[str]
    category_id: Optional[int]
    category_name: Optional[str]
    total_amount: Decimal
    your_share: Decimal
    paid_by_member_id: int


@dataclass(frozen=True)
class BalanceBreakdown:
    """Household assets, liabilities and net worth.

    Liability balances are reported as positive amounts owed.
    """

    household_id: int
    assets: tuple[Account, ...]
    liabilities: tuple[Account, ...]
    total_assets: Decimal
    total_liabilities: Decimal

    @property
    def net_worth(self) -> Decimal:
        return self.total_assets - self.total_liabilities


@dataclass(frozen=True)
class SplitShare:
    """One participant's share of a split amount."""

    member_id: int
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class SpendingPace:
    """Spending speed compared with the passage of time in a period."""

    total_days: int
    days_elapsed: int
    days_remaining: int
    time_progress: float
    budget_amount: Decimal
    spent_so_far: Decimal
    budget_remaining: Decimal
    budget_progress: float
    status: str
    pace_ratio: Optional[float] = None
    daily_spend_rate: Optional[Decimal] = None
    projected_total: Optional[Decimal] = None
    projected_variance: Optional[Decimal] = None
    safe_daily_spend: Optional[Decimal] = None
    recommendation: str = ""
