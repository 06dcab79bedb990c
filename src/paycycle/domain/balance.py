"""Household balance breakdown: assets minus liabilities."""

from typing import Iterable

from paycycle.database.base import Database
from paycycle.domain.entities import Account, BalanceBreakdown, ZERO
from paycycle.domain.errors import NotFoundError, household_not_found


def calculate_true_balance(household_id: int, accounts: Iterable[Account]) -> BalanceBreakdown:
    """Split accounts into assets and liabilities and total them.

    Credit card balances are owed money, so they count by magnitude
    whatever their sign.
    """
    assets = []
    liabilities = []
    for account in accounts:
        if account.is_liability:
            liabilities.append(account)
        else:
            assets.append(account)

    return BalanceBreakdown(
        household_id=household_id,
        assets=tuple(assets),
        liabilities=tuple(liabilities),
        total_assets=sum((acc.balance for acc in assets), ZERO),
        total_liabilities=sum((abs(acc.balance) for acc in liabilities), ZERO),
    )


class BalanceService:
    """Service for household-wide balance reporting."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def calculate_true_balance(self, household_id: int) -> BalanceBreakdown:
        """Break down the balances of every account held by household members.

        Raises:
            NotFoundError: If the household doesn't exist
        """
        if self.db.get_household(household_id) is None:
            raise NotFoundError(household_not_found(household_id))

        accounts = []
        for member in self.db.list_members(household_id):
            accounts.extend(self.db.list_accounts(owner_member_id=member.id))
        return calculate_true_balance(household_id, accounts)
