"""Account domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from paycycle.database.base import Database
from paycycle.database.batch import ACCOUNTS, create, update
from paycycle.domain.budget import BudgetService
from paycycle.domain.entities import ACCOUNT_CHECKING, ACCOUNT_TYPES, Account as AccountEntity
from paycycle.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    member_not_found,
    no_primary_account,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        owner_member_id: int,
        name: str,
        balance: Decimal = Decimal("0"),
        is_excluded_from_budget: bool = False,
        is_primary: bool = False,
        account_type: str = ACCOUNT_CHECKING,
    ) -> int:
        """Create a new account.

        A member's first account becomes their primary account. Marking a
        new account primary clears the flag on the owner's other accounts.

        Args:
            owner_member_id: Member who owns the account
            name: Account name, unique per owner
            balance: Opening balance
            is_excluded_from_budget: Keep this account's spend out of budgets
            is_primary: Use as designated account for settlements
            account_type: One of ACCOUNT_TYPES; credit cards count as liabilities

        Returns:
            Account ID

        Raises:
            NotFoundError: If the owner doesn't exist
            ConflictError: If the owner already has an account with that name
            ValidationError: If the account type is unknown
        """
        if self.db.get_member(owner_member_id) is None:
            raise NotFoundError(member_not_found(owner_member_id))
        account_type = account_type.strip().lower()
        if account_type not in ACCOUNT_TYPES:
            raise ValidationError(
                f"Unknown account type '{account_type}'. Expected one of: {', '.join(ACCOUNT_TYPES)}"
            )

        existing = self.db.list_accounts(owner_member_id=owner_member_id)
        for acc in existing:
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        if not existing:
            is_primary = True

        mutations = []
        if is_primary:
            mutations.extend(
                update(ACCOUNTS, acc.id, is_primary=False) for acc in existing if acc.is_primary
            )
        mutations.append(
            create(
                ACCOUNTS,
                key="account",
                owner_member_id=owner_member_id,
                name=name,
                balance=balance,
                is_excluded_from_budget=is_excluded_from_budget,
                is_primary=is_primary,
                account_type=account_type,
            )
        )
        created = self.db.transact(mutations)
        logger.info("Created account %s for member %s", created["account"], owner_member_id)
        return created["account"]

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, owner_member_id: Optional[int] = None) -> list[AccountEntity]:
        """List accounts, optionally only those of one member."""
        return self.db.list_accounts(owner_member_id=owner_member_id)

    def set_budget_exclusion(
        self, account_id: int, excluded: bool, today: Optional[date] = None
    ) -> None:
        """Include or exclude an account from budget totals.

        The owner's spend is recomputed since the set of counted
        transactions changes.

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        self.db.transact([update(ACCOUNTS, account_id, is_excluded_from_budget=excluded)])
        BudgetService(self.db).recalculate_member_spend(account.owner_member_id, today=today)

    def get_designated_account(
        self, member_id: int, account_id: Optional[int] = None
    ) -> AccountEntity:
        """Resolve the account a member pays from or receives into.

        Args:
            member_id: Member ID
            account_id: Explicit account; defaults to the member's primary

        Returns:
            Account entity owned by the member

        Raises:
            AccountNotFoundError: If the account is missing or the member has
                no primary account
            ValidationError: If the account belongs to someone else
        """
        if account_id is not None:
            account = self.db.get_account(account_id)
            if account is None:
                raise AccountNotFoundError(account_not_found(account_id))
            if account.owner_member_id != member_id:
                raise ValidationError(
                    f"Account {account_id} does not belong to member {member_id}"
                )
            return account

        for account in self.db.list_accounts(owner_member_id=member_id):
            if account.is_primary:
                return account
        raise AccountNotFoundError(no_primary_account(member_id))
