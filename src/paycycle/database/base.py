"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date

from paycycle.database.batch import Mutation

from paycycle.domain.entities import (
    Household,
    Member,
    Account,
    Category,
    CategoryBudget,
    BudgetSummary,
    Transaction,
    SharedExpenseSplit,
    Settlement,
    AccountTransfer,
    RecurringTemplate,
)


class Database(ABC):
    """Abstract document-store interface for paycycle.

    Reads return domain entities matching simple filters. All writes go
    through ``transact`` so that one logical operation is applied as a single
    all-or-nothing batch.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Atomic writes
    @abstractmethod
    def transact(self, mutations: Sequence[Mutation]) -> dict[str, int]:
        """Apply a batch of mutations atomically.

        Args:
            mutations: Creates, updates and deletes for one logical operation

        Returns:
            Mapping of create keys to the ids assigned to the new records

        Raises:
            OperationFailedError: If any mutation fails; no change is committed
        """
        pass

    # Household operations
    @abstractmethod
    def get_household(self, household_id: int) -> Optional[Household]:
        """Get household by ID."""
        pass

    @abstractmethod
    def list_households(self) -> list[Household]:
        """List all households."""
        pass

    # Member operations
    @abstractmethod
    def get_member(self, member_id: int) -> Optional[Member]:
        """Get member by ID."""
        pass

    @abstractmethod
    def list_members(self, household_id: int, status: Optional[str] = None) -> list[Member]:
        """List members of a household, optionally filtered by status."""
        pass

    # Account operations
    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, owner_member_id: Optional[int] = None) -> list[Account]:
        """List accounts, optionally filtered by owner."""
        pass

    # Category operations
    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, household_id: int) -> list[Category]:
        """List categories of a household."""
        pass

    # Budget operations
    @abstractmethod
    def list_category_budgets(self, member_id: int) -> list[CategoryBudget]:
        """List a member's category budgets."""
        pass

    @abstractmethod
    def get_budget_summary(self, member_id: int) -> Optional[BudgetSummary]:
        """Get a member's budget summary record."""
        pass

    # Transaction operations
    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        household_id: Optional[int] = None,
        member_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        is_shared: Optional[bool] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            household_id: Optional household filter
            member_id: Optional filter on the member who posted the transaction
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            is_shared: Optional shared flag filter
        """
        pass

    # Split operations
    @abstractmethod
    def get_split(self, split_id: int) -> Optional[SharedExpenseSplit]:
        """Get shared expense split by ID."""
        pass

    @abstractmethod
    def list_splits(
        self,
        transaction_id: Optional[int] = None,
        member_ids: Optional[Sequence[int]] = None,
        is_paid: Optional[bool] = None,
    ) -> list[SharedExpenseSplit]:
        """List shared expense splits with optional filters.

        Args:
            transaction_id: Optional parent transaction filter
            member_ids: If given, only splits whose ower or owed-to member is
                in this set
            is_paid: Optional paid flag filter
        """
        pass

    # Settlement operations
    @abstractmethod
    def get_settlement(self, settlement_id: int) -> Optional[Settlement]:
        """Get settlement by ID."""
        pass

    @abstractmethod
    def list_settlements(self, household_id: int) -> list[Settlement]:
        """List settlements of a household, newest first."""
        pass

    # Transfer operations
    @abstractmethod
    def get_transfer(self, transfer_id: int) -> Optional[AccountTransfer]:
        """Get account transfer by ID."""
        pass

    @abstractmethod
    def list_transfers(
        self, member_id: Optional[int] = None, account_id: Optional[int] = None
    ) -> list[AccountTransfer]:
        """List transfers, newest first.

        Args:
            member_id: Optional filter on the member who made the transfer
            account_id: If given, only transfers from or to this account
        """
        pass

    # Recurring template operations
    @abstractmethod
    def get_recurring_template(self, template_id: int) -> Optional[RecurringTemplate]:
        """Get recurring template by ID."""
        pass

    @abstractmethod
    def list_recurring_templates(
        self, member_id: int, is_active: Optional[bool] = None
    ) -> list[RecurringTemplate]:
        """List a member's recurring templates, optionally by active flag."""
        pass
