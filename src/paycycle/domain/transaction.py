"""Transaction domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from paycycle.database.base import Database
from paycycle.database.batch import (
    ACCOUNTS,
    RECURRING_TEMPLATES,
    SPLITS,
    TRANSACTIONS,
    Mutation,
    Ref,
    create,
    delete,
    update,
)
from paycycle.domain.budget import BudgetService
from paycycle.domain.entities import MEMBER_ACTIVE, Member, Transaction as TransactionEntity
from paycycle.domain.errors import (
    AccountNotFoundError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    member_not_found,
    settlement_transaction_locked,
    transaction_not_found,
)
from paycycle.domain.splits import resolve_split_ratio, split_amount

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for posting, editing and removing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _split_mutations(
        self, transaction_id: Union[int, Ref], poster: Member, amount: Decimal
    ) -> list[Mutation]:
        """Splits of a shared expense owed to the poster by the other active members."""
        members = self.db.list_members(poster.household_id, status=MEMBER_ACTIVE)
        ratio = resolve_split_ratio(members)
        if len(ratio) < 2:
            return []

        mutations = []
        for share in split_amount(-amount, ratio):
            if share.member_id == poster.id or share.amount <= 0:
                continue
            mutations.append(
                create(
                    SPLITS,
                    transaction_id=transaction_id,
                    ower_member_id=share.member_id,
                    owed_to_member_id=poster.id,
                    split_amount=share.amount,
                    split_percentage=share.percentage,
                    is_paid=False,
                )
            )
        return mutations

    def _check_category(self, category_id: int, household_id: int) -> None:
        category = self.db.get_category(category_id)
        if category is None or category.household_id != household_id:
            raise NotFoundError(category_not_found(category_id))

    def create_transaction(
        self,
        member_id: int,
        account_id: int,
        txn_date: date,
        amount: Decimal,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
        is_shared: bool = False,
        today: Optional[date] = None,
        recurring_template_id: Optional[int] = None,
    ) -> int:
        """Post a transaction.

        The account balance moves by ``amount`` and, for shared expenses,
        one split per other active member is created in the same batch.
        A transaction posted from a recurring template also stamps the
        template's last created date in that batch.

        Args:
            member_id: Member posting the transaction
            account_id: Account owned by the member
            txn_date: Transaction date
            amount: Signed amount; negative for money out
            category_id: Optional category ID
            description: Optional description
            is_shared: Split the expense with the rest of the household
            today: Reference date for the spend recompute
            recurring_template_id: Template this posting was created from

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If member or category doesn't exist
            AccountNotFoundError: If account doesn't exist
            ValidationError: If the account belongs to someone else, the
                amount is zero, or a shared transaction is not an expense
        """
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        if account.owner_member_id != member_id:
            raise ValidationError(f"Account {account_id} does not belong to member {member_id}")
        if amount == 0:
            raise ValidationError("Transaction amount cannot be zero")
        if is_shared and amount > 0:
            raise ValidationError("Only expenses can be shared")
        if category_id is not None:
            self._check_category(category_id, member.household_id)

        mutations = [
            create(
                TRANSACTIONS,
                key="txn",
                household_id=member.household_id,
                member_id=member_id,
                account_id=account_id,
                category_id=category_id,
                date=txn_date,
                amount=amount,
                description=description,
                is_shared=is_shared,
                is_settled=False,
                recurring_template_id=recurring_template_id,
            ),
            update(ACCOUNTS, account_id, balance=account.balance + amount),
        ]
        if is_shared:
            mutations.extend(self._split_mutations(Ref("txn"), member, amount))
        if recurring_template_id is not None:
            mutations.append(
                update(RECURRING_TEMPLATES, recurring_template_id, last_created_date=txn_date)
            )

        created = self.db.transact(mutations)
        logger.info("Posted transaction %s for member %s", created["txn"], member_id)

        BudgetService(self.db).recalculate_member_spend(member_id, today=today)
        return created["txn"]

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        household_id: Optional[int] = None,
        member_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first."""
        return self.db.list_transactions(
            household_id=household_id,
            member_id=member_id,
            start_date=start_date,
            end_date=end_date,
        )

    def update_transaction(
        self,
        transaction_id: int,
        txn_date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
        clear_category: bool = False,
        today: Optional[date] = None,
    ) -> None:
        """Update transaction fields.

        Args:
            transaction_id: Transaction ID
            txn_date: New date (optional)
            amount: New amount (optional)
            category_id: New category ID (optional)
            description: New description (optional)
            clear_category: If True, remove the category
            today: Reference date for the spend recompute

        Raises:
            NotFoundError: If transaction or category doesn't exist
            ValidationError: If the new amount is invalid, the transaction
                records a settlement and its amount would change, or the
                splits of a shared transaction would change after one was paid
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        values = {}
        if txn_date is not None:
            values["date"] = txn_date
        if description is not None:
            values["description"] = description
        if clear_category:
            values["category_id"] = None
        elif category_id is not None:
            self._check_category(category_id, txn.household_id)
            values["category_id"] = category_id

        mutations = []
        if amount is not None and amount != txn.amount:
            if txn.settlement_id is not None:
                raise ValidationError(settlement_transaction_locked(transaction_id, txn.settlement_id))
            if amount == 0:
                raise ValidationError("Transaction amount cannot be zero")
            if txn.is_shared and amount > 0:
                raise ValidationError("Only expenses can be shared")
            values["amount"] = amount

            account = self.db.get_account(txn.account_id)
            if account is None:
                raise AccountNotFoundError(account_not_found(txn.account_id))
            mutations.append(update(ACCOUNTS, account.id, balance=account.balance + amount - txn.amount))

            if txn.is_shared:
                splits = self.db.list_splits(transaction_id=transaction_id)
                if any(split.is_paid for split in splits):
                    raise ValidationError(
                        f"Transaction {transaction_id} has settled splits; its amount cannot change"
                    )
                poster = self.db.get_member(txn.member_id)
                if poster is None:
                    raise NotFoundError(member_not_found(txn.member_id))
                mutations.extend(delete(SPLITS, split.id) for split in splits)
                mutations.extend(self._split_mutations(transaction_id, poster, amount))

        if not values:
            return

        mutations.insert(0, update(TRANSACTIONS, transaction_id, **values))
        self.db.transact(mutations)
        logger.info("Updated transaction %s", transaction_id)

        BudgetService(self.db).recalculate_member_spend(txn.member_id, today=today)

    def delete_transaction(self, transaction_id: int, today: Optional[date] = None) -> None:
        """Delete a transaction with its splits and reverse its balance effect.

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If it records a settlement or one of its splits
                is already settled
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.settlement_id is not None:
            raise ValidationError(settlement_transaction_locked(transaction_id, txn.settlement_id))

        splits = self.db.list_splits(transaction_id=transaction_id)
        if any(split.is_paid for split in splits):
            raise ValidationError(f"Transaction {transaction_id} has settled splits")

        mutations = [delete(SPLITS, split.id) for split in splits]
        mutations.append(delete(TRANSACTIONS, transaction_id))
        account = self.db.get_account(txn.account_id)
        if account is not None:
            mutations.append(update(ACCOUNTS, account.id, balance=account.balance - txn.amount))

        self.db.transact(mutations)
        logger.info("Deleted transaction %s with %d splits", transaction_id, len(splits))

        BudgetService(self.db).recalculate_member_spend(txn.member_id, today=today)
