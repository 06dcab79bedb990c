"""Transfers between a member's own accounts.

A transfer moves money without posting a transaction, so budgets and spend
totals are untouched. Both balance updates and the audit record are written
in one batch.
"""

import logging
from decimal import Decimal
from typing import Optional

from paycycle.database.base import Database
from paycycle.database.batch import ACCOUNTS, TRANSFERS, create, update
from paycycle.domain.entities import Account, AccountTransfer
from paycycle.domain.errors import (
    AccountNotFoundError,
    NotFoundError,
    ValidationError,
    account_not_found,
    member_not_found,
)

logger = logging.getLogger(__name__)


def validate_transfer(amount: Decimal, from_account: Account, to_account: Account) -> None:
    """Check a transfer's amount and accounts.

    Raises:
        ValidationError: If the amount is not positive, the accounts are the
            same, or the source account cannot cover the amount
    """
    if amount <= 0:
        raise ValidationError("Transfer amount must be greater than 0")
    if from_account.id == to_account.id:
        raise ValidationError("Source and destination accounts must be different")
    if amount > from_account.balance:
        raise ValidationError(
            f"Insufficient funds in account '{from_account.name}' "
            f"(balance {from_account.balance:,.2f})"
        )


class TransferService:
    """Service for moving money between a member's accounts."""

    def __init__(self, db: Database):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    def _owned_account(self, account_id: int, member_id: int) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        if account.owner_member_id != member_id:
            raise ValidationError(f"Account {account_id} does not belong to member {member_id}")
        return account

    def create_transfer(
        self,
        member_id: int,
        from_account_id: int,
        to_account_id: int,
        amount: Decimal,
        note: Optional[str] = None,
    ) -> AccountTransfer:
        """Move money from one of a member's accounts to another.

        Args:
            member_id: Member who owns both accounts
            from_account_id: Source account
            to_account_id: Destination account
            amount: Amount to move (> 0, at most the source balance)
            note: Optional free-text note

        Returns:
            The stored AccountTransfer

        Raises:
            NotFoundError: If the member doesn't exist
            AccountNotFoundError: If an account doesn't exist
            ValidationError: If an account belongs to someone else or the
                transfer is invalid
            OperationFailedError: If the store rejects the batch
        """
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        from_account = self._owned_account(from_account_id, member_id)
        to_account = self._owned_account(to_account_id, member_id)
        validate_transfer(amount, from_account, to_account)

        created = self.db.transact(
            [
                update(ACCOUNTS, from_account.id, balance=from_account.balance - amount),
                update(ACCOUNTS, to_account.id, balance=to_account.balance + amount),
                create(
                    TRANSFERS,
                    key="transfer",
                    household_id=member.household_id,
                    member_id=member_id,
                    from_account_id=from_account.id,
                    to_account_id=to_account.id,
                    amount=amount,
                    note=note,
                ),
            ]
        )
        logger.info(
            "Transferred between accounts %s and %s for member %s (transfer %s)",
            from_account.id,
            to_account.id,
            member_id,
            created["transfer"],
        )
        return self.db.get_transfer(created["transfer"])

    def list_transfers(
        self, member_id: int, account_id: Optional[int] = None
    ) -> list[AccountTransfer]:
        """List a member's transfers, newest first, optionally for one account."""
        return self.db.list_transfers(member_id=member_id, account_id=account_id)
