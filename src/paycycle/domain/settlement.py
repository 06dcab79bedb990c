"""Settlement recording.

A settlement moves money between two members' designated accounts and
marks the shared-expense splits it covers as paid. Everything it writes
goes to the store as one batch.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from paycycle.database.base import Database
from paycycle.database.batch import ACCOUNTS, SETTLEMENTS, SPLITS, TRANSACTIONS, Ref, create, update
from paycycle.domain.account import AccountService
from paycycle.domain.budget import BudgetService
from paycycle.domain.debt import DebtService
from paycycle.domain.entities import CENT, Member, Settlement, SharedExpenseSplit, ZERO
from paycycle.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    member_not_found,
    settlement_mismatch,
    split_not_found,
)

logger = logging.getLogger(__name__)


def payer_signed_total(splits: Sequence[SharedExpenseSplit], payer_id: int) -> Decimal:
    """Sum of splits from the payer's side: what they owe minus what they are owed."""
    total = ZERO
    for split in splits:
        if split.ower_member_id == payer_id:
            total += split.split_amount
        else:
            total -= split.split_amount
    return total


class SettlementService:
    """Service for settling shared-expense debt between two members."""

    def __init__(self, db: Database):
        """Initialize settlement service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_member(self, member_id: int) -> Member:
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        return member

    def _load_covered_splits(
        self, covered_split_ids: Sequence[int], payer_id: int, receiver_id: int
    ) -> list[SharedExpenseSplit]:
        if not covered_split_ids:
            raise ValidationError("A settlement must cover at least one split")
        if len(set(covered_split_ids)) != len(covered_split_ids):
            raise ValidationError("Covered splits contain duplicates")

        pair = {(payer_id, receiver_id), (receiver_id, payer_id)}
        splits = []
        for split_id in covered_split_ids:
            split = self.db.get_split(split_id)
            if split is None:
                raise NotFoundError(split_not_found(split_id))
            if split.is_paid:
                raise ValidationError(f"Split {split_id} is already settled")
            if (split.ower_member_id, split.owed_to_member_id) not in pair:
                raise ValidationError(
                    f"Split {split_id} is not between members {payer_id} and {receiver_id}"
                )
            splits.append(split)
        return splits

    def record_settlement(
        self,
        payer_id: int,
        receiver_id: int,
        amount: Decimal,
        category_id: Optional[int],
        covered_split_ids: Sequence[int],
        payer_account_id: Optional[int] = None,
        receiver_account_id: Optional[int] = None,
        note: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Settlement:
        """Record a settlement from payer to receiver.

        All checks run before anything is written. The balances, the
        settlement record, the covered splits, the settled flags of fully
        paid transactions and the optional budget expense are then written
        in one batch.

        Args:
            payer_id: Member paying
            receiver_id: Member receiving
            amount: Amount transferred (> 0)
            category_id: Category for a budget expense on the payer's side,
                or None to record none
            covered_split_ids: Splits this settlement pays off
            payer_account_id: Account paid from (defaults to primary)
            receiver_account_id: Account paid into (defaults to primary)
            note: Optional free-text note
            today: Date of the budget expense and reference date for the
                spend recompute (defaults to date.today())

        Returns:
            The stored Settlement

        Raises:
            ValidationError: If the input is invalid or the amount does not
                reconcile with the covered splits
            NotFoundError: If a member, category or split doesn't exist
            AccountNotFoundError: If a designated account is missing
            OperationFailedError: If the store rejects the batch
        """
        if amount <= 0:
            raise ValidationError("Settlement amount must be greater than 0")
        if payer_id == receiver_id:
            raise ValidationError("Payer and receiver must be different members")

        payer = self._require_member(payer_id)
        receiver = self._require_member(receiver_id)
        if payer.household_id != receiver.household_id:
            raise ValidationError("Payer and receiver must belong to the same household")

        if category_id is not None:
            category = self.db.get_category(category_id)
            if category is None or category.household_id != payer.household_id:
                raise NotFoundError(category_not_found(category_id))

        splits = self._load_covered_splits(covered_split_ids, payer_id, receiver_id)
        covered_total = payer_signed_total(splits, payer_id)
        if abs(covered_total - amount) > CENT:
            raise ValidationError(settlement_mismatch(amount, covered_total))

        accounts = AccountService(self.db)
        payer_account = accounts.get_designated_account(payer_id, payer_account_id)
        receiver_account = accounts.get_designated_account(receiver_id, receiver_account_id)

        mutations = [
            update(ACCOUNTS, payer_account.id, balance=payer_account.balance - amount),
            update(ACCOUNTS, receiver_account.id, balance=receiver_account.balance + amount),
            create(
                SETTLEMENTS,
                key="settlement",
                household_id=payer.household_id,
                payer_member_id=payer_id,
                receiver_member_id=receiver_id,
                amount=amount,
                category_id=category_id,
                payer_account_id=payer_account.id,
                receiver_account_id=receiver_account.id,
                note=note,
            ),
        ]
        mutations.extend(
            update(SPLITS, split.id, is_paid=True, settlement_id=Ref("settlement"))
            for split in splits
        )

        covered = set(covered_split_ids)
        for transaction_id in sorted({split.transaction_id for split in splits}):
            siblings = self.db.list_splits(transaction_id=transaction_id)
            if all(s.is_paid or s.id in covered for s in siblings):
                mutations.append(update(TRANSACTIONS, transaction_id, is_settled=True))

        as_of = today if today is not None else date.today()
        if category_id is not None:
            # Balance already moved via the settlement above
            mutations.append(
                create(
                    TRANSACTIONS,
                    household_id=payer.household_id,
                    member_id=payer_id,
                    account_id=payer_account.id,
                    category_id=category_id,
                    date=as_of,
                    amount=-amount,
                    description=note or f"Settlement to {receiver.name}",
                    is_shared=False,
                    is_settled=True,
                    settlement_id=Ref("settlement"),
                )
            )

        created = self.db.transact(mutations)
        settlement_id = created["settlement"]
        logger.info(
            "Recorded settlement %s: member %s paid %s to member %s covering %d splits",
            settlement_id,
            payer_id,
            amount,
            receiver_id,
            len(splits),
        )

        if category_id is not None:
            BudgetService(self.db).recalculate_member_spend(payer_id, today=as_of)

        return self.db.get_settlement(settlement_id)

    def settle_all(
        self,
        payer_id: int,
        receiver_id: int,
        category_id: Optional[int] = None,
        payer_account_id: Optional[int] = None,
        receiver_account_id: Optional[int] = None,
        note: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Settlement:
        """Settle every unpaid split between two members for the net amount.

        Raises:
            ValidationError: If the payer does not owe the receiver anything
        """
        self._require_member(payer_id)
        self._require_member(receiver_id)
        summary = DebtService(self.db).calculate_debt_balance(payer_id, receiver_id)
        if summary.net_debt <= 0:
            raise ValidationError(f"Member {payer_id} owes nothing to member {receiver_id}")

        return self.record_settlement(
            payer_id,
            receiver_id,
            summary.net_debt,
            category_id,
            summary.split_ids,
            payer_account_id=payer_account_id,
            receiver_account_id=receiver_account_id,
            note=note,
            today=today,
        )

    def list_settlements(self, household_id: int) -> list[Settlement]:
        """List a household's settlements, newest first."""
        return self.db.list_settlements(household_id)
