"""Recurring transaction templates.

A template is not a transaction. Once its day of the month has arrived, it
can be posted as a normal transaction, at most once per calendar month.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from paycycle.database.base import Database
from paycycle.database.batch import RECURRING_TEMPLATES, create, update
from paycycle.domain.entities import RecurringTemplate
from paycycle.domain.errors import (
    AccountNotFoundError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    member_not_found,
    recurring_template_not_found,
)
from paycycle.domain.period import days_in_month
from paycycle.domain.transaction import TransactionService

logger = logging.getLogger(__name__)


def validate_recurring_day(recurring_day: object) -> int:
    """Return recurring_day unchanged if it is 1-31, else raise ValidationError."""
    if isinstance(recurring_day, bool) or not isinstance(recurring_day, int):
        raise ValidationError(f"Invalid recurring day {recurring_day!r}: expected 1-31")
    if not 1 <= recurring_day <= 31:
        raise ValidationError(f"Invalid recurring day {recurring_day!r}: expected 1-31")
    return recurring_day


def recurring_date(recurring_day: int, year: int, month: int) -> date:
    """Date a template falls due in a month, clamped to the month's last day."""
    return date(year, month, min(recurring_day, days_in_month(year, month)))


def should_create_this_month(template: RecurringTemplate, today: Optional[date] = None) -> bool:
    """Check whether a template is due and not yet posted this month."""
    if today is None:
        today = date.today()
    if not template.is_active:
        return False
    if today < recurring_date(template.recurring_day, today.year, today.month):
        return False

    last = template.last_created_date
    if last is not None and (last.year, last.month) == (today.year, today.month):
        return False
    return True


class RecurringService:
    """Service for managing recurring transaction templates."""

    def __init__(self, db: Database):
        """Initialize recurring service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_account(self, account_id: int, member_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        if account.owner_member_id != member_id:
            raise ValidationError(f"Account {account_id} does not belong to member {member_id}")

    def _check_category(self, category_id: int, household_id: int) -> None:
        category = self.db.get_category(category_id)
        if category is None or category.household_id != household_id:
            raise NotFoundError(category_not_found(category_id))

    def _require_template(self, template_id: int) -> RecurringTemplate:
        template = self.db.get_recurring_template(template_id)
        if template is None:
            raise NotFoundError(recurring_template_not_found(template_id))
        return template

    def create_template(
        self,
        member_id: int,
        account_id: int,
        amount: Decimal,
        recurring_day: int,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a recurring template.

        Args:
            member_id: Member the transactions are posted for
            account_id: Account owned by the member
            amount: Signed amount of each posting; negative for expenses
            recurring_day: Day of month 1-31, clamped in shorter months
            category_id: Optional category ID
            description: Optional description copied to each posting

        Returns:
            Template ID

        Raises:
            NotFoundError: If member or category doesn't exist
            AccountNotFoundError: If account doesn't exist
            ValidationError: If the account belongs to someone else, the
                amount is zero or the day is outside 1-31
        """
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        self._check_account(account_id, member_id)
        if amount == 0:
            raise ValidationError("Recurring amount cannot be zero")
        validate_recurring_day(recurring_day)
        if category_id is not None:
            self._check_category(category_id, member.household_id)

        created = self.db.transact(
            [
                create(
                    RECURRING_TEMPLATES,
                    key="template",
                    household_id=member.household_id,
                    member_id=member_id,
                    account_id=account_id,
                    category_id=category_id,
                    amount=amount,
                    recurring_day=recurring_day,
                    description=description,
                    is_active=True,
                    last_created_date=None,
                )
            ]
        )
        logger.info("Created recurring template %s for member %s", created["template"], member_id)
        return created["template"]

    def get_template(self, template_id: int) -> Optional[RecurringTemplate]:
        """Get recurring template by ID."""
        return self.db.get_recurring_template(template_id)

    def list_templates(self, member_id: int, include_inactive: bool = False) -> list[RecurringTemplate]:
        """List a member's templates ordered by day of month."""
        return self.db.list_recurring_templates(
            member_id, is_active=None if include_inactive else True
        )

    def update_template(
        self,
        template_id: int,
        amount: Optional[Decimal] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        recurring_day: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update the fields that are provided.

        Raises:
            NotFoundError: If the template or category doesn't exist
            AccountNotFoundError: If the account doesn't exist
            ValidationError: If a new value is invalid
        """
        template = self._require_template(template_id)

        values = {}
        if amount is not None:
            if amount == 0:
                raise ValidationError("Recurring amount cannot be zero")
            values["amount"] = amount
        if account_id is not None:
            self._check_account(account_id, template.member_id)
            values["account_id"] = account_id
        if category_id is not None:
            self._check_category(category_id, template.household_id)
            values["category_id"] = category_id
        if recurring_day is not None:
            values["recurring_day"] = validate_recurring_day(recurring_day)
        if description is not None:
            values["description"] = description

        if not values:
            return
        self.db.transact([update(RECURRING_TEMPLATES, template_id, **values)])
        logger.info("Updated recurring template %s", template_id)

    def deactivate_template(self, template_id: int) -> None:
        """Stop a template from posting. Transactions already posted are kept."""
        self._require_template(template_id)
        self.db.transact([update(RECURRING_TEMPLATES, template_id, is_active=False)])
        logger.info("Deactivated recurring template %s", template_id)

    def create_transaction_from_template(
        self,
        template_id: int,
        txn_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> int:
        """Post a template as a transaction.

        Args:
            template_id: Template ID
            txn_date: Explicit posting date; defaults to the template's day
                in the month of ``today``
            today: Reference date (defaults to date.today())

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the template doesn't exist
            ValidationError: If the template is inactive
        """
        template = self._require_template(template_id)
        if not template.is_active:
            raise ValidationError(f"Recurring template {template_id} is inactive")
        if today is None:
            today = date.today()
        if txn_date is None:
            txn_date = recurring_date(template.recurring_day, today.year, today.month)

        return TransactionService(self.db).create_transaction(
            member_id=template.member_id,
            account_id=template.account_id,
            txn_date=txn_date,
            amount=template.amount,
            category_id=template.category_id,
            description=template.description,
            today=today,
            recurring_template_id=template.id,
        )

    def create_due_transactions(self, member_id: int, today: Optional[date] = None) -> list[int]:
        """Post every active template of a member that is due this month.

        Returns:
            IDs of the transactions created, in template order
        """
        if today is None:
            today = date.today()
        created = []
        for template in self.list_templates(member_id):
            if should_create_this_month(template, today):
                created.append(self.create_transaction_from_template(template.id, today=today))
        if created:
            logger.info("Posted %d recurring transaction(s) for member %s", len(created), member_id)
        return created
