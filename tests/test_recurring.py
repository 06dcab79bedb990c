"""Tests for recurring transaction templates."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from paycycle.domain.entities import RecurringTemplate
from paycycle.domain.errors import AccountNotFoundError, NotFoundError, ValidationError
from paycycle.domain.recurring import (
    RecurringService,
    recurring_date,
    should_create_this_month,
    validate_recurring_day,
)

TODAY = date(2026, 2, 8)


def template(recurring_day=5, is_active=True, last_created_date=None):
    return RecurringTemplate(
        id=1,
        household_id=1,
        member_id=1,
        account_id=1,
        category_id=None,
        amount=Decimal("-1500.00"),
        recurring_day=recurring_day,
        description="Rent",
        is_active=is_active,
        last_created_date=last_created_date,
        created_at=datetime(2026, 1, 1),
    )


@pytest.fixture
def recurring_service(temp_db):
    return RecurringService(temp_db)


@pytest.fixture
def rent_template(recurring_service, sample_household):
    return recurring_service.create_template(
        sample_household["alex"],
        sample_household["alex_checking"],
        Decimal("-1500.00"),
        5,
        category_id=sample_household["rent"],
        description="Rent",
    )


class TestShouldCreateThisMonth:
    def test_due_on_and_after_day(self):
        assert should_create_this_month(template(5), date(2026, 2, 5))
        assert should_create_this_month(template(5), TODAY)

    def test_not_due_before_day(self):
        assert not should_create_this_month(template(10), TODAY)

    def test_already_created_this_month(self):
        assert not should_create_this_month(template(5, last_created_date=date(2026, 2, 5)), TODAY)
        assert should_create_this_month(template(5, last_created_date=date(2026, 1, 5)), TODAY)
        # Same month of an earlier year does not count
        assert should_create_this_month(template(5, last_created_date=date(2025, 2, 5)), TODAY)

    def test_inactive_never_due(self):
        assert not should_create_this_month(template(1, is_active=False), TODAY)

    def test_day_31_clamps_in_short_months(self):
        assert recurring_date(31, 2026, 2) == date(2026, 2, 28)
        assert recurring_date(31, 2028, 2) == date(2028, 2, 29)
        assert recurring_date(31, 2026, 4) == date(2026, 4, 30)
        assert should_create_this_month(template(31), date(2026, 2, 28))
        assert not should_create_this_month(template(31), date(2026, 2, 27))


@pytest.mark.parametrize("day", [0, 32, -1, True, "5", None])
def test_invalid_recurring_day(day):
    with pytest.raises(ValidationError):
        validate_recurring_day(day)


class TestCreateTemplate:
    def test_create_and_get(self, recurring_service, rent_template, sample_household):
        stored = recurring_service.get_template(rent_template)

        assert stored.member_id == sample_household["alex"]
        assert stored.household_id == sample_household["household"]
        assert stored.amount == Decimal("-1500.00")
        assert stored.recurring_day == 5
        assert stored.is_active
        assert stored.last_created_date is None

    def test_zero_amount_rejected(self, recurring_service, sample_household):
        with pytest.raises(ValidationError, match="cannot be zero"):
            recurring_service.create_template(
                sample_household["alex"], sample_household["alex_checking"], Decimal("0"), 5
            )

    def test_invalid_day_rejected(self, recurring_service, sample_household):
        with pytest.raises(ValidationError):
            recurring_service.create_template(
                sample_household["alex"], sample_household["alex_checking"], Decimal("-10"), 32
            )

    def test_other_members_account_rejected(self, recurring_service, sample_household):
        with pytest.raises(ValidationError, match="does not belong"):
            recurring_service.create_template(
                sample_household["alex"], sample_household["cecilia_checking"], Decimal("-10"), 5
            )

    def test_unknown_references(self, recurring_service, sample_household):
        with pytest.raises(NotFoundError):
            recurring_service.create_template(999, sample_household["alex_checking"], Decimal("-10"), 5)
        with pytest.raises(AccountNotFoundError):
            recurring_service.create_template(sample_household["alex"], 999, Decimal("-10"), 5)
        with pytest.raises(NotFoundError):
            recurring_service.create_template(
                sample_household["alex"], sample_household["alex_checking"], Decimal("-10"), 5,
                category_id=999,
            )


class TestPosting:
    def test_post_from_template(self, temp_db, recurring_service, rent_template, sample_household):
        txn_id = recurring_service.create_transaction_from_template(rent_template, today=TODAY)

        txn = temp_db.get_transaction(txn_id)
        assert txn.date == date(2026, 2, 5)
        assert txn.amount == Decimal("-1500.00")
        assert txn.category_id == sample_household["rent"]
        assert txn.description == "Rent"
        assert txn.recurring_template_id == rent_template
        assert temp_db.get_account(sample_household["alex_checking"]).balance == Decimal("8500.00")
        assert recurring_service.get_template(rent_template).last_created_date == date(2026, 2, 5)

    def test_explicit_date(self, temp_db, recurring_service, rent_template):
        txn_id = recurring_service.create_transaction_from_template(
            rent_template, txn_date=date(2026, 2, 7), today=TODAY
        )

        assert temp_db.get_transaction(txn_id).date == date(2026, 2, 7)
        assert recurring_service.get_template(rent_template).last_created_date == date(2026, 2, 7)

    def test_default_date_clamped(self, temp_db, recurring_service, sample_household):
        template_id = recurring_service.create_template(
            sample_household["alex"], sample_household["alex_checking"], Decimal("-20"), 31
        )

        txn_id = recurring_service.create_transaction_from_template(
            template_id, today=date(2026, 2, 28)
        )

        assert temp_db.get_transaction(txn_id).date == date(2026, 2, 28)

    def test_inactive_template_rejected(self, temp_db, recurring_service, rent_template, sample_household):
        recurring_service.deactivate_template(rent_template)

        with pytest.raises(ValidationError, match="inactive"):
            recurring_service.create_transaction_from_template(rent_template, today=TODAY)
        assert temp_db.list_transactions(member_id=sample_household["alex"]) == []

    def test_unknown_template(self, recurring_service):
        with pytest.raises(NotFoundError):
            recurring_service.create_transaction_from_template(999, today=TODAY)

    def test_due_transactions_once_per_month(
        self, temp_db, recurring_service, rent_template, sample_household
    ):
        alex = sample_household["alex"]
        later = recurring_service.create_template(
            alex, sample_household["alex_checking"], Decimal("-45"), 20, description="Gym"
        )

        created = recurring_service.create_due_transactions(alex, today=TODAY)
        assert len(created) == 1
        assert temp_db.get_transaction(created[0]).recurring_template_id == rent_template

        assert recurring_service.create_due_transactions(alex, today=date(2026, 2, 15)) == []

        created = recurring_service.create_due_transactions(alex, today=date(2026, 2, 20))
        assert [temp_db.get_transaction(t).recurring_template_id for t in created] == [later]

        created = recurring_service.create_due_transactions(alex, today=date(2026, 3, 5))
        assert len(created) == 1
        assert temp_db.get_account(sample_household["alex_checking"]).balance == Decimal("6955.00")


class TestManageTemplates:
    def test_update_fields(self, recurring_service, rent_template, sample_household):
        recurring_service.update_template(
            rent_template, amount=Decimal("-1600.00"), recurring_day=1, description="New rent"
        )

        stored = recurring_service.get_template(rent_template)
        assert stored.amount == Decimal("-1600.00")
        assert stored.recurring_day == 1
        assert stored.description == "New rent"
        assert stored.category_id == sample_household["rent"]

    def test_update_validates(self, recurring_service, rent_template, sample_household):
        with pytest.raises(ValidationError):
            recurring_service.update_template(rent_template, amount=Decimal("0"))
        with pytest.raises(ValidationError):
            recurring_service.update_template(rent_template, recurring_day=40)
        with pytest.raises(ValidationError):
            recurring_service.update_template(
                rent_template, account_id=sample_household["cecilia_checking"]
            )
        with pytest.raises(NotFoundError):
            recurring_service.update_template(999, amount=Decimal("-1"))

    def test_deactivate_keeps_history(self, temp_db, recurring_service, rent_template, sample_household):
        txn_id = recurring_service.create_transaction_from_template(rent_template, today=TODAY)

        recurring_service.deactivate_template(rent_template)

        assert recurring_service.list_templates(sample_household["alex"]) == []
        listed = recurring_service.list_templates(sample_household["alex"], include_inactive=True)
        assert [t.id for t in listed] == [rent_template]
        assert not listed[0].is_active
        assert temp_db.get_transaction(txn_id) is not None

    def test_list_ordered_by_day(self, recurring_service, rent_template, sample_household):
        alex = sample_household["alex"]
        early = recurring_service.create_template(
            alex, sample_household["alex_checking"], Decimal("-9.99"), 1, description="Music"
        )

        assert [t.id for t in recurring_service.list_templates(alex)] == [early, rent_template]
