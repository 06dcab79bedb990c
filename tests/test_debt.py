"""Tests for the household debt ledger."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from paycycle.domain.debt import compute_debt, signed_share
from paycycle.domain.entities import SharedExpenseSplit
from paycycle.domain.errors import NotFoundError, ValidationError

TODAY = date(2026, 2, 8)

ALEX = 1
CECILIA = 2
NOW = datetime(2026, 1, 1, tzinfo=UTC)


def make_split(split_id, ower, owed_to, amount, is_paid=False, transaction_id=None):
    return SharedExpenseSplit(
        id=split_id,
        transaction_id=transaction_id or split_id,
        ower_member_id=ower,
        owed_to_member_id=owed_to,
        split_amount=Decimal(amount),
        split_percentage=None,
        is_paid=is_paid,
        settlement_id=None,
        created_at=NOW,
    )


@pytest.fixture
def rent_and_groceries():
    """Cecilia owes 840 of Alex's rent; Alex owes 37.92 of Cecilia's groceries."""
    return [
        make_split(1, CECILIA, ALEX, "840.00"),
        make_split(2, ALEX, CECILIA, "37.92"),
    ]


class TestComputeDebt:
    """Tests for compute_debt."""

    def test_sign_convention(self, rent_and_groceries):
        summary = compute_debt(rent_and_groceries, ALEX, CECILIA)

        shares = {line.split_id: line.your_share for line in summary.lines}
        assert shares == {1: Decimal("-840.00"), 2: Decimal("37.92")}
        assert summary.total_you_owe == Decimal("37.92")
        assert summary.total_you_are_owed == Decimal("840.00")
        assert summary.net_debt == Decimal("-802.08")
        assert [line.split_id for line in summary.you_are_owed] == [1]
        assert [line.split_id for line in summary.you_owe] == [2]

    def test_anti_symmetric(self, rent_and_groceries):
        alex = compute_debt(rent_and_groceries, ALEX, CECILIA)
        cecilia = compute_debt(rent_and_groceries, CECILIA, ALEX)

        assert cecilia.net_debt == Decimal("802.08")
        assert alex.net_debt == -cecilia.net_debt
        assert cecilia.total_you_owe == alex.total_you_are_owed

    def test_paid_splits_excluded(self, rent_and_groceries):
        splits = rent_and_groceries + [make_split(3, CECILIA, ALEX, "500.00", is_paid=True)]

        summary = compute_debt(splits, ALEX, CECILIA)

        assert len(summary.lines) == 2
        assert 3 not in summary.split_ids
        assert summary.total_you_are_owed == Decimal("840.00")

    def test_splits_with_third_party_ignored(self, rent_and_groceries):
        splits = rent_and_groceries + [make_split(3, 3, ALEX, "10.00")]

        assert compute_debt(splits, ALEX, CECILIA).net_debt == Decimal("-802.08")

    def test_empty_ledger(self):
        summary = compute_debt([], ALEX, CECILIA)

        assert not summary.has_unsettled_expenses
        assert summary.net_debt == Decimal("0")
        assert summary.split_ids == ()

    def test_signed_share_requires_viewer(self):
        with pytest.raises(ValidationError):
            signed_share(make_split(1, CECILIA, ALEX, "1.00"), 3)


class TestDebtService:
    """Tests for DebtService against the database."""

    def test_shared_expenses_create_debt(self, debt_service, transaction_service, sample_household):
        alex = sample_household["alex"]
        cecilia = sample_household["cecilia"]
        transaction_service.create_transaction(
            alex, sample_household["alex_checking"], date(2026, 2, 1), Decimal("-2100.00"),
            category_id=sample_household["rent"], description="Rent", is_shared=True, today=TODAY,
        )
        transaction_service.create_transaction(
            cecilia, sample_household["cecilia_checking"], date(2026, 2, 3), Decimal("-75.84"),
            category_id=sample_household["groceries"], is_shared=True, today=TODAY,
        )

        debt = debt_service.calculate_household_debt(sample_household["household"], alex)

        assert debt.partner.id == cecilia
        assert debt.summary.total_you_are_owed == Decimal("1050.00")
        assert debt.summary.total_you_owe == Decimal("37.92")
        assert debt.summary.net_debt == Decimal("-1012.08")

    def test_unsettled_expenses_newest_first(self, debt_service, transaction_service, sample_household):
        alex = sample_household["alex"]
        transaction_service.create_transaction(
            alex, sample_household["alex_checking"], date(2026, 2, 1), Decimal("-100.00"),
            category_id=sample_household["rent"], description="Older", is_shared=True, today=TODAY,
        )
        transaction_service.create_transaction(
            alex, sample_household["alex_checking"], date(2026, 2, 5), Decimal("-60.00"),
            description="Newer", is_shared=True, today=TODAY,
        )

        expenses = debt_service.get_unsettled_expenses(
            sample_household["household"], sample_household["cecilia"]
        )

        assert [e.description for e in expenses] == ["Newer", "Older"]
        assert expenses[0].your_share == Decimal("30.00")
        assert expenses[0].total_amount == Decimal("60.00")
        assert expenses[0].category_name is None
        assert expenses[1].category_name == "Rent"
        assert expenses[1].paid_by_member_id == alex

    def test_no_partner_returns_none(self, debt_service, household_service):
        household = household_service.create_household("Solo")
        member = household_service.add_member(household, "Sam")

        assert debt_service.calculate_household_debt(household, member) is None
        assert debt_service.get_unsettled_expenses(household, member) == []

    def test_three_members_returns_none(self, debt_service, household_service, sample_household):
        household_service.add_member(sample_household["household"], "Robin")

        assert debt_service.calculate_household_debt(
            sample_household["household"], sample_household["alex"]
        ) is None

    def test_inactive_member_is_not_a_partner(self, debt_service, household_service, sample_household):
        household_service.add_member(sample_household["household"], "Robin")
        robin = household_service.list_members(sample_household["household"])[-1]
        household_service.deactivate_member(robin.id)

        debt = debt_service.calculate_household_debt(
            sample_household["household"], sample_household["alex"]
        )
        assert debt.partner.id == sample_household["cecilia"]

    def test_unknown_household_or_viewer(self, debt_service, sample_household):
        with pytest.raises(NotFoundError):
            debt_service.calculate_household_debt(999, sample_household["alex"])
        with pytest.raises(NotFoundError):
            debt_service.calculate_household_debt(sample_household["household"], 999)
