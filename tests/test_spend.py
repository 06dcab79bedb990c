"""Tests for spend aggregation and the budget service."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from paycycle.domain.entities import Account, CategoryBudget, Transaction
from paycycle.domain.errors import NotFoundError, ValidationError
from paycycle.domain.spend import (
    STATUS_ON_TRACK,
    STATUS_OVER_BUDGET,
    STATUS_WARNING,
    determine_budget_status,
    recompute_spend,
    spend_by_category,
)

TODAY = date(2026, 2, 8)

NOW = datetime(2026, 1, 1, tzinfo=UTC)
START = date(2026, 1, 25)
END = date(2026, 2, 24)


def make_account(account_id, excluded=False):
    return Account(
        id=account_id,
        owner_member_id=1,
        name=f"Account {account_id}",
        balance=Decimal("0"),
        is_excluded_from_budget=excluded,
        is_primary=account_id == 1,
        created_at=NOW,
    )


def make_txn(txn_id, day, amount, category_id=10, account_id=1):
    return Transaction(
        id=txn_id,
        household_id=1,
        member_id=1,
        account_id=account_id,
        category_id=category_id,
        date=day,
        amount=Decimal(amount),
        description=None,
        is_shared=False,
        is_settled=False,
        created_at=NOW,
    )


def make_budget(category_id, allocated, group="Food"):
    return CategoryBudget(
        id=category_id,
        member_id=1,
        category_id=category_id,
        category_group=group,
        allocated_amount=Decimal(allocated),
        spent_amount=Decimal("0"),
    )


class TestSpendAggregation:
    """Tests for the pure spend functions."""

    def test_expenses_are_summed_as_positive_spend(self):
        txns = [make_txn(1, date(2026, 1, 26), "-100.00"), make_txn(2, date(2026, 2, 1), "-50.50")]

        assert spend_by_category(START, END, txns, [make_account(1)]) == {10: Decimal("150.50")}

    def test_window_bounds_are_inclusive(self):
        txns = [
            make_txn(1, date(2026, 1, 24), "-1"),
            make_txn(2, START, "-2"),
            make_txn(3, END, "-4"),
            make_txn(4, date(2026, 2, 25), "-8"),
        ]

        assert spend_by_category(START, END, txns, [make_account(1)]) == {10: Decimal("6")}

    def test_excluded_account_and_uncategorized_ignored(self):
        txns = [
            make_txn(1, date(2026, 2, 1), "-100", account_id=2),
            make_txn(2, date(2026, 2, 1), "-30", category_id=None),
            make_txn(3, date(2026, 2, 1), "-20"),
        ]
        accounts = [make_account(1), make_account(2, excluded=True)]

        assert spend_by_category(START, END, txns, accounts) == {10: Decimal("20")}

    def test_future_dated_transactions_ignored(self):
        txns = [make_txn(1, date(2026, 2, 1), "-20"), make_txn(2, date(2026, 2, 20), "-70")]

        assert spend_by_category(START, END, txns, [make_account(1)], as_of=TODAY) == {
            10: Decimal("20")
        }

    def test_refund_reduces_spend_and_result_is_clamped(self):
        budgets = [make_budget(10, "500"), make_budget(11, "200")]
        txns = [
            make_txn(1, date(2026, 2, 1), "-100"),
            make_txn(2, date(2026, 2, 2), "40"),
            make_txn(3, date(2026, 2, 3), "25", category_id=11),
        ]

        totals = recompute_spend(START, END, txns, [make_account(1)], budgets)

        assert totals.for_category(10).spent_amount == Decimal("60")
        assert totals.for_category(11).spent_amount == Decimal("0")
        assert totals.total_spent == Decimal("60")
        assert totals.total_allocated == Decimal("700")
        assert totals.remaining == Decimal("640")

    def test_groups_sum_their_categories(self):
        budgets = [make_budget(10, "500"), make_budget(11, "200"), make_budget(12, "2000", "Housing")]
        txns = [
            make_txn(1, date(2026, 2, 1), "-100"),
            make_txn(2, date(2026, 2, 1), "-50", category_id=11),
            make_txn(3, date(2026, 2, 1), "-2000", category_id=12),
        ]

        totals = recompute_spend(START, END, txns, [make_account(1)], budgets)

        assert [g.group_name for g in totals.per_group] == ["Food", "Housing"]
        food = totals.per_group[0]
        assert food.category_ids == (10, 11)
        assert food.spent_amount == Decimal("150")
        assert food.allocated_amount == Decimal("700")
        assert food.remaining == Decimal("550")

    def test_order_independent_and_idempotent(self):
        budgets = [make_budget(10, "500"), make_budget(11, "200")]
        txns = [
            make_txn(1, date(2026, 2, 1), "-100"),
            make_txn(2, date(2026, 2, 2), "-30", category_id=11),
            make_txn(3, date(2026, 2, 3), "15"),
        ]
        accounts = [make_account(1)]

        forward = recompute_spend(START, END, txns, accounts, budgets)
        backward = recompute_spend(START, END, list(reversed(txns)), accounts, list(reversed(budgets)))

        assert forward == backward
        assert recompute_spend(START, END, txns, accounts, budgets) == forward

    def test_category_without_transactions_reports_zero(self):
        totals = recompute_spend(START, END, [], [make_account(1)], [make_budget(10, "100")])

        assert totals.for_category(10).spent_amount == Decimal("0")
        assert totals.for_category(10).status == STATUS_ON_TRACK
        assert totals.for_category(99) is None

    @pytest.mark.parametrize(
        "allocated,spent,expected",
        [
            ("100", "50", STATUS_ON_TRACK),
            ("100", "95", STATUS_WARNING),
            ("100", "100", STATUS_WARNING),
            ("100", "100.01", STATUS_OVER_BUDGET),
            ("0", "0", STATUS_ON_TRACK),
            ("0", "1", STATUS_OVER_BUDGET),
        ],
    )
    def test_budget_status(self, allocated, spent, expected):
        assert determine_budget_status(Decimal(allocated), Decimal(spent)) == expected


class TestBudgetService:
    """Tests for BudgetService against the database."""

    def test_set_allocation_creates_then_updates(self, budget_service, sample_household):
        alex = sample_household["alex"]
        groceries = sample_household["groceries"]

        first = budget_service.set_allocation(alex, groceries, Decimal("4000"), today=TODAY)
        second = budget_service.set_allocation(alex, groceries, Decimal("4500"), today=TODAY)

        assert first == second
        budgets = budget_service.list_budgets(alex)
        assert len(budgets) == 1
        assert budgets[0].allocated_amount == Decimal("4500")
        assert budgets[0].category_group == "Food"

    def test_negative_allocation_rejected(self, budget_service, sample_household):
        with pytest.raises(ValidationError):
            budget_service.set_allocation(
                sample_household["alex"], sample_household["groceries"], Decimal("-1")
            )

    def test_unknown_category(self, budget_service, sample_household):
        with pytest.raises(NotFoundError):
            budget_service.set_allocation(sample_household["alex"], 999, Decimal("10"))

    def test_category_from_other_household(
        self, budget_service, household_service, category_service, sample_household
    ):
        other = household_service.create_household("Cabin")
        foreign = category_service.create_category(other, "Firewood")

        with pytest.raises(ValidationError):
            budget_service.set_allocation(sample_household["alex"], foreign, Decimal("10"))

    def test_transactions_update_stored_spend(
        self, temp_db, budget_service, transaction_service, sample_household
    ):
        alex = sample_household["alex"]
        groceries = sample_household["groceries"]
        budget_service.set_allocation(alex, groceries, Decimal("4000"), today=TODAY)

        transaction_service.create_transaction(
            alex, sample_household["alex_checking"], date(2026, 2, 1), Decimal("-250.00"),
            category_id=groceries, today=TODAY,
        )
        transaction_service.create_transaction(
            alex, sample_household["alex_checking"], date(2026, 1, 20), Decimal("-99.00"),
            category_id=groceries, today=TODAY,
        )

        budget = budget_service.get_budget(alex, groceries)
        assert budget.spent_amount == Decimal("250.00")
        summary = temp_db.get_budget_summary(alex)
        assert summary.total_allocated == Decimal("4000.00")
        assert summary.total_spent == Decimal("250.00")

    def test_excluding_account_recomputes(
        self, budget_service, account_service, transaction_service, sample_household
    ):
        alex = sample_household["alex"]
        groceries = sample_household["groceries"]
        savings = account_service.create_account(alex, "Savings")
        budget_service.set_allocation(alex, groceries, Decimal("1000"), today=TODAY)
        transaction_service.create_transaction(
            alex, savings, date(2026, 2, 1), Decimal("-300"), category_id=groceries, today=TODAY
        )
        assert budget_service.get_budget(alex, groceries).spent_amount == Decimal("300")

        account_service.set_budget_exclusion(savings, True, today=TODAY)

        assert budget_service.get_budget(alex, groceries).spent_amount == Decimal("0")

    def test_report_uses_member_period(self, budget_service, transaction_service, sample_household):
        cecilia = sample_household["cecilia"]
        dining = sample_household["dining"]
        budget_service.set_allocation(cecilia, dining, Decimal("800"), today=TODAY)
        transaction_service.create_transaction(
            cecilia, sample_household["cecilia_checking"], date(2026, 1, 30), Decimal("-120"),
            category_id=dining, today=TODAY,
        )
        transaction_service.create_transaction(
            cecilia, sample_household["cecilia_checking"], date(2026, 1, 31), Decimal("-80"),
            category_id=dining, today=TODAY,
        )

        period, totals = budget_service.get_budget_report(cecilia, today=TODAY)

        assert period.start == date(2026, 1, 31)
        assert totals.total_spent == Decimal("80")

    def test_category_pace(self, budget_service, transaction_service, sample_household):
        alex = sample_household["alex"]
        groceries = sample_household["groceries"]
        budget_service.set_allocation(alex, groceries, Decimal("3000"), today=TODAY)
        transaction_service.create_transaction(
            alex, sample_household["alex_checking"], date(2026, 1, 26), Decimal("-2500"),
            category_id=groceries, today=TODAY,
        )

        pace = budget_service.get_category_pace(alex, groceries, today=TODAY)

        assert pace.status == "too-fast"
        assert pace.spent_so_far == Decimal("2500")

    def test_pace_without_budget(self, budget_service, sample_household):
        with pytest.raises(NotFoundError):
            budget_service.get_category_pace(sample_household["alex"], sample_household["rent"])
