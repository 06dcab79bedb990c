"""Tests for shared-expense split math."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from paycycle.domain.entities import MEMBER_ACTIVE, MEMBER_INACTIVE, Member
from paycycle.domain.errors import ValidationError
from paycycle.domain.splits import resolve_split_ratio, round_to_cents, split_amount

TODAY = date(2026, 2, 8)


def make_member(member_id, pct=None, status=MEMBER_ACTIVE):
    return Member(
        id=member_id,
        household_id=1,
        name=f"Member {member_id}",
        email=None,
        payday_day=1,
        split_percentage=None if pct is None else Decimal(pct),
        status=status,
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


class TestSplitAmount:
    """Tests for split_amount."""

    def test_even_split(self):
        shares = split_amount(Decimal("2100.00"), [(1, Decimal("50")), (2, Decimal("50"))])

        assert [(s.member_id, s.amount) for s in shares] == [
            (1, Decimal("1050.00")),
            (2, Decimal("1050.00")),
        ]
        assert [s.percentage for s in shares] == [Decimal("50.00"), Decimal("50.00")]

    def test_odd_cent_goes_to_lower_member_id(self):
        shares = split_amount(Decimal("100.01"), [(2, Decimal("50")), (1, Decimal("50"))])

        assert {s.member_id: s.amount for s in shares} == {1: Decimal("50.01"), 2: Decimal("50.00")}

    def test_three_way_split_sums_to_total(self):
        third = Decimal("100") / 3
        shares = split_amount(Decimal("100.00"), [(1, third), (2, third), (3, third)])

        assert [s.amount for s in shares] == [Decimal("33.34"), Decimal("33.33"), Decimal("33.33")]
        assert sum(s.amount for s in shares) == Decimal("100.00")

    def test_weighted_split(self):
        shares = split_amount(Decimal("2100.00"), [(1, Decimal("60")), (2, Decimal("40"))])

        assert [s.amount for s in shares] == [Decimal("1260.00"), Decimal("840.00")]
        assert [s.percentage for s in shares] == [Decimal("60.00"), Decimal("40.00")]

    def test_remainder_prefers_larger_fraction(self):
        shares = split_amount(Decimal("0.05"), [(1, Decimal("70")), (2, Decimal("30"))])

        # 3.5 and 1.5 cents: equal fractions, larger ratio wins the leftover cent
        assert [s.amount for s in shares] == [Decimal("0.04"), Decimal("0.01")]

    @pytest.mark.parametrize("total", ["0.01", "0.99", "17.17", "1234.57", "99999.99"])
    def test_shares_always_sum_to_total(self, total):
        ratios = [(1, Decimal("45.5")), (2, Decimal("30")), (3, Decimal("24.5"))]

        shares = split_amount(Decimal(total), ratios)

        assert sum(s.amount for s in shares) == Decimal(total)

    def test_non_positive_total_gives_zero_shares(self):
        shares = split_amount(Decimal("0"), [(1, Decimal("50")), (2, Decimal("50"))])

        assert [s.amount for s in shares] == [Decimal("0.00"), Decimal("0.00")]

    def test_non_positive_ratio_rejected(self):
        with pytest.raises(ValidationError):
            split_amount(Decimal("10"), [(1, Decimal("0")), (2, Decimal("100"))])

    def test_no_participants(self):
        assert split_amount(Decimal("10"), []) == []

    def test_round_to_cents(self):
        assert round_to_cents(Decimal("1.005")) == Decimal("1.01")
        assert round_to_cents(Decimal("-1.005")) == Decimal("-1.01")


class TestResolveSplitRatio:
    """Tests for resolve_split_ratio."""

    def test_equal_without_manual_percentages(self):
        assert resolve_split_ratio([make_member(1), make_member(2)]) == [
            (1, Decimal("50")),
            (2, Decimal("50")),
        ]

    def test_manual_percentages_used_when_complete(self):
        members = [make_member(1, "60"), make_member(2, "40")]

        assert resolve_split_ratio(members) == [(1, Decimal("60")), (2, Decimal("40"))]

    def test_incomplete_manual_percentages_fall_back_to_equal(self):
        members = [make_member(1, "60"), make_member(2)]

        assert resolve_split_ratio(members) == [(1, Decimal("50")), (2, Decimal("50"))]

    def test_manual_percentages_not_summing_to_100_fall_back(self):
        members = [make_member(1, "60"), make_member(2, "30")]

        assert resolve_split_ratio(members) == [(1, Decimal("50")), (2, Decimal("50"))]

    def test_inactive_members_excluded(self):
        members = [make_member(1), make_member(2), make_member(3, status=MEMBER_INACTIVE)]

        assert [member_id for member_id, _ in resolve_split_ratio(members)] == [1, 2]


class TestSharedTransactionSplits:
    """Splits created when posting shared transactions."""

    def test_manual_percentages_drive_splits(
        self, temp_db, household_service, transaction_service, sample_household
    ):
        household_service.set_split_percentages(
            sample_household["household"],
            {sample_household["alex"]: Decimal("60"), sample_household["cecilia"]: Decimal("40")},
        )

        txn = transaction_service.create_transaction(
            sample_household["alex"], sample_household["alex_checking"], date(2026, 2, 1),
            Decimal("-2100.00"), is_shared=True, today=TODAY,
        )

        splits = temp_db.list_splits(transaction_id=txn)
        assert len(splits) == 1
        assert splits[0].ower_member_id == sample_household["cecilia"]
        assert splits[0].owed_to_member_id == sample_household["alex"]
        assert splits[0].split_amount == Decimal("840.00")
        assert splits[0].split_percentage == Decimal("40.00")
