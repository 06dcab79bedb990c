"""Tests for name-to-ID resolution."""

import pytest

from paycycle.domain.errors import NotFoundError, ValidationError
from paycycle.utils.resolvers import (
    resolve_account,
    resolve_category,
    resolve_household,
    resolve_member,
)


def test_resolve_member_by_name_or_id(temp_db, sample_household):
    assert resolve_member(temp_db, "Alex") == sample_household["alex"]
    assert resolve_member(temp_db, str(sample_household["cecilia"])) == sample_household["cecilia"]
    assert resolve_member(temp_db, sample_household["alex"]) == sample_household["alex"]


def test_resolve_member_missing(temp_db, sample_household):
    with pytest.raises(NotFoundError):
        resolve_member(temp_db, "Robin")
    with pytest.raises(NotFoundError):
        resolve_member(temp_db, "999")


def test_resolve_member_ambiguous(temp_db, household_service, sample_household):
    other = household_service.create_household("Cabin")
    household_service.add_member(other, "Alex")

    with pytest.raises(ValidationError, match="ambiguous"):
        resolve_member(temp_db, "Alex")


def test_resolve_household(temp_db, sample_household):
    assert resolve_household(temp_db, "Home") == sample_household["household"]
    with pytest.raises(NotFoundError):
        resolve_household(temp_db, "Cabin")


def test_resolve_account_scoped_to_member(temp_db, sample_household):
    assert resolve_account(temp_db, sample_household["cecilia"], "Checking") == sample_household["cecilia_checking"]
    with pytest.raises(NotFoundError):
        resolve_account(temp_db, sample_household["alex"], "Savings")


def test_resolve_category(temp_db, sample_household):
    household = sample_household["household"]
    assert resolve_category(temp_db, household, "Groceries") == sample_household["groceries"]
    assert resolve_category(temp_db, household, str(sample_household["rent"])) == sample_household["rent"]
    with pytest.raises(NotFoundError):
        resolve_category(temp_db, household, "Travel")
