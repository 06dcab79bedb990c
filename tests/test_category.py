"""Tests for category service."""

import pytest

from paycycle.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_and_list_ordered_by_group(category_service, sample_household):
    categories = category_service.list_categories(sample_household["household"])

    assert [(c.group_name, c.name) for c in categories] == [
        ("Food", "Dining"),
        ("Food", "Groceries"),
        ("Housing", "Rent"),
    ]


def test_default_group(category_service, sample_household):
    category_id = category_service.create_category(sample_household["household"], "Gifts")

    assert category_service.get_category(category_id).group_name == "General"


def test_duplicate_name(category_service, sample_household):
    with pytest.raises(ConflictError):
        category_service.create_category(sample_household["household"], "Rent")


def test_same_name_in_other_household(category_service, household_service, sample_household):
    other = household_service.create_household("Cabin")

    category_id = category_service.create_category(other, "Rent")

    assert category_service.get_category(category_id).household_id == other


def test_empty_name(category_service, sample_household):
    with pytest.raises(ValidationError):
        category_service.create_category(sample_household["household"], " ")


def test_lookup(category_service, sample_household):
    household = sample_household["household"]

    assert category_service.get_category_by_name(household, "Rent").id == sample_household["rent"]
    assert category_service.get_category_by_name(household, "Travel") is None
    with pytest.raises(NotFoundError):
        category_service.require_category(999)
    with pytest.raises(NotFoundError):
        category_service.create_category(999, "Rent")
