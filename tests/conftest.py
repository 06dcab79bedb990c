"""Shared pytest fixtures for paycycle tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from paycycle.database.factories import create_sqlite_database
from paycycle.domain.account import AccountService
from paycycle.domain.budget import BudgetService
from paycycle.domain.category import CategoryService
from paycycle.domain.debt import DebtService
from paycycle.domain.household import HouseholdService
from paycycle.domain.settlement import SettlementService
from paycycle.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)

@pytest.fixture
def household_service(temp_db):
    """Create a HouseholdService with a temporary database."""
    return HouseholdService(temp_db)

@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)

@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)

@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)

@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)

@pytest.fixture
def debt_service(temp_db):
    """Create a DebtService with a temporary database."""
    return DebtService(temp_db)

@pytest.fixture
def settlement_service(temp_db):
    """Create a SettlementService with a temporary database."""
    return SettlementService(temp_db)

@pytest.fixture
def sample_household(household_service, account_service, category_service):
    """Create a two-member household with accounts and categories.

    Alex is paid on the 25th, Cecilia on the last day of the month. Each has
    a primary checking account holding 10000.
    """
    household_id = household_service.create_household("Home")
    alex = household_service.add_member(household_id, "Alex", payday_day=25)
    cecilia = household_service.add_member(household_id, "Cecilia", payday_day=-1)

    return {
        "household": household_id,
        "alex": alex,
        "cecilia": cecilia,
        "alex_checking": account_service.create_account(alex, "Checking", balance=Decimal("10000")),
        "cecilia_checking": account_service.create_account(
            cecilia, "Checking", balance=Decimal("10000")
        ),
        "rent": category_service.create_category(household_id, "Rent", group_name="Housing"),
        "groceries": category_service.create_category(household_id, "Groceries", group_name="Food"),
        "dining": category_service.create_category(household_id, "Dining", group_name="Food"),
    }

@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
