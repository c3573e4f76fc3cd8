"""Shared pytest fixtures for pocketledger tests."""

import tempfile
import os
import pytest

from pocketledger.database.factories import create_sqlite_database
from pocketledger.domain.account import AccountService
from pocketledger.domain.budget import BudgetService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.payee import PayeeService
from pocketledger.domain.recurring import RecurringService
from pocketledger.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def payee_service(temp_db):
    """Create a PayeeService with a temporary database."""
    return PayeeService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringService with a temporary database."""
    return RecurringService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(name="Test Account")
    return account_service.get_account(account_id)


@pytest.fixture
def sample_categories(category_service):
    """Create the default categories and return their IDs keyed by name."""
    from pocketledger.cli.commands.init_categories import INITIAL_CATEGORIES

    category_ids = {}
    for name, is_income, exclude_from_budget, exclude_from_totals in INITIAL_CATEGORIES:
        category_ids[name] = category_service.create_category(
            name=name,
            is_income=is_income,
            exclude_from_budget=exclude_from_budget,
            exclude_from_totals=exclude_from_totals,
        )
    return category_ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

