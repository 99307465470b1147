"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.alerts import AlertService
from fintrack.domain.analytics import AnalyticsService
from fintrack.domain.budget import BudgetService
from fintrack.domain.category import CategoryService
from fintrack.domain.expense import ExpenseService
from fintrack.domain.notification import NotificationService
from fintrack.domain.recurring import RecurringExpenseService
from fintrack.domain.user import UserService


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
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def alert_service(temp_db):
    """Create an AlertService with a temporary database."""
    return AlertService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringExpenseService with a temporary database."""
    return RecurringExpenseService(temp_db)


@pytest.fixture
def analytics_service(temp_db):
    """Create an AnalyticsService with a temporary database."""
    return AnalyticsService(temp_db)


@pytest.fixture
def notification_service(temp_db):
    """Create a NotificationService with a temporary database."""
    return NotificationService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Register a sample user without default categories."""
    user_id = user_service.register_user(
        email="jane@example.com",
        first_name="Jane",
        last_name="Doe",
        with_default_categories=False,
    )
    return user_service.get_user(user_id)


@pytest.fixture
def other_user(user_service):
    """Register a second user for ownership checks."""
    user_id = user_service.register_user(
        email="sam@example.com",
        first_name="Sam",
        last_name="Smith",
        with_default_categories=False,
    )
    return user_service.get_user(user_id)


@pytest.fixture
def sample_categories(category_service, sample_user):
    """Create a few categories for the sample user and return name -> ID."""
    return {
        name: category_service.create_category(sample_user.id, name=name, category_type=category_type)
        for name, category_type in [
            ("Food", "expense"),
            ("Transport", "expense"),
            ("Housing", "expense"),
            ("Salary", "income"),
        ]
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, sample_user):
    """Global CLI options selecting the temporary database and sample user."""
    return ["--db-path", temp_db.database_path, "--user", sample_user.email]
