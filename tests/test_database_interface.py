"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from fintrack.database.factories import create_database
from fintrack.domain import entities
from fintrack.domain.errors import NotFoundError


@pytest.fixture
def user_id(temp_db):
    return temp_db.create_user(email="db@example.com", first_name="Db", last_name="User")


@pytest.fixture
def category_id(temp_db, user_id):
    return temp_db.create_category(user_id=user_id, name="Food")


def _draft(user_id, category_id, start, end, amount="100.00", period=entities.BudgetPeriod.MONTHLY, enabled=True):
    return entities.BudgetDraft(
        user_id=user_id,
        category_id=category_id,
        amount=Decimal(amount),
        period=period,
        start_date=start,
        end_date=end,
        alert_threshold=Decimal("80"),
        is_alert_enabled=enabled,
    )


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_domain_model(self, temp_db, user_id):
        user = temp_db.get_user(user_id)

        assert isinstance(user, entities.User)
        assert user.email == "db@example.com"
        assert isinstance(user.created_at, datetime)
        assert temp_db.get_user_by_email("db@example.com") == user
        assert temp_db.get_user(999) is None

    def test_get_category_returns_domain_model(self, temp_db, user_id, category_id):
        category = temp_db.get_category(category_id)

        assert isinstance(category, entities.Category)
        assert category.user_id == user_id
        assert category.category_type == entities.CategoryType.EXPENSE
        assert temp_db.get_category_by_name(user_id, "Food") == category

    def test_expense_round_trip(self, temp_db, user_id, category_id):
        expense_id = temp_db.create_expense(
            user_id=user_id,
            category_id=category_id,
            amount=Decimal("12.34"),
            description="Lunch",
            date=date(2024, 1, 5),
        )

        expense = temp_db.get_expense(expense_id)
        assert isinstance(expense, entities.Expense)
        assert expense.amount == Decimal("12.34")
        assert isinstance(expense.amount, Decimal)

    def test_sum_expenses(self, temp_db, user_id, category_id):
        for day, amount in [(1, "0.10"), (2, "0.20"), (3, "0.30")]:
            temp_db.create_expense(
                user_id=user_id, category_id=category_id, amount=Decimal(amount), description="x", date=date(2024, 1, day)
            )

        assert temp_db.sum_expenses(user_id, category_id) == Decimal("0.60")
        assert temp_db.sum_expenses(user_id, category_id, date(2024, 1, 2), date(2024, 1, 2)) == Decimal("0.20")
        assert temp_db.sum_expenses(user_id, category_id, date(2025, 1, 1), date(2025, 1, 31)) == Decimal("0")
        assert temp_db.sum_expenses_by_category(user_id) == [(category_id, Decimal("0.60"), 3)]

    def test_latest_occurrence_date(self, temp_db, user_id, category_id):
        template_id = temp_db.create_expense(
            user_id=user_id,
            category_id=category_id,
            amount=Decimal("5"),
            description="Coffee",
            date=date(2024, 1, 1),
            is_recurring=True,
            recurring_frequency=entities.RecurringFrequency.DAILY,
            next_recurring_date=date(2024, 1, 2),
        )
        assert temp_db.get_latest_occurrence_date(template_id) is None

        temp_db.create_recurring_occurrence(template_id, date(2024, 1, 2), date(2024, 1, 3))
        temp_db.create_recurring_occurrence(template_id, date(2024, 1, 3), date(2024, 1, 4))

        assert temp_db.get_latest_occurrence_date(template_id) == date(2024, 1, 3)

    def test_list_expenses_ascending_with_limit(self, temp_db, user_id, category_id):
        for day in (3, 1, 2):
            temp_db.create_expense(
                user_id=user_id, category_id=category_id, amount=Decimal("1"), description=str(day), date=date(2024, 1, day)
            )

        expenses = temp_db.list_expenses(user_id, ascending=True, limit=2)

        assert [e.description for e in expenses] == ["1", "2"]

    def test_create_budget_with_children(self, temp_db, user_id, category_id):
        parent = _draft(user_id, category_id, date(2024, 1, 1), date(2024, 12, 31), "300", entities.BudgetPeriod.YEARLY)
        children = [
            _draft(user_id, category_id, date(2024, 1, 1), date(2024, 1, 31)),
            _draft(user_id, category_id, date(2024, 2, 1), date(2024, 2, 29)),
        ]

        parent_id, child_ids = temp_db.create_budget_with_children(parent, children)

        assert len(child_ids) == 2
        assert all(temp_db.get_budget(child_id).parent_id == parent_id for child_id in child_ids)

    def test_list_budgets_filters(self, temp_db, user_id, category_id):
        january = temp_db.create_budget(_draft(user_id, category_id, date(2024, 1, 1), date(2024, 1, 31)))
        february = temp_db.create_budget(_draft(user_id, category_id, date(2024, 2, 1), date(2024, 2, 29), enabled=False))

        overlapping = temp_db.list_budgets(user_id, overlapping_start=date(2024, 1, 15), overlapping_end=date(2024, 2, 10))
        enabled = temp_db.list_budgets(user_id, alert_enabled_only=True)

        assert [b.id for b in overlapping] == [february, january]
        assert [b.id for b in enabled] == [january]

    def test_missing_rows_raise_not_found(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_budget(42)
        with pytest.raises(NotFoundError):
            temp_db.delete_expense(42)
        with pytest.raises(NotFoundError):
            temp_db.mark_notification_read(42)
        with pytest.raises(NotFoundError):
            temp_db.update_category(42, name="x")

    def test_notification_metadata_round_trip(self, temp_db, user_id):
        (notification_id,) = temp_db.create_notifications(
            [
                entities.NotificationDraft(
                    user_id=user_id,
                    notification_type=entities.NotificationType.BUDGET_ALERT,
                    title="t",
                    message="m",
                    metadata={"budget_id": 1, "amount": Decimal("100.00")},
                )
            ]
        )

        notification = temp_db.get_notification(notification_id)
        assert isinstance(notification, entities.Notification)
        assert notification.metadata == {"budget_id": 1, "amount": "100.00"}


def test_create_database_from_url():
    db = create_database("sqlite:///:memory:")
    db.connect()
    db.initialize_schema()

    user_id = db.create_user(email="mem@example.com", first_name="Mem", last_name="Ory")

    assert db.get_user(user_id).email == "mem@example.com"
    db.disconnect()
