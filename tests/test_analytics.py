"""Tests for analytics service."""

import pytest
from datetime import date
from decimal import Decimal

from fintrack.domain.errors import ValidationError


@pytest.fixture
def spending_history(expense_service, sample_user, sample_categories):
    """A few months of expenses for the sample user."""
    food, transport = sample_categories["Food"], sample_categories["Transport"]
    rows = [
        (food, "10.00", date(2024, 1, 5)),
        (food, "20.00", date(2024, 1, 20)),
        (transport, "5.00", date(2024, 1, 21)),
        (food, "30.00", date(2024, 3, 1)),
        (transport, "100.00", date(2024, 3, 15)),
    ]
    for category_id, amount, day in rows:
        expense_service.create_expense(sample_user.id, category_id, amount, "expense", day)
    return rows


def test_expense_summary(analytics_service, sample_user, spending_history):
    summary = analytics_service.expense_summary(sample_user.id, date(2024, 1, 1), date(2024, 1, 31))

    assert summary.total == Decimal("35.00")
    assert summary.by_category == {"Food": Decimal("30.00"), "Transport": Decimal("5.00")}
    assert summary.transaction_count == 3


def test_expense_summary_rejects_inverted_range(analytics_service, sample_user):
    with pytest.raises(ValidationError, match="before start date"):
        analytics_service.expense_summary(sample_user.id, date(2024, 2, 1), date(2024, 1, 1))


def test_monthly_totals_skip_empty_months(analytics_service, sample_user, spending_history):
    totals = analytics_service.monthly_totals(sample_user.id, date(2024, 1, 1), date(2024, 3, 31))

    assert [(t.month, t.total) for t in totals] == [
        (date(2024, 1, 1), Decimal("35.00")),
        (date(2024, 3, 1), Decimal("130.00")),
    ]


def test_monthly_trend_looks_back(analytics_service, sample_user, spending_history):
    totals = analytics_service.monthly_trend(sample_user.id, months=1, today=date(2024, 3, 20))

    assert [t.month for t in totals] == [date(2024, 3, 1)]


def test_monthly_trend_needs_a_month(analytics_service, sample_user):
    with pytest.raises(ValidationError):
        analytics_service.monthly_trend(sample_user.id, months=0)


def test_category_patterns(analytics_service, sample_user, spending_history):
    patterns = analytics_service.category_patterns(sample_user.id, date(2024, 1, 1), date(2024, 3, 31))

    assert [p.category_name for p in patterns] == ["Transport", "Food"]
    transport, food = patterns
    assert (transport.total, transport.count, transport.average) == (Decimal("105.00"), 2, Decimal("52.50"))
    assert (food.total, food.count, food.average) == (Decimal("60.00"), 3, Decimal("20.00"))


def test_budget_analysis(analytics_service, budget_service, sample_user, sample_categories, spending_history):
    budget_service.create_budget(sample_user.id, sample_categories["Food"], "25", "monthly", date(2024, 1, 1))
    budget_service.create_budget(sample_user.id, sample_categories["Food"], "25", "monthly", date(2024, 5, 1))

    rows = analytics_service.budget_analysis(sample_user.id, date(2024, 1, 1), date(2024, 1, 31))

    assert len(rows) == 1
    row = rows[0]
    assert row.category_name == "Food"
    assert row.budgeted == Decimal("25.00")
    assert row.spent == Decimal("30.00")
    assert row.remaining == Decimal("-5.00")
    assert row.percentage_used == Decimal("120")
    assert row.is_alert_triggered


def test_recurring_expenses_sorted_by_next_date(analytics_service, expense_service, sample_user, sample_categories):
    food = sample_categories["Food"]
    expense_service.create_expense(sample_user.id, food, "9", "Magazine", date(2024, 1, 1), is_recurring=True, recurring_frequency="monthly")
    expense_service.create_expense(sample_user.id, food, "3", "Coffee", date(2024, 1, 1), is_recurring=True, recurring_frequency="daily")

    templates = analytics_service.recurring_expenses(sample_user.id)

    assert [t.description for t in templates] == ["Coffee", "Magazine"]


def test_dashboard(analytics_service, budget_service, expense_service, sample_user, sample_categories, spending_history):
    budget_service.create_budget(sample_user.id, sample_categories["Food"], "400", "monthly", date(2024, 3, 1))

    board = analytics_service.dashboard(sample_user.id, today=date(2024, 3, 20))

    assert board.total_expenses == Decimal("165.00")
    assert board.monthly_expenses == Decimal("130.00")
    assert board.monthly_budget == Decimal("400.00")
    assert [e.date for e in board.recent_expenses] == [date(2024, 3, 1), date(2024, 3, 15)]


def test_dashboard_without_budget(analytics_service, sample_user):
    board = analytics_service.dashboard(sample_user.id, today=date(2024, 3, 20))

    assert board.total_expenses == 0
    assert board.monthly_budget == 0
    assert board.recent_expenses == ()
