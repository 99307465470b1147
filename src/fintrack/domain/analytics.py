"""Spending analytics domain service."""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from fintrack.database.base import Database
from fintrack.domain.budget import build_comparison
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import (
    BudgetComparison,
    CategoryPattern,
    Dashboard,
    Expense,
    ExpenseSummary,
    MonthlyTotal,
)
from fintrack.domain.errors import ValidationError, end_date_before_start
from fintrack.domain.money import average
from fintrack.domain.periods import month_range
from fintrack.domain.spending import SpendingService

RECENT_DAYS = 30
RECENT_LIMIT = 30


def _check_range(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise ValidationError(end_date_before_start(start_date, end_date))


class AnalyticsService:
    """Read-only reports over a user's expenses and budgets."""

    def __init__(self, db: Database):
        """Initialize analytics service.

        Args:
            db: Database instance
        """
        self.db = db
        self.categories = CategoryService(db)
        self.spending = SpendingService(db)

    def expense_summary(self, user_id: int, start_date: date, end_date: date) -> ExpenseSummary:
        """Total spend, spend per category name and expense count for a range."""
        _check_range(start_date, end_date)
        names = self.categories.category_names(user_id)

        by_category: dict[str, Decimal] = defaultdict(Decimal)
        total = Decimal("0")
        count = 0
        for category_id, category_total, category_count in self.spending.spent_by_category(
            user_id, start_date, end_date
        ):
            by_category[names.get(category_id, "Unknown")] += category_total
            total += category_total
            count += category_count

        return ExpenseSummary(
            start_date=start_date,
            end_date=end_date,
            total=total,
            by_category=dict(by_category),
            transaction_count=count,
        )

    def monthly_totals(self, user_id: int, start_date: date, end_date: date) -> list[MonthlyTotal]:
        """Spend per calendar month in a range, oldest month first.

        Months without expenses are left out.
        """
        _check_range(start_date, end_date)
        buckets: dict[date, Decimal] = defaultdict(Decimal)
        for expense in self.db.list_expenses(user_id, start_date=start_date, end_date=end_date):
            buckets[expense.date.replace(day=1)] += expense.amount
        return [MonthlyTotal(month=month, total=buckets[month]) for month in sorted(buckets)]

    def monthly_trend(self, user_id: int, months: int = 12, today: Optional[date] = None) -> list[MonthlyTotal]:
        """Spend per calendar month over the last `months` months up to today."""
        if months < 1:
            raise ValidationError(f"Months must be at least 1, got {months}")
        if today is None:
            today = date.today()
        return self.monthly_totals(user_id, today - relativedelta(months=months), today)

    def category_patterns(self, user_id: int, start_date: date, end_date: date) -> list[CategoryPattern]:
        """Total, count and average expense per category, largest total first."""
        _check_range(start_date, end_date)
        names = self.categories.category_names(user_id)
        patterns = [
            CategoryPattern(
                category_id=category_id,
                category_name=names.get(category_id, "Unknown"),
                total=total,
                count=count,
                average=average(total, count),
            )
            for category_id, total, count in self.spending.spent_by_category(user_id, start_date, end_date)
        ]
        return sorted(patterns, key=lambda p: (-p.total, p.category_name))

    def budget_analysis(self, user_id: int, start_date: date, end_date: date) -> list[BudgetComparison]:
        """Budgets overlapping a range, each compared with spend over its own range."""
        _check_range(start_date, end_date)
        names = self.categories.category_names(user_id)
        budgets = self.db.list_budgets(user_id, overlapping_start=start_date, overlapping_end=end_date)
        return [
            build_comparison(self.spending.budget_status(budget), names.get(budget.category_id, "Unknown"))
            for budget in budgets
        ]

    def recurring_expenses(self, user_id: int) -> list[Expense]:
        """Recurring expense templates, soonest next date first."""
        templates = self.db.list_expenses(user_id, recurring_only=True)
        return sorted(templates, key=lambda e: (e.next_recurring_date or date.max, e.id))

    def dashboard(self, user_id: int, today: Optional[date] = None) -> Dashboard:
        """Snapshot of all-time spend, this month's spend and budget, and recent expenses."""
        if today is None:
            today = date.today()
        month_start, month_end = month_range(today.year, today.month)

        # A budget counts when it covers the whole current month
        covering = [
            budget
            for budget in self.db.list_budgets(user_id, overlapping_start=month_start, overlapping_end=month_end)
            if budget.start_date <= month_start and budget.end_date >= month_end
        ]
        monthly_budget = covering[0].amount if covering else Decimal("0")

        recent = self.db.list_expenses(
            user_id,
            start_date=today - timedelta(days=RECENT_DAYS),
            ascending=True,
            limit=RECENT_LIMIT,
        )
        return Dashboard(
            total_expenses=self.spending.total_spent(user_id, None, None, None),
            monthly_expenses=self.spending.total_spent(user_id, None, month_start, month_end),
            monthly_budget=monthly_budget,
            recent_expenses=tuple(recent),
        )
