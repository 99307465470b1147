"""Spend aggregation domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import Budget, BudgetStatus


class SpendingService:
    """Service for summing expense amounts."""

    def __init__(self, db: Database):
        """Initialize spending service.

        Args:
            db: Database instance
        """
        self.db = db

    def total_spent(
        self,
        user_id: int,
        category_id: Optional[int],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Decimal:
        """Sum a user's expenses in a category over an inclusive date range.

        Args:
            user_id: Owner of the expenses
            category_id: Category to sum, or None for all categories
            start_date: First day included, or None for no lower bound
            end_date: Last day included, or None for no upper bound

        Returns:
            Total amount, Decimal("0") when no expense matches
        """
        return self.db.sum_expenses(
            user_id=user_id,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
        )

    def spent_by_category(
        self, user_id: int, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[tuple[int, Decimal, int]]:
        """Return (category_id, total, count) for each category with expenses in range."""
        return self.db.sum_expenses_by_category(user_id, start_date=start_date, end_date=end_date)

    def budget_status(self, budget: Budget) -> BudgetStatus:
        """Pair a budget with the spend in its own date range."""
        spent = self.total_spent(
            budget.user_id, budget.category_id, budget.start_date, budget.end_date
        )
        return BudgetStatus(budget=budget, spent=spent)
