"""Budget domain service."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from fintrack.database.base import Database
from fintrack.domain.alerts import AlertService
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import (
    Budget as BudgetEntity,
    BudgetComparison,
    BudgetCreation,
    BudgetDraft,
    BudgetPeriod,
    BudgetStatus,
    NotificationDraft,
    NotificationType,
    YearlySummary,
)
from fintrack.domain.errors import (
    NotFoundError,
    ValidationError,
    budget_not_found,
    end_date_not_after_start,
    threshold_out_of_range,
)
from fintrack.domain.money import split_amount, validate_amount
from fintrack.domain.periods import compute_period_range, month_range, month_ranges, parse_period, period_end
from fintrack.domain.spending import SpendingService

logger = logging.getLogger(__name__)

DEFAULT_ALERT_THRESHOLD = Decimal("80")


def validate_threshold(threshold: Decimal | int | str) -> Decimal:
    """Return the threshold as a Decimal, rejecting values outside 0-100."""
    try:
        value = Decimal(str(threshold))
    except (InvalidOperation, ValueError):
        raise ValidationError(threshold_out_of_range(threshold))
    if value < 0 or value > 100:
        raise ValidationError(threshold_out_of_range(threshold))
    return value


def decompose_yearly(yearly: BudgetEntity | BudgetDraft) -> list[BudgetDraft]:
    """Build the twelve monthly budgets covering a yearly budget's calendar year.

    Each monthly budget inherits the category, alert threshold and alert flag
    of the yearly budget.
    """
    year = yearly.start_date.year
    amounts = split_amount(yearly.amount, 12)
    return [
        BudgetDraft(
            user_id=yearly.user_id,
            category_id=yearly.category_id,
            amount=monthly_amount,
            period=BudgetPeriod.MONTHLY,
            start_date=start,
            end_date=end,
            alert_threshold=yearly.alert_threshold,
            is_alert_enabled=yearly.is_alert_enabled,
        )
        for (start, end), monthly_amount in zip(month_ranges(year), amounts)
    ]


def build_comparison(status: BudgetStatus, category_name: str) -> BudgetComparison:
    """Flatten a budget status into a reporting row."""
    budget = status.budget
    return BudgetComparison(
        budget_id=budget.id,
        category_id=budget.category_id,
        category_name=category_name,
        period=budget.period,
        start_date=budget.start_date,
        end_date=budget.end_date,
        budgeted=budget.amount,
        spent=status.spent,
        remaining=status.remaining,
        percentage_used=status.percentage_used,
        is_alert_triggered=status.is_alert_triggered,
    )


class BudgetService:
    """Service for managing budgets and their lifecycle."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db
        self.categories = CategoryService(db)
        self.spending = SpendingService(db)
        self.alerts = AlertService(db)

    def create_budget(
        self,
        user_id: int,
        category_id: int,
        amount: Decimal | int | str,
        period: BudgetPeriod | str,
        start_date: date,
        end_date: Optional[date] = None,
        alert_threshold: Decimal | int | str = DEFAULT_ALERT_THRESHOLD,
        is_alert_enabled: bool = True,
    ) -> BudgetCreation:
        """Create a budget.

        Without an end date the budget runs one period from start_date.
        Yearly budgets always span January 1 to December 31 of the start
        year and are decomposed into twelve monthly budgets, inserted
        together with the yearly budget in one transaction.

        Args:
            user_id: Owner of the budget
            category_id: Category the budget caps
            amount: Budgeted amount, must be positive
            period: "monthly" or "yearly"
            start_date: First day of the budget
            end_date: Optional last day, must be after start_date
            alert_threshold: Percentage (0-100) at which alerts fire
            is_alert_enabled: Whether alerts fire at all

        Returns:
            BudgetCreation with the stored budget, monthly budget IDs and any alert

        Raises:
            NotFoundError: If the category does not exist for this user
            ValidationError: If amount, threshold, period or dates are invalid
        """
        category = self.categories.require_category(user_id, category_id)
        period = parse_period(period)
        money = validate_amount(amount)
        threshold = validate_threshold(alert_threshold)

        if end_date is None:
            end_date = period_end(period, start_date)
        elif end_date <= start_date:
            raise ValidationError(end_date_not_after_start(start_date, end_date))

        if period == BudgetPeriod.YEARLY:
            start_date, end_date = compute_period_range(BudgetPeriod.YEARLY, start_date)

        draft = BudgetDraft(
            user_id=user_id,
            category_id=category.id,
            amount=money,
            period=period,
            start_date=start_date,
            end_date=end_date,
            alert_threshold=threshold,
            is_alert_enabled=is_alert_enabled,
        )

        monthly_ids: list[int] = []
        if period == BudgetPeriod.YEARLY:
            budget_id, monthly_ids = self.db.create_budget_with_children(draft, decompose_yearly(draft))
            logger.info("Created %d monthly budgets for yearly budget %s", len(monthly_ids), budget_id)
        else:
            budget_id = self.db.create_budget(draft)

        budget = self.db.get_budget(budget_id)
        logger.info(
            "Created %s budget %s for '%s': %s (%s to %s)",
            period.value, budget_id, category.name, money, start_date, end_date,
        )

        self.db.create_notifications(
            [
                NotificationDraft(
                    user_id=user_id,
                    notification_type=NotificationType.BUDGET_CREATED,
                    title=f"New {period.value} Budget Created",
                    message=f"A new {period.value} budget of {money} has been created for {category.name}",
                    metadata={
                        "budget_id": budget_id,
                        "category_id": category.id,
                        "amount": money,
                        "period": period.value,
                    },
                )
            ]
        )

        alert = self.alerts.evaluate_status(self.spending.budget_status(budget))
        return BudgetCreation(budget=budget, monthly_budget_ids=tuple(monthly_ids), alert=alert)

    def get_budget(self, user_id: int, budget_id: int) -> BudgetEntity:
        """Get a user's budget.

        Raises:
            NotFoundError: If the budget does not exist for this user
        """
        budget = self.db.get_budget(budget_id)
        if budget is None or budget.user_id != user_id:
            raise NotFoundError(budget_not_found(budget_id))
        return budget

    def get_progress(self, user_id: int, budget_id: int) -> BudgetStatus:
        """Get a budget with freshly computed spend."""
        return self.spending.budget_status(self.get_budget(user_id, budget_id))

    def list_budgets(self, user_id: int, period: Optional[BudgetPeriod | str] = None) -> list[BudgetStatus]:
        """List a user's budgets, newest start date first, each with fresh spend."""
        parsed = parse_period(period) if period is not None else None
        budgets = self.db.list_budgets(user_id, period=parsed)
        return [self.spending.budget_status(budget) for budget in budgets]

    def update_budget(
        self,
        user_id: int,
        budget_id: int,
        category_id: Optional[int] = None,
        amount: Optional[Decimal | int | str] = None,
        period: Optional[BudgetPeriod | str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> BudgetStatus:
        """Update a budget.

        A budget that ends up yearly is normalized to its calendar year.
        Monthly budgets decomposed from a yearly budget are not changed.

        Returns:
            Updated budget with fresh spend

        Raises:
            NotFoundError: If the budget or new category does not exist for this user
            ValidationError: If the new values are invalid
        """
        budget = self.get_budget(user_id, budget_id)

        if category_id is not None and category_id != budget.category_id:
            self.categories.require_category(user_id, category_id)

        money = validate_amount(amount) if amount is not None else None
        new_period = parse_period(period) if period is not None else budget.period
        new_start = start_date if start_date is not None else budget.start_date
        new_end = end_date if end_date is not None else budget.end_date
        if new_end <= new_start:
            raise ValidationError(end_date_not_after_start(new_start, new_end))
        if new_period == BudgetPeriod.YEARLY:
            new_start, new_end = compute_period_range(BudgetPeriod.YEARLY, new_start)

        if budget.period == BudgetPeriod.YEARLY and self.db.list_budgets(user_id, parent_id=budget_id):
            logger.warning(
                "Budget %s is yearly; its monthly budgets are not updated", budget_id
            )

        self.db.update_budget(
            budget_id,
            category_id=category_id,
            amount=money,
            period=new_period,
            start_date=new_start,
            end_date=new_end,
        )
        return self.get_progress(user_id, budget_id)

    def update_alert_settings(
        self,
        user_id: int,
        budget_id: int,
        alert_threshold: Optional[Decimal | int | str] = None,
        is_alert_enabled: Optional[bool] = None,
    ) -> BudgetStatus:
        """Change a budget's alert threshold and/or alert flag."""
        self.get_budget(user_id, budget_id)
        threshold = validate_threshold(alert_threshold) if alert_threshold is not None else None
        self.db.update_budget(budget_id, alert_threshold=threshold, is_alert_enabled=is_alert_enabled)
        return self.get_progress(user_id, budget_id)

    def delete_budget(self, user_id: int, budget_id: int) -> None:
        """Delete a budget. Monthly budgets of a deleted yearly budget are kept."""
        self.get_budget(user_id, budget_id)
        self.db.delete_budget(budget_id)
        logger.info("Deleted budget %s for user %s", budget_id, user_id)

    def _comparisons(self, user_id: int, budgets: Sequence[BudgetEntity]) -> list[BudgetComparison]:
        names = self.categories.category_names(user_id)
        return [
            build_comparison(self.spending.budget_status(budget), names.get(budget.category_id, "Unknown"))
            for budget in budgets
        ]

    def category_caps(self, user_id: int) -> list[BudgetComparison]:
        """Every budget of a user as a cap row, ordered by category."""
        budgets = sorted(self.db.list_budgets(user_id), key=lambda b: (b.category_id, b.start_date, b.id))
        return self._comparisons(user_id, budgets)

    def yearly_summary(self, user_id: int, year: int) -> YearlySummary:
        """Summarize the yearly budgets of a year and its monthly budgets month by month."""
        year_start, year_end = date(year, 1, 1), date(year, 12, 31)
        yearly = self.db.list_budgets(
            user_id, period=BudgetPeriod.YEARLY, overlapping_start=year_start, overlapping_end=year_end
        )
        monthly = self.db.list_budgets(
            user_id, period=BudgetPeriod.MONTHLY, overlapping_start=year_start, overlapping_end=year_end
        )
        monthly_rows = self._comparisons(user_id, monthly)

        by_month: dict[int, tuple[BudgetComparison, ...]] = {}
        for month in range(1, 13):
            month_start, month_end = month_range(year, month)
            by_month[month] = tuple(
                row
                for row in sorted(monthly_rows, key=lambda r: (r.start_date, r.budget_id))
                if row.start_date <= month_end and row.end_date >= month_start
            )

        return YearlySummary(
            year=year,
            yearly=tuple(self._comparisons(user_id, yearly)),
            monthly=by_month,
        )
