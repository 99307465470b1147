"""Budget alert evaluation.

Alerts are level-triggered: every evaluation of a budget at or above its
threshold produces a new notification, whether or not an earlier evaluation
already did.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import (
    Alert,
    AlertDecision,
    BudgetStatus,
    NotificationDraft,
    NotificationType,
)
from fintrack.domain.errors import NotFoundError, budget_not_found
from fintrack.domain.spending import SpendingService

logger = logging.getLogger(__name__)

EXCEEDED_TITLE = "Budget Exceeded!"
APPROACHING_TITLE = "Budget Alert: Approaching Limit"

_CENT = Decimal("0.01")


def decide_alert(status: BudgetStatus, category_name: str) -> Optional[AlertDecision]:
    """Decide whether a budget should alert, without touching storage.

    Args:
        status: Budget with freshly aggregated spend
        category_name: Name used in the alert message

    Returns:
        AlertDecision with the alert and the notifications to persist, or None
        when alerts are disabled or usage is below the threshold
    """
    budget = status.budget
    if not budget.is_alert_enabled:
        return None

    percentage_used = status.percentage_used
    if percentage_used < budget.alert_threshold:
        return None

    is_exceeded = status.is_exceeded
    if is_exceeded:
        title = EXCEEDED_TITLE
        message = (
            f"You have exceeded your {category_name} budget of {budget.amount}. "
            f"Total spent: {status.spent}"
        )
        notification_type = NotificationType.BUDGET_EXCEEDED
    else:
        title = APPROACHING_TITLE
        message = (
            f"Your {category_name} budget is at {percentage_used:.1f}% of the limit "
            f"({budget.amount}). Current spent: {status.spent}"
        )
        notification_type = NotificationType.BUDGET_ALERT

    notification = NotificationDraft(
        user_id=budget.user_id,
        notification_type=notification_type,
        title=title,
        message=message,
        metadata={
            "budget_id": budget.id,
            "category_id": budget.category_id,
            "amount": budget.amount,
            "spent": status.spent,
            "percentage_used": percentage_used.quantize(_CENT, rounding=ROUND_HALF_UP),
        },
    )
    alert = Alert(
        budget_id=budget.id,
        title=title,
        message=message,
        percentage_used=percentage_used,
        is_exceeded=is_exceeded,
    )
    return AlertDecision(alert=alert, notifications=(notification,))


class AlertService:
    """Service that evaluates budgets and records alert notifications."""

    def __init__(self, db: Database):
        """Initialize alert service.

        Args:
            db: Database instance
        """
        self.db = db
        self.spending = SpendingService(db)

    def _category_name(self, category_id: int) -> str:
        category = self.db.get_category(category_id)
        return category.name if category is not None else "Unknown"

    def evaluate_status(self, status: BudgetStatus) -> Optional[Alert]:
        """Decide on an already computed status and persist the resulting notifications."""
        decision = decide_alert(status, self._category_name(status.budget.category_id))
        if decision is None:
            return None

        self.db.create_notifications(decision.notifications)
        logger.info(
            "Budget %s alert: %s (%.1f%% used)",
            status.budget.id,
            decision.alert.title,
            decision.alert.percentage_used,
        )
        return decision.alert

    def evaluate(self, user_id: int, budget_id: int) -> Optional[Alert]:
        """Recompute a budget's spend and raise an alert if its threshold is crossed.

        Args:
            user_id: Owner of the budget
            budget_id: Budget to evaluate

        Returns:
            Alert payload, or None if no alert applies

        Raises:
            NotFoundError: If the budget does not exist for this user
        """
        budget = self.db.get_budget(budget_id)
        if budget is None or budget.user_id != user_id:
            raise NotFoundError(budget_not_found(budget_id))
        return self.evaluate_status(self.spending.budget_status(budget))

    def check_alerts(self, user_id: int) -> list[Alert]:
        """Evaluate every alert-enabled budget of a user.

        Returns:
            Alerts raised, in budget listing order
        """
        alerts = []
        budgets = self.db.list_budgets(user_id, alert_enabled_only=True)
        logger.debug("Checking %d alert-enabled budgets for user %s", len(budgets), user_id)
        for budget in budgets:
            alert = self.evaluate_status(self.spending.budget_status(budget))
            if alert is not None:
                alerts.append(alert)
        return alerts
