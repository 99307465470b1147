"""Domain layer for fintrack application."""

import importlib

_SERVICES = {
    "AlertService": "fintrack.domain.alerts",
    "AnalyticsService": "fintrack.domain.analytics",
    "BudgetService": "fintrack.domain.budget",
    "CategoryService": "fintrack.domain.category",
    "ExpenseService": "fintrack.domain.expense",
    "NotificationService": "fintrack.domain.notification",
    "RecurringExpenseService": "fintrack.domain.recurring",
    "SpendingService": "fintrack.domain.spending",
    "UserService": "fintrack.domain.user",
}

__all__ = sorted(_SERVICES)


# Import services lazily; the database layer imports domain.entities while
# the services import the database layer
def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
