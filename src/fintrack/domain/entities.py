"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema. Derived budget figures live on BudgetStatus and are always
computed from a freshly aggregated spend, never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class CategoryType(str, Enum):
    """Category kinds."""

    EXPENSE = "expense"
    INCOME = "income"


class BudgetPeriod(str, Enum):
    """Budget recurrence unit."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class RecurringFrequency(str, Enum):
    """How often a recurring expense repeats."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class NotificationType(str, Enum):
    """Notification kinds."""

    BUDGET_ALERT = "budget_alert"
    BUDGET_EXCEEDED = "budget_exceeded"
    BUDGET_CREATED = "budget_created"
    MONTHLY_SUMMARY = "monthly_summary"
    YEARLY_SUMMARY = "yearly_summary"


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    email: str
    first_name: str
    last_name: str
    password_hash: str
    role: str
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Category:
    """Category domain entity, owned by a single user."""

    id: int
    user_id: int
    name: str
    category_type: CategoryType
    description: Optional[str]
    icon: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Expense domain entity.

    A recurring expense acts as a template: its next_recurring_date is the day
    the next occurrence is due.
    """

    id: int
    user_id: int
    category_id: int
    amount: Decimal
    description: str
    date: date
    note: Optional[str]
    receipt: Optional[str]
    is_recurring: bool
    recurring_frequency: Optional[RecurringFrequency]
    next_recurring_date: Optional[date]
    recurring_source_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Budget:
    """Budget domain entity as persisted."""

    id: int
    user_id: int
    category_id: int
    amount: Decimal
    period: BudgetPeriod
    start_date: date
    end_date: date
    alert_threshold: Decimal
    is_alert_enabled: bool
    parent_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class BudgetDraft:
    """Budget fields ready to be inserted."""

    user_id: int
    category_id: int
    amount: Decimal
    period: BudgetPeriod
    start_date: date
    end_date: date
    alert_threshold: Decimal
    is_alert_enabled: bool


@dataclass(frozen=True)
class Notification:
    """Notification domain entity."""

    id: int
    user_id: int
    notification_type: NotificationType
    title: str
    message: str
    is_read: bool
    metadata: dict[str, Any]
    created_at: datetime


@dataclass(frozen=True)
class NotificationDraft:
    """Notification fields ready to be inserted."""

    user_id: int
    notification_type: NotificationType
    title: str
    message: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BudgetStatus:
    """A budget paired with its current spend, exposing derived figures."""

    budget: Budget
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        """Amount left; negative when the budget is overspent."""
        return self.budget.amount - self.spent

    @property
    def percentage_used(self) -> Decimal:
        """Share of the budget spent, in percent. Zero for a zero budget."""
        if self.budget.amount == 0:
            return Decimal("0")
        return self.spent / self.budget.amount * 100

    @property
    def is_alert_triggered(self) -> bool:
        return self.budget.is_alert_enabled and self.percentage_used >= self.budget.alert_threshold

    @property
    def is_exceeded(self) -> bool:
        return self.percentage_used >= 100


@dataclass(frozen=True)
class Alert:
    """Alert payload returned to callers of the alert evaluator."""

    budget_id: int
    title: str
    message: str
    percentage_used: Decimal
    is_exceeded: bool


@dataclass(frozen=True)
class AlertDecision:
    """Outcome of evaluating a budget: the alert and the events to persist."""

    alert: Alert
    notifications: tuple[NotificationDraft, ...]


@dataclass(frozen=True)
class BudgetCreation:
    """Result of creating a budget."""

    budget: Budget
    monthly_budget_ids: tuple[int, ...]
    alert: Optional[Alert]


@dataclass(frozen=True)
class RecurringFailure:
    """A recurring template that could not be processed."""

    expense_id: int
    error: str


@dataclass(frozen=True)
class RecurringRunResult:
    """Outcome of one recurring-expense processing run."""

    created_expense_ids: tuple[int, ...]
    advanced_expense_ids: tuple[int, ...]
    failures: tuple[RecurringFailure, ...]

    @property
    def processed_count(self) -> int:
        return len(self.advanced_expense_ids)

    @property
    def failed_count(self) -> int:
        return len(self.failures)


@dataclass(frozen=True)
class MonthlyTotal:
    """Spend total for one calendar month."""

    month: date
    total: Decimal


@dataclass(frozen=True)
class CategoryPattern:
    """Spending pattern for one category."""

    category_id: int
    category_name: str
    total: Decimal
    count: int
    average: Decimal


@dataclass(frozen=True)
class BudgetComparison:
    """Budget paired with the actual spend in its own date range."""

    budget_id: int
    category_id: int
    category_name: str
    period: BudgetPeriod
    start_date: date
    end_date: date
    budgeted: Decimal
    spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    is_alert_triggered: bool


@dataclass(frozen=True)
class ExpenseSummary:
    """Totals for a date range."""

    start_date: date
    end_date: date
    total: Decimal
    by_category: dict[str, Decimal]
    transaction_count: int


@dataclass(frozen=True)
class YearlySummary:
    """Yearly budgets of a year and monthly budgets grouped by month (1-12)."""

    year: int
    yearly: tuple[BudgetComparison, ...]
    monthly: dict[int, tuple[BudgetComparison, ...]]


@dataclass(frozen=True)
class Dashboard:
    """Snapshot of a user's spending."""

    total_expenses: Decimal
    monthly_expenses: Decimal
    monthly_budget: Decimal
    recent_expenses: tuple[Expense, ...]
