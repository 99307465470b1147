"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fintrack.domain.entities import (
    User,
    Category,
    Expense,
    Budget,
    BudgetDraft,
    BudgetPeriod,
    Notification,
    NotificationDraft,
    NotificationType,
    RecurringFrequency,
)


class Database(ABC):
    """Abstract database interface for fintrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self, email: str, first_name: str, last_name: str, password_hash: str = "", role: str = "user"
    ) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    def update_user(
        self,
        user_id: int,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> None:
        """Update user profile fields that are not None."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        user_id: int,
        name: str,
        category_type: str = "expense",
        description: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, user_id: int, name: str) -> Optional[Category]:
        """Get a user's category by name."""
        pass

    @abstractmethod
    def list_categories(self, user_id: int, category_type: Optional[str] = None) -> list[Category]:
        """List a user's categories, optionally filtered by type."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        category_type: Optional[str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Update category fields that are not None."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category together with its expenses and budgets."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        user_id: int,
        category_id: int,
        amount: Decimal,
        description: str,
        date: date,
        note: Optional[str] = None,
        receipt: Optional[str] = None,
        is_recurring: bool = False,
        recurring_frequency: Optional[RecurringFrequency] = None,
        next_recurring_date: Optional[date] = None,
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def update_expense(
        self,
        expense_id: int,
        category_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        date: Optional[date] = None,
        note: Optional[str] = None,
        receipt: Optional[str] = None,
        is_recurring: bool = False,
        recurring_frequency: Optional[RecurringFrequency] = None,
        next_recurring_date: Optional[date] = None,
        update_recurrence: bool = False,
    ) -> None:
        """Update expense fields.

        Args:
            update_recurrence: If True, overwrite is_recurring, recurring_frequency
                and next_recurring_date even when they are None/False
        """
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        recurring_only: bool = False,
        ascending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Expense]:
        """List a user's expenses with optional filters, newest first by default."""
        pass

    @abstractmethod
    def list_due_recurring_expenses(self, user_id: int, as_of: date) -> list[Expense]:
        """List recurring templates whose next date is on or before as_of."""
        pass

    @abstractmethod
    def create_recurring_occurrence(self, template_id: int, occurrence_date: date, next_date: date) -> int:
        """Insert one occurrence of a recurring template and advance the template.

        Both writes happen in one transaction. Returns the new expense ID.
        """
        pass

    @abstractmethod
    def get_latest_occurrence_date(self, template_id: int) -> Optional[date]:
        """Get the date of the newest occurrence generated from a template, if any."""
        pass

    @abstractmethod
    def sum_expenses(
        self,
        user_id: int,
        category_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        """Sum expense amounts; both range bounds are inclusive. Zero when nothing matches."""
        pass

    @abstractmethod
    def sum_expenses_by_category(
        self, user_id: int, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[tuple[int, Decimal, int]]:
        """Return (category_id, total, count) per category with expenses in range."""
        pass

    # Budget operations
    @abstractmethod
    def create_budget(self, draft: BudgetDraft) -> int:
        """Create a budget. Returns budget ID."""
        pass

    @abstractmethod
    def create_budget_with_children(
        self, parent: BudgetDraft, children: Sequence[BudgetDraft]
    ) -> tuple[int, list[int]]:
        """Create a parent budget and its children in one transaction.

        Returns (parent ID, child IDs in input order).
        """
        pass

    @abstractmethod
    def get_budget(self, budget_id: int) -> Optional[Budget]:
        """Get budget by ID."""
        pass

    @abstractmethod
    def list_budgets(
        self,
        user_id: int,
        period: Optional[BudgetPeriod] = None,
        overlapping_start: Optional[date] = None,
        overlapping_end: Optional[date] = None,
        alert_enabled_only: bool = False,
        parent_id: Optional[int] = None,
    ) -> list[Budget]:
        """List a user's budgets, newest start date first.

        overlapping_start/overlapping_end keep budgets whose range intersects
        the given range.
        """
        pass

    @abstractmethod
    def update_budget(
        self,
        budget_id: int,
        category_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        period: Optional[BudgetPeriod] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        alert_threshold: Optional[Decimal] = None,
        is_alert_enabled: Optional[bool] = None,
    ) -> None:
        """Update budget fields that are not None."""
        pass

    @abstractmethod
    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget, detaching any children."""
        pass

    # Notification operations
    @abstractmethod
    def create_notifications(self, drafts: Sequence[NotificationDraft]) -> list[int]:
        """Create notifications in one transaction. Returns their IDs."""
        pass

    @abstractmethod
    def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID."""
        pass

    @abstractmethod
    def list_notifications(
        self,
        user_id: int,
        types: Optional[Sequence[NotificationType]] = None,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> list[Notification]:
        """List a user's notifications, newest first."""
        pass

    @abstractmethod
    def mark_notification_read(self, notification_id: int) -> None:
        """Mark a notification as read."""
        pass
