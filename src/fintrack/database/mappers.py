"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, keeping enum decoding and the
Decimal handling of amounts in one place.
"""

from decimal import Decimal

from fintrack.domain import entities as domain
from fintrack.database.models import (
    User as ORMUser,
    Category as ORMCategory,
    Expense as ORMExpense,
    Budget as ORMBudget,
    Notification as ORMNotification,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        password_hash=orm_user.password_hash,
        role=orm_user.role,
        created_at=orm_user.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=orm_category.user_id,
        name=orm_category.name,
        category_type=domain.CategoryType(orm_category.category_type),
        description=orm_category.description,
        icon=orm_category.icon,
        created_at=orm_category.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    frequency = None
    if orm_expense.recurring_frequency is not None:
        frequency = domain.RecurringFrequency(orm_expense.recurring_frequency)
    return domain.Expense(
        id=orm_expense.id,
        user_id=orm_expense.user_id,
        category_id=orm_expense.category_id,
        amount=Decimal(orm_expense.amount),
        description=orm_expense.description,
        date=orm_expense.date,
        note=orm_expense.note,
        receipt=orm_expense.receipt,
        is_recurring=bool(orm_expense.is_recurring),
        recurring_frequency=frequency,
        next_recurring_date=orm_expense.next_recurring_date,
        recurring_source_id=orm_expense.recurring_source_id,
        created_at=orm_expense.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        user_id=orm_budget.user_id,
        category_id=orm_budget.category_id,
        amount=Decimal(orm_budget.amount),
        period=domain.BudgetPeriod(orm_budget.period),
        start_date=orm_budget.start_date,
        end_date=orm_budget.end_date,
        alert_threshold=Decimal(orm_budget.alert_threshold),
        is_alert_enabled=bool(orm_budget.is_alert_enabled),
        parent_id=orm_budget.parent_id,
        created_at=orm_budget.created_at,
    )


def budget_draft_to_orm(draft: domain.BudgetDraft) -> ORMBudget:
    """Build an unsaved SQLAlchemy Budget from a domain BudgetDraft."""
    return ORMBudget(
        user_id=draft.user_id,
        category_id=draft.category_id,
        amount=draft.amount,
        period=draft.period.value,
        start_date=draft.start_date,
        end_date=draft.end_date,
        alert_threshold=draft.alert_threshold,
        is_alert_enabled=draft.is_alert_enabled,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    return domain.Notification(
        id=orm_notification.id,
        user_id=orm_notification.user_id,
        notification_type=domain.NotificationType(orm_notification.notification_type),
        title=orm_notification.title,
        message=orm_notification.message,
        is_read=bool(orm_notification.is_read),
        metadata=dict(orm_notification.payload or {}),
        created_at=orm_notification.created_at,
    )


def notification_draft_to_orm(draft: domain.NotificationDraft) -> ORMNotification:
    """Build an unsaved SQLAlchemy Notification from a domain NotificationDraft.

    Decimal values in the metadata are stored as strings so the JSON column
    keeps exact amounts.
    """
    payload = {
        key: str(value) if isinstance(value, Decimal) else value
        for key, value in draft.metadata.items()
    }
    return ORMNotification(
        user_id=draft.user_id,
        notification_type=draft.notification_type.value,
        title=draft.title,
        message=draft.message,
        payload=payload,
    )
