"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist or is owned by another user."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def user_not_found(user: int | str) -> str:
    """Return message for missing user by ID or email."""
    if isinstance(user, int):
        return f"User {user} not found"
    return f"User '{user}' not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"


def notification_not_found(notification_id: int) -> str:
    """Return message for missing notification."""
    return f"Notification {notification_id} not found"


def duplicate_user_email(email: str) -> str:
    """Return message for duplicate user email."""
    return f"User with email '{email}' already exists"


def end_date_not_after_start(start_date, end_date) -> str:
    """Return message for an inverted or empty date range."""
    return f"End date {end_date} must be after start date {start_date}"


def non_positive_amount(amount) -> str:
    """Return message for a zero or negative amount."""
    return f"Amount must be positive, got {amount}"


def threshold_out_of_range(threshold) -> str:
    """Return message for an alert threshold outside 0-100."""
    return f"Alert threshold must be between 0 and 100, got {threshold}"


def end_date_before_start(start_date, end_date) -> str:
    """Return message for a report range that ends before it starts."""
    return f"End date {end_date} is before start date {start_date}"


def duplicate_category_name(name: str) -> str:
    """Return message for a category name the user already has."""
    return f"Category '{name}' already exists"
