"""Expense domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import Expense as ExpenseEntity, RecurringFrequency
from fintrack.domain.errors import NotFoundError, ValidationError, expense_not_found
from fintrack.domain.money import validate_amount
from fintrack.domain.recurring import compute_next_date, parse_frequency


class ExpenseService:
    """Service for managing a user's expenses."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db
        self.categories = CategoryService(db)

    def create_expense(
        self,
        user_id: int,
        category_id: int,
        amount: Decimal | int | str,
        description: str,
        date: date,
        note: Optional[str] = None,
        receipt: Optional[str] = None,
        is_recurring: bool = False,
        recurring_frequency: Optional[RecurringFrequency | str] = None,
    ) -> int:
        """Create an expense.

        Args:
            user_id: Owner of the expense
            category_id: Category ID
            amount: Positive amount
            description: Description
            date: Expense date
            note: Optional note
            receipt: Optional receipt reference
            is_recurring: If True, the expense repeats at recurring_frequency
            recurring_frequency: daily, weekly, monthly or yearly

        Returns:
            Expense ID

        Raises:
            NotFoundError: If the category does not exist for this user
            ValidationError: If amount or description is invalid, or a
                recurring expense has no frequency
        """
        self.categories.require_category(user_id, category_id)
        money = validate_amount(amount)
        if not description or not description.strip():
            raise ValidationError("Expense description must not be empty")

        frequency, next_date = self._recurrence(date, is_recurring, recurring_frequency)

        return self.db.create_expense(
            user_id=user_id,
            category_id=category_id,
            amount=money,
            description=description.strip(),
            date=date,
            note=note,
            receipt=receipt,
            is_recurring=is_recurring,
            recurring_frequency=frequency,
            next_recurring_date=next_date,
        )

    def _recurrence(
        self,
        expense_date: date,
        is_recurring: bool,
        recurring_frequency: Optional[RecurringFrequency | str],
    ) -> tuple[Optional[RecurringFrequency], Optional[date]]:
        """Resolve frequency and first next date for a recurring expense."""
        if not is_recurring:
            return None, None
        if recurring_frequency is None:
            raise ValidationError("Recurring expenses need a frequency")
        frequency = parse_frequency(recurring_frequency)
        return frequency, compute_next_date(expense_date, frequency)

    def get_expense(self, user_id: int, expense_id: int) -> ExpenseEntity:
        """Get a user's expense.

        Raises:
            NotFoundError: If the expense does not exist for this user
        """
        expense = self.db.get_expense(expense_id)
        if expense is None or expense.user_id != user_id:
            raise NotFoundError(expense_not_found(expense_id))
        return expense

    def update_expense(
        self,
        user_id: int,
        expense_id: int,
        category_id: Optional[int] = None,
        amount: Optional[Decimal | int | str] = None,
        description: Optional[str] = None,
        date: Optional[date] = None,
        note: Optional[str] = None,
        receipt: Optional[str] = None,
        is_recurring: Optional[bool] = None,
        recurring_frequency: Optional[RecurringFrequency | str] = None,
    ) -> ExpenseEntity:
        """Update expense fields that are provided.

        Changing the date, the recurring flag or the frequency recomputes the
        next recurring date. It continues after the newest occurrence already
        generated from the expense, or from the expense date when there is none.
        Re-passing the current values leaves the next recurring date alone.

        Returns:
            Updated expense

        Raises:
            NotFoundError: If the expense or new category does not exist for this user
            ValidationError: If new values are invalid
        """
        expense = self.get_expense(user_id, expense_id)

        if category_id is not None:
            self.categories.require_category(user_id, category_id)
        money = validate_amount(amount) if amount is not None else None
        if description is not None and not description.strip():
            raise ValidationError("Expense description must not be empty")

        recurring = expense.is_recurring if is_recurring is None else is_recurring
        new_date = date if date is not None else expense.date
        if recurring_frequency is None:
            recurring_frequency = expense.recurring_frequency
        frequency, next_date = self._recurrence(new_date, recurring, recurring_frequency)

        update_recurrence = (
            recurring != expense.is_recurring
            or frequency != expense.recurring_frequency
            or new_date != expense.date
        )
        if update_recurrence and frequency is not None:
            # Resume after the newest generated occurrence so it is never repeated
            latest = self.db.get_latest_occurrence_date(expense_id)
            if latest is not None and latest >= new_date:
                next_date = compute_next_date(latest, frequency, anchor=new_date)

        self.db.update_expense(
            expense_id,
            category_id=category_id,
            amount=money,
            description=description.strip() if description is not None else None,
            date=date,
            note=note,
            receipt=receipt,
            is_recurring=recurring,
            recurring_frequency=frequency,
            next_recurring_date=next_date,
            update_recurrence=update_recurrence,
        )
        return self.get_expense(user_id, expense_id)

    def delete_expense(self, user_id: int, expense_id: int) -> None:
        """Delete a user's expense.

        Raises:
            NotFoundError: If the expense does not exist for this user
        """
        self.get_expense(user_id, expense_id)
        self.db.delete_expense(expense_id)

    def list_expenses(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
    ) -> list[ExpenseEntity]:
        """List a user's expenses, newest first, with optional filters."""
        return self.db.list_expenses(
            user_id, start_date=start_date, end_date=end_date, category_id=category_id
        )
