"""Recurring expense projection."""

import logging
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy.exc import SQLAlchemyError

from fintrack.database.base import Database
from fintrack.domain.entities import (
    Expense as ExpenseEntity,
    RecurringFailure,
    RecurringFrequency,
    RecurringRunResult,
)
from fintrack.domain.errors import DomainError, ValidationError

logger = logging.getLogger(__name__)


def parse_frequency(frequency: RecurringFrequency | str) -> RecurringFrequency:
    """Coerce a frequency name into a RecurringFrequency.

    Raises:
        ValidationError: If the frequency is not daily, weekly, monthly or yearly
    """
    if isinstance(frequency, RecurringFrequency):
        return frequency
    try:
        return RecurringFrequency(str(frequency).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown frequency: '{frequency}'. Supported frequencies: daily, weekly, monthly, yearly"
        )


def compute_next_date(
    current: date, frequency: RecurringFrequency | str, anchor: Optional[date] = None
) -> date:
    """Get the date of the next occurrence after current.

    Monthly and yearly steps move by calendar months/years and clamp to the
    last day of a shorter month: 2024-01-31 -> 2024-02-29 (monthly),
    2024-02-29 -> 2025-02-28 (yearly).

    Args:
        current: Date of the current occurrence
        frequency: daily, weekly, monthly or yearly
        anchor: Optional first date of the series; monthly and yearly steps
            target the anchor's day of month so a series started on the 31st
            returns to the 31st after a short month

    Returns:
        Next occurrence date
    """
    frequency = parse_frequency(frequency)
    if frequency == RecurringFrequency.DAILY:
        return current + timedelta(days=1)
    if frequency == RecurringFrequency.WEEKLY:
        return current + timedelta(days=7)

    day = anchor.day if anchor is not None else current.day
    if frequency == RecurringFrequency.MONTHLY:
        # relativedelta clamps day to the month length
        return current + relativedelta(months=1, day=day)
    return current + relativedelta(years=1, day=day)


class RecurringExpenseService:
    """Service that materializes due occurrences of recurring expenses."""

    def __init__(self, db: Database):
        """Initialize recurring expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_recurring(self, user_id: int) -> list[ExpenseEntity]:
        """List a user's recurring expense templates."""
        return self.db.list_expenses(user_id, recurring_only=True)

    def process_due(self, user_id: int, today: Optional[date] = None) -> RecurringRunResult:
        """Create one occurrence for every recurring expense due on or before today.

        Each template is handled on its own: the occurrence is inserted and
        the template's next date advanced in a single transaction. A failing
        template is recorded in the result and the others still run. Running
        again on the same day is a no-op because advanced templates are no
        longer due.

        Args:
            user_id: Owner of the recurring expenses
            today: Processing date, defaults to date.today()

        Returns:
            RecurringRunResult listing created occurrences, advanced templates and failures
        """
        if today is None:
            today = date.today()

        created: list[int] = []
        advanced: list[int] = []
        failures: list[RecurringFailure] = []

        for template in self.db.list_due_recurring_expenses(user_id, today):
            try:
                occurrence_id = self._process_template(template)
            except (DomainError, SQLAlchemyError) as e:
                logger.warning("Could not process recurring expense %s: %s", template.id, e)
                failures.append(RecurringFailure(expense_id=template.id, error=str(e)))
                continue
            created.append(occurrence_id)
            advanced.append(template.id)

        logger.info(
            "Processed recurring expenses for user %s: %d created, %d failed",
            user_id, len(created), len(failures),
        )
        return RecurringRunResult(
            created_expense_ids=tuple(created),
            advanced_expense_ids=tuple(advanced),
            failures=tuple(failures),
        )

    def _process_template(self, template: ExpenseEntity) -> int:
        if template.recurring_frequency is None or template.next_recurring_date is None:
            raise ValidationError(f"Recurring expense {template.id} has no frequency or next date")

        occurrence_date = template.next_recurring_date
        next_date = compute_next_date(occurrence_date, template.recurring_frequency, anchor=template.date)
        return self.db.create_recurring_occurrence(template.id, occurrence_date, next_date)
