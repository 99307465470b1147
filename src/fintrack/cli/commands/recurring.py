"""Recurring expense commands."""

import click
from fintrack.cli.date_filters import parse_date_or_exit
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.category import CategoryService
from fintrack.domain.recurring import RecurringExpenseService


@click.group()
def recurring_group():
    """Manage recurring expenses."""
    pass


@recurring_group.command("list")
@click.pass_context
def list_recurring(ctx):
    """List recurring expenses and when they next occur."""
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]

    templates = RecurringExpenseService(db).list_recurring(user_id)
    if not templates:
        click.echo("No recurring expenses found.")
        return

    names = CategoryService(db).category_names(user_id)
    for exp in templates:
        click.echo(
            f"{exp.id:>5}  {exp.description:<25}  {f'${exp.amount:,.2f}':>12}  "
            f"{names.get(exp.category_id, 'Unknown'):<20}  {exp.recurring_frequency.value:<8}  next: {exp.next_recurring_date}"
        )


@recurring_group.command("process")
@click.option("--date", "as_of", default="today", help="Process expenses due on or before this date (default: today)")
@click.pass_context
def process_recurring(ctx, as_of: str):
    """Create the due occurrences of recurring expenses.

    Each recurring expense produces at most one occurrence per run.
    """
    user_id = require_user_id(ctx)
    today = parse_date_or_exit(ctx, as_of, "date")

    result = RecurringExpenseService(ctx.obj["db"]).process_due(user_id, today=today)
    click.echo(f"Processed {result.processed_count} recurring expense(s).")
    for failure in result.failures:
        click.echo(f"Warning: Recurring expense {failure.expense_id} failed: {failure.error}", err=True)
    if result.failed_count:
        ctx.exit(1)


def register_commands(cli):
    """Register recurring expense commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
