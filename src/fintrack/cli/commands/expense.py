"""Expense management commands."""

import click
from fintrack.cli.date_filters import parse_date_or_exit, period_options, pop_period_flags, resolve_cli_date_range
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.category import CategoryService
from fintrack.domain.errors import DomainError
from fintrack.domain.expense import ExpenseService
from fintrack.utils.amount_parser import parse_amount

FREQUENCIES = ["daily", "weekly", "monthly", "yearly"]


def _parse_amount_or_exit(ctx, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--amount", required=True, help="Expense amount (e.g., 42.50)")
@click.option("--description", required=True, help="Expense description")
@click.option("--date", "expense_date", default="today", help="Expense date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--note", help="Note")
@click.option("--receipt", help="Receipt reference")
@click.option("--recurring", type=click.Choice(FREQUENCIES, case_sensitive=False), help="Repeat this expense at the given frequency")
@click.pass_context
def add_expense(
    ctx,
    category: str,
    amount: str,
    description: str,
    expense_date: str,
    note: str | None,
    receipt: str | None,
    recurring: str | None,
):
    """Record an expense.

    Examples:
        fintrack expense add --category "Food & Dining" --amount 42.50 --description "Groceries"
        fintrack expense add --category Housing --amount 1200 --description Rent --date 2024-01-01 --recurring monthly
    """
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]
    service = ExpenseService(db)

    exp_date = parse_date_or_exit(ctx, expense_date, "date")
    exp_amount = _parse_amount_or_exit(ctx, amount)

    try:
        category_obj = CategoryService(db).resolve_category(user_id, category)
        expense_id = service.create_expense(
            user_id,
            category_id=category_obj.id,
            amount=exp_amount,
            description=description,
            date=exp_date,
            note=note,
            receipt=receipt,
            is_recurring=recurring is not None,
            recurring_frequency=recurring,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    expense = service.get_expense(user_id, expense_id)
    click.echo(f"Created expense {expense_id}")
    click.echo(f"  Date: {expense.date}")
    click.echo(f"  Amount: ${expense.amount:,.2f}")
    click.echo(f"  Category: {category_obj.name}")
    if expense.is_recurring:
        click.echo(f"  Repeats: {expense.recurring_frequency.value}, next on {expense.next_recurring_date}")


@expense_group.command("list")
@period_options
@click.option("--category", help="Category name or ID")
@click.pass_context
def list_expenses(ctx, start_date: str | None, end_date: str | None, category: str | None, **period_flags):
    """List expenses with optional filters, newest first."""
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]
    category_service = CategoryService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(period_flags)
    )

    category_id = None
    if category:
        try:
            category_id = category_service.resolve_category(user_id, category).id
        except DomainError as e:
            handle_domain_error(ctx, e)

    expenses = ExpenseService(db).list_expenses(user_id, start_date=start, end_date=end, category_id=category_id)
    if not expenses:
        click.echo("No expenses found.")
        return

    names = category_service.category_names(user_id)
    click.echo(f"\nFound {len(expenses)} expense(s):")
    click.echo(f"{'ID':>5}  {'Date':<10}  {'Amount':>12}  {'Category':<20}  Description")
    click.echo("-" * 80)
    for exp in expenses:
        marker = " (recurring)" if exp.is_recurring else ""
        click.echo(
            f"{exp.id:>5}  {exp.date!s:<10}  {f'${exp.amount:,.2f}':>12}  "
            f"{names.get(exp.category_id, 'Unknown'):<20}  {exp.description}{marker}"
        )
    total = sum(exp.amount for exp in expenses)
    click.echo("-" * 80)
    click.echo(f"{'Total':<17}  {f'${total:,.2f}':>12}")


@expense_group.command("update")
@click.argument("expense_id", type=int)
@click.option("--category", help="Category name or ID")
@click.option("--amount", help="Expense amount")
@click.option("--description", help="Expense description")
@click.option("--date", "expense_date", help="Expense date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--note", help="Note")
@click.option("--receipt", help="Receipt reference")
@click.option("--recurring", type=click.Choice(FREQUENCIES, case_sensitive=False), help="Make the expense repeat at this frequency")
@click.option("--not-recurring", is_flag=True, help="Stop the expense from repeating")
@click.pass_context
def update_expense(
    ctx,
    expense_id: int,
    category: str | None,
    amount: str | None,
    description: str | None,
    expense_date: str | None,
    note: str | None,
    receipt: str | None,
    recurring: str | None,
    not_recurring: bool,
):
    """Update an expense.

    Updates only the fields that are provided.

    Examples:
        fintrack expense update 3 --amount 55.00
        fintrack expense update 3 --recurring weekly
    """
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]

    if recurring and not_recurring:
        click.echo("Error: --recurring and --not-recurring cannot be combined.", err=True)
        ctx.exit(1)

    exp_date = parse_date_or_exit(ctx, expense_date, "date") if expense_date is not None else None
    exp_amount = _parse_amount_or_exit(ctx, amount) if amount is not None else None

    is_recurring = None
    if recurring:
        is_recurring = True
    elif not_recurring:
        is_recurring = False

    try:
        category_id = CategoryService(db).resolve_category(user_id, category).id if category else None
        ExpenseService(db).update_expense(
            user_id,
            expense_id,
            category_id=category_id,
            amount=exp_amount,
            description=description,
            date=exp_date,
            note=note,
            receipt=receipt,
            is_recurring=is_recurring,
            recurring_frequency=recurring,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated expense {expense_id}")


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.pass_context
def delete_expense(ctx, expense_id: int):
    """Delete an expense."""
    user_id = require_user_id(ctx)
    try:
        ExpenseService(ctx.obj["db"]).delete_expense(user_id, expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
