"""Budget management commands."""

from datetime import date

import click
from fintrack.cli.date_filters import parse_date_or_exit, period_options, pop_period_flags, resolve_cli_date_range
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.analytics import AnalyticsService
from fintrack.domain.budget import DEFAULT_ALERT_THRESHOLD, BudgetService
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import BudgetComparison, BudgetStatus
from fintrack.domain.errors import DomainError
from fintrack.domain.periods import compute_period_range
from fintrack.utils.amount_parser import parse_amount

PERIODS = ["monthly", "yearly"]

ROW_HEADER = f"{'ID':>5}  {'Category':<20}  {'Period':<8}  {'Range':<23}  {'Budget':>12}  {'Spent':>12}  {'Used':>7}"


def _parse_amount_or_exit(ctx, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def _format_row(row: BudgetComparison) -> str:
    flag = " !" if row.is_alert_triggered else ""
    return (
        f"{row.budget_id:>5}  {row.category_name:<20}  {row.period.value:<8}  "
        f"{row.start_date!s} - {row.end_date!s}  {f'${row.budgeted:,.2f}':>12}  "
        f"{f'${row.spent:,.2f}':>12}  {row.percentage_used:>6.1f}%{flag}"
    )


def _print_progress(status: BudgetStatus, category_name: str) -> None:
    budget = status.budget
    click.echo(f"\nBudget {budget.id}: {category_name} ({budget.period.value})")
    click.echo(f"  Range: {budget.start_date} to {budget.end_date}")
    click.echo(f"  Budget: ${budget.amount:,.2f}")
    click.echo(f"  Spent: ${status.spent:,.2f}")
    click.echo(f"  Remaining: ${status.remaining:,.2f}")
    click.echo(f"  Used: {status.percentage_used:.1f}%")
    alerts = f"on at {budget.alert_threshold}%" if budget.is_alert_enabled else "off"
    click.echo(f"  Alerts: {alerts}")
    if status.is_exceeded:
        click.echo("  Status: exceeded")
    elif status.is_alert_triggered:
        click.echo("  Status: approaching limit")


@click.group()
def budget_group():
    """Manage budgets."""
    pass


@budget_group.command("create")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--amount", required=True, help="Budget amount (e.g., 500.00)")
@click.option("--period", type=click.Choice(PERIODS, case_sensitive=False), default="monthly", help="Budget period (default: monthly)")
@click.option("--start-date", default="this month", help="First day of the budget (default: first day of this month)")
@click.option("--end-date", help="Last day of the budget (default: end of the period)")
@click.option("--threshold", default=str(DEFAULT_ALERT_THRESHOLD), help="Alert threshold in percent (default: 80)")
@click.option("--no-alerts", is_flag=True, help="Disable alerts for this budget")
@click.pass_context
def create_budget(
    ctx,
    category: str,
    amount: str,
    period: str,
    start_date: str,
    end_date: str | None,
    threshold: str,
    no_alerts: bool,
):
    """Create a monthly or yearly budget for a category.

    A yearly budget always covers January 1 to December 31 and is split into
    twelve monthly budgets.

    Examples:
        fintrack budget create --category "Food & Dining" --amount 500
        fintrack budget create --category Housing --amount 24000 --period yearly --start-date 2024-01-01
    """
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]

    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None
    budget_amount = _parse_amount_or_exit(ctx, amount)

    try:
        category_obj = CategoryService(db).resolve_category(user_id, category)
        result = BudgetService(db).create_budget(
            user_id,
            category_id=category_obj.id,
            amount=budget_amount,
            period=period,
            start_date=start,
            end_date=end,
            alert_threshold=threshold,
            is_alert_enabled=not no_alerts,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    budget = result.budget
    click.echo(f"Created {budget.period.value} budget {budget.id} for '{category_obj.name}'")
    click.echo(f"  Amount: ${budget.amount:,.2f}")
    click.echo(f"  Range: {budget.start_date} to {budget.end_date}")
    if result.monthly_budget_ids:
        click.echo(f"  Created {len(result.monthly_budget_ids)} monthly budgets")
    if result.alert is not None:
        click.echo(f"  {result.alert.title}: {result.alert.message}")


@budget_group.command("list")
@click.option("--period", type=click.Choice(PERIODS, case_sensitive=False), help="Only show budgets of this period")
@click.pass_context
def list_budgets(ctx, period: str | None):
    """List budgets with their current spend."""
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]

    statuses = BudgetService(db).list_budgets(user_id, period=period)
    if not statuses:
        click.echo("No budgets found.")
        return

    names = CategoryService(db).category_names(user_id)
    click.echo(ROW_HEADER)
    click.echo("-" * len(ROW_HEADER))
    for status in statuses:
        budget = status.budget
        click.echo(
            f"{budget.id:>5}  {names.get(budget.category_id, 'Unknown'):<20}  {budget.period.value:<8}  "
            f"{budget.start_date!s} - {budget.end_date!s}  {f'${budget.amount:,.2f}':>12}  "
            f"{f'${status.spent:,.2f}':>12}  {status.percentage_used:>6.1f}%"
        )


@budget_group.command("progress")
@click.argument("budget_id", type=int)
@click.pass_context
def budget_progress(ctx, budget_id: int):
    """Show a budget's spend, remaining amount and alert state."""
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]

    try:
        status = BudgetService(db).get_progress(user_id, budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    names = CategoryService(db).category_names(user_id)
    _print_progress(status, names.get(status.budget.category_id, "Unknown"))


@budget_group.command("update")
@click.argument("budget_id", type=int)
@click.option("--category", help="Category name or ID")
@click.option("--amount", help="Budget amount")
@click.option("--period", type=click.Choice(PERIODS, case_sensitive=False), help="Budget period")
@click.option("--start-date", help="First day of the budget")
@click.option("--end-date", help="Last day of the budget")
@click.pass_context
def update_budget(
    ctx,
    budget_id: int,
    category: str | None,
    amount: str | None,
    period: str | None,
    start_date: str | None,
    end_date: str | None,
):
    """Update a budget.

    Updates only the fields that are provided. Monthly budgets created from
    a yearly budget are left unchanged.
    """
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]

    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None
    budget_amount = _parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        category_id = CategoryService(db).resolve_category(user_id, category).id if category else None
        status = BudgetService(db).update_budget(
            user_id,
            budget_id,
            category_id=category_id,
            amount=budget_amount,
            period=period,
            start_date=start,
            end_date=end,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated budget {budget_id}: ${status.budget.amount:,.2f} ({status.percentage_used:.1f}% used)")


@budget_group.command("alert-settings")
@click.argument("budget_id", type=int)
@click.option("--threshold", help="Alert threshold in percent (0-100)")
@click.option("--enable/--disable", "enabled", default=None, help="Turn alerts on or off")
@click.pass_context
def alert_settings(ctx, budget_id: int, threshold: str | None, enabled: bool | None):
    """Change when a budget raises alerts."""
    user_id = require_user_id(ctx)
    try:
        status = BudgetService(ctx.obj["db"]).update_alert_settings(
            user_id, budget_id, alert_threshold=threshold, is_alert_enabled=enabled
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    budget = status.budget
    state = "enabled" if budget.is_alert_enabled else "disabled"
    click.echo(f"Budget {budget_id}: alerts {state}, threshold {budget.alert_threshold}%")


@budget_group.command("delete")
@click.argument("budget_id", type=int)
@click.pass_context
def delete_budget(ctx, budget_id: int):
    """Delete a budget. Monthly budgets of a yearly budget are kept."""
    user_id = require_user_id(ctx)
    try:
        BudgetService(ctx.obj["db"]).delete_budget(user_id, budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted budget {budget_id}")


@budget_group.command("caps")
@click.pass_context
def category_caps(ctx):
    """Show every budget as a spending cap, grouped by category."""
    user_id = require_user_id(ctx)
    rows = BudgetService(ctx.obj["db"]).category_caps(user_id)
    if not rows:
        click.echo("No budgets found.")
        return

    click.echo(ROW_HEADER)
    click.echo("-" * len(ROW_HEADER))
    for row in rows:
        click.echo(_format_row(row))


@budget_group.command("yearly-summary")
@click.option("--year", type=int, default=lambda: date.today().year, help="Year to summarize (default: this year)")
@click.pass_context
def yearly_summary(ctx, year: int):
    """Show a year's yearly budgets and its monthly budgets month by month."""
    user_id = require_user_id(ctx)
    summary = BudgetService(ctx.obj["db"]).yearly_summary(user_id, year)

    click.echo(f"\nBudget summary for {year}")
    click.echo("=" * len(ROW_HEADER))
    if summary.yearly:
        click.echo("\nYearly budgets:")
        click.echo(ROW_HEADER)
        for row in summary.yearly:
            click.echo(_format_row(row))
    else:
        click.echo("\nNo yearly budgets.")

    for month, rows in summary.monthly.items():
        if not rows:
            continue
        click.echo(f"\n{date(year, month, 1):%B}:")
        for row in rows:
            click.echo(_format_row(row))


@budget_group.command("comparison")
@period_options
@click.pass_context
def budget_comparison(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Compare budgets overlapping a date range with actual spend.

    Defaults to the current month.
    """
    user_id = require_user_id(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_flags),
        default_range=compute_period_range("monthly", date.today()),
    )
    if start is None or end is None:
        click.echo("Error: Both --start-date and --end-date are required.", err=True)
        ctx.exit(1)

    try:
        rows = AnalyticsService(ctx.obj["db"]).budget_analysis(user_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo(f"No budgets between {start} and {end}.")
        return

    click.echo(f"\nBudgets between {start} and {end}:")
    click.echo(ROW_HEADER)
    click.echo("-" * len(ROW_HEADER))
    for row in rows:
        click.echo(_format_row(row))


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
