"""Spending analytics commands."""

from datetime import date

import click
from fintrack.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.analytics import AnalyticsService
from fintrack.domain.errors import DomainError
from fintrack.domain.periods import compute_period_range


def _resolve_range_or_exit(ctx, start_date, end_date, period_flags) -> tuple[date, date]:
    """Resolve a report range, defaulting to the current month."""
    today = date.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_flags),
        default_range=compute_period_range("monthly", today),
    )
    # An open end means up to today, an open start means from the start of that month
    if end is None:
        end = today
    if start is None:
        start = end.replace(day=1)
    return start, end


@click.group()
def analytics_group():
    """Spending reports."""
    pass


@analytics_group.command("summary")
@period_options
@click.pass_context
def expense_summary(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Total spend per category for a date range (default: this month)."""
    user_id = require_user_id(ctx)
    start, end = _resolve_range_or_exit(ctx, start_date, end_date, period_flags)

    try:
        summary = AnalyticsService(ctx.obj["db"]).expense_summary(user_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nExpenses from {summary.start_date} to {summary.end_date}")
    click.echo("=" * 71)
    for name, total in sorted(summary.by_category.items(), key=lambda item: (-item[1], item[0])):
        click.echo(f"{name:<50} {f'${total:,.2f}':>20}")
    click.echo("-" * 71)
    click.echo(f"{'Total':<50} {f'${summary.total:,.2f}':>20}")
    click.echo(f"{summary.transaction_count} expense(s)")


@analytics_group.command("trend")
@click.option("--months", type=int, default=12, show_default=True, help="Number of months to look back")
@click.pass_context
def monthly_trend(ctx, months: int):
    """Spend per month over the last months."""
    user_id = require_user_id(ctx)
    try:
        totals = AnalyticsService(ctx.obj["db"]).monthly_trend(user_id, months=months)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not totals:
        click.echo("No expenses found.")
        return

    for row in totals:
        click.echo(f"{row.month:%Y-%m}  {f'${row.total:,.2f}':>14}")


@analytics_group.command("patterns")
@period_options
@click.pass_context
def category_patterns(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Total, count and average expense per category (default: this month)."""
    user_id = require_user_id(ctx)
    start, end = _resolve_range_or_exit(ctx, start_date, end_date, period_flags)

    try:
        patterns = AnalyticsService(ctx.obj["db"]).category_patterns(user_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not patterns:
        click.echo("No expenses found.")
        return

    click.echo(f"{'Category':<25} {'Total':>14} {'Count':>6} {'Average':>12}")
    click.echo("-" * 60)
    for p in patterns:
        click.echo(f"{p.category_name:<25} {f'${p.total:,.2f}':>14} {p.count:>6} {f'${p.average:,.2f}':>12}")


@analytics_group.command("budget-analysis")
@period_options
@click.pass_context
def budget_analysis(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Budgeted against spent for budgets overlapping a date range (default: this month)."""
    user_id = require_user_id(ctx)
    start, end = _resolve_range_or_exit(ctx, start_date, end_date, period_flags)

    try:
        rows = AnalyticsService(ctx.obj["db"]).budget_analysis(user_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo(f"No budgets between {start} and {end}.")
        return

    click.echo(f"{'Category':<25} {'Budgeted':>12} {'Spent':>12} {'Remaining':>12} {'Used':>7}")
    click.echo("-" * 72)
    for row in rows:
        click.echo(
            f"{row.category_name:<25} {f'${row.budgeted:,.2f}':>12} {f'${row.spent:,.2f}':>12} "
            f"{f'${row.remaining:,.2f}':>12} {row.percentage_used:>6.1f}%"
        )


def register_commands(cli):
    """Register analytics commands with main CLI."""
    cli.add_command(analytics_group, name="analytics")
