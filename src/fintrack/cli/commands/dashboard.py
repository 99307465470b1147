"""Dashboard command."""

import click
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.analytics import AnalyticsService
from fintrack.domain.category import CategoryService


@click.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show totals, this month's budget and recent expenses."""
    user_id = require_user_id(ctx)
    db = ctx.obj["db"]

    board = AnalyticsService(db).dashboard(user_id)
    names = CategoryService(db).category_names(user_id)

    click.echo("\nDashboard")
    click.echo("=" * 60)
    click.echo(f"Total expenses:    ${board.total_expenses:,.2f}")
    click.echo(f"This month:        ${board.monthly_expenses:,.2f}")
    click.echo(f"Monthly budget:    ${board.monthly_budget:,.2f}")

    click.echo("\nRecent expenses:")
    if not board.recent_expenses:
        click.echo("  None in the last 30 days.")
        return
    for exp in board.recent_expenses:
        click.echo(
            f"  {exp.date}  {f'${exp.amount:,.2f}':>12}  {names.get(exp.category_id, 'Unknown'):<20}  {exp.description}"
        )


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
