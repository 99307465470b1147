"""Budget alert commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.alerts import AlertService
from fintrack.domain.errors import DomainError


@click.group()
def alerts_group():
    """Check budgets against their alert thresholds."""
    pass


@alerts_group.command("check")
@click.option("--budget", "budget_id", type=int, help="Only check this budget")
@click.pass_context
def check_alerts(ctx, budget_id: int | None):
    """Evaluate alert-enabled budgets and record notifications for crossed thresholds."""
    user_id = require_user_id(ctx)
    service = AlertService(ctx.obj["db"])

    try:
        if budget_id is not None:
            alert = service.evaluate(user_id, budget_id)
            alerts = [alert] if alert is not None else []
        else:
            alerts = service.check_alerts(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not alerts:
        click.echo("All budgets are within their alert thresholds.")
        return

    click.echo(f"\n{len(alerts)} budget alert(s):")
    for alert in alerts:
        click.echo(f"\n[{alert.title}] Budget {alert.budget_id}")
        click.echo(f"  {alert.message}")


def register_commands(cli):
    """Register alert commands with main CLI."""
    cli.add_command(alerts_group, name="alerts")
