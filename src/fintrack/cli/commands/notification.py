"""Notification commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.entities import NotificationType
from fintrack.domain.errors import DomainError
from fintrack.domain.notification import DEFAULT_LIMIT, NotificationService


@click.group()
def notification_group():
    """Read notifications."""
    pass


@notification_group.command("list")
@click.option(
    "--type",
    "types",
    multiple=True,
    type=click.Choice([t.value for t in NotificationType], case_sensitive=False),
    help="Only show notifications of this type (repeatable)",
)
@click.option("--unread", is_flag=True, help="Only show unread notifications")
@click.option("--limit", type=int, default=DEFAULT_LIMIT, show_default=True, help="Maximum number shown")
@click.pass_context
def list_notifications(ctx, types: tuple[str, ...], unread: bool, limit: int):
    """List notifications, newest first."""
    user_id = require_user_id(ctx)
    notifications = NotificationService(ctx.obj["db"]).list_notifications(
        user_id, types=list(types) or None, unread_only=unread, limit=limit
    )
    if not notifications:
        click.echo("No notifications found.")
        return

    for n in notifications:
        marker = " " if n.is_read else "*"
        click.echo(f"{marker} {n.id:>4}  {n.created_at:%Y-%m-%d %H:%M}  {n.title}")
        click.echo(f"        {n.message}")


@notification_group.command("read")
@click.argument("notification_id", type=int)
@click.pass_context
def mark_read(ctx, notification_id: int):
    """Mark a notification as read."""
    user_id = require_user_id(ctx)
    try:
        NotificationService(ctx.obj["db"]).mark_read(user_id, notification_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Marked notification {notification_id} as read")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notification_group, name="notification")
