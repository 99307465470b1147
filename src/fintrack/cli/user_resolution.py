"""CLI helpers for resolving the acting user."""

from __future__ import annotations

import click
from fintrack.domain.errors import NotFoundError
from fintrack.domain.user import UserService


def require_user_id(ctx: click.Context) -> int:
    """Resolve the --user option to a user ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    user = ctx.obj.get("user")
    if not user:
        click.echo(
            "Error: No user selected. Pass --user EMAIL_OR_ID or set FINTRACK_USER.",
            err=True,
        )
        ctx.exit(1)

    try:
        return UserService(ctx.obj["db"]).resolve_user(user).id
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
