"""Initialize default categories."""

import click
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.category import DEFAULT_CATEGORIES, CategoryService


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the default categories that are missing for the current user."""
    user_id = require_user_id(ctx)
    service = CategoryService(ctx.obj["db"])

    created = service.create_default_categories(user_id)
    if not created:
        click.echo("All default categories already exist.")
        return

    skipped = len(DEFAULT_CATEGORIES) - len(created)
    click.echo(f"Successfully created {len(created)} categories.")
    if skipped:
        click.echo(f"Skipped {skipped} categories that already exist.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
