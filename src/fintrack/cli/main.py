"""Main CLI entry point."""

import logging

import click
from fintrack.database.factories import create_database, create_sqlite_database

# Import and register all commands at module level
from fintrack.cli.commands import (
    alerts,
    analytics,
    budget,
    category,
    dashboard,
    expense,
    init_categories,
    notification,
    recurring,
    user,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--db-url",
    help="SQLAlchemy database URL, takes precedence over --db-path (FINTRACK_DATABASE_URL)",
    envvar="FINTRACK_DATABASE_URL",
)
@click.option(
    "--user",
    "user",
    help="Acting user email or ID (FINTRACK_USER)",
    envvar="FINTRACK_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, db_url: str | None, user: str | None, verbose: bool):
    """Fintrack - Personal finance tracking application.

    Record expenses, plan monthly and yearly budgets per category, and get
    alerted when spending approaches or exceeds a budget.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)
    ctx.obj["user"] = user

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(db_url) if db_url else create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
expense.register_commands(cli)
budget.register_commands(cli)
alerts.register_commands(cli)
notification.register_commands(cli)
recurring.register_commands(cli)
analytics.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
