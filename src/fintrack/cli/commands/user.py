"""User management commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.errors import DomainError
from fintrack.domain.user import USER_ROLES, UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email")
@click.option("--first-name", default="", help="First name")
@click.option("--last-name", default="", help="Last name")
@click.option("--role", type=click.Choice(USER_ROLES, case_sensitive=False), default="user", help="Role (default: user)")
@click.option("--no-default-categories", is_flag=True, help="Do not create the default categories")
@click.pass_context
def create_user(ctx, email: str, first_name: str, last_name: str, role: str, no_default_categories: bool):
    """Register a new user.

    New users get the default expense and income categories unless
    --no-default-categories is passed.

    Examples:
        fintrack user create jane@example.com --first-name Jane --last-name Doe
    """
    service = UserService(ctx.obj["db"])

    try:
        user_id = service.register_user(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role.lower(),
            with_default_categories=not no_default_categories,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created user '{email.strip().lower()}' (ID: {user_id})")


@user_group.command("update")
@click.option("--first-name", help="New first name")
@click.option("--last-name", help="New last name")
@click.option("--email", help="New email address")
@click.pass_context
def update_user(ctx, first_name: str | None, last_name: str | None, email: str | None):
    """Update the selected user's profile.

    Examples:
        fintrack --user jane@example.com user update --last-name Smith
        fintrack --user jane@example.com user update --email jane.smith@example.com
    """
    if first_name is None and last_name is None and email is None:
        click.echo("Error: Nothing to update. Pass --first-name, --last-name or --email.", err=True)
        ctx.exit(1)

    user_id = require_user_id(ctx)
    try:
        user = UserService(ctx.obj["db"]).update_profile(
            user_id, first_name=first_name, last_name=last_name, email=email
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated user {user.id}: {user.email} ({user.full_name})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    users = UserService(ctx.obj["db"]).list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for u in users:
        click.echo(f"ID: {u.id:3d} | {u.email:30s} | {u.full_name}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
