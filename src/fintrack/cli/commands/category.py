"""Category management commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.user_resolution import require_user_id
from fintrack.domain.category import CategoryService
from fintrack.domain.errors import DomainError

CATEGORY_TYPES = ["expense", "income"]


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False), help="Only show categories of this type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List your categories."""
    user_id = require_user_id(ctx)
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(user_id, category_type=category_type)
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        icon = f"{cat.icon} " if cat.icon else ""
        click.echo(f"{icon}{cat.name} (ID: {cat.id}, {cat.category_type.value})")


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False), default="expense", help="Category type (default: expense)")
@click.option("--description", help="Description")
@click.option("--icon", help="Icon, e.g. an emoji")
@click.pass_context
def create_category(ctx, name: str, category_type: str, description: str | None, icon: str | None):
    """Create a new category."""
    user_id = require_user_id(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(
            user_id, name=name, category_type=category_type, description=description, icon=icon
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False), help="New type")
@click.option("--description", help="New description")
@click.option("--icon", help="New icon")
@click.pass_context
def update_category(ctx, category: str, name: str | None, category_type: str | None, description: str | None, icon: str | None):
    """Update a category given by name or ID."""
    user_id = require_user_id(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_obj = service.resolve_category(user_id, category)
        service.update_category(
            user_id, category_obj.id, name=name, category_type=category_type, description=description, icon=icon
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category {category_obj.id}")


@category_group.command("delete")
@click.argument("category")
@click.confirmation_option(prompt="Deleting a category also deletes its expenses and budgets. Continue?")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category given by name or ID, with its expenses and budgets."""
    user_id = require_user_id(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_obj = service.resolve_category(user_id, category)
        service.delete_category(user_id, category_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{category_obj.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
