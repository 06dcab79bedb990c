"""Category commands."""

import click
from paycycle.domain.category import CategoryService, DEFAULT_GROUP
from paycycle.domain.errors import DomainError
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import household_or_exit


@click.group()
def category_group():
    """Manage budget categories."""
    pass


@category_group.command("add")
@click.argument("household", metavar="HOUSEHOLD")
@click.argument("name", metavar="NAME")
@click.option("--group", "group_name", default=DEFAULT_GROUP, show_default=True, help="Category group")
@click.pass_context
def add_category(ctx, household: str, name: str, group_name: str):
    """Add a category to a household.

    Examples:
        paycycle category add Home Groceries --group Food
        paycycle category add 1 Rent --group Housing
    """
    db = ctx.obj["db"]
    household_id = household_or_exit(ctx, db, household)
    try:
        category_id = CategoryService(db).create_category(household_id, name, group_name=group_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id}) in group '{group_name}'")


@category_group.command("list")
@click.argument("household", metavar="HOUSEHOLD")
@click.pass_context
def list_categories(ctx, household: str):
    """List a household's categories by group."""
    db = ctx.obj["db"]
    household_id = household_or_exit(ctx, db, household)

    categories = CategoryService(db).list_categories(household_id)
    if not categories:
        click.echo("No categories found.")
        return

    current_group = None
    for cat in categories:
        if cat.group_name != current_group:
            current_group = cat.group_name
            click.echo(f"\n{current_group}")
        click.echo(f"  {cat.id:3d}  {cat.name}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
