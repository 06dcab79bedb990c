"""Household commands."""

import click
from paycycle.domain.errors import DomainError
from paycycle.domain.household import HouseholdService
from paycycle.cli.error_handling import handle_domain_error


@click.group()
def household_group():
    """Manage households."""
    pass


@household_group.command("create")
@click.argument("name", metavar="NAME")
@click.pass_context
def create_household(ctx, name: str):
    """Create a new household.

    Examples:
        paycycle household create "Home"
    """
    service = HouseholdService(ctx.obj["db"])
    try:
        household_id = service.create_household(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created household '{name.strip()}' (ID: {household_id})")


@household_group.command("list")
@click.pass_context
def list_households(ctx):
    """List all households."""
    service = HouseholdService(ctx.obj["db"])

    households = service.list_households()
    if not households:
        click.echo("No households found.")
        return

    click.echo("\nHouseholds:")
    click.echo("-" * 60)
    for h in households:
        members = ", ".join(m.name for m in service.list_members(h.id)) or "-"
        click.echo(f"ID: {h.id:3d} | {h.name:20s} | Members: {members}")


def register_commands(cli):
    """Register household commands with main CLI."""
    cli.add_command(household_group, name="household")
