"""Member management commands."""

from decimal import Decimal, InvalidOperation

import click
from paycycle.domain.errors import DomainError
from paycycle.domain.household import HouseholdService
from paycycle.domain.period import format_period, payday_display_text
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import household_or_exit, member_or_exit
from paycycle.utils.date_parser import parse_date, parse_payday


@click.group()
def member_group():
    """Manage household members."""
    pass


@member_group.command("add")
@click.argument("household", metavar="HOUSEHOLD")
@click.argument("name", metavar="NAME")
@click.option("--email", help="Email address")
@click.option("--payday", default="1", show_default=True, help="Day of month 1-31, or 'last'")
@click.pass_context
def add_member(ctx, household: str, name: str, email: str | None, payday: str):
    """Add a member to a household.

    HOUSEHOLD can be a household name or ID.

    Examples:
        paycycle member add Home Alex --payday 25
        paycycle member add 1 Cecilia --payday last
    """
    db = ctx.obj["db"]
    household_id = household_or_exit(ctx, db, household)
    try:
        payday_day = parse_payday(payday)
        member_id = HouseholdService(db).add_member(
            household_id, name, email=email, payday_day=payday_day
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added member '{name}' (ID: {member_id}), payday: {payday_display_text(payday_day)}")


@member_group.command("list")
@click.argument("household", metavar="HOUSEHOLD")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive members")
@click.pass_context
def list_members(ctx, household: str, include_inactive: bool):
    """List a household's members."""
    db = ctx.obj["db"]
    household_id = household_or_exit(ctx, db, household)

    members = HouseholdService(db).list_members(household_id, include_inactive=include_inactive)
    if not members:
        click.echo("No members found.")
        return

    click.echo("\nMembers:")
    click.echo("-" * 60)
    for m in members:
        split = f"{m.split_percentage}%" if m.split_percentage is not None else "equal"
        click.echo(
            f"ID: {m.id:3d} | {m.name:15s} | Payday: {payday_display_text(m.payday_day):17s} "
            f"| Split: {split} | {m.status}"
        )


@member_group.command("payday")
@click.argument("member", metavar="MEMBER")
@click.argument("payday", metavar="DAY")
@click.option("--today", help="Reference date for the new period (default: today)")
@click.pass_context
def set_payday(ctx, member: str, payday: str, today: str | None):
    """Change a member's payday.

    DAY is a day of month 1-31, or 'last' for the last day of the month.

    Examples:
        paycycle member payday Alex 25
        paycycle member payday Cecilia last
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        payday_day = parse_payday(payday)
        reference = parse_date(today) if today else None
        period = HouseholdService(db).set_payday(member_obj.id, payday_day, today=reference)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Payday for {member_obj.name} set to {payday_display_text(payday_day)}")
    click.echo(f"Current period: {format_period(period)}")


@member_group.command("deactivate")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def deactivate_member(ctx, member: str):
    """Mark a member inactive. Their history is kept."""
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        HouseholdService(db).deactivate_member(member_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated member '{member_obj.name}'")


@member_group.command("split")
@click.argument("household", metavar="HOUSEHOLD")
@click.argument("shares", metavar="MEMBER=PERCENT...", nargs=-1, required=True)
@click.pass_context
def set_split(ctx, household: str, shares: tuple[str, ...]):
    """Set manual shared-expense percentages.

    Every active member needs a share and the shares must sum to 100.

    Examples:
        paycycle member split Home Alex=60 Cecilia=40
    """
    db = ctx.obj["db"]
    household_id = household_or_exit(ctx, db, household)

    percentages = {}
    for share in shares:
        name, sep, pct = share.partition("=")
        if not sep:
            handle_domain_error(ctx, ValueError(f"Expected MEMBER=PERCENT, got '{share}'"))
        member_obj = member_or_exit(ctx, db, name)
        try:
            percentages[member_obj.id] = Decimal(pct)
        except InvalidOperation:
            handle_domain_error(ctx, ValueError(f"Invalid percentage '{pct}'"))

    try:
        HouseholdService(db).set_split_percentages(household_id, percentages)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo("Updated split percentages")


def register_commands(cli):
    """Register member commands with main CLI."""
    cli.add_command(member_group, name="member")
