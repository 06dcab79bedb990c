"""Budget period command."""

import click
from paycycle.domain.period import PeriodService, format_period, payday_display_text
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import member_or_exit
from paycycle.utils.date_parser import parse_date


@click.command("period")
@click.argument("member", metavar="MEMBER")
@click.option("--today", help="Reference date (default: today)")
@click.pass_context
def show_period(ctx, member: str, today: str | None):
    """Show a member's current budget period.

    Examples:
        paycycle period Alex
        paycycle period Alex --today 2026-02-08
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        reference = parse_date(today) if today else None
        period = PeriodService(db).get_member_period(member_obj.id, today=reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{member_obj.name} (payday: {payday_display_text(member_obj.payday_day)})")
    click.echo(f"  Period:         {format_period(period)}")
    click.echo(f"  Start:          {period.start}")
    click.echo(f"  End:            {period.end}")
    click.echo(f"  Days remaining: {period.days_remaining}")
    click.echo(f"  Resets on:      {period.resets_on}")


def register_commands(cli):
    """Register period command with main CLI."""
    cli.add_command(show_period)
