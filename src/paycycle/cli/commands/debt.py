"""Household debt command."""

import click
from paycycle.domain.debt import DebtService
from paycycle.domain.errors import DomainError
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import member_or_exit


@click.command("debt")
@click.argument("member", metavar="MEMBER")
@click.option("--details", is_flag=True, help="List each unsettled shared expense")
@click.pass_context
def show_debt(ctx, member: str, details: bool):
    """Show what a member owes or is owed in their household.

    Examples:
        paycycle debt Alex
        paycycle debt Cecilia --details
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    service = DebtService(db)
    try:
        household_debt = service.calculate_household_debt(member_obj.household_id, member_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if household_debt is None:
        click.echo("Debt tracking needs exactly one other active household member.")
        return

    summary = household_debt.summary
    partner = household_debt.partner.name
    if not summary.has_unsettled_expenses:
        click.echo(f"{member_obj.name} and {partner} are settled up.")
        return

    click.echo(f"You owe {partner}:      {summary.total_you_owe:>12,.2f}")
    click.echo(f"{partner} owes you:     {summary.total_you_are_owed:>12,.2f}")
    if summary.net_debt > 0:
        click.echo(f"Net: you owe {partner} {summary.net_debt:,.2f}")
    elif summary.net_debt < 0:
        click.echo(f"Net: {partner} owes you {-summary.net_debt:,.2f}")
    else:
        click.echo("Net: even")

    if details:
        click.echo("\nUnsettled expenses:")
        for expense in service.get_unsettled_expenses(member_obj.household_id, member_obj.id):
            click.echo(
                f"  split {expense.split_id:4d} | {expense.date} | {expense.total_amount:>10,.2f} "
                f"| your share {expense.your_share:>10,.2f} | {expense.description or ''}"
            )


def register_commands(cli):
    """Register debt command with main CLI."""
    cli.add_command(show_debt)
