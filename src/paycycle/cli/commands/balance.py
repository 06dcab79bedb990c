"""Household balance command."""

import click
from paycycle.domain.balance import BalanceService
from paycycle.domain.errors import DomainError
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import household_or_exit


@click.command("balance")
@click.argument("household", metavar="HOUSEHOLD")
@click.pass_context
def show_balance(ctx, household: str):
    """Show household assets, liabilities and net worth.

    Examples:
        paycycle balance Home
    """
    db = ctx.obj["db"]
    household_id = household_or_exit(ctx, db, household)
    try:
        breakdown = BalanceService(db).calculate_true_balance(household_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nAssets:")
    for acc in breakdown.assets:
        click.echo(f"  {acc.name:20s} {acc.account_type:11s} {acc.balance:>12,.2f}")
    click.echo(f"  {'Total':32s} {breakdown.total_assets:>12,.2f}")

    click.echo("\nLiabilities:")
    for acc in breakdown.liabilities:
        click.echo(f"  {acc.name:20s} {acc.account_type:11s} {abs(acc.balance):>12,.2f}")
    click.echo(f"  {'Total':32s} {breakdown.total_liabilities:>12,.2f}")

    click.echo(f"\nNet worth: {breakdown.net_worth:,.2f}")


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(show_balance)
