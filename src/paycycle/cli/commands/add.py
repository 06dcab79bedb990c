"""Add transaction command."""

import click
from paycycle.domain.transaction import TransactionService
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import account_or_exit, category_or_exit, member_or_exit
from paycycle.utils.date_parser import parse_date
from paycycle.utils.amount_parser import parse_amount


@click.command("add")
@click.option("--member", required=True, help="Member name or ID")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount", required=True, help="Transaction amount (e.g., -123.45 for an expense)"
)
@click.option("--category", help="Category name or ID")
@click.option("--description", help="Transaction description")
@click.option("--shared", is_flag=True, help="Split the expense with the household")
@click.pass_context
def add_transaction(
    ctx,
    member: str,
    account: str,
    date: str,
    amount: str,
    category: str | None,
    description: str | None,
    shared: bool,
):
    """Add a transaction.

    Examples:
        paycycle add --member Alex --account Checking --date today --amount -82.50 --category Groceries
        paycycle add --member Alex --account 1 --date 2026-01-26 --amount -1500 --category Rent --shared
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    account_id = account_or_exit(ctx, db, member_obj, account)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    category_id = None
    if category:
        category_id = category_or_exit(ctx, db, member_obj.household_id, category)

    try:
        transaction_id = TransactionService(db).create_transaction(
            member_id=member_obj.id,
            account_id=account_id,
            txn_date=txn_date,
            amount=txn_amount,
            category_id=category_id,
            description=description,
            is_shared=shared,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {txn_amount:,.2f}")
    if description:
        click.echo(f"  Description: {description}")
    if category:
        click.echo(f"  Category: {category}")
    if shared:
        click.echo("  Shared with household")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
