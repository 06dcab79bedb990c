"""Account management commands."""

import click
from paycycle.domain.account import AccountService
from paycycle.domain.entities import ACCOUNT_CHECKING, ACCOUNT_TYPES
from paycycle.domain.errors import DomainError
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import account_or_exit, member_or_exit
from paycycle.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("member", metavar="MEMBER")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--balance", default="0", help="Opening balance")
@click.option(
    "--exclude-from-budget", is_flag=True, help="Keep this account's spending out of budgets"
)
@click.option("--primary", is_flag=True, help="Use for settlements by default")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default=ACCOUNT_CHECKING,
    show_default=True,
    help="Account type; credit cards count as liabilities",
)
@click.pass_context
def create_account(
    ctx,
    member: str,
    name: str,
    balance: str,
    exclude_from_budget: bool,
    primary: bool,
    account_type: str,
):
    """Create a new account for a member.

    A member's first account is their primary account.

    Examples:
        paycycle account create Alex "Checking" --balance 5000
        paycycle account create Alex "Savings" --exclude-from-budget
        paycycle account create Alex "Visa" --type "credit card"
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        opening = parse_amount(balance)
        account_id = AccountService(db).create_account(
            member_obj.id,
            name,
            balance=opening,
            is_excluded_from_budget=exclude_from_budget,
            is_primary=primary,
            account_type=account_type,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id}) for {member_obj.name}")


@account_group.command("list")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def list_accounts(ctx, member: str):
    """List a member's accounts."""
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)

    accounts = AccountService(db).list_accounts(owner_member_id=member_obj.id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        flags = []
        if acc.is_primary:
            flags.append("primary")
        if acc.is_excluded_from_budget:
            flags.append("excluded")
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type:11s} | Balance: {acc.balance:>12,.2f} "
            f"| {', '.join(flags)}"
        )


def _set_exclusion(ctx, member: str, account: str, excluded: bool) -> None:
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    account_id = account_or_exit(ctx, db, member_obj, account)
    try:
        AccountService(db).set_budget_exclusion(account_id, excluded)
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("exclude")
@click.argument("member", metavar="MEMBER")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def exclude_account(ctx, member: str, account: str):
    """Exclude an account's spending from budgets."""
    _set_exclusion(ctx, member, account, True)
    click.echo(f"Account '{account}' excluded from budgets")


@account_group.command("include")
@click.argument("member", metavar="MEMBER")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def include_account(ctx, member: str, account: str):
    """Count an account's spending in budgets again."""
    _set_exclusion(ctx, member, account, False)
    click.echo(f"Account '{account}' included in budgets")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
