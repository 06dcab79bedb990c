"""Account transfer commands."""

import click
from paycycle.domain.transfer import TransferService
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import account_or_exit, member_or_exit
from paycycle.utils.amount_parser import parse_amount


@click.command("transfer")
@click.argument("member", metavar="MEMBER")
@click.argument("from_account", metavar="FROM_ACCOUNT")
@click.argument("to_account", metavar="TO_ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--note", help="Note stored with the transfer")
@click.pass_context
def transfer(ctx, member: str, from_account: str, to_account: str, amount: str, note: str | None):
    """Move money between two of a member's accounts.

    Transfers are not transactions and never count as spending.

    Examples:
        paycycle transfer Alex Checking Savings 500
        paycycle transfer Alex 1 2 250 --note "Holiday fund"
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    from_account_id = account_or_exit(ctx, db, member_obj, from_account)
    to_account_id = account_or_exit(ctx, db, member_obj, to_account)
    try:
        record = TransferService(db).create_transfer(
            member_obj.id, from_account_id, to_account_id, parse_amount(amount), note=note
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transferred {record.amount:,.2f} from '{from_account}' to '{to_account}'")
    for account_id in (record.from_account_id, record.to_account_id):
        account = db.get_account(account_id)
        click.echo(f"  {account.name}: {account.balance:,.2f}")


@click.command("transfers")
@click.argument("member", metavar="MEMBER")
@click.option("--account", help="Only transfers from or to this account")
@click.pass_context
def list_transfers(ctx, member: str, account: str | None):
    """List a member's transfers, newest first."""
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    account_id = account_or_exit(ctx, db, member_obj, account) if account else None

    transfers = TransferService(db).list_transfers(member_obj.id, account_id=account_id)
    if not transfers:
        click.echo("No transfers found.")
        return

    names = {acc.id: acc.name for acc in db.list_accounts(owner_member_id=member_obj.id)}
    for t in transfers:
        click.echo(
            f"{t.id:4d} | {t.created_at:%Y-%m-%d} | {names.get(t.from_account_id, '?'):15s} -> "
            f"{names.get(t.to_account_id, '?'):15s} | {t.amount:>10,.2f} | {t.note or ''}"
        )


def register_commands(cli):
    """Register transfer commands with main CLI."""
    cli.add_command(transfer)
    cli.add_command(list_transfers)
