"""Settlement commands."""

import click
from paycycle.domain.debt import DebtService
from paycycle.domain.errors import DomainError
from paycycle.domain.settlement import SettlementService
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import (
    account_or_exit,
    category_or_exit,
    household_or_exit,
    member_or_exit,
)
from paycycle.utils.amount_parser import parse_amount


@click.command("settle")
@click.argument("payer", metavar="PAYER")
@click.option("--all", "settle_all", is_flag=True, help="Settle every unpaid split for the net amount")
@click.option("--split", "split_ids", type=int, multiple=True, help="Split ID to cover (repeatable)")
@click.option("--amount", help="Amount transferred (required with --split)")
@click.option("--category", help="Record the payment as spending in this category")
@click.option("--from-account", help="Payer account (default: primary)")
@click.option("--to-account", help="Receiver account (default: primary)")
@click.option("--note", help="Note stored with the settlement")
@click.pass_context
def settle(
    ctx,
    payer: str,
    settle_all: bool,
    split_ids: tuple[int, ...],
    amount: str | None,
    category: str | None,
    from_account: str | None,
    to_account: str | None,
    note: str | None,
):
    """Pay the other household member back.

    Examples:
        paycycle settle Cecilia --all
        paycycle settle Cecilia --split 3 --split 4 --amount 802.08 --note "January"
    """
    if settle_all == bool(split_ids):
        click.echo("Error: Use either --all or one or more --split", err=True)
        ctx.exit(1)
    if split_ids and amount is None:
        click.echo("Error: --amount is required with --split", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    payer_obj = member_or_exit(ctx, db, payer)
    try:
        receiver = DebtService(db).get_partner(payer_obj.household_id, payer_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if receiver is None:
        click.echo("Error: Settlement needs exactly one other active household member", err=True)
        ctx.exit(1)

    category_id = None
    if category:
        category_id = category_or_exit(ctx, db, payer_obj.household_id, category)
    payer_account_id = account_or_exit(ctx, db, payer_obj, from_account) if from_account else None
    receiver_account_id = account_or_exit(ctx, db, receiver, to_account) if to_account else None

    service = SettlementService(db)
    try:
        if settle_all:
            settlement = service.settle_all(
                payer_obj.id,
                receiver.id,
                category_id=category_id,
                payer_account_id=payer_account_id,
                receiver_account_id=receiver_account_id,
                note=note,
            )
        else:
            settlement = service.record_settlement(
                payer_obj.id,
                receiver.id,
                parse_amount(amount),
                category_id,
                list(split_ids),
                payer_account_id=payer_account_id,
                receiver_account_id=receiver_account_id,
                note=note,
            )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Recorded settlement {settlement.id}: {payer_obj.name} paid {receiver.name} "
        f"{settlement.amount:,.2f}"
    )


@click.command("settlements")
@click.argument("household", metavar="HOUSEHOLD")
@click.pass_context
def list_settlements(ctx, household: str):
    """List a household's settlements, newest first."""
    db = ctx.obj["db"]
    household_id = household_or_exit(ctx, db, household)

    settlements = SettlementService(db).list_settlements(household_id)
    if not settlements:
        click.echo("No settlements found.")
        return

    names = {m.id: m.name for m in db.list_members(household_id)}
    for s in settlements:
        click.echo(
            f"{s.id:4d} | {s.created_at:%Y-%m-%d} | {names.get(s.payer_member_id, '?'):10s} -> "
            f"{names.get(s.receiver_member_id, '?'):10s} | {s.amount:>10,.2f} | {s.note or ''}"
        )


def register_commands(cli):
    """Register settlement commands with main CLI."""
    cli.add_command(settle)
    cli.add_command(list_settlements)
