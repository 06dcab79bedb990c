"""Transaction management commands."""

import click
from paycycle.domain.errors import DomainError
from paycycle.domain.transaction import TransactionService
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import category_or_exit, member_or_exit
from paycycle.utils.date_parser import parse_date
from paycycle.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.argument("member", metavar="MEMBER")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.pass_context
def list_transactions(ctx, member: str, start_date: str | None, end_date: str | None):
    """List a member's transactions, newest first."""
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    transactions = TransactionService(db).list_transactions(
        member_id=member_obj.id, start_date=start, end_date=end
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    categories = {c.id: c.name for c in db.list_categories(member_obj.household_id)}
    for txn in transactions:
        category = categories.get(txn.category_id, "-") if txn.category_id is not None else "-"
        marker = "S" if txn.is_shared else " "
        click.echo(
            f"{txn.id:5d} {txn.date} {marker} {txn.amount:>10,.2f}  {category:15s} {txn.description or ''}"
        )


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount (e.g., -123.45)")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Use --category "" to clear the category.

    Examples:
        paycycle transaction update 1 --amount -75.00
        paycycle transaction update 1 --category ""  # Clear category
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    try:
        txn_date = parse_date(date) if date is not None else None
        txn_amount = parse_amount(amount) if amount is not None else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    category_id = None
    clear_category = category == ""
    if category:
        category_id = category_or_exit(ctx, db, txn.household_id, category)

    try:
        service.update_transaction(
            transaction_id,
            txn_date=txn_date,
            amount=txn_amount,
            category_id=category_id,
            description=description,
            clear_category=clear_category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction and its shared-expense splits."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
