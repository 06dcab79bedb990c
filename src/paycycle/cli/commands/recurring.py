"""Recurring transaction template commands."""

import click
from paycycle.domain.errors import DomainError
from paycycle.domain.recurring import RecurringService, should_create_this_month
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import account_or_exit, category_or_exit, member_or_exit
from paycycle.utils.amount_parser import parse_amount
from paycycle.utils.date_parser import parse_date


@click.group()
def recurring_group():
    """Manage recurring transactions."""
    pass


@recurring_group.command("add")
@click.argument("member", metavar="MEMBER")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--amount", required=True, help="Amount of each posting (e.g., -1500 for an expense)")
@click.option("--day", type=click.IntRange(1, 31), required=True, help="Day of month 1-31")
@click.option("--category", help="Category name or ID")
@click.option("--description", help="Description copied to each posting")
@click.pass_context
def add_template(
    ctx,
    member: str,
    account: str,
    amount: str,
    day: int,
    category: str | None,
    description: str | None,
):
    """Create a monthly recurring transaction.

    Examples:
        paycycle recurring add Alex --account Checking --amount -1500 --day 1 --category Rent
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    account_id = account_or_exit(ctx, db, member_obj, account)
    category_id = None
    if category:
        category_id = category_or_exit(ctx, db, member_obj.household_id, category)

    try:
        template_id = RecurringService(db).create_template(
            member_obj.id,
            account_id,
            parse_amount(amount),
            day,
            category_id=category_id,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created recurring template {template_id} (day {day})")


@recurring_group.command("list")
@click.argument("member", metavar="MEMBER")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive templates")
@click.option("--today", help="Reference date for the due marker (default: today)")
@click.pass_context
def list_templates(ctx, member: str, include_inactive: bool, today: str | None):
    """List a member's recurring templates. Due ones are marked with '*'."""
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        reference = parse_date(today) if today else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    templates = RecurringService(db).list_templates(member_obj.id, include_inactive=include_inactive)
    if not templates:
        click.echo("No recurring templates found.")
        return

    for t in templates:
        marker = "*" if should_create_this_month(t, reference) else " "
        state = "" if t.is_active else "inactive"
        last = t.last_created_date or "-"
        click.echo(
            f"{marker} {t.id:4d} | day {t.recurring_day:2d} | {t.amount:>10,.2f} | "
            f"last {last} | {t.description or ''} {state}".rstrip()
        )


@recurring_group.command("deactivate")
@click.argument("template_id", type=int)
@click.pass_context
def deactivate_template(ctx, template_id: int):
    """Stop a template from posting."""
    try:
        RecurringService(ctx.obj["db"]).deactivate_template(template_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated recurring template {template_id}")


@recurring_group.command("post")
@click.argument("template_id", type=int)
@click.option("--date", "txn_date", help="Posting date (default: the template's day this month)")
@click.pass_context
def post_template(ctx, template_id: int, txn_date: str | None):
    """Post one template as a transaction now."""
    try:
        posting_date = parse_date(txn_date) if txn_date else None
        transaction_id = RecurringService(ctx.obj["db"]).create_transaction_from_template(
            template_id, txn_date=posting_date
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {transaction_id} from template {template_id}")


@recurring_group.command("run")
@click.argument("member", metavar="MEMBER")
@click.option("--today", help="Reference date (default: today)")
@click.pass_context
def run_templates(ctx, member: str, today: str | None):
    """Post every template of a member that is due this month."""
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        reference = parse_date(today) if today else None
        created = RecurringService(db).create_due_transactions(member_obj.id, today=reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not created:
        click.echo("No recurring transactions due.")
        return
    click.echo(f"Created {len(created)} recurring transaction(s): {', '.join(map(str, created))}")


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
