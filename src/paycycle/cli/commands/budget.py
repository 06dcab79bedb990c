"""Budget commands."""

import click
from paycycle.domain.budget import BudgetService
from paycycle.domain.period import format_period
from paycycle.domain.spend import STATUS_OVER_BUDGET, STATUS_WARNING
from paycycle.cli.error_handling import handle_domain_error
from paycycle.cli.resolution import category_or_exit, member_or_exit
from paycycle.utils.amount_parser import parse_amount
from paycycle.utils.date_parser import parse_date

STATUS_MARKERS = {STATUS_OVER_BUDGET: "!!", STATUS_WARNING: "! "}


@click.group()
def budget_group():
    """Manage budget allocations and view spending."""
    pass


@budget_group.command("set")
@click.argument("member", metavar="MEMBER")
@click.argument("category", metavar="CATEGORY")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def set_allocation(ctx, member: str, category: str, amount: str):
    """Set a member's allocation for a category.

    Examples:
        paycycle budget set Alex Groceries 4000
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    category_id = category_or_exit(ctx, db, member_obj.household_id, category)
    try:
        allocated = parse_amount(amount)
        BudgetService(db).set_allocation(member_obj.id, category_id, allocated)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Allocated {allocated:,.2f} to '{category}' for {member_obj.name}")


@budget_group.command("show")
@click.argument("member", metavar="MEMBER")
@click.option("--today", help="Reference date (default: today)")
@click.option("--groups", is_flag=True, help="Show totals per category group")
@click.pass_context
def show_budget(ctx, member: str, today: str | None, groups: bool):
    """Show spending against allocations for the current period.

    Examples:
        paycycle budget show Alex
        paycycle budget show Alex --groups
    """
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    try:
        reference = parse_date(today) if today else None
        period, totals = BudgetService(db).get_budget_report(member_obj.id, today=reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBudget for {member_obj.name}: {format_period(period)} ({period.days_remaining} days left)")
    click.echo("-" * 70)
    if not totals.per_category:
        click.echo("No allocations set.")
        return

    if groups:
        for group in totals.per_group:
            click.echo(
                f"   {group.group_name:25s} {group.spent_amount:>12,.2f} / {group.allocated_amount:>12,.2f}"
            )
    else:
        names = {c.id: c.name for c in db.list_categories(member_obj.household_id)}
        for entry in totals.per_category:
            marker = STATUS_MARKERS.get(entry.status, "  ")
            name = names.get(entry.category_id, str(entry.category_id))
            click.echo(
                f"{marker} {name:25s} {entry.spent_amount:>12,.2f} / {entry.allocated_amount:>12,.2f}"
            )

    click.echo("-" * 70)
    click.echo(
        f"   {'Total':25s} {totals.total_spent:>12,.2f} / {totals.total_allocated:>12,.2f}"
        f"  (remaining {totals.remaining:,.2f})"
    )


@budget_group.command("pace")
@click.argument("member", metavar="MEMBER")
@click.argument("category", metavar="CATEGORY")
@click.option("--today", help="Reference date (default: today)")
@click.pass_context
def show_pace(ctx, member: str, category: str, today: str | None):
    """Show whether a category is being spent faster than the period passes."""
    db = ctx.obj["db"]
    member_obj = member_or_exit(ctx, db, member)
    category_id = category_or_exit(ctx, db, member_obj.household_id, category)
    try:
        reference = parse_date(today) if today else None
        pace = BudgetService(db).get_category_pace(member_obj.id, category_id, today=reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Status: {pace.status}")
    click.echo(f"  Time elapsed:  {pace.time_progress:.0f}% ({pace.days_elapsed}/{pace.total_days} days)")
    click.echo(f"  Budget used:   {pace.budget_progress:.0f}%")
    if pace.projected_total is not None:
        click.echo(f"  Projected:     {pace.projected_total:,.2f}")
    click.echo(f"  {pace.recommendation}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
