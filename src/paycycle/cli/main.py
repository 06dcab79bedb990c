"""Main CLI entry point."""

import logging

import click
from paycycle.database.factories import create_sqlite_database

# Import and register all commands at module level
from paycycle.cli.commands import (
    household,
    member,
    account,
    category,
    add,
    transaction,
    period,
    budget,
    debt,
    settle,
    transfer,
    recurring,
    balance,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PAYCYCLE_DB_PATH environment variable)",
    envvar="PAYCYCLE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level (overrides PAYCYCLE_LOG_LEVEL environment variable)",
    envvar="PAYCYCLE_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Paycycle - household budgets that follow your payday.

    Each member's budget period runs from one payday to the next. Shared
    expenses are split between members and settled against each other.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
household.register_commands(cli)
member.register_commands(cli)
account.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
period.register_commands(cli)
budget.register_commands(cli)
debt.register_commands(cli)
settle.register_commands(cli)
transfer.register_commands(cli)
recurring.register_commands(cli)
balance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
