"""CLI error rendering for paycycle commands."""

import click

from paycycle.domain.errors import NotFoundError, OperationFailedError


def format_error(error: ValueError) -> str:
    """Build the one-line message shown for a failed command."""
    message = f"Error: {error}"
    if isinstance(error, OperationFailedError):
        message += " (nothing was saved)"
    elif isinstance(error, NotFoundError):
        message += " (use the matching 'list' command to see valid names and IDs)"
    return message


def handle_domain_error(ctx: click.Context, error: ValueError) -> None:
    """Print the error on stderr and exit with status 1."""
    click.echo(format_error(error), err=True)
    ctx.exit(1)
