"""CLI helpers for name resolution and error handling."""

from __future__ import annotations

import click

from paycycle.database.base import Database
from paycycle.domain.entities import Member
from paycycle.domain.errors import DomainError
from paycycle.cli.error_handling import handle_domain_error
from paycycle.utils.resolvers import (
    resolve_account,
    resolve_category,
    resolve_household,
    resolve_member,
)


def household_or_exit(ctx: click.Context, db: Database, household: str) -> int:
    """Resolve household name or ID, or exit with a CLI error."""
    try:
        return resolve_household(db, household)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def member_or_exit(ctx: click.Context, db: Database, member: str) -> Member:
    """Resolve member name or ID to the member, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return db.get_member(resolve_member(db, member))
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def account_or_exit(ctx: click.Context, db: Database, member: Member, account: str) -> int:
    """Resolve one of a member's accounts, or exit with a CLI error."""
    try:
        return resolve_account(db, member.id, account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def category_or_exit(ctx: click.Context, db: Database, household_id: int, category: str) -> int:
    """Resolve one of a household's categories, or exit with a CLI error."""
    try:
        return resolve_category(db, household_id, category)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
