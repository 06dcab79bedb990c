"""Utilities for resolving household, member, account and category names to IDs."""

from paycycle.database.base import Database
from paycycle.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    household_not_found,
    member_not_found,
)


def _as_id(value: str | int) -> int | None:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def resolve_member(db: Database, member: str | int) -> int:
    """Resolve member name or ID to member ID.

    Names are matched across all households and must be unambiguous.

    Args:
        db: Database instance
        member: Member name (str) or ID (int or string representation of int)

    Returns:
        Member ID

    Raises:
        NotFoundError: If member is not found
        ValidationError: If the name matches members of several households
    """
    member_id = _as_id(member)
    if member_id is not None:
        if db.get_member(member_id) is None:
            raise NotFoundError(member_not_found(member_id))
        return member_id

    matches = [
        m.id
        for household in db.list_households()
        for m in db.list_members(household.id)
        if m.name == member
    ]
    if not matches:
        raise NotFoundError(f"Member '{member}' not found")
    if len(matches) > 1:
        raise ValidationError(f"Member name '{member}' is ambiguous; use the member ID")
    return matches[0]


def resolve_account(db: Database, owner_member_id: int, account: str | int) -> int:
    """Resolve one of a member's accounts by name or ID.

    Raises:
        NotFoundError: If the member has no such account
    """
    account_id = _as_id(account)
    if account_id is not None:
        if db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return account_id

    for acc in db.list_accounts(owner_member_id=owner_member_id):
        if acc.name == account:
            return acc.id
    raise NotFoundError(f"Account '{account}' not found")


def resolve_category(db: Database, household_id: int, category: str | int) -> int:
    """Resolve one of a household's categories by name or ID.

    Raises:
        NotFoundError: If the household has no such category
    """
    category_id = _as_id(category)
    if category_id is not None:
        if db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        return category_id

    for cat in db.list_categories(household_id):
        if cat.name == category:
            return cat.id
    raise NotFoundError(f"Category '{category}' not found")


def resolve_household(db: Database, household: str | int) -> int:
    """Resolve household name or ID to household ID.

    Raises:
        NotFoundError: If household is not found
    """
    household_id = _as_id(household)
    if household_id is not None:
        if db.get_household(household_id) is None:
            raise NotFoundError(household_not_found(household_id))
        return household_id

    for h in db.list_households():
        if h.name == household:
            return h.id
    raise NotFoundError(f"Household '{household}' not found")
