"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class AccountNotFoundError(NotFoundError):
    """Account missing or no designated account for a member."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class OperationFailedError(DomainError):
    """The store rejected or failed an atomic batch; nothing was committed."""


def household_not_found(household_id: int) -> str:
    """Return message for missing household."""
    return f"Household {household_id} not found"


def member_not_found(member_id: int) -> str:
    """Return message for missing member."""
    return f"Member {member_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def no_primary_account(member_id: int) -> str:
    """Return message when a member has no designated account."""
    return f"Member {member_id} has no primary account"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def split_not_found(split_id: int) -> str:
    """Return message for missing shared expense split."""
    return f"Split {split_id} not found"


def invalid_payday_day(payday_day: object) -> str:
    """Return message for a payday outside 1-31 and the last-day sentinel."""
    return f"Invalid payday day {payday_day!r}: expected 1-31 or -1 (last day of month)"


def settlement_mismatch(amount, covered_total) -> str:
    """Return message when covered splits do not reconcile with the amount."""
    return (
        f"Settlement amount {amount} does not match covered splits total "
        f"{covered_total}"
    )


def settlement_transaction_locked(transaction_id: int, settlement_id: int) -> str:
    """Return message when a settlement's budget expense would change money."""
    return (
        f"Transaction {transaction_id} records settlement {settlement_id}; "
        "its amount cannot be changed and it cannot be deleted"
    )


def recurring_template_not_found(template_id: int) -> str:
    """Return message for missing recurring template."""
    return f"Recurring template {template_id} not found"
