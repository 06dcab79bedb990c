"""Batch mutation vocabulary for atomic writes.

Services never write records one at a time. They build a list of mutations
for one logical operation and hand it to ``Database.transact``, which applies
the whole list or nothing.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

CREATE = "create"
UPDATE = "update"
DELETE = "delete"

HOUSEHOLDS = "households"
MEMBERS = "members"
ACCOUNTS = "accounts"
CATEGORIES = "categories"
CATEGORY_BUDGETS = "category_budgets"
BUDGET_SUMMARIES = "budget_summaries"
TRANSACTIONS = "transactions"
SPLITS = "shared_expense_splits"
SETTLEMENTS = "settlements"
TRANSFERS = "account_transfers"
RECURRING_TEMPLATES = "recurring_templates"


@dataclass(frozen=True)
class Ref:
    """Placeholder for the id of a record created earlier in the same batch."""

    key: str


RecordId = Union[int, Ref]


@dataclass(frozen=True)
class Mutation:
    """A single create, update or delete against one entity set."""

    action: str
    entity: str
    record_id: Optional[RecordId] = None
    values: dict[str, Any] = field(default_factory=dict)
    key: Optional[str] = None


def create(entity: str, key: Optional[str] = None, **values: Any) -> Mutation:
    """Build a create mutation.

    Args:
        entity: Entity set name (e.g. ``ACCOUNTS``)
        key: Optional batch-local key; the new id is reported under it and
            can be referenced by later mutations with ``Ref(key)``
        **values: Column values for the new record
    """
    return Mutation(action=CREATE, entity=entity, values=values, key=key)


def update(entity: str, record_id: RecordId, **values: Any) -> Mutation:
    """Build an update mutation for an existing record."""
    return Mutation(action=UPDATE, entity=entity, record_id=record_id, values=values)


def delete(entity: str, record_id: RecordId) -> Mutation:
    """Build a delete mutation."""
    return Mutation(action=DELETE, entity=entity, record_id=record_id)
