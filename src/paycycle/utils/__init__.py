"""Utility functions for paycycle."""

from paycycle.utils.date_parser import parse_date, parse_payday
from paycycle.utils.amount_parser import parse_amount
from paycycle.utils.resolvers import (
    resolve_account,
    resolve_category,
    resolve_household,
    resolve_member,
)

__all__ = [
    "parse_date",
    "parse_payday",
    "parse_amount",
    "resolve_account",
    "resolve_category",
    "resolve_household",
    "resolve_member",
]
