"""Split math for shared expenses.

Amounts are split in whole cents so that the shares always add up to the
original total.
"""

from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from typing import Iterable, Sequence

from paycycle.domain.entities import CENT, Member, SplitShare, ZERO
from paycycle.domain.errors import ValidationError

HUNDRED = Decimal("100")


def round_to_cents(value: Decimal) -> Decimal:
    """Round a money value to 0.01."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def split_amount(total: Decimal, participants: Sequence[tuple[int, Decimal]]) -> list[SplitShare]:
    """Split ``total`` between participants in proportion to their ratios.

    Each share is floored to the cent, then the leftover cents go one at a
    time to the shares with the largest fractional part (ties: larger ratio,
    then lower member id).

    Args:
        total: Amount to split (values <= 0 yield zero shares)
        participants: (member_id, ratio) pairs with positive ratios

    Returns:
        One SplitShare per participant, in input order, summing to total

    Raises:
        ValidationError: If a ratio is not positive
    """
    if not participants:
        return []
    for member_id, ratio in participants:
        if ratio <= 0:
            raise ValidationError(f"Split ratio for member {member_id} must be positive")

    total_ratio = sum((ratio for _, ratio in participants), ZERO)
    percentages = [round_to_cents(ratio / total_ratio * HUNDRED) for _, ratio in participants]

    if total <= 0:
        return [
            SplitShare(member_id=member_id, amount=ZERO.quantize(CENT), percentage=pct)
            for (member_id, _), pct in zip(participants, percentages)
        ]

    total_cents = int(round_to_cents(total) * HUNDRED)
    floored = []
    fractions = []
    for _, ratio in participants:
        raw = Decimal(total_cents) * ratio / total_ratio
        whole = int(raw.to_integral_value(rounding=ROUND_FLOOR))
        floored.append(whole)
        fractions.append(raw - whole)

    remainder = total_cents - sum(floored)
    order = sorted(
        range(len(participants)),
        key=lambda i: (-fractions[i], -participants[i][1], participants[i][0]),
    )
    for i in order[:remainder]:
        floored[i] += 1

    return [
        SplitShare(member_id=member_id, amount=(Decimal(cents) / HUNDRED).quantize(CENT), percentage=pct)
        for (member_id, _), cents, pct in zip(participants, floored, percentages)
    ]


def resolve_split_ratio(members: Iterable[Member]) -> list[tuple[int, Decimal]]:
    """Return (member_id, percentage) pairs for a household's active members.

    Manual percentages are used when every active member has one and they
    sum to 100; otherwise the split is equal.
    """
    active = [m for m in members if m.is_active]
    if not active:
        return []

    manual = [m.split_percentage for m in active]
    if all(pct is not None and pct > 0 for pct in manual) and sum(manual, ZERO) == HUNDRED:
        return [(m.id, m.split_percentage) for m in active]

    equal = HUNDRED / len(active)
    return [(m.id, equal) for m in active]
