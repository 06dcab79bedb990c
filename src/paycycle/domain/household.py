"""Household and member domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from paycycle.database.base import Database
from paycycle.database.batch import HOUSEHOLDS, MEMBERS, create, update
from paycycle.domain.budget import BudgetService
from paycycle.domain.debt import DebtService
from paycycle.domain.entities import (
    BudgetPeriod,
    Household,
    Member,
    MEMBER_ACTIVE,
    MEMBER_INACTIVE,
    ZERO,
)
from paycycle.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    household_not_found,
    member_not_found,
)
from paycycle.domain.period import compute_period, validate_payday_day

logger = logging.getLogger(__name__)


class HouseholdService:
    """Service for managing households and their members."""

    def __init__(self, db: Database):
        """Initialize household service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_household(self, name: str) -> int:
        """Create a household.

        Returns:
            Household ID

        Raises:
            ValidationError: If name is empty
        """
        name = name.strip()
        if not name:
            raise ValidationError("Household name cannot be empty")
        created = self.db.transact([create(HOUSEHOLDS, key="household", name=name)])
        logger.info("Created household %s", created["household"])
        return created["household"]

    def get_household(self, household_id: int) -> Optional[Household]:
        """Get household by ID."""
        return self.db.get_household(household_id)

    def list_households(self) -> list[Household]:
        """List all households."""
        return self.db.list_households()

    def require_household(self, household_id: int) -> Household:
        """Get household by ID or raise NotFoundError."""
        household = self.db.get_household(household_id)
        if household is None:
            raise NotFoundError(household_not_found(household_id))
        return household

    def add_member(
        self,
        household_id: int,
        name: str,
        email: Optional[str] = None,
        payday_day: int = 1,
    ) -> int:
        """Add a member to a household.

        Args:
            household_id: Household ID
            name: Member name, unique within the household
            email: Optional email address
            payday_day: Day of month 1-31, or -1 for the last day

        Returns:
            Member ID

        Raises:
            NotFoundError: If household doesn't exist
            ValidationError: If payday_day is invalid or name is empty
            ConflictError: If the household already has a member with that name
        """
        self.require_household(household_id)
        validate_payday_day(payday_day)
        name = name.strip()
        if not name:
            raise ValidationError("Member name cannot be empty")
        for member in self.db.list_members(household_id):
            if member.name == name:
                raise ConflictError(f"Member '{name}' already exists in household {household_id}")

        created = self.db.transact(
            [
                create(
                    MEMBERS,
                    key="member",
                    household_id=household_id,
                    name=name,
                    email=email,
                    payday_day=payday_day,
                    status=MEMBER_ACTIVE,
                )
            ]
        )
        logger.info("Added member %s to household %s", created["member"], household_id)
        return created["member"]

    def get_member(self, member_id: int) -> Optional[Member]:
        """Get member by ID."""
        return self.db.get_member(member_id)

    def require_member(self, member_id: int) -> Member:
        """Get member by ID or raise NotFoundError."""
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        return member

    def list_members(self, household_id: int, include_inactive: bool = False) -> list[Member]:
        """List a household's members (active ones unless include_inactive)."""
        status = None if include_inactive else MEMBER_ACTIVE
        return self.db.list_members(household_id, status=status)

    def deactivate_member(self, member_id: int) -> None:
        """Mark a member inactive; their history is kept."""
        self.require_member(member_id)
        self.db.transact([update(MEMBERS, member_id, status=MEMBER_INACTIVE)])
        logger.info("Deactivated member %s", member_id)

    def set_payday(self, member_id: int, payday_day: int, today: Optional[date] = None) -> BudgetPeriod:
        """Change a member's payday and recompute their spend.

        Args:
            member_id: Member ID
            payday_day: Day of month 1-31, or -1 for the last day
            today: Reference date for the new period

        Returns:
            The member's budget period under the new payday

        Raises:
            ValidationError: If payday_day is invalid
            NotFoundError: If member doesn't exist
        """
        validate_payday_day(payday_day)
        self.require_member(member_id)
        self.db.transact([update(MEMBERS, member_id, payday_day=payday_day)])
        logger.info("Member %s payday set to %s", member_id, payday_day)

        BudgetService(self.db).recalculate_member_spend(member_id, today=today)
        return compute_period(payday_day, today=today)

    def set_split_percentages(self, household_id: int, percentages: dict[int, Decimal]) -> None:
        """Set manual shared-expense percentages for every active member.

        Args:
            household_id: Household ID
            percentages: Mapping of member ID to percentage; must cover all
                active members and sum to 100

        Raises:
            NotFoundError: If household doesn't exist
            ValidationError: If the mapping is incomplete, has non-positive
                values, or does not sum to 100
        """
        self.require_household(household_id)
        active_ids = {m.id for m in self.db.list_members(household_id, status=MEMBER_ACTIVE)}
        if set(percentages) != active_ids:
            raise ValidationError("Split percentages must cover exactly the active members")
        if any(pct <= 0 for pct in percentages.values()):
            raise ValidationError("Split percentages must be positive")
        if sum(percentages.values(), ZERO) != Decimal("100"):
            raise ValidationError("Split percentages must sum to 100")

        self.db.transact(
            [
                update(MEMBERS, member_id, split_percentage=pct)
                for member_id, pct in sorted(percentages.items())
            ]
        )

    def get_other_member(self, household_id: int, member_id: int) -> Optional[Member]:
        """Get the single other active member of a two-person household.

        Returns:
            The other member, or None when there isn't exactly one
        """
        return DebtService(self.db).get_partner(household_id, member_id)
