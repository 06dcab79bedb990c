"""Category domain service."""

from typing import Optional

from paycycle.database.base import Database
from paycycle.database.batch import CATEGORIES, create
from paycycle.domain.entities import Category
from paycycle.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    household_not_found,
)

DEFAULT_GROUP = "General"


class CategoryService:
    """Service for looking up and adding budget categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, household_id: int, name: str, group_name: str = DEFAULT_GROUP) -> int:
        """Create a category.

        Args:
            household_id: Household ID
            name: Category name, unique within the household
            group_name: Category group used for group totals

        Returns:
            Category ID

        Raises:
            NotFoundError: If household doesn't exist
            ConflictError: If the name is already used in the household
        """
        if self.db.get_household(household_id) is None:
            raise NotFoundError(household_not_found(household_id))
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        for category in self.db.list_categories(household_id):
            if category.name == name:
                raise ConflictError(f"Category '{name}' already exists")

        created = self.db.transact(
            [create(CATEGORIES, key="category", household_id=household_id, name=name, group_name=group_name)]
        )
        return created["category"]

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> Category:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_name(self, household_id: int, name: str) -> Optional[Category]:
        """Get a household's category by name."""
        for category in self.db.list_categories(household_id):
            if category.name == name:
                return category
        return None

    def list_categories(self, household_id: int) -> list[Category]:
        """List a household's categories ordered by group and name."""
        return self.db.list_categories(household_id)
