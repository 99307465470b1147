"""Category domain service."""

import logging
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import Category as CategoryEntity, CategoryType
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_name_not_found,
    category_not_found,
    duplicate_category_name,
)

logger = logging.getLogger(__name__)


# (name, type, description, icon)
DEFAULT_CATEGORIES = [
    ("Food & Dining", CategoryType.EXPENSE, "Restaurants, groceries, and food delivery", "🍽️"),
    ("Transportation", CategoryType.EXPENSE, "Public transit, fuel, car maintenance", "🚗"),
    ("Housing", CategoryType.EXPENSE, "Rent, utilities, maintenance", "🏠"),
    ("Entertainment", CategoryType.EXPENSE, "Movies, games, hobbies", "🎮"),
    ("Shopping", CategoryType.EXPENSE, "Clothing, electronics, personal items", "🛍️"),
    ("Healthcare", CategoryType.EXPENSE, "Medical expenses, medications, insurance", "⚕️"),
    ("Education", CategoryType.EXPENSE, "Tuition, books, courses", "📚"),
    ("Bills & Utilities", CategoryType.EXPENSE, "Phone, internet, electricity", "📱"),
    ("Salary", CategoryType.INCOME, "Regular employment income", "💰"),
    ("Investments", CategoryType.INCOME, "Stock dividends, interest, capital gains", "📈"),
    ("Freelance", CategoryType.INCOME, "Contract work and side gigs", "💻"),
    ("Gifts", CategoryType.INCOME, "Money received as gifts", "🎁"),
]


def parse_category_type(category_type: CategoryType | str) -> CategoryType:
    """Coerce a category type name into a CategoryType.

    Raises:
        ValidationError: If the type is not expense or income
    """
    if isinstance(category_type, CategoryType):
        return category_type
    try:
        return CategoryType(str(category_type).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown category type: '{category_type}'. Supported types: expense, income")


class CategoryService:
    """Service for managing a user's categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        user_id: int,
        name: str,
        category_type: CategoryType | str = CategoryType.EXPENSE,
        description: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> int:
        """Create a category.

        Args:
            user_id: Owner of the category
            name: Category name
            category_type: "expense" or "income"
            description: Optional description
            icon: Optional icon

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty or the type is unknown
            ConflictError: If the user already has a category with this name
        """
        name = name.strip() if name else ""
        if not name:
            raise ValidationError("Category name must not be empty")
        parsed_type = parse_category_type(category_type)
        if self.db.get_category_by_name(user_id, name) is not None:
            raise ConflictError(duplicate_category_name(name))

        return self.db.create_category(
            user_id=user_id,
            name=name,
            category_type=parsed_type.value,
            description=description,
            icon=icon,
        )

    def create_default_categories(self, user_id: int) -> list[int]:
        """Create the default category set for a user, skipping names already present.

        Returns:
            IDs of the categories created
        """
        created = []
        for name, category_type, description, icon in DEFAULT_CATEGORIES:
            if self.db.get_category_by_name(user_id, name) is not None:
                continue
            created.append(
                self.create_category(
                    user_id=user_id,
                    name=name,
                    category_type=category_type,
                    description=description,
                    icon=icon,
                )
            )
        logger.info("Created %d default categories for user %s", len(created), user_id)
        return created

    def get_category(self, user_id: int, category_id: int) -> Optional[CategoryEntity]:
        """Get a user's category by ID.

        Returns:
            Category entity, or None if it does not exist or belongs to another user
        """
        category = self.db.get_category(category_id)
        if category is None or category.user_id != user_id:
            return None
        return category

    def require_category(self, user_id: int, category_id: int) -> CategoryEntity:
        """Get a user's category by ID or raise NotFoundError."""
        category = self.get_category(user_id, category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def require_category_by_name(self, user_id: int, name: str) -> CategoryEntity:
        """Get a user's category by name or raise NotFoundError."""
        category = self.db.get_category_by_name(user_id, name)
        if category is None:
            raise NotFoundError(category_name_not_found(name))
        return category

    def resolve_category(self, user_id: int, category: str | int) -> CategoryEntity:
        """Resolve a category given by ID or by name."""
        if isinstance(category, int):
            return self.require_category(user_id, category)
        try:
            category_id = int(category)
        except (TypeError, ValueError):
            # Not a number, treat as name
            return self.require_category_by_name(user_id, category)
        return self.require_category(user_id, category_id)

    def list_categories(
        self, user_id: int, category_type: Optional[CategoryType | str] = None
    ) -> list[CategoryEntity]:
        """List a user's categories, optionally filtered by type."""
        type_value = None
        if category_type is not None:
            type_value = parse_category_type(category_type).value
        return self.db.list_categories(user_id, category_type=type_value)

    def category_names(self, user_id: int) -> dict[int, str]:
        """Map category IDs to names for a user."""
        return {category.id: category.name for category in self.db.list_categories(user_id)}

    def update_category(
        self,
        user_id: int,
        category_id: int,
        name: Optional[str] = None,
        category_type: Optional[CategoryType | str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Update category fields.

        Raises:
            NotFoundError: If the category does not exist for this user
            ValidationError: If the new name is empty or the type is unknown
        """
        self.require_category(user_id, category_id)
        if name is not None and not name.strip():
            raise ValidationError("Category name must not be empty")
        type_value = None
        if category_type is not None:
            type_value = parse_category_type(category_type).value

        self.db.update_category(
            category_id,
            name=name.strip() if name is not None else None,
            category_type=type_value,
            description=description,
            icon=icon,
        )

    def delete_category(self, user_id: int, category_id: int) -> None:
        """Delete a category together with its expenses and budgets.

        Raises:
            NotFoundError: If the category does not exist for this user
        """
        category = self.require_category(user_id, category_id)
        self.db.delete_category(category_id)
        logger.info("Deleted category '%s' (ID: %s) for user %s", category.name, category_id, user_id)
