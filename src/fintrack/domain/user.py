"""User domain service."""

import logging
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import User as UserEntity
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_user_email,
    user_not_found,
)

logger = logging.getLogger(__name__)

USER_ROLES = ("user", "admin")


def _normalize_email(email: str) -> str:
    email = email.strip().lower() if email else ""
    if "@" not in email:
        raise ValidationError(f"Invalid email address: '{email}'")
    return email


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def register_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password_hash: str = "",
        role: str = "user",
        with_default_categories: bool = True,
    ) -> int:
        """Register a user.

        Args:
            email: Unique email address
            first_name: First name
            last_name: Last name
            password_hash: Credential hash produced by the caller; stored as-is
            role: "user" or "admin"
            with_default_categories: If True, seed the default category set

        Returns:
            User ID

        Raises:
            ValidationError: If email is malformed or role is unknown
            ConflictError: If a user with this email already exists
        """
        email = _normalize_email(email)
        if role not in USER_ROLES:
            raise ValidationError(f"Unknown role: '{role}'. Supported roles: {', '.join(USER_ROLES)}")
        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_user_email(email))

        user_id = self.db.create_user(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            role=role,
        )
        logger.info("Registered user %s (ID: %s)", email, user_id)

        if with_default_categories:
            CategoryService(self.db).create_default_categories(user_id)
        return user_id

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        """Get user by ID."""
        return self.db.get_user(user_id)

    def list_users(self) -> list[UserEntity]:
        """List all users."""
        return self.db.list_users()

    def resolve_user(self, user: str | int) -> UserEntity:
        """Resolve a user given by ID or email.

        Raises:
            NotFoundError: If no such user exists
        """
        if isinstance(user, int):
            found = self.db.get_user(user)
        else:
            try:
                found = self.db.get_user(int(user))
            except (TypeError, ValueError):
                # Not a number, treat as email
                found = self.db.get_user_by_email(user.strip().lower())
        if found is None:
            raise NotFoundError(user_not_found(user))
        return found

    def update_profile(
        self,
        user_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> UserEntity:
        """Update a user's name and email.

        Args:
            user_id: User to update
            first_name: New first name, unchanged if None
            last_name: New last name, unchanged if None
            email: New email address, unchanged if None

        Returns:
            Updated user

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the new email is malformed
            ConflictError: If another user already has the new email
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))

        if email is not None:
            email = _normalize_email(email)
            existing = self.db.get_user_by_email(email)
            if existing is not None and existing.id != user_id:
                raise ConflictError(duplicate_user_email(email))

        self.db.update_user(user_id, email=email, first_name=first_name, last_name=last_name)
        if email is not None and email != user.email:
            logger.info("Changed email of user %s from %s to %s", user_id, user.email, email)
        return self.db.get_user(user_id)
