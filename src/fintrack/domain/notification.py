"""Notification domain service."""

from typing import Optional, Sequence

from fintrack.database.base import Database
from fintrack.domain.entities import Notification as NotificationEntity, NotificationType
from fintrack.domain.errors import NotFoundError, ValidationError, notification_not_found

DEFAULT_LIMIT = 50

ALERT_TYPES = (NotificationType.BUDGET_ALERT, NotificationType.BUDGET_EXCEEDED)


def parse_notification_type(notification_type: NotificationType | str) -> NotificationType:
    """Coerce a notification type name into a NotificationType."""
    if isinstance(notification_type, NotificationType):
        return notification_type
    try:
        return NotificationType(str(notification_type).strip().lower())
    except ValueError:
        supported = ", ".join(t.value for t in NotificationType)
        raise ValidationError(f"Unknown notification type: '{notification_type}'. Supported types: {supported}")


class NotificationService:
    """Service for reading and acknowledging a user's notifications."""

    def __init__(self, db: Database):
        """Initialize notification service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_notifications(
        self,
        user_id: int,
        types: Optional[Sequence[NotificationType | str]] = None,
        unread_only: bool = False,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> list[NotificationEntity]:
        """List a user's notifications, newest first.

        Args:
            user_id: Owner of the notifications
            types: Optional notification types to keep
            unread_only: If True, skip notifications already read
            limit: Maximum number returned (None for all)
        """
        parsed = [parse_notification_type(t) for t in types] if types else None
        return self.db.list_notifications(user_id, types=parsed, unread_only=unread_only, limit=limit)

    def list_alerts(self, user_id: int, limit: Optional[int] = DEFAULT_LIMIT) -> list[NotificationEntity]:
        """List budget alert and budget exceeded notifications, newest first."""
        return self.list_notifications(user_id, types=ALERT_TYPES, limit=limit)

    def mark_read(self, user_id: int, notification_id: int) -> NotificationEntity:
        """Mark a user's notification as read.

        Raises:
            NotFoundError: If the notification does not exist for this user
        """
        notification = self.db.get_notification(notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFoundError(notification_not_found(notification_id))
        self.db.mark_notification_read(notification_id)
        return self.db.get_notification(notification_id)
