"""Notification service: message rendering, delivery and the recipient's feed."""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Protocol

import structlog

from core.config import settings
from core.exceptions import FieldValidationError, NotificationNotFoundError
from domain.entities.notification import (
    Notification,
    NotificationEvent,
    NotificationPage,
    NotificationType,
    NotificationView,
)
from domain.entities.profile import UNKNOWN_USER_NAME
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

MAX_PAGE_SIZE = 50


class INotificationPublisher(Protocol):
    """Sink that accepts notification events without blocking the caller."""

    def publish(self, event: NotificationEvent) -> bool:
        """Hand off an event. Returns False when it was dropped."""
        ...


def render_message(event: NotificationEvent, sender_name: str) -> str:
    """Human-readable message for a notification event."""
    club = event.club_name
    if event.type == NotificationType.JOIN_REQUEST:
        return f"{sender_name} wants to join {club}"
    if event.type == NotificationType.REQUEST_APPROVED:
        return f"Your request to join {club} was approved by {sender_name}"
    if event.type == NotificationType.REQUEST_REJECTED:
        return f"Your request to join {club} was rejected by {sender_name}"
    if event.type == NotificationType.NEW_MEMBER:
        return f"{sender_name} joined {club}"
    if event.data.get("newRole") == "member":
        return f"You are no longer an admin of {club}"
    return f"You are now an admin of {club}"


class NotificationService:
    """Service layer for notification delivery and management."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        ttl_days: int = settings.notification_ttl_days,
    ) -> None:
        self._uow_factory = uow_factory
        self._ttl = timedelta(days=ttl_days)

    # --- Delivery (called by the dispatcher worker) ---

    async def deliver(self, event: NotificationEvent) -> list[Notification]:
        """Persist one notification per recipient of ``event``.

        The sender is dropped from the recipients and duplicates are collapsed.
        Names are resolved from profiles at delivery time.
        """
        recipients = [
            uid for uid in dict.fromkeys(event.recipient_ids) if uid != event.sender_id
        ]
        if not recipients:
            logger.debug("notification_skipped_no_recipients", type=event.type.value)
            return []

        async with self._uow_factory() as uow:
            sender_name = UNKNOWN_USER_NAME
            if event.sender_id:
                profiles = await uow.profiles.get_many([event.sender_id])
                profile = profiles.get(event.sender_id)
                if profile:
                    sender_name = profile.name

            message = render_message(event, sender_name)
            data = dict(event.data)
            if event.sender_id:
                data.setdefault("senderName", sender_name)

            now = datetime.utcnow()
            notifications = [
                Notification(
                    type=event.type,
                    recipient_id=uid,
                    club_id=event.club_id,
                    message=message,
                    sender_id=event.sender_id,
                    data=data,
                    created_at=now,
                    expires_at=now + self._ttl,
                )
                for uid in recipients
            ]
            created = await uow.notifications.create_many(notifications)
            await uow.commit()

        logger.info(
            "notifications_delivered",
            type=event.type.value,
            club_id=event.club_id,
            count=len(created),
        )
        return created

    # --- Recipient feed ---

    async def list_notifications(
        self, recipient_id: str, page: int = 1, limit: int = 20
    ) -> NotificationPage:
        """One page of the recipient's notifications, newest first."""
        errors = []
        if page < 1:
            errors.append({"field": "page", "message": "Page must be at least 1"})
        if not 1 <= limit <= MAX_PAGE_SIZE:
            errors.append(
                {"field": "limit", "message": f"Limit must be between 1 and {MAX_PAGE_SIZE}"}
            )
        if errors:
            raise FieldValidationError(errors)

        async with self._uow_factory() as uow:
            rows = await uow.notifications.list_for_recipient(
                recipient_id, offset=(page - 1) * limit, limit=limit
            )
            total = await uow.notifications.count_for_recipient(recipient_id)

            clubs = await uow.clubs.get_many(list({n.club_id for n in rows}))
            profiles = await uow.profiles.get_many(
                list({n.sender_id for n in rows if n.sender_id})
            )

        views = []
        for n in rows:
            club = clubs.get(n.club_id)
            sender = profiles.get(n.sender_id) if n.sender_id else None
            views.append(
                NotificationView(
                    id=n.id,
                    type=n.type,
                    message=n.message,
                    club_id=n.club_id,
                    club_name=club.name if club else None,
                    sender_id=n.sender_id,
                    sender_name=sender.name if sender else None,
                    is_read=n.is_read,
                    created_at=n.created_at,
                    data=n.data,
                )
            )
        return NotificationPage(notifications=views, page=page, limit=limit, total=total)

    async def get_unread_count(self, recipient_id: str) -> int:
        """Get the count of unread notifications."""
        async with self._uow_factory() as uow:
            return await uow.notifications.count_unread(recipient_id)

    async def mark_read(self, notification_id: str, recipient_id: str) -> Notification:
        """Mark a notification as read."""
        async with self._uow_factory() as uow:
            notification = await uow.notifications.mark_read(notification_id, recipient_id)
            if notification is None:
                raise NotificationNotFoundError(notification_id)
            await uow.commit()
            return notification

    async def mark_all_read(self, recipient_id: str) -> int:
        """Mark all notifications as read. Returns count of marked."""
        async with self._uow_factory() as uow:
            count = await uow.notifications.mark_all_read(recipient_id)
            await uow.commit()
            return count

    async def delete_notification(self, notification_id: str, recipient_id: str) -> None:
        """Delete one of the recipient's notifications."""
        async with self._uow_factory() as uow:
            deleted = await uow.notifications.delete(notification_id, recipient_id)
            if not deleted:
                raise NotificationNotFoundError(notification_id)
            await uow.commit()

    # --- Cleanup ---

    async def cleanup_expired(self) -> int:
        """Delete expired notifications. Called by the lifespan cleanup loop."""
        async with self._uow_factory() as uow:
            count = await uow.notifications.delete_expired(datetime.utcnow())
            await uow.commit()
            return count
