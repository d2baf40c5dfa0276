"""Notification repository protocol."""

from datetime import datetime
from typing import Protocol

from domain.entities.notification import Notification


class INotificationRepository(Protocol):
    """Repository interface for Notification entities."""

    async def create_many(self, notifications: list[Notification]) -> list[Notification]:
        """Batch-create notifications."""
        ...

    async def list_for_recipient(
        self, recipient_id: str, offset: int = 0, limit: int = 20
    ) -> list[Notification]:
        """Recipient's notifications, newest first."""
        ...

    async def count_for_recipient(self, recipient_id: str) -> int:
        """Total notifications of a recipient."""
        ...

    async def count_unread(self, recipient_id: str) -> int:
        """Unread notifications of a recipient."""
        ...

    async def mark_read(self, id: str, recipient_id: str) -> Notification | None:
        """Mark one notification read. None if it is not the recipient's."""
        ...

    async def mark_all_read(self, recipient_id: str) -> int:
        """Mark every unread notification read. Returns the updated count."""
        ...

    async def delete(self, id: str, recipient_id: str) -> bool:
        """Delete one of the recipient's notifications."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete notifications past their expiry. Returns the deleted count."""
        ...
