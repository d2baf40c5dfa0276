"""Notification domain entities and type constants."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from domain.entities.identifiers import new_object_id


class NotificationType(str, Enum):
    """Kinds of club activity users are notified about."""

    JOIN_REQUEST = "join_request"
    REQUEST_APPROVED = "request_approved"
    REQUEST_REJECTED = "request_rejected"
    NEW_MEMBER = "new_member"
    ROLE_CHANGE = "role_change"


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    """Message handed to the notification sink after a membership transition.

    ``sender_id`` is the acting user: the requester, the deciding admin, or
    the newcomer for ``new_member``. It is never among the delivered recipients.
    """

    type: NotificationType
    club_id: str
    club_name: str
    recipient_ids: tuple[str, ...]
    sender_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Notification:
    """Domain entity for a delivered notification."""

    type: NotificationType
    recipient_id: str
    club_id: str
    message: str
    id: str = field(default_factory=new_object_id)
    sender_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    expires_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class NotificationView:
    """Read-only value object: notification with club and sender names resolved."""

    id: str
    type: NotificationType
    message: str
    club_id: str
    club_name: str | None
    sender_id: str | None
    sender_name: str | None
    is_read: bool
    created_at: datetime
    data: dict[str, Any]


@dataclass(frozen=True, slots=True)
class NotificationPage:
    """One page of a recipient's notification feed."""

    notifications: list[NotificationView]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
