"""Pydantic schemas for Notification API."""

from datetime import datetime
from typing import Any

from api.v1.schemas.common import CamelModel
from domain.entities.notification import NotificationPage, NotificationView


class NotificationResponse(CamelModel):
    """Single notification in the feed."""

    id: str
    type: str
    message: str
    club_id: str
    club_name: str | None = None
    sender_id: str | None = None
    sender_name: str | None = None
    is_read: bool
    data: dict[str, Any]
    created_at: datetime

    @classmethod
    def from_view(cls, view: NotificationView) -> "NotificationResponse":
        return cls(
            id=view.id,
            type=view.type.value,
            message=view.message,
            club_id=view.club_id,
            club_name=view.club_name,
            sender_id=view.sender_id,
            sender_name=view.sender_name,
            is_read=view.is_read,
            data=view.data,
            created_at=view.created_at,
        )


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class NotificationListResponse(CamelModel):
    """Paginated notification feed response."""

    notifications: list[NotificationResponse]
    pagination: PaginationMeta

    @classmethod
    def from_page(cls, page: NotificationPage) -> "NotificationListResponse":
        return cls(
            notifications=[NotificationResponse.from_view(v) for v in page.notifications],
            pagination=PaginationMeta(
                page=page.page,
                limit=page.limit,
                total=page.total,
                total_pages=page.total_pages,
                has_next=page.has_next,
                has_prev=page.has_prev,
            ),
        )


class UnreadCountResponse(CamelModel):
    """Unread notification count response."""

    unread_count: int


class MarkAllReadResponse(CamelModel):
    """Response for mark-all-read operation."""

    message: str
    modified_count: int
