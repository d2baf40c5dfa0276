"""Notification API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import InitializedUser
from api.dependencies.ids import NotificationId
from api.v1.dependencies import get_notification_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.notification import (
    MarkAllReadResponse,
    NotificationListResponse,
    UnreadCountResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List my notifications",
    responses={
        200: {"description": "Paginated notification feed, newest first"},
        400: {"description": "Invalid page or limit"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_notifications(
    request: Request,
    user: InitializedUser,
    page: int = Query(1, description="Page number, starting at 1"),
    limit: int = Query(20, description="Page size (max 50)"),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    result = await service.list_notifications(user.id, page=page, limit=limit)
    return NotificationListResponse.from_page(result)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Get unread notification count",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_unread_count(
    request: Request,
    user: InitializedUser,
    service: NotificationService = Depends(get_notification_service),
) -> UnreadCountResponse:
    count = await service.get_unread_count(user.id)
    return UnreadCountResponse(unread_count=count)


@router.put(
    "/mark-all-read",
    response_model=MarkAllReadResponse,
    summary="Mark all notifications as read",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def mark_all_read(
    request: Request,
    user: InitializedUser,
    service: NotificationService = Depends(get_notification_service),
) -> MarkAllReadResponse:
    count = await service.mark_all_read(user.id)
    return MarkAllReadResponse(
        message="All notifications marked as read",
        modified_count=count,
    )


@router.put(
    "/{notification_id}/read",
    response_model=MessageResponse,
    summary="Mark a notification as read",
    responses={404: {"description": "Notification not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def mark_notification_read(
    request: Request,
    notification_id: NotificationId,
    user: InitializedUser,
    service: NotificationService = Depends(get_notification_service),
) -> MessageResponse:
    await service.mark_read(notification_id, user.id)
    return MessageResponse(message="Notification marked as read")


@router.delete(
    "/{notification_id}",
    response_model=MessageResponse,
    summary="Delete a notification",
    responses={404: {"description": "Notification not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_notification(
    request: Request,
    notification_id: NotificationId,
    user: InitializedUser,
    service: NotificationService = Depends(get_notification_service),
) -> MessageResponse:
    await service.delete_notification(notification_id, user.id)
    return MessageResponse(message="Notification deleted successfully")
