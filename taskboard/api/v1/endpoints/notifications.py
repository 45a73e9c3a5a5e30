"""Notification API: the caller's feed and read state."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskboard.api.v1.dependencies import CurrentUser, get_notification_service
from taskboard.application.use_cases.notifications import NotificationService
from taskboard.schemas.common import MessageResponse, SuccessResponse
from taskboard.schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter()

NotificationSvc = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: CurrentUser,
    service: NotificationSvc,
) -> NotificationListResponse:
    """Most recent notifications, newest first, plus the unread count."""
    feed = await service.feed(current_user.id)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in feed.notifications],
        unread_count=feed.unread_count,
    )


@router.get("/unread/count", response_model=UnreadCountResponse)
async def unread_count(
    current_user: CurrentUser,
    service: NotificationSvc,
) -> UnreadCountResponse:
    return UnreadCountResponse(count=await service.unread_count(current_user.id))


@router.post("/read-all", response_model=SuccessResponse)
async def mark_all_read(
    current_user: CurrentUser,
    service: NotificationSvc,
) -> SuccessResponse:
    """Mark every unread notification read; success is False when none were unread."""
    changed = await service.mark_all_read(current_user.id)
    return SuccessResponse(success=changed > 0)


@router.post("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: int,
    current_user: CurrentUser,
    service: NotificationSvc,
) -> MessageResponse:
    """Mark one of the caller's notifications read; 404 for anyone else's."""
    await service.mark_read(current_user.id, notification_id)
    return MessageResponse(message="Notification marked as read")
