"""
Notification routes
"""
from typing import List
from fastapi import APIRouter, Depends

from jobboard.auth.dependencies import require_capability
from jobboard.core.exceptions import NotFoundError
from jobboard.models import User
from jobboard.notifications.repository import NotificationRepository, get_notification_repository
from jobboard.notifications.schemas import NotificationResponse

router = APIRouter(prefix="/api/v1/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    current_user: User = Depends(require_capability("notifications:read")),
    notifications: NotificationRepository = Depends(get_notification_repository),
):
    """Latest 20 notifications, newest first"""
    return [
        NotificationResponse.model_validate(notification)
        for notification in notifications.recent_for_user(current_user.id)
    ]


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: int,
    current_user: User = Depends(require_capability("notifications:read")),
    notifications: NotificationRepository = Depends(get_notification_repository),
):
    notification = notifications.get_for_user(notification_id, current_user.id)
    if not notification:
        raise NotFoundError("Notification", str(notification_id))
    return NotificationResponse.model_validate(notifications.mark_read(notification))
