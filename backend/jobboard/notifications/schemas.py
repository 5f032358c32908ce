"""
Notification Pydantic schemas
"""
from typing import Optional
from pydantic import BaseModel
from datetime import datetime

from jobboard.models import NotificationType


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    read: bool
    link: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
