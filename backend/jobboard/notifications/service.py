"""
Notification sink: in-app notifications and best-effort email
"""
from typing import Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
import structlog

from jobboard.models import Notification, NotificationType, Role
from jobboard.notifications.repository import NotificationRepository, get_notification_repository
from jobboard.tasks.email_tasks import send_email_task
from jobboard.users.repository import UserRepository, get_user_repository

logger = structlog.get_logger()


def dispatch_email(to: Optional[str], subject: str, html: str):
    """Queue an email; a broker failure is logged, never raised"""
    if not to:
        return
    try:
        send_email_task.delay(to, subject, html)
    except Exception as e:
        logger.error("email_enqueue_failed", to=to, subject=subject, error=str(e))


class NotificationService:
    """
    Writes notifications after the primary change has been committed, so a
    failure here only loses the notification.
    """

    def __init__(self, notifications: NotificationRepository, users: UserRepository):
        self.notifications = notifications
        self.users = users

    def notify(
        self,
        user_id: int,
        title: str,
        message: str,
        type: NotificationType = NotificationType.SYSTEM,
        link: Optional[str] = None,
    ) -> Optional[Notification]:
        try:
            return self.notifications.add(
                Notification(user_id=user_id, title=title, message=message, type=type, link=link)
            )
        except SQLAlchemyError as e:
            self.notifications.rollback()
            logger.error("notification_failed", user_id=user_id, title=title, error=str(e))
            return None

    def notify_admins(
        self,
        title: str,
        message: str,
        type: NotificationType = NotificationType.SYSTEM,
        link: Optional[str] = None,
        email_html: Optional[str] = None,
    ) -> int:
        """Notify every admin, optionally emailing them too; returns how many were notified"""
        try:
            admins = self.users.list_by_role(Role.ADMIN)
        except SQLAlchemyError as e:
            self.notifications.rollback()
            logger.error("notification_failed", audience="admins", title=title, error=str(e))
            return 0

        sent = 0
        for admin in admins:
            if self.notify(admin.id, title, message, type, link) is not None:
                sent += 1
            if email_html:
                dispatch_email(admin.email, title, email_html)
        return sent


def get_notification_service(
    notifications: NotificationRepository = Depends(get_notification_repository),
    users: UserRepository = Depends(get_user_repository),
) -> NotificationService:
    return NotificationService(notifications, users)
