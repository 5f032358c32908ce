"""
Administration: employer verification, user moderation and platform stats
"""
from typing import List, Optional

from fastapi import Depends
import structlog

from jobboard.applications.repository import ApplicationRepository, get_application_repository
from jobboard.core.exceptions import AuthorizationError, NotFoundError
from jobboard.core.storage import LocalFileStorage, get_storage
from jobboard.jobs.repository import JobRepository, get_job_repository
from jobboard.models import Application, ApplicationStatus, Job, JobStatus, NotificationType, Role, User
from jobboard.notifications import templates
from jobboard.notifications.service import NotificationService, dispatch_email, get_notification_service
from jobboard.users.repository import UserRepository, get_user_repository

logger = structlog.get_logger()


class AdminService:
    def __init__(
        self,
        users: UserRepository,
        jobs: JobRepository,
        applications: ApplicationRepository,
        notifications: NotificationService,
        storage: LocalFileStorage,
    ):
        self.users = users
        self.jobs = jobs
        self.applications = applications
        self.notifications = notifications
        self.storage = storage

    def unverified_employers(self) -> List[User]:
        return self.users.unverified_employers()

    def verify_employer(self, admin: User, user_id: int) -> User:
        user = self.users.get(user_id)
        if not user or user.role != Role.EMPLOYER:
            raise NotFoundError("Employer", message="Employer not found")

        user.is_verified = True
        user = self.users.save(user)
        logger.info("employer_verified", user_id=user.id, admin_id=admin.id)

        self.notifications.notify(
            user.id,
            "Account Verified",
            "Your employer account has been verified! You can now post jobs.",
            NotificationType.SYSTEM,
            "/employer/dashboard",
        )
        dispatch_email(user.email, "Account Verified", templates.employer_verified())
        return user

    def stats(self) -> dict:
        return {
            "total_users": self.users.count(),
            "total_job_seekers": self.users.count(User.role == Role.JOBSEEKER),
            "total_employers": self.users.count(User.role == Role.EMPLOYER),
            "verified_employers": self.users.count(User.role == Role.EMPLOYER, User.is_verified == True),  # noqa: E712
            "unverified_employers": self.users.count(User.role == Role.EMPLOYER, User.is_verified == False),  # noqa: E712
            "blocked_users": self.users.count(User.is_blocked == True),  # noqa: E712
            "total_jobs": self.jobs.count(),
            "approved_jobs": self.jobs.count(Job.status == JobStatus.APPROVED),
            "pending_jobs": self.jobs.count(Job.status == JobStatus.PENDING),
            "rejected_jobs": self.jobs.count(Job.status == JobStatus.REJECTED),
            "total_applications": self.applications.count(),
            "pending_applications": self.applications.count(Application.status == ApplicationStatus.PENDING),
            "shortlisted_applications": self.applications.count(Application.status == ApplicationStatus.SHORTLISTED),
            "accepted_applications": self.applications.count(Application.status == ApplicationStatus.ACCEPTED),
        }

    def list_users(self, role: Optional[Role] = None, search: Optional[str] = None) -> List[User]:
        return self.users.search(role=role, text=search, limit=100)

    def set_blocked(self, admin: User, user_id: int, blocked: bool) -> User:
        user = self.users.get(user_id)
        if not user:
            raise NotFoundError("User", message="User not found")
        if user.role == Role.ADMIN:
            raise AuthorizationError("Cannot block admin users")

        user.is_blocked = blocked
        if blocked:
            user.refresh_token = None
        user = self.users.save(user)
        logger.info("user_block_changed", user_id=user.id, blocked=blocked, admin_id=admin.id)

        if blocked:
            title = "Account Blocked"
            message = "Your account has been blocked by an administrator. Please contact support."
        else:
            title = "Account Unblocked"
            message = "Your account has been unblocked. You can now use the platform."
        self.notifications.notify(user.id, title, message, NotificationType.SYSTEM, "/")
        return user

    def delete_user(self, admin: User, user_id: int):
        user = self.users.get(user_id)
        if not user:
            raise NotFoundError("User", message="User not found")
        if user.role == Role.ADMIN:
            raise AuthorizationError("Cannot delete admin users")

        files = self.users.delete_cascade(user)
        self.storage.delete_many(files)
        logger.info("user_deleted", user_id=user_id, admin_id=admin.id)


def get_admin_service(
    users: UserRepository = Depends(get_user_repository),
    jobs: JobRepository = Depends(get_job_repository),
    applications: ApplicationRepository = Depends(get_application_repository),
    notifications: NotificationService = Depends(get_notification_service),
    storage: LocalFileStorage = Depends(get_storage),
) -> AdminService:
    return AdminService(users, jobs, applications, notifications, storage)
