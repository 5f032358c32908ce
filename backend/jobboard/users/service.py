"""
Profile workflow: updates, uploads and employer verification requests
"""
from typing import Tuple

from fastapi import Depends, UploadFile
import structlog

from jobboard.auth.permissions import has_capability
from jobboard.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from jobboard.core.storage import LocalFileStorage, get_storage
from jobboard.models import NotificationType, Role, User
from jobboard.notifications import templates
from jobboard.notifications.service import NotificationService, get_notification_service
from jobboard.users.completion import calculate_profile_completion, refresh_profile_completion
from jobboard.users.repository import UserRepository, get_user_repository
from jobboard.users.schemas import ProfileUpdate

logger = structlog.get_logger()

UNVERIFIED_EMPLOYERS_LINK = "/admin/employers/unverified"


class ProfileService:
    def __init__(
        self,
        users: UserRepository,
        notifications: NotificationService,
        storage: LocalFileStorage,
    ):
        self.users = users
        self.notifications = notifications
        self.storage = storage

    def read_own(self, user: User) -> User:
        """Own profile with a freshly persisted completion score"""
        refresh_profile_completion(user)
        return self.users.save(user)

    def update(self, user: User, changes: ProfileUpdate) -> Tuple[User, bool]:
        """
        Apply profile changes. An employer whose profile reaches 100% goes back
        to unverified and the admins are told it is ready for review.

        Returns the user and whether admin review is outstanding.
        """
        previous_completion = user.profile_completion or 0

        for field, value in changes.model_dump(exclude_unset=True, mode="json").items():
            if field == "name" and not value:
                continue
            setattr(user, field, value)

        refresh_profile_completion(user)
        became_complete = (
            user.role == Role.EMPLOYER
            and user.profile_completion == 100
            and previous_completion < 100
        )
        if became_complete:
            user.is_verified = False

        user = self.users.save(user)
        logger.info("profile_updated", user_id=user.id, profile_completion=user.profile_completion)

        if became_complete:
            self.notifications.notify_admins(
                "Employer Profile Completed",
                f"{user.company_name or user.name} has completed their profile and is ready for review.",
                NotificationType.SYSTEM,
                UNVERIFIED_EMPLOYERS_LINK,
            )

        requires_review = user.role == Role.EMPLOYER and user.profile_completion == 100 and not user.is_verified
        return user, requires_review

    def upload_resume(self, user: User, file: UploadFile) -> User:
        stored = self.storage.save_resume(file)
        previous = user.resume

        user.resume = stored
        refresh_profile_completion(user)
        user = self.users.save(user)

        if previous and previous != stored:
            self.storage.delete(previous)
        logger.info("resume_uploaded", user_id=user.id, resume=stored)
        return user

    def upload_logo(self, user: User, file: UploadFile) -> User:
        stored = self.storage.save_logo(file)
        previous = user.company_logo

        user.company_logo = stored
        refresh_profile_completion(user)
        user = self.users.save(user)

        self.storage.delete(previous)
        logger.info("logo_uploaded", user_id=user.id, logo=stored)
        return user

    def view_profile(self, viewer: User, user_id: int) -> User:
        """Someone else's profile; completion is recomputed but not persisted"""
        user = self.users.get(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))

        if user.role == Role.JOBSEEKER and viewer.id != user.id and not has_capability(
            viewer.role, "users:seeker-profile:read"
        ):
            raise AuthorizationError("Access denied")

        user.profile_completion = calculate_profile_completion(user)
        return user

    def resume_for(self, viewer: User, user_id: int):
        """Stored resume reference for a user, if the viewer may read it"""
        target = self.users.get(user_id)
        if not target:
            raise NotFoundError("User", str(user_id))

        if viewer.id != target.id and not has_capability(viewer.role, "resumes:read-any"):
            raise AuthorizationError("Access denied")

        if not target.resume:
            raise NotFoundError("Resume", message="Resume not found")
        if not self.storage.exists(target.resume):
            logger.error("resume_file_missing", user_id=target.id, resume=target.resume)
            raise NotFoundError("Resume", message="Resume file missing on server")

        return self.storage.path_for(target.resume), self.storage.content_type_for(target.resume)

    def request_verification(self, user: User) -> Tuple[str, int]:
        completion = calculate_profile_completion(user)
        if completion < 100:
            raise ValidationError(
                "Please complete your profile (100%) before requesting verification",
                details={"profile_completion": completion},
            )

        if user.is_verified:
            return "Your account is already verified", completion

        self.notifications.notify_admins(
            "Employer Verification Requested",
            f"{user.company_name or user.name} has requested account verification.",
            NotificationType.SYSTEM,
            UNVERIFIED_EMPLOYERS_LINK,
            email_html=templates.verification_requested(user.name, user.email),
        )
        logger.info("verification_requested", user_id=user.id)
        return "Verification request sent to admins. You will be notified once verified.", completion


def get_profile_service(
    users: UserRepository = Depends(get_user_repository),
    notifications: NotificationService = Depends(get_notification_service),
    storage: LocalFileStorage = Depends(get_storage),
) -> ProfileService:
    return ProfileService(users, notifications, storage)
