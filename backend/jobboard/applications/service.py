"""
Application lifecycle

    pending --(owning employer)--> shortlisted | accepted | rejected

The three outcomes are final. Shortlisted and accepted applications occupy
the job's openings; once every opening is taken the job stops accepting
applications and the employer only sees the selected candidates.
"""
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
import structlog

from jobboard.applications.repository import ApplicationRepository, get_application_repository
from jobboard.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from jobboard.jobs.repository import JobRepository, get_job_repository
from jobboard.jobs.service import is_open, openings_filled
from jobboard.models import Application, ApplicationStatus, Job, NotificationType, Role, User
from jobboard.notifications import templates
from jobboard.notifications.service import NotificationService, dispatch_email, get_notification_service
from jobboard.users.repository import UserRepository, get_user_repository

logger = structlog.get_logger()

TRANSITIONS = {
    ApplicationStatus.PENDING: frozenset({
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.ACCEPTED,
        ApplicationStatus.REJECTED,
    }),
}


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


class ApplicationService:
    def __init__(
        self,
        applications: ApplicationRepository,
        jobs: JobRepository,
        users: UserRepository,
        notifications: NotificationService,
    ):
        self.applications = applications
        self.jobs = jobs
        self.users = users
        self.notifications = notifications

    def apply(self, seeker: User, job_id: int, cover_letter: Optional[str] = None) -> Application:
        if seeker.role != Role.JOBSEEKER:
            raise AuthorizationError("Only job seekers can apply to jobs")

        job = self.jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", message="Job not found")

        if not is_open(job, self.jobs.filled_positions(job.id)):
            raise ValidationError(
                "This job is not available for applications",
                details={"job_id": job.id, "status": job.status.value},
            )

        if self.applications.find(job.id, seeker.id):
            raise ConflictError("You have already applied for this job", details={"job_id": job.id})

        if not seeker.resume:
            raise ValidationError("Please upload your resume before applying")

        try:
            application = self.applications.add(
                Application(
                    job_id=job.id,
                    user_id=seeker.id,
                    cover_letter=cover_letter or "",
                    resume_used=seeker.resume,
                    status=ApplicationStatus.PENDING,
                )
            )
        except IntegrityError:
            # Lost the race against a concurrent apply for the same pair
            self.applications.rollback()
            raise ConflictError("You have already applied for this job", details={"job_id": job.id})

        job.applications_count = (job.applications_count or 0) + 1
        self.jobs.save(job)

        logger.info("application_submitted", application_id=application.id, job_id=job.id, user_id=seeker.id)

        self.notifications.notify(
            job.posted_by,
            "New Application",
            f"{seeker.name} applied for your job: {job.title}",
            NotificationType.APPLICATION,
            f"/employer/jobs/{job.id}",
        )
        dispatch_email(
            seeker.email,
            "Application Submitted",
            templates.application_submitted(seeker.name, job.title, job.company),
        )
        employer = job.poster or self.users.get(job.posted_by)
        if employer is not None:
            dispatch_email(
                employer.email,
                "New Application Received",
                templates.new_application(employer.name, seeker.name, job.title),
            )
        return application

    def mine(self, user: User) -> List[Application]:
        return self.applications.for_user(user.id)

    def job_details_for_applicant(self, user: User, job_id: int) -> Dict:
        job = self.jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", message="Job not found")

        application = self.applications.find(job.id, user.id)
        if not application:
            raise AuthorizationError("Access denied. Only applicants can view job details.")

        return {"job": job, "filled": self.jobs.filled_positions(job.id), "application": application}

    def _owned_job(self, employer: User, job_id: int) -> Job:
        job = self.jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", message="Job not found")
        if job.posted_by != employer.id:
            raise AuthorizationError("Access denied")
        return job

    def list_for_job(self, employer: User, job_id: int) -> List[Application]:
        """
        Applications for an own job. Viewing the list is what clears the
        "new applications" badge.
        """
        job = self._owned_job(employer, job_id)
        filled_only = openings_filled(job, self.jobs.filled_positions(job.id))
        applications = self.applications.for_job(job.id, filled_only=filled_only)

        job.last_employer_view = datetime.utcnow()
        self.jobs.save(job)
        return applications

    def update_status(
        self,
        employer: User,
        application_id: int,
        status: ApplicationStatus,
        employer_notes: Optional[str] = None,
    ) -> Application:
        application = self.applications.get(application_id)
        if not application:
            raise NotFoundError("Application", message="Application not found")

        job = application.job
        if job is None or job.posted_by != employer.id:
            raise AuthorizationError("Access denied")

        if not can_transition(application.status, status):
            raise ValidationError(
                f"Cannot change application status from {application.status.value} to {status.value}",
                details={"current_status": application.status.value, "requested_status": status.value},
            )

        application.status = status
        application.status_updated_at = datetime.utcnow()
        if employer_notes:
            application.employer_notes = employer_notes
        application = self.applications.save(application)

        logger.info(
            "application_status_updated",
            application_id=application.id,
            job_id=job.id,
            status=status.value,
        )

        applicant = application.applicant
        self.notifications.notify(
            application.user_id,
            f"Application {status.value}",
            f'Your application for "{job.title}" has been {status.value}.',
            NotificationType.APPLICATION,
            "/jobseeker/applications",
        )
        if applicant is not None:
            dispatch_email(
                applicant.email,
                f"Application {status.value}",
                templates.application_status(applicant.name, job.title, job.company, status.value, employer_notes),
            )
        return application


def get_application_service(
    applications: ApplicationRepository = Depends(get_application_repository),
    jobs: JobRepository = Depends(get_job_repository),
    users: UserRepository = Depends(get_user_repository),
    notifications: NotificationService = Depends(get_notification_service),
) -> ApplicationService:
    return ApplicationService(applications, jobs, users, notifications)
