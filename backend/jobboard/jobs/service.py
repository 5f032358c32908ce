"""
Job moderation state machine and visibility rules

    pending --(admin)--> approved | rejected
    approved/rejected --(admin re-review)--> approved | rejected
    approved --> closed   (schema only, no route moves a job there)

Only open jobs are listed or accept applications. A job is open when it is
approved, its deadline day has not ended, and its openings are not all
taken by shortlisted/accepted applications.
"""
from datetime import date, datetime
from typing import Dict, List, Optional

from fastapi import Depends
import structlog

from jobboard.applications.repository import ApplicationRepository, get_application_repository
from jobboard.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from jobboard.jobs.repository import JobRepository, get_job_repository
from jobboard.jobs.schemas import JobCreate
from jobboard.models import Job, JobStatus, NotificationType, Role, User
from jobboard.notifications import templates
from jobboard.notifications.service import NotificationService, dispatch_email, get_notification_service
from jobboard.users.completion import calculate_profile_completion, is_employer_ready

logger = structlog.get_logger()

REVIEW_OUTCOMES = (JobStatus.APPROVED, JobStatus.REJECTED)
REVIEWABLE_FROM = (JobStatus.PENDING, JobStatus.APPROVED, JobStatus.REJECTED)


def today() -> date:
    return datetime.utcnow().date()


def deadline_passed(job: Job, on: Optional[date] = None) -> bool:
    """True once the whole deadline day is over"""
    if job.application_deadline is None:
        return False
    return job.application_deadline < (on or today())


def openings_filled(job: Job, filled: int) -> bool:
    return bool(job.openings) and filled >= job.openings


def available_positions(job: Job, filled: int) -> Optional[int]:
    """Remaining openings, None when the job has no opening limit"""
    if not job.openings:
        return None
    return max(job.openings - filled, 0)


def is_open(job: Job, filled: int, on: Optional[date] = None) -> bool:
    return (
        job.status == JobStatus.APPROVED
        and not deadline_passed(job, on)
        and not openings_filled(job, filled)
    )


def ensure_can_post(employer: User):
    """Employers post only with a complete profile and admin verification"""
    completion = calculate_profile_completion(employer)
    if completion < 100 or not is_employer_ready(employer):
        raise AuthorizationError(
            f"Please complete your profile (100%) before posting jobs. Current completion: {completion}%",
            details={"profile_completion": completion},
        )
    if not employer.is_verified:
        raise AuthorizationError(
            "Your profile is pending admin review. You can post jobs after admin approval.",
            details={"profile_completion": completion},
        )


class JobService:
    def __init__(
        self,
        jobs: JobRepository,
        applications: ApplicationRepository,
        notifications: NotificationService,
    ):
        self.jobs = jobs
        self.applications = applications
        self.notifications = notifications

    # Public reads

    def list_open(
        self,
        category: Optional[str] = None,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Dict]:
        candidates = self.jobs.search_approved(category, job_type, location, search)
        filled = self.jobs.filled_positions_for(job.id for job in candidates)
        current = today()

        visible = []
        for job in candidates:
            job_filled = filled.get(job.id, 0)
            if not is_open(job, job_filled, current):
                continue
            visible.append({"job": job, "filled": job_filled})
        return visible

    def get_visible(self, job_id: int, viewer: Optional[User]) -> Dict:
        """
        Single job for any caller, anonymous included. Owners and admins also
        see jobs that are not approved; everyone gets the full record.
        """
        job = self.jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", message="Job not found")

        privileged = viewer is not None and (
            viewer.is_admin or (viewer.role == Role.EMPLOYER and job.posted_by == viewer.id)
        )
        if job.status != JobStatus.APPROVED and not privileged:
            raise NotFoundError("Job", message="Job not found")

        if deadline_passed(job):
            raise NotFoundError("Job", message="Job application deadline has passed")

        filled = self.jobs.filled_positions(job.id)
        if openings_filled(job, filled):
            raise NotFoundError("Job", message="All positions for this job have been filled")

        return {"job": job, "filled": filled}

    def record_view(self, job: Job):
        # Read-modify-write; concurrent views may be lost
        job.views = (job.views or 0) + 1
        self.jobs.save(job)

    # Employer operations

    def create(self, employer: User, data: JobCreate) -> Job:
        ensure_can_post(employer)

        job = Job(
            **data.model_dump(),
            posted_by=employer.id,
            status=JobStatus.PENDING,
            views=0,
            applications_count=0,
        )
        job = self.jobs.add(job)
        logger.info("job_created", job_id=job.id, employer_id=employer.id)

        self.notifications.notify_admins(
            "New Job Posted",
            f"{job.company} posted a new job: {job.title}",
            NotificationType.JOB,
            f"/admin/jobs/{job.id}",
        )
        return job

    def get_owned(self, employer: User, job_id: int) -> Job:
        job = self.jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", message="Job not found")
        if job.posted_by != employer.id:
            raise AuthorizationError("Access denied")
        return job

    def delete(self, employer: User, job_id: int):
        job = self.get_owned(employer, job_id)
        self.jobs.delete_cascade(job)

    def employer_dashboard(self, employer: User) -> List[Dict]:
        jobs = self.jobs.posted_by(employer.id)
        filled = self.jobs.filled_positions_for(job.id for job in jobs)
        current = today()

        rows = []
        for job in jobs:
            job_filled = filled.get(job.id, 0)
            new_count = self.applications.count_new_since(job.id, job.last_employer_view or job.created_at)
            rows.append({
                "job": job,
                "filled": job_filled,
                "new_applications_count": new_count,
                "deadline_status": "expired" if deadline_passed(job, current) else None,
                "opening_status": "filled" if openings_filled(job, job_filled) else None,
            })
        return rows

    # Moderation

    def pending(self) -> List[Job]:
        return self.jobs.by_status(JobStatus.PENDING)

    def review(self, admin: User, job_id: int, status: JobStatus, rejection_reason: Optional[str] = None) -> Job:
        if status not in REVIEW_OUTCOMES:
            raise ValidationError(
                "Review status must be approved or rejected",
                details={"status": status.value},
            )

        job = self.jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", message="Job not found")
        if job.status not in REVIEWABLE_FROM:
            raise ValidationError(
                f"A {job.status.value} job cannot be reviewed",
                details={"current_status": job.status.value},
            )

        job.status = status
        if status == JobStatus.APPROVED:
            job.approved_at = datetime.utcnow()
            job.approved_by = admin.id
            job.rejection_reason = None
        else:
            job.rejection_reason = rejection_reason
        job = self.jobs.save(job)

        logger.info("job_reviewed", job_id=job.id, status=status.value, admin_id=admin.id)

        self.notifications.notify(
            job.posted_by,
            f"Job {status.value}",
            f'Your job posting "{job.title}" has been {status.value}.',
            NotificationType.JOB,
            "/employer/jobs",
        )
        if job.poster is not None:
            dispatch_email(
                job.poster.email,
                f"Job {status.value}",
                templates.job_reviewed(job.title, status.value, rejection_reason),
            )
        return job


def get_job_service(
    jobs: JobRepository = Depends(get_job_repository),
    applications: ApplicationRepository = Depends(get_application_repository),
    notifications: NotificationService = Depends(get_notification_service),
) -> JobService:
    return JobService(jobs, applications, notifications)
