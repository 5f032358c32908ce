"""
Abuse reports on job postings
"""
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
import structlog

from jobboard.core.exceptions import ConflictError, NotFoundError, ValidationError
from jobboard.jobs.repository import JobRepository, get_job_repository
from jobboard.models import JobStatus, NotificationType, Report, ReportStatus, User
from jobboard.notifications.service import NotificationService, get_notification_service
from jobboard.reports.repository import ReportRepository, get_report_repository

logger = structlog.get_logger()

BLOCK_JOB = "block_job"
BLOCK_EMPLOYER = "block_employer"
DISMISS = "dismiss"
REVIEW_ACTIONS = (BLOCK_JOB, BLOCK_EMPLOYER, DISMISS)

REVIEW_STATUSES = (ReportStatus.REVIEWED, ReportStatus.RESOLVED, ReportStatus.DISMISSED)
REPORTED_JOB_REASON = "Reported as fake/inappropriate"


class ReportService:
    def __init__(
        self,
        reports: ReportRepository,
        jobs: JobRepository,
        notifications: NotificationService,
    ):
        self.reports = reports
        self.jobs = jobs
        self.notifications = notifications

    def report(self, reporter: User, job_id: int, reason: str, description: Optional[str] = None) -> Report:
        job = self.jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", message="Job not found")

        if self.reports.find(job.id, reporter.id):
            raise ConflictError("You have already reported this job", details={"job_id": job.id})

        try:
            report = self.reports.add(
                Report(job_id=job.id, reported_by=reporter.id, reason=reason, description=description or "")
            )
        except IntegrityError:
            self.reports.rollback()
            raise ConflictError("You have already reported this job", details={"job_id": job.id})

        logger.info("job_reported", report_id=report.id, job_id=job.id, reporter_id=reporter.id)

        self.notifications.notify_admins(
            "Job Reported",
            f'A job "{job.title}" has been reported for: {reason}',
            NotificationType.SYSTEM,
            f"/admin/reports/{report.id}",
        )
        return report

    def pending(self) -> List[Report]:
        return self.reports.pending()

    def review(self, admin: User, report_id: int, status: ReportStatus, action: Optional[str] = None) -> Report:
        if status not in REVIEW_STATUSES:
            raise ValidationError(
                "Review status must be reviewed, resolved or dismissed",
                details={"status": status.value},
            )
        if action is not None and action not in REVIEW_ACTIONS:
            raise ValidationError(
                "Unknown review action",
                details={"action": action, "allowed": list(REVIEW_ACTIONS)},
            )

        report = self.reports.get(report_id)
        if not report:
            raise NotFoundError("Report", message="Report not found")

        report.status = status
        report.reviewed_by = admin.id
        report.reviewed_at = datetime.utcnow()

        job = report.job
        if action == BLOCK_JOB and job is not None:
            job.status = JobStatus.REJECTED
            job.rejection_reason = REPORTED_JOB_REASON
        elif action == BLOCK_EMPLOYER and job is not None and job.poster is not None:
            job.poster.is_blocked = True

        # Report and its consequence commit together
        report = self.reports.save(report)
        logger.info("report_reviewed", report_id=report.id, status=status.value, action=action, admin_id=admin.id)
        return report


def get_report_service(
    reports: ReportRepository = Depends(get_report_repository),
    jobs: JobRepository = Depends(get_job_repository),
    notifications: NotificationService = Depends(get_notification_service),
) -> ReportService:
    return ReportService(reports, jobs, notifications)
