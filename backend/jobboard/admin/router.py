"""
Admin routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
import structlog

from jobboard.admin.schemas import (
    BlockUserRequest,
    BlockUserResponse,
    PendingJobResponse,
    PlatformStats,
    VerifyEmployerResponse,
)
from jobboard.admin.service import AdminService, get_admin_service
from jobboard.auth.dependencies import require_capability
from jobboard.auth.schemas import MessageResponse
from jobboard.jobs.schemas import JobResponse, JobReview, JobReviewResponse
from jobboard.jobs.service import JobService, get_job_service
from jobboard.models import Role, User
from jobboard.reports.schemas import ReportListItem, ReportResponse, ReportResult, ReportReview
from jobboard.reports.service import ReportService, get_report_service
from jobboard.users.schemas import ProfileResponse

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"])
logger = structlog.get_logger()


@router.get("/jobs/pending", response_model=List[PendingJobResponse])
def pending_jobs(
    current_user: User = Depends(require_capability("admin:jobs:review")),
    jobs: JobService = Depends(get_job_service),
):
    return [
        PendingJobResponse.model_validate(job).model_copy(
            update={"poster_email": job.poster.email if job.poster else None}
        )
        for job in jobs.pending()
    ]


@router.put("/jobs/{job_id}/review", response_model=JobReviewResponse)
def review_job(
    job_id: int,
    review: JobReview,
    current_user: User = Depends(require_capability("admin:jobs:review")),
    jobs: JobService = Depends(get_job_service),
):
    """Approve or reject a job posting"""
    job = jobs.review(current_user, job_id, review.status, review.rejection_reason)
    return JobReviewResponse(
        message=f"Job {job.status.value} successfully",
        job=JobResponse.model_validate(job),
    )


@router.get("/employers/unverified", response_model=List[ProfileResponse])
def unverified_employers(
    current_user: User = Depends(require_capability("admin:employers:verify")),
    admin: AdminService = Depends(get_admin_service),
):
    return [ProfileResponse.model_validate(user) for user in admin.unverified_employers()]


@router.put("/employers/{user_id}/verify", response_model=VerifyEmployerResponse)
def verify_employer(
    user_id: int,
    current_user: User = Depends(require_capability("admin:employers:verify")),
    admin: AdminService = Depends(get_admin_service),
):
    user = admin.verify_employer(current_user, user_id)
    return VerifyEmployerResponse(
        message="Employer verified successfully",
        user=ProfileResponse.model_validate(user),
    )


@router.get("/stats", response_model=PlatformStats)
def platform_stats(
    current_user: User = Depends(require_capability("admin:stats:read")),
    admin: AdminService = Depends(get_admin_service),
):
    return PlatformStats(**admin.stats())


@router.get("/users", response_model=List[ProfileResponse])
def list_users(
    role: Optional[Role] = None,
    search: Optional[str] = None,
    current_user: User = Depends(require_capability("admin:users:manage")),
    admin: AdminService = Depends(get_admin_service),
):
    """Up to 100 users, newest first"""
    return [ProfileResponse.model_validate(user) for user in admin.list_users(role, search)]


@router.put("/users/{user_id}/block", response_model=BlockUserResponse)
def block_user(
    user_id: int,
    payload: BlockUserRequest,
    current_user: User = Depends(require_capability("admin:users:manage")),
    admin: AdminService = Depends(get_admin_service),
):
    user = admin.set_blocked(current_user, user_id, payload.blocked)
    return BlockUserResponse(
        message=f"User {'blocked' if payload.blocked else 'unblocked'} successfully",
        user=ProfileResponse.model_validate(user),
    )


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: User = Depends(require_capability("admin:users:manage")),
    admin: AdminService = Depends(get_admin_service),
):
    """Delete a user with their jobs, applications and notifications"""
    admin.delete_user(current_user, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/reports", response_model=List[ReportListItem])
def pending_reports(
    current_user: User = Depends(require_capability("admin:reports:review")),
    reports: ReportService = Depends(get_report_service),
):
    return [
        ReportListItem(
            **ReportResponse.model_validate(report).model_dump(),
            job_title=report.job.title if report.job else None,
            job_company=report.job.company if report.job else None,
            reporter_name=report.reporter.name if report.reporter else None,
            reporter_email=report.reporter.email if report.reporter else None,
        )
        for report in reports.pending()
    ]


@router.put("/reports/{report_id}/review", response_model=ReportResult)
def review_report(
    report_id: int,
    review: ReportReview,
    current_user: User = Depends(require_capability("admin:reports:review")),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.review(current_user, report_id, review.status, review.action)
    return ReportResult(
        message="Report reviewed successfully",
        report=ReportResponse.model_validate(report),
    )
