"""
Application routes
"""
from typing import List
from fastapi import APIRouter, Depends, status
import structlog

from jobboard.applications.schemas import (
    AppliedJobDetail,
    AppliedJobSummary,
    ApplicantSummary,
    ApplicationCreate,
    ApplicationResponse,
    ApplicationResult,
    ApplicationStatusUpdate,
    JobApplicationResponse,
    MyApplicationResponse,
)
from jobboard.applications.service import ApplicationService, get_application_service
from jobboard.auth.dependencies import require_capability
from jobboard.jobs.router import to_list_item
from jobboard.models import Application, User

router = APIRouter(prefix="/api/v1", tags=["Applications"])
logger = structlog.get_logger()


def to_my_application(application: Application) -> MyApplicationResponse:
    job = application.job
    summary = None
    if job is not None:
        summary = AppliedJobSummary(
            id=job.id,
            title=job.title,
            company=job.company,
            location=job.location,
            status=job.status,
            application_deadline=job.application_deadline,
            company_name=job.poster.company_name if job.poster else None,
            company_logo=job.poster.company_logo if job.poster else None,
        )
    return MyApplicationResponse(
        **ApplicationResponse.model_validate(application).model_dump(),
        job=summary,
    )


@router.post("/applications", response_model=ApplicationResult, status_code=status.HTTP_201_CREATED)
def apply_to_job(
    payload: ApplicationCreate,
    current_user: User = Depends(require_capability("applications:create")),
    applications: ApplicationService = Depends(get_application_service),
):
    """Apply to an open job with the resume on file"""
    application = applications.apply(current_user, payload.job_id, payload.cover_letter)
    return ApplicationResult(
        message="Application submitted successfully",
        application=ApplicationResponse.model_validate(application),
    )


@router.get("/applications/my", response_model=List[MyApplicationResponse])
def my_applications(
    current_user: User = Depends(require_capability("applications:read-own")),
    applications: ApplicationService = Depends(get_application_service),
):
    return [to_my_application(application) for application in applications.mine(current_user)]


@router.get("/applications/job/{job_id}/details", response_model=AppliedJobDetail)
def applied_job_details(
    job_id: int,
    current_user: User = Depends(require_capability("applications:read-own")),
    applications: ApplicationService = Depends(get_application_service),
):
    """Full job details for someone who applied, whatever the job's current state"""
    row = applications.job_details_for_applicant(current_user, job_id)
    item = to_list_item(row["job"], row["filled"])
    return AppliedJobDetail(**item.model_dump(), application_status=row["application"].status)


@router.get("/jobs/{job_id}/applications", response_model=List[JobApplicationResponse])
def job_applications(
    job_id: int,
    current_user: User = Depends(require_capability("applications:read-for-job")),
    applications: ApplicationService = Depends(get_application_service),
):
    """Applications for an own job; only selected candidates once openings are filled"""
    return [
        JobApplicationResponse(
            **ApplicationResponse.model_validate(application).model_dump(),
            applicant=ApplicantSummary.model_validate(application.applicant),
        )
        for application in applications.list_for_job(current_user, job_id)
    ]


@router.put("/applications/{application_id}", response_model=ApplicationResult)
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    current_user: User = Depends(require_capability("applications:update-status")),
    applications: ApplicationService = Depends(get_application_service),
):
    application = applications.update_status(
        current_user, application_id, payload.status, payload.employer_notes
    )
    return ApplicationResult(
        message="Application status updated successfully",
        application=ApplicationResponse.model_validate(application),
    )
