"""
Job posting routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
import structlog

from jobboard.auth.dependencies import get_optional_user, require_capability
from jobboard.auth.schemas import MessageResponse
from jobboard.jobs.schemas import (
    EmployerJobResponse,
    JobCreate,
    JobCreateResponse,
    JobListItem,
    JobResponse,
)
from jobboard.jobs.service import JobService, available_positions, get_job_service
from jobboard.models import Job, JobType, User

router = APIRouter(prefix="/api/v1", tags=["Jobs"])
logger = structlog.get_logger()


def to_list_item(job: Job, filled: int) -> JobListItem:
    return JobListItem.model_validate(job).model_copy(
        update={
            "filled_positions": filled,
            "available_positions": available_positions(job, filled),
        }
    )


@router.get("/jobs", response_model=List[JobListItem])
def list_jobs(
    category: Optional[str] = None,
    job_type: Optional[JobType] = Query(None, alias="type"),
    location: Optional[str] = None,
    search: Optional[str] = None,
    jobs: JobService = Depends(get_job_service),
):
    """Approved jobs that still accept applications, newest first"""
    return [
        to_list_item(row["job"], row["filled"])
        for row in jobs.list_open(category, job_type, location, search)
    ]


@router.get("/jobs/{job_id}", response_model=JobListItem)
def get_job(
    job_id: int,
    viewer: Optional[User] = Depends(get_optional_user),
    jobs: JobService = Depends(get_job_service),
):
    """Job details; a bad or missing token falls back to anonymous access"""
    row = jobs.get_visible(job_id, viewer)
    item = to_list_item(row["job"], row["filled"])

    jobs.record_view(row["job"])
    logger.info("job_viewed", job_id=job_id, viewer_id=viewer.id if viewer else None)
    return item


@router.post("/jobs", response_model=JobCreateResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    job_data: JobCreate,
    current_user: User = Depends(require_capability("jobs:create")),
    jobs: JobService = Depends(get_job_service),
):
    """Submit a job for admin approval"""
    job = jobs.create(current_user, job_data)
    return JobCreateResponse(
        message="Job submitted for admin approval",
        job=JobResponse.model_validate(job),
    )


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: int,
    current_user: User = Depends(require_capability("jobs:delete")),
    jobs: JobService = Depends(get_job_service),
):
    """Delete an own job together with its applications"""
    jobs.delete(current_user, job_id)
    return MessageResponse(message="Job deleted successfully")


@router.get("/employer/jobs", response_model=List[EmployerJobResponse])
def list_employer_jobs(
    current_user: User = Depends(require_capability("employer:jobs:read")),
    jobs: JobService = Depends(get_job_service),
):
    """Own jobs with new-application badges and capacity status"""
    return [
        EmployerJobResponse(
            **JobResponse.model_validate(row["job"]).model_dump(),
            last_employer_view=row["job"].last_employer_view,
            has_new_applications=row["new_applications_count"] > 0,
            new_applications_count=row["new_applications_count"],
            filled_positions=row["filled"],
            available_positions=available_positions(row["job"], row["filled"]),
            deadline_status=row["deadline_status"],
            opening_status=row["opening_status"],
        )
        for row in jobs.employer_dashboard(current_user)
    ]
