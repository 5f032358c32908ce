"""
Admin Pydantic schemas
"""
from typing import Optional
from pydantic import BaseModel

from jobboard.jobs.schemas import JobResponse, PosterSummary
from jobboard.users.schemas import ProfileResponse


class PendingJobResponse(JobResponse):
    poster: Optional[PosterSummary] = None
    poster_email: Optional[str] = None


class VerifyEmployerResponse(BaseModel):
    message: str
    user: ProfileResponse


class BlockUserRequest(BaseModel):
    blocked: bool


class BlockUserResponse(BaseModel):
    message: str
    user: ProfileResponse


class PlatformStats(BaseModel):
    total_users: int
    total_job_seekers: int
    total_employers: int
    verified_employers: int
    unverified_employers: int
    blocked_users: int
    total_jobs: int
    approved_jobs: int
    pending_jobs: int
    rejected_jobs: int
    total_applications: int
    pending_applications: int
    shortlisted_applications: int
    accepted_applications: int
