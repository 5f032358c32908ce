"""
Job posting Pydantic schemas
"""
from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import date, datetime

from jobboard.models import ExperienceLevel, JobStatus, JobType, WorkMode


class JobCreate(BaseModel):
    """Job posting creation schema; status is always pending on creation"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    salary: Optional[str] = None
    job_type: JobType = JobType.FULL_TIME
    required_skills: List[str] = []
    experience_level: ExperienceLevel = ExperienceLevel.ENTRY
    openings: Optional[int] = Field(1, ge=0)
    work_mode: WorkMode = WorkMode.ON_SITE
    application_deadline: Optional[date] = None


class PosterSummary(BaseModel):
    """Employer fields shown alongside a job"""
    id: int
    name: str
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    company_website: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    company_description: Optional[str] = None
    is_verified: bool

    class Config:
        from_attributes = True


class JobResponse(BaseModel):
    """Job posting response schema"""
    id: int
    title: str
    description: str
    company: str
    location: str
    category: str
    salary: Optional[str] = None
    job_type: JobType
    required_skills: Optional[List[str]] = None
    experience_level: ExperienceLevel
    openings: Optional[int] = None
    work_mode: WorkMode
    application_deadline: Optional[date] = None
    status: JobStatus
    rejection_reason: Optional[str] = None
    posted_by: int
    views: int
    applications_count: int
    created_at: datetime
    approved_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobListItem(JobResponse):
    """Job with capacity information; available_positions is None when unlimited"""
    filled_positions: int = 0
    available_positions: Optional[int] = None
    poster: Optional[PosterSummary] = None


class JobCreateResponse(BaseModel):
    message: str
    job: JobResponse


class EmployerJobResponse(JobResponse):
    """Employer dashboard row"""
    last_employer_view: Optional[datetime] = None
    has_new_applications: bool
    new_applications_count: int
    filled_positions: int
    available_positions: Optional[int] = None
    deadline_status: Optional[str] = None
    opening_status: Optional[str] = None


class JobReview(BaseModel):
    """Admin moderation decision"""
    status: JobStatus
    rejection_reason: Optional[str] = None


class JobReviewResponse(BaseModel):
    message: str
    job: JobResponse
