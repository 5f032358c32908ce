"""
Application Pydantic schemas
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from datetime import date, datetime

from jobboard.jobs.schemas import JobListItem
from jobboard.models import ApplicationStatus, JobStatus


class ApplicationCreate(BaseModel):
    job_id: int
    cover_letter: Optional[str] = Field(None, max_length=10000)


class ApplicationStatusUpdate(BaseModel):
    """Employer decision on an application"""
    status: ApplicationStatus
    employer_notes: Optional[str] = None


class ApplicationResponse(BaseModel):
    id: int
    job_id: int
    user_id: int
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    resume_used: Optional[str] = None
    employer_notes: Optional[str] = None
    applied_at: datetime
    status_updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationResult(BaseModel):
    message: str
    application: ApplicationResponse


class ApplicantSummary(BaseModel):
    """Applicant profile fields shown to the employer"""
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    resume: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[List[Dict[str, Any]]] = None
    education: Optional[List[Dict[str, Any]]] = None

    class Config:
        from_attributes = True


class JobApplicationResponse(ApplicationResponse):
    """Application as listed for the owning employer"""
    applicant: ApplicantSummary


class AppliedJobSummary(BaseModel):
    id: int
    title: str
    company: str
    location: str
    status: JobStatus
    application_deadline: Optional[date] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None


class MyApplicationResponse(ApplicationResponse):
    """Application as listed for the seeker; job is None once it was deleted"""
    job: Optional[AppliedJobSummary] = None


class AppliedJobDetail(JobListItem):
    application_status: ApplicationStatus
