"""
Report Pydantic schemas
"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

from jobboard.models import ReportStatus


class ReportCreate(BaseModel):
    reason: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)


class ReportReview(BaseModel):
    """Admin decision; action is one of block_job, block_employer, dismiss"""
    status: ReportStatus
    action: Optional[str] = None


class ReportResponse(BaseModel):
    id: int
    job_id: int
    reported_by: int
    reason: str
    description: Optional[str] = None
    status: ReportStatus
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReportResult(BaseModel):
    message: str
    report: ReportResponse


class ReportListItem(ReportResponse):
    job_title: Optional[str] = None
    job_company: Optional[str] = None
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None
