"""
Report routes
"""
from fastapi import APIRouter, Depends, status

from jobboard.auth.dependencies import require_capability
from jobboard.models import User
from jobboard.reports.schemas import ReportCreate, ReportResponse, ReportResult
from jobboard.reports.service import ReportService, get_report_service

router = APIRouter(prefix="/api/v1", tags=["Reports"])


@router.post("/jobs/{job_id}/report", response_model=ReportResult, status_code=status.HTTP_201_CREATED)
def report_job(
    job_id: int,
    payload: ReportCreate,
    current_user: User = Depends(require_capability("jobs:report")),
    reports: ReportService = Depends(get_report_service),
):
    """Flag a job as fake or inappropriate"""
    report = reports.report(current_user, job_id, payload.reason, payload.description)
    return ReportResult(
        message="Job reported successfully. Our team will review it.",
        report=ReportResponse.model_validate(report),
    )
