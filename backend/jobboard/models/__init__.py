"""
Database models
"""
from jobboard.models.enums import (
    Role,
    JobStatus,
    JobType,
    ExperienceLevel,
    WorkMode,
    ApplicationStatus,
    NotificationType,
    ReportStatus,
)
from jobboard.models.user import User
from jobboard.models.job import Job
from jobboard.models.application import Application
from jobboard.models.notification import Notification
from jobboard.models.report import Report

__all__ = [
    "Role",
    "JobStatus",
    "JobType",
    "ExperienceLevel",
    "WorkMode",
    "ApplicationStatus",
    "NotificationType",
    "ReportStatus",
    "User",
    "Job",
    "Application",
    "Notification",
    "Report",
]
