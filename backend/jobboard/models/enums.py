"""
Closed value sets shared by models, schemas and services
"""
import enum

from sqlalchemy import Enum as SAEnum


class Role(str, enum.Enum):
    JOBSEEKER = "jobseeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class JobStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CLOSED = "closed"


class JobType(str, enum.Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    INTERNSHIP = "Internship"
    CONTRACT = "Contract"


class ExperienceLevel(str, enum.Enum):
    ENTRY = "Entry"
    MID = "Mid"
    SENIOR = "Senior"
    LEAD = "Lead"


class WorkMode(str, enum.Enum):
    REMOTE = "Remote"
    ON_SITE = "On-site"
    HYBRID = "Hybrid"


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    SHORTLISTED = "shortlisted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class NotificationType(str, enum.Enum):
    JOB = "job"
    APPLICATION = "application"
    SYSTEM = "system"


class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


# Applications that occupy an opening
FILLED_APPLICATION_STATUSES = (ApplicationStatus.SHORTLISTED, ApplicationStatus.ACCEPTED)


def enum_column(enum_cls, name: str) -> SAEnum:
    """String-backed column type that stores enum values, not member names"""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
