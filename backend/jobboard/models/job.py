"""
Job posting model
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from jobboard.core.database import Base
from jobboard.models.enums import JobStatus, JobType, ExperienceLevel, WorkMode, enum_column


class Job(Base):
    """Job posting owned by an employer and moderated by admins"""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    salary = Column(String(100))
    job_type = Column(enum_column(JobType, "job_type"), default=JobType.FULL_TIME, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    required_skills = Column(JSON, default=list)
    experience_level = Column(enum_column(ExperienceLevel, "experience_level"), default=ExperienceLevel.ENTRY, nullable=False)
    openings = Column(Integer, default=1)
    work_mode = Column(enum_column(WorkMode, "work_mode"), default=WorkMode.ON_SITE, nullable=False)
    application_deadline = Column(Date)

    # Moderation
    status = Column(enum_column(JobStatus, "job_status"), default=JobStatus.PENDING, nullable=False, index=True)
    rejection_reason = Column(Text)
    approved_at = Column(DateTime)
    approved_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))

    # Denormalized counters
    views = Column(Integer, default=0, nullable=False)
    applications_count = Column(Integer, default=0, nullable=False)
    last_employer_view = Column(DateTime)

    posted_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    poster = relationship("User", back_populates="jobs", foreign_keys=[posted_by])
    applications = relationship("Application", back_populates="job", passive_deletes=True)
    reports = relationship("Report", back_populates="job", passive_deletes=True)

    def __repr__(self):
        return f"<Job {self.id}: {self.title} [{self.status.value if self.status else None}]>"
