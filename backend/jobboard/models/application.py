"""
Job application model
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from jobboard.core.database import Base
from jobboard.models.enums import ApplicationStatus, enum_column


class Application(Base):
    """A seeker's application to one job"""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "user_id", name="uq_application_job_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(enum_column(ApplicationStatus, "application_status"), default=ApplicationStatus.PENDING, nullable=False, index=True)
    cover_letter = Column(Text, default="")
    resume_used = Column(String(500))  # resume reference at apply time
    employer_notes = Column(Text)
    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    status_updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")
