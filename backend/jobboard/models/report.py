"""
Abuse report model
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from jobboard.core.database import Base
from jobboard.models.enums import ReportStatus, enum_column


class Report(Base):
    """A user's flag on a job posting"""

    __tablename__ = "reports"
    __table_args__ = (
        UniqueConstraint("job_id", "reported_by", name="uq_report_job_reporter"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    reported_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reason = Column(String(255), nullable=False)
    description = Column(Text, default="")
    status = Column(enum_column(ReportStatus, "report_status"), default=ReportStatus.PENDING, nullable=False, index=True)
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    reviewed_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    job = relationship("Job", back_populates="reports")
    reporter = relationship("User", foreign_keys=[reported_by])
