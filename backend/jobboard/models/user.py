"""
User model
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from sqlalchemy.orm import relationship

from jobboard.core.database import Base
from jobboard.models.enums import Role, enum_column


class User(Base):
    """Seeker, employer or admin account"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(enum_column(Role, "user_role"), nullable=False, default=Role.JOBSEEKER, index=True)
    phone = Column(String(50))
    location = Column(String(255))
    profile_pic = Column(String(500))

    # Account state
    is_verified = Column(Boolean, default=False, nullable=False)
    is_blocked = Column(Boolean, default=False, nullable=False)
    refresh_token = Column(Text)
    reset_password_token = Column(Text)
    reset_password_expires = Column(DateTime)

    # Job seeker
    resume = Column(String(500))  # storage reference, e.g. resumes/<uuid>.pdf
    skills = Column(JSON, default=list)
    experience = Column(JSON, default=list)  # [{title, company, start_date, end_date, current, description}]
    education = Column(JSON, default=list)  # [{degree, institution, start_date, end_date, grade}]
    preferred_location = Column(JSON, default=list)
    expected_salary = Column(String(100))

    # Employer
    company_name = Column(String(255), index=True)
    company_website = Column(String(500))
    company_logo = Column(String(500))
    industry = Column(String(255))
    company_size = Column(String(100))
    company_description = Column(Text)
    tax_id = Column(String(100))

    # Cached score, see users.completion
    profile_completion = Column(Integer, default=20, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    jobs = relationship("Job", back_populates="poster", foreign_keys="Job.posted_by", passive_deletes=True)
    applications = relationship("Application", back_populates="applicant", passive_deletes=True)
    notifications = relationship("Notification", back_populates="user", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __repr__(self):
        return f"<User {self.id}: {self.email} ({self.role.value if self.role else None})>"
