"""
Application persistence
"""
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from jobboard.core.database import get_db
from jobboard.models import Application, ApplicationStatus, Job
from jobboard.models.enums import FILLED_APPLICATION_STATUSES


class ApplicationRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, application_id: int) -> Optional[Application]:
        return (
            self.db.query(Application)
            .options(joinedload(Application.job), joinedload(Application.applicant))
            .filter(Application.id == application_id)
            .first()
        )

    def find(self, job_id: int, user_id: int) -> Optional[Application]:
        return (
            self.db.query(Application)
            .filter(Application.job_id == job_id, Application.user_id == user_id)
            .first()
        )

    def add(self, application: Application) -> Application:
        """Insert; raises IntegrityError on a duplicate (job, user) pair"""
        self.db.add(application)
        self.db.commit()
        self.db.refresh(application)
        return application

    def save(self, application: Application) -> Application:
        self.db.commit()
        self.db.refresh(application)
        return application

    def rollback(self):
        self.db.rollback()

    def for_user(self, user_id: int) -> List[Application]:
        return (
            self.db.query(Application)
            .options(joinedload(Application.job).joinedload(Job.poster))
            .filter(Application.user_id == user_id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
            .all()
        )

    def for_job(self, job_id: int, filled_only: bool = False) -> List[Application]:
        query = (
            self.db.query(Application)
            .options(joinedload(Application.applicant))
            .filter(Application.job_id == job_id)
        )
        if filled_only:
            query = query.filter(Application.status.in_(FILLED_APPLICATION_STATUSES))
        return query.order_by(Application.applied_at.desc(), Application.id.desc()).all()

    def count_new_since(self, job_id: int, since: datetime) -> int:
        """Pending applications that arrived after ``since``"""
        return (
            self.db.query(func.count(Application.id))
            .filter(
                Application.job_id == job_id,
                Application.status == ApplicationStatus.PENDING,
                Application.applied_at > since,
            )
            .scalar()
            or 0
        )

    def count(self, *criteria) -> int:
        return self.db.query(func.count(Application.id)).filter(*criteria).scalar() or 0


def get_application_repository(db: Session = Depends(get_db)) -> ApplicationRepository:
    return ApplicationRepository(db)
