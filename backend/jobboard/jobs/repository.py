"""
Job persistence
"""
from typing import Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload
import structlog

from jobboard.core.database import LIKE_ESCAPE, contains_pattern, get_db
from jobboard.models import Application, Job, JobStatus, Report
from jobboard.models.enums import FILLED_APPLICATION_STATUSES

logger = structlog.get_logger()


class JobRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, job_id: int) -> Optional[Job]:
        return (
            self.db.query(Job)
            .options(joinedload(Job.poster))
            .filter(Job.id == job_id)
            .first()
        )

    def add(self, job: Job) -> Job:
        self.db.add(job)
        self.db.commit()
        self.db.refresh(job)
        return job

    def save(self, job: Job) -> Job:
        self.db.commit()
        self.db.refresh(job)
        return job

    def search_approved(
        self,
        category: Optional[str] = None,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Job]:
        """Approved jobs matching the listing filters, newest first"""
        query = (
            self.db.query(Job)
            .options(joinedload(Job.poster))
            .filter(Job.status == JobStatus.APPROVED)
        )
        if category:
            query = query.filter(Job.category == category)
        if job_type:
            query = query.filter(Job.job_type == job_type)
        if location:
            query = query.filter(func.lower(Job.location).like(contains_pattern(location), escape=LIKE_ESCAPE))
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    func.lower(Job.title).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Job.description).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Job.company).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query.order_by(Job.created_at.desc(), Job.id.desc()).all()

    def by_status(self, status: JobStatus) -> List[Job]:
        return (
            self.db.query(Job)
            .options(joinedload(Job.poster))
            .filter(Job.status == status)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )

    def posted_by(self, user_id: int) -> List[Job]:
        return (
            self.db.query(Job)
            .filter(Job.posted_by == user_id)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )

    def filled_positions(self, job_id: int) -> int:
        return (
            self.db.query(func.count(Application.id))
            .filter(
                Application.job_id == job_id,
                Application.status.in_(FILLED_APPLICATION_STATUSES),
            )
            .scalar()
            or 0
        )

    def filled_positions_for(self, job_ids: Iterable[int]) -> Dict[int, int]:
        """Filled positions per job with a single grouped query"""
        job_ids = list(job_ids)
        if not job_ids:
            return {}
        rows = (
            self.db.query(Application.job_id, func.count(Application.id))
            .filter(
                Application.job_id.in_(job_ids),
                Application.status.in_(FILLED_APPLICATION_STATUSES),
            )
            .group_by(Application.job_id)
            .all()
        )
        return {job_id: count for job_id, count in rows}

    def count(self, *criteria) -> int:
        return self.db.query(func.count(Job.id)).filter(*criteria).scalar() or 0

    def delete_cascade(self, job: Job):
        """Delete a job with its applications and reports in one transaction"""
        try:
            self.db.query(Application).filter(Application.job_id == job.id).delete(synchronize_session=False)
            self.db.query(Report).filter(Report.job_id == job.id).delete(synchronize_session=False)
            self.db.delete(job)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("job_deleted_cascade", job_id=job.id)


def get_job_repository(db: Session = Depends(get_db)) -> JobRepository:
    return JobRepository(db)
