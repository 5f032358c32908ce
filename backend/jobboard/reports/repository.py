"""
Report persistence
"""
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session, joinedload

from jobboard.core.database import get_db
from jobboard.models import Job, Report, ReportStatus


class ReportRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, report_id: int) -> Optional[Report]:
        return (
            self.db.query(Report)
            .options(joinedload(Report.job).joinedload(Job.poster))
            .filter(Report.id == report_id)
            .first()
        )

    def find(self, job_id: int, reported_by: int) -> Optional[Report]:
        return (
            self.db.query(Report)
            .filter(Report.job_id == job_id, Report.reported_by == reported_by)
            .first()
        )

    def add(self, report: Report) -> Report:
        """Insert; raises IntegrityError on a duplicate (job, reporter) pair"""
        self.db.add(report)
        self.db.commit()
        self.db.refresh(report)
        return report

    def save(self, report: Report) -> Report:
        self.db.commit()
        self.db.refresh(report)
        return report

    def rollback(self):
        self.db.rollback()

    def pending(self) -> List[Report]:
        return (
            self.db.query(Report)
            .options(joinedload(Report.job), joinedload(Report.reporter))
            .filter(Report.status == ReportStatus.PENDING)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .all()
        )


def get_report_repository(db: Session = Depends(get_db)) -> ReportRepository:
    return ReportRepository(db)
