"""
User persistence
"""
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
import structlog

from jobboard.core.database import LIKE_ESCAPE, contains_pattern, get_db
from jobboard.models import (
    Application,
    Job,
    Notification,
    Report,
    Role,
    User,
)

logger = structlog.get_logger()


class UserRepository:
    """Credential store: lookups and writes on user records"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: User) -> User:
        self.db.commit()
        self.db.refresh(user)
        return user

    def list_by_role(self, role: Role) -> List[User]:
        return self.db.query(User).filter(User.role == role).all()

    def search(self, role: Optional[Role] = None, text: Optional[str] = None, limit: int = 100) -> List[User]:
        query = self.db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        if text:
            pattern = contains_pattern(text)
            query = query.filter(
                or_(
                    func.lower(User.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(User.email).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(User.company_name).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query.order_by(User.created_at.desc(), User.id.desc()).limit(limit).all()

    def unverified_employers(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == Role.EMPLOYER, User.is_verified == False)  # noqa: E712
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def count(self, *criteria) -> int:
        return self.db.query(func.count(User.id)).filter(*criteria).scalar() or 0

    def delete_cascade(self, user: User) -> List[Optional[str]]:
        """
        Delete a user with everything that hangs off it, in one transaction:
        the user's jobs (with their applications and reports), the user's own
        applications, reports and notifications.

        Returns the stored file references that belonged to the user so the
        caller can remove them from storage once the transaction committed.
        """
        files = [user.resume, user.company_logo]
        job_ids = [job_id for (job_id,) in self.db.query(Job.id).filter(Job.posted_by == user.id).all()]

        try:
            if job_ids:
                self.db.query(Application).filter(Application.job_id.in_(job_ids)).delete(synchronize_session=False)
                self.db.query(Report).filter(Report.job_id.in_(job_ids)).delete(synchronize_session=False)
                self.db.query(Job).filter(Job.id.in_(job_ids)).delete(synchronize_session=False)
            self.db.query(Application).filter(Application.user_id == user.id).delete(synchronize_session=False)
            self.db.query(Report).filter(Report.reported_by == user.id).delete(synchronize_session=False)
            self.db.query(Notification).filter(Notification.user_id == user.id).delete(synchronize_session=False)
            # Moderation stamps survive the moderator
            self.db.query(Job).filter(Job.approved_by == user.id).update(
                {Job.approved_by: None}, synchronize_session=False
            )
            self.db.query(Report).filter(Report.reviewed_by == user.id).update(
                {Report.reviewed_by: None}, synchronize_session=False
            )
            self.db.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("user_deleted_cascade", user_id=user.id, jobs_deleted=len(job_ids))
        return files


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
