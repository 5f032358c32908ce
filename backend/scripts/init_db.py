"""
Initialize database tables and the bootstrap admin user
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from jobboard.core.config import settings
from jobboard.core.database import SessionLocal, init_db
from jobboard.core.logging_config import configure_logging
from jobboard.core.storage import storage
from jobboard.models import Role, User
from jobboard.auth.service import get_password_hash
from jobboard.users.completion import refresh_profile_completion
import structlog

logger = structlog.get_logger()


def create_admin_user(db: Session):
    """Create the admin account configured in settings"""
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.info("admin_bootstrap_skipped", reason="ADMIN_EMAIL or ADMIN_PASSWORD not set")
        return

    admin_email = settings.ADMIN_EMAIL.lower()
    existing = db.query(User).filter(User.email == admin_email).first()
    if existing:
        logger.info("admin_user_exists", email=admin_email)
        return

    admin_user = User(
        name=settings.ADMIN_NAME,
        email=admin_email,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role=Role.ADMIN,
        is_verified=True,
    )
    refresh_profile_completion(admin_user)
    db.add(admin_user)
    db.commit()

    logger.info("admin_user_created", email=admin_email)


def main():
    """Main initialization function"""
    configure_logging()
    logger.info("initializing_database")

    # Initialize database tables
    init_db()
    storage.ensure_dirs()

    db: Session = SessionLocal()
    try:
        create_admin_user(db)
        logger.info("database_initialization_complete")
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
