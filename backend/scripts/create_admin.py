"""
Create an admin account, or promote an existing user to admin

Usage:
    python scripts/create_admin.py --email admin@example.com --password secret --name "Site Admin"
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from jobboard.core.database import SessionLocal, init_db
from jobboard.core.logging_config import configure_logging
from jobboard.models import Role, User
from jobboard.auth.service import get_password_hash
from jobboard.users.completion import refresh_profile_completion
import structlog

logger = structlog.get_logger()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create or promote a job board admin")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", default="Admin")
    return parser.parse_args(argv)


def create_or_promote(db: Session, email: str, password: str, name: str) -> User:
    email = email.lower()
    user = db.query(User).filter(User.email == email).first()

    if user:
        user.role = Role.ADMIN
        user.is_verified = True
        user.is_blocked = False
        user.hashed_password = get_password_hash(password)
        logger.info("admin_user_promoted", email=email, user_id=user.id)
    else:
        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(password),
            role=Role.ADMIN,
            is_verified=True,
        )
        db.add(user)
        logger.info("admin_user_created", email=email)

    # Company or seeker fields no longer count once the role is admin
    refresh_profile_completion(user)

    db.commit()
    db.refresh(user)
    return user


def main(argv=None):
    configure_logging()
    args = parse_args(argv)

    if len(args.password) < 6:
        print("Password must be at least 6 characters", file=sys.stderr)
        sys.exit(1)

    init_db()
    db: Session = SessionLocal()
    try:
        user = create_or_promote(db, args.email, args.password, args.name)
        print(f"Admin ready: {user.email} (id={user.id})")
    except Exception as e:
        logger.error("create_admin_failed", error=str(e))
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
