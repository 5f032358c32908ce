"""
Shared fixtures: in-memory database, eager Celery and a temporary upload dir
"""
import itertools
import os
import tempfile
from datetime import timedelta

# Settings are read at import time, so the environment goes first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SMTP_HOST"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jobboard-uploads-")

import pytest
from fastapi.testclient import TestClient

from jobboard.auth.service import get_password_hash
from jobboard.core.database import Base, SessionLocal, engine
from jobboard.jobs.service import today
from jobboard.main import app
from jobboard.models import Job, JobStatus, Role, User
from jobboard.users.completion import calculate_profile_completion

PASSWORD = "secret123"

COMPLETE_EMPLOYER_PROFILE = {
    "company_name": "Acme Corp",
    "company_website": "https://acme.example",
    "industry": "Software",
    "company_size": "11-50",
    "company_description": "We build rockets and roadrunner traps.",
}

_emails = itertools.count(1)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_user(db):
    """Insert a user directly; returns it detached with its columns loaded"""

    def _create(role=Role.JOBSEEKER, **fields):
        fields.setdefault("name", f"{role.value.title()} {next(_emails)}")
        fields.setdefault("email", f"user{next(_emails)}@example.com")
        fields.setdefault("skills", [])
        fields.setdefault("experience", [])
        fields.setdefault("education", [])
        fields.setdefault("preferred_location", [])
        user = User(role=role, hashed_password=get_password_hash(PASSWORD), **fields)
        user.profile_completion = calculate_profile_completion(user)
        db.add(user)
        db.commit()
        db.refresh(user)
        db.expunge(user)
        return user

    return _create


@pytest.fixture
def create_job(db):
    """Insert a job directly, approved unless told otherwise"""

    def _create(employer, **fields):
        fields.setdefault("title", "Backend Engineer")
        fields.setdefault("description", "Build APIs")
        fields.setdefault("company", employer.company_name or "Acme Corp")
        fields.setdefault("location", "Berlin")
        fields.setdefault("category", "Engineering")
        fields.setdefault("status", JobStatus.APPROVED)
        fields.setdefault("openings", 1)
        fields.setdefault("application_deadline", today() + timedelta(days=30))
        job = Job(posted_by=employer.id, required_skills=[], **fields)
        db.add(job)
        db.commit()
        db.refresh(job)
        db.expunge(job)
        return job

    return _create


@pytest.fixture
def login(client):
    """Log a user in and return bearer headers"""

    def _login(user, password=PASSWORD):
        response = client.post("/api/v1/auth/login", json={"email": user.email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def admin(create_user):
    return create_user(Role.ADMIN, name="Site Admin", is_verified=True)


@pytest.fixture
def seeker(create_user):
    return create_user(Role.JOBSEEKER, name="Sam Seeker", phone="555-0100", resume="resumes/existing.pdf")


@pytest.fixture
def employer(create_user):
    """Verified employer with a complete profile"""
    return create_user(Role.EMPLOYER, name="Erin Employer", is_verified=True, **COMPLETE_EMPLOYER_PROFILE)


@pytest.fixture
def admin_headers(admin, login):
    return login(admin)


@pytest.fixture
def seeker_headers(seeker, login):
    return login(seeker)


@pytest.fixture
def employer_headers(employer, login):
    return login(employer)


@pytest.fixture
def pdf_upload():
    return {"resume": ("cv.pdf", b"%PDF-1.4 test resume", "application/pdf")}
