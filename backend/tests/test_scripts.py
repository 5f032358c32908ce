"""
Admin bootstrap scripts
"""
from jobboard.core.config import settings
from jobboard.models import Role, User
from jobboard.users.completion import BASE_SCORE
from scripts.create_admin import create_or_promote
from scripts.init_db import create_admin_user

from conftest import COMPLETE_EMPLOYER_PROFILE, PASSWORD


def test_init_db_admin_keeps_base_completion(client, db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", PASSWORD)
    create_admin_user(db)

    admin = db.query(User).filter(User.email == settings.ADMIN_EMAIL.lower()).one()
    assert admin.role == Role.ADMIN
    assert admin.profile_completion == BASE_SCORE

    response = client.post("/api/v1/auth/login", json={"email": settings.ADMIN_EMAIL, "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["user"]["profile_completion"] == BASE_SCORE


def test_init_db_skips_admin_without_password(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", None)
    create_admin_user(db)
    assert db.query(User).count() == 0


def test_create_admin_new_account(db):
    admin = create_or_promote(db, "Root@Example.com", PASSWORD, "Root")
    assert admin.email == "root@example.com"
    assert admin.is_verified is True
    assert admin.profile_completion == BASE_SCORE


def test_promoted_employer_drops_to_base_completion(db, create_user):
    employer = create_user(Role.EMPLOYER, is_blocked=True, **COMPLETE_EMPLOYER_PROFILE)
    assert employer.profile_completion == 100

    promoted = create_or_promote(db, employer.email, "newpass1", "ignored")
    assert promoted.id == employer.id
    assert promoted.role == Role.ADMIN
    assert promoted.is_blocked is False
    assert promoted.profile_completion == BASE_SCORE
