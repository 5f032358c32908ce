"""
Registration, login, token refresh and password reset
"""
import pytest

from jobboard.auth.service import RESET, create_access_token, create_reset_token, decode_token
from jobboard.core.config import settings
from jobboard.models import Role, User
from jobboard.core.exceptions import AuthenticationError

from conftest import PASSWORD


def register(client, **overrides):
    payload = {"name": "Alice", "email": "alice@example.com", "password": "secret123"}
    payload.update(overrides)
    return client.post("/api/v1/auth/register", json=payload)


def test_register_defaults_to_jobseeker(client):
    response = register(client)
    assert response.status_code == 201
    user = response.json()["user"]
    assert user["role"] == "jobseeker"
    assert user["is_verified"] is False
    assert user["profile_completion"] == 20
    assert "hashed_password" not in user


def test_register_employer(client):
    response = register(client, role="employer", email="boss@example.com")
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "employer"


def test_register_rejects_admin_role(client):
    response = register(client, role="admin")
    assert response.status_code == 400
    assert response.json()["error"]["type"] == "ValidationError"


def test_register_duplicate_email_is_conflict(client):
    assert register(client).status_code == 201
    response = register(client, email="ALICE@example.com")
    assert response.status_code == 400
    assert response.json()["error"]["type"] == "ConflictError"
    assert response.json()["error"]["message"] == "User already exists"


def test_register_validates_payload(client):
    response = register(client, email="not-an-email", password="123")
    assert response.status_code == 400
    body = response.json()["error"]
    assert body["type"] == "ValidationError"
    fields = {error["field"] for error in body["details"]["errors"]}
    assert "body.email" in fields
    assert "body.password" in fields


def test_login_returns_token_pair(client, seeker):
    response = client.post("/api/v1/auth/login", json={"email": seeker.email, "password": PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 3600
    assert body["user"]["id"] == seeker.id
    assert decode_token(body["access_token"]) == seeker.id


def test_login_is_case_insensitive_on_email(client, seeker):
    response = client.post("/api/v1/auth/login", json={"email": seeker.email.upper(), "password": PASSWORD})
    assert response.status_code == 200


def test_login_bad_credentials(client, seeker):
    wrong_password = client.post("/api/v1/auth/login", json={"email": seeker.email, "password": "nope"})
    unknown = client.post("/api/v1/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert wrong_password.status_code == 401
    assert unknown.status_code == 401
    assert wrong_password.json()["error"]["message"] == "Invalid credentials"


def test_blocked_user_cannot_log_in(client, create_user):
    user = create_user(Role.JOBSEEKER, is_blocked=True)
    response = client.post("/api/v1/auth/login", json={"email": user.email, "password": PASSWORD})
    assert response.status_code == 403
    assert response.json()["error"]["type"] == "AuthorizationError"


def test_bootstrap_admin_can_log_in(client, create_user):
    admin = create_user(Role.ADMIN, email=settings.ADMIN_EMAIL, is_verified=True)
    response = client.post("/api/v1/auth/login", json={"email": settings.ADMIN_EMAIL, "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == admin.id


def test_login_accepts_addresses_on_internal_domains(client, create_user):
    user = create_user(Role.ADMIN, email="ops@jobboard.local")
    response = client.post("/api/v1/auth/login", json={"email": user.email, "password": PASSWORD})
    assert response.status_code == 200

    reset = client.post("/api/v1/auth/forgot-password", json={"email": user.email})
    assert reset.status_code == 200


def test_me_requires_token(client):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Access denied. No token provided."


def test_me_rejects_garbage_token(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_me_returns_current_user(client, seeker, seeker_headers):
    response = client.get("/api/v1/auth/me", headers=seeker_headers)
    assert response.status_code == 200
    assert response.json()["email"] == seeker.email


def test_token_for_deleted_user_is_rejected(client, db, seeker):
    token = create_access_token(seeker)
    db.query(User).filter(User.id == seeker.id).delete()
    db.commit()
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_blocked_user_token_gets_403(client, db, seeker, seeker_headers):
    db.query(User).filter(User.id == seeker.id).update({User.is_blocked: True})
    db.commit()
    response = client.get("/api/v1/profile", headers=seeker_headers)
    assert response.status_code == 403


def test_refresh_and_logout(client, seeker):
    login = client.post("/api/v1/auth/login", json={"email": seeker.email, "password": PASSWORD}).json()
    headers = {"Authorization": f"Bearer {login['access_token']}"}

    refreshed = client.post("/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})
    assert refreshed.status_code == 200
    assert decode_token(refreshed.json()["access_token"]) == seeker.id

    assert client.post("/api/v1/auth/logout", headers=headers).status_code == 200

    revoked = client.post("/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})
    assert revoked.status_code == 401


def test_access_token_cannot_be_used_as_refresh_token(client, seeker):
    login = client.post("/api/v1/auth/login", json={"email": seeker.email, "password": PASSWORD}).json()
    response = client.post("/api/v1/auth/refresh", json={"refresh_token": login["access_token"]})
    assert response.status_code == 401


def test_forgot_password_same_answer_for_unknown_email(client, seeker):
    known = client.post("/api/v1/auth/forgot-password", json={"email": seeker.email})
    unknown = client.post("/api/v1/auth/forgot-password", json={"email": "ghost@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json()["message"] == unknown.json()["message"]


def test_reset_password_flow(client, db, seeker):
    client.post("/api/v1/auth/forgot-password", json={"email": seeker.email})
    token = db.query(User).filter(User.id == seeker.id).one().reset_password_token
    assert decode_token(token, RESET) == seeker.id

    response = client.post("/api/v1/auth/reset-password", json={"token": token, "new_password": "brandnew1"})
    assert response.status_code == 200

    old = client.post("/api/v1/auth/login", json={"email": seeker.email, "password": PASSWORD})
    new = client.post("/api/v1/auth/login", json={"email": seeker.email, "password": "brandnew1"})
    assert old.status_code == 401
    assert new.status_code == 200

    # Single use
    again = client.post("/api/v1/auth/reset-password", json={"token": token, "new_password": "another1"})
    assert again.status_code == 400


def test_reset_password_rejects_unissued_token(client, seeker):
    # Validly signed but never stored on the user
    token = create_reset_token(seeker)
    response = client.post("/api/v1/auth/reset-password", json={"token": token, "new_password": "brandnew1"})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid or expired token"


def test_decode_token_checks_type(seeker):
    with pytest.raises(AuthenticationError, match="Invalid token type"):
        decode_token(create_reset_token(seeker))
