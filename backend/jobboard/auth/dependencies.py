"""
Authentication dependencies for FastAPI routes

A protected route runs three stages in order: ``get_current_user``
(authenticate), ``require_capability`` (authorize), then the handler.
"""
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import structlog

from jobboard.auth.permissions import has_capability, roles_for
from jobboard.auth.service import ACCESS, decode_token
from jobboard.core.exceptions import AuthenticationError, AuthorizationError
from jobboard.models import User
from jobboard.users.repository import UserRepository, get_user_repository

logger = structlog.get_logger()

bearer_scheme = HTTPBearer(auto_error=False)


def resolve_user(token: Optional[str], users: UserRepository) -> User:
    """Token to user; raises on a missing/invalid token, unknown or blocked user"""
    if not token:
        raise AuthenticationError("Access denied. No token provided.")

    user_id = decode_token(token, ACCESS)
    user = users.get(user_id)
    if user is None:
        raise AuthenticationError("User not found")

    if user.is_blocked:
        raise AuthorizationError("Your account has been blocked. Please contact support.")

    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Get current authenticated user from JWT token
    """
    token = credentials.credentials if credentials else None
    return resolve_user(token, users)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> Optional[User]:
    """Authenticated user if the token checks out, otherwise anonymous"""
    if not credentials:
        return None
    try:
        return resolve_user(credentials.credentials, users)
    except (AuthenticationError, AuthorizationError):
        return None


def get_user_from_header_or_query(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token: Optional[str] = Query(None),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """Like get_current_user, but also accepts ?token= for direct download links"""
    raw = credentials.credentials if credentials else token
    return resolve_user(raw, users)


def require_capability(capability: str):
    """
    Dependency factory for role-based access control
    Usage: current_user: User = Depends(require_capability("jobs:create"))
    """
    def capability_checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_capability(current_user.role, capability):
            required = sorted(role.value for role in roles_for(capability))
            logger.warning(
                "unauthorized_access_attempt",
                user_id=current_user.id,
                capability=capability,
                user_role=current_user.role.value,
            )
            raise AuthorizationError(
                "Access forbidden. Insufficient permissions.",
                details={"capability": capability, "required_roles": required},
            )
        return current_user

    return capability_checker
