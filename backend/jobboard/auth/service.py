"""
Authentication service layer
"""
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from fastapi import Depends
from jose import JWTError, jwt
from passlib.context import CryptContext
import structlog

from jobboard.core.config import settings
from jobboard.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)
from jobboard.models import Role, User
from jobboard.notifications import templates
from jobboard.notifications.service import dispatch_email
from jobboard.users.completion import refresh_profile_completion
from jobboard.users.repository import UserRepository, get_user_repository

logger = structlog.get_logger()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

ACCESS = "access"
REFRESH = "refresh"
RESET = "reset"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def _encode(claims: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    to_encode = claims.copy()
    to_encode.update({"exp": datetime.utcnow() + expires_delta, "type": token_type})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    return _encode(
        {"sub": str(user.id), "email": user.email, "role": user.role.value},
        ACCESS,
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(user: User) -> str:
    """Create JWT refresh token"""
    return _encode({"sub": str(user.id)}, REFRESH, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def create_reset_token(user: User) -> str:
    """Create single-use password reset token"""
    return _encode({"sub": str(user.id)}, RESET, timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES))


def decode_token(token: str, expected_type: str = ACCESS) -> int:
    """Verify signature, expiry and token type; returns the user id"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid token")

    if payload.get("type") != expected_type:
        raise AuthenticationError("Invalid token type")

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token")


class AuthService:
    """Registration, login and password lifecycle"""

    def __init__(self, users: UserRepository):
        self.users = users

    def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        user = self.users.get_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def register(self, name: str, email: str, password: str, role: Role = Role.JOBSEEKER) -> User:
        if role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be self-registered")
        if self.users.get_by_email(email):
            raise ConflictError("User already exists", details={"email": email})

        user = User(
            name=name,
            email=email.lower(),
            hashed_password=get_password_hash(password),
            role=role,
            is_verified=False,
            skills=[],
            experience=[],
            education=[],
            preferred_location=[],
        )
        refresh_profile_completion(user)
        user = self.users.add(user)

        logger.info("user_registered", user_id=user.id, role=role.value)
        dispatch_email(user.email, "Welcome to Job Board", templates.welcome(user.name, role.value))
        return user

    def login(self, email: str, password: str) -> Dict[str, Any]:
        existing = self.users.get_by_email(email)
        if existing and existing.is_blocked:
            raise AuthorizationError("Your account has been blocked. Please contact support.")

        user = self.authenticate_user(email, password)
        if not user:
            logger.warning("failed_login_attempt", email=email)
            raise AuthenticationError("Invalid credentials")

        access_token = create_access_token(user)
        refresh_token = create_refresh_token(user)
        user.refresh_token = refresh_token
        self.users.save(user)

        logger.info("user_logged_in", user_id=user.id)
        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": user,
        }

    def refresh(self, refresh_token: str) -> str:
        try:
            user_id = decode_token(refresh_token, REFRESH)
        except AuthenticationError:
            raise AuthenticationError("Invalid or expired refresh token")

        user = self.users.get(user_id)
        if not user or user.refresh_token != refresh_token:
            raise AuthenticationError("Invalid refresh token")
        if user.is_blocked:
            raise AuthenticationError("Invalid refresh token")
        return create_access_token(user)

    def logout(self, user: User):
        user.refresh_token = None
        self.users.save(user)
        logger.info("user_logged_out", user_id=user.id)

    def forgot_password(self, email: str):
        user = self.users.get_by_email(email)
        if not user:
            # Same response either way
            logger.info("password_reset_unknown_email")
            return

        token = create_reset_token(user)
        user.reset_password_token = token
        user.reset_password_expires = datetime.utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
        self.users.save(user)

        reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
        dispatch_email(user.email, "Password Reset Request", templates.password_reset(user.name, reset_url))
        logger.info("password_reset_requested", user_id=user.id)

    def reset_password(self, token: str, new_password: str):
        try:
            user_id = decode_token(token, RESET)
        except AuthenticationError:
            raise ValidationError("Invalid or expired token")

        user = self.users.get(user_id)
        if (
            not user
            or user.reset_password_token != token
            or user.reset_password_expires is None
            or user.reset_password_expires < datetime.utcnow()
        ):
            raise ValidationError("Invalid or expired token")

        user.hashed_password = get_password_hash(new_password)
        user.reset_password_token = None
        user.reset_password_expires = None
        # Existing sessions end with the old password
        user.refresh_token = None
        self.users.save(user)

        dispatch_email(user.email, "Password Reset Successful", templates.password_reset_done(user.name))
        logger.info("password_reset_completed", user_id=user.id)


def get_auth_service(users: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(users)
