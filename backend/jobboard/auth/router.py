"""
Authentication routes
"""
from fastapi import APIRouter, Depends, status
import structlog

from jobboard.auth.dependencies import get_current_user
from jobboard.auth.service import AuthService, get_auth_service
from jobboard.auth.schemas import (
    AccessTokenResponse,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshTokenRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UserCreate,
    UserSummary,
)
from jobboard.core.config import settings
from jobboard.models import User

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])
logger = structlog.get_logger()

RESET_LINK_SENT = "If an account exists, a password reset link has been sent."


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    auth: AuthService = Depends(get_auth_service),
):
    """Register a new job seeker or employer"""
    user = auth.register(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
    )
    return RegisterResponse(message="User registered successfully", user=UserSummary.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """Authenticate user and return tokens"""
    result = auth.login(credentials.email, credentials.password)
    return LoginResponse(
        access_token=result["access_token"],
        refresh_token=result["refresh_token"],
        expires_in=result["expires_in"],
        user=UserSummary.model_validate(result["user"]),
    )


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh_token(
    token_data: RefreshTokenRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """Issue a new access token for a stored refresh token"""
    return AccessTokenResponse(
        access_token=auth.refresh(token_data.refresh_token),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    """Revoke the stored refresh token"""
    auth.logout(current_user)
    return MessageResponse(message="Logged out successfully")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    payload: ForgotPasswordRequest,
    auth: AuthService = Depends(get_auth_service),
):
    auth.forgot_password(payload.email)
    return MessageResponse(message=RESET_LINK_SENT)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    payload: ResetPasswordRequest,
    auth: AuthService = Depends(get_auth_service),
):
    auth.reset_password(payload.token, payload.new_password)
    return MessageResponse(message="Password reset successfully")


@router.get("/me", response_model=UserSummary)
def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """Get current user information"""
    return UserSummary.model_validate(current_user)
