"""
Authentication Pydantic schemas
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

from jobboard.models import Role


class UserCreate(BaseModel):
    """Registration schema"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.JOBSEEKER


class UserSummary(BaseModel):
    """User summary returned by auth endpoints"""
    id: int
    name: str
    email: str
    role: Role
    is_verified: bool
    profile_completion: int
    created_at: datetime

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    message: str
    user: UserSummary


class LoginRequest(BaseModel):
    """Login request schema"""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Token pair plus the logged in user"""
    message: str = "Login successful"
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserSummary


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema"""
    refresh_token: str


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str = Field(..., min_length=6)


class MessageResponse(BaseModel):
    message: str
    detail: Optional[str] = None
