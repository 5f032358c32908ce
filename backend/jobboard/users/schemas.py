"""
Profile Pydantic schemas
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from datetime import date, datetime

from jobboard.models import Role


class ExperienceEntry(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


class EducationEntry(BaseModel):
    degree: Optional[str] = None
    institution: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    grade: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile; omitted fields are left alone"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = None
    location: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[List[ExperienceEntry]] = None
    education: Optional[List[EducationEntry]] = None
    preferred_location: Optional[List[str]] = None
    expected_salary: Optional[str] = None
    company_name: Optional[str] = None
    company_website: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    company_description: Optional[str] = None
    tax_id: Optional[str] = None


class ProfileResponse(BaseModel):
    """Own profile, without credentials"""
    id: int
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    location: Optional[str] = None
    profile_pic: Optional[str] = None
    is_verified: bool
    is_blocked: bool
    resume: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[List[Dict[str, Any]]] = None
    education: Optional[List[Dict[str, Any]]] = None
    preferred_location: Optional[List[str]] = None
    expected_salary: Optional[str] = None
    company_name: Optional[str] = None
    company_website: Optional[str] = None
    company_logo: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    company_description: Optional[str] = None
    tax_id: Optional[str] = None
    profile_completion: int
    created_at: datetime

    class Config:
        from_attributes = True


class PublicProfileResponse(BaseModel):
    """Profile as seen by other users"""
    id: int
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    location: Optional[str] = None
    is_verified: bool
    resume: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[List[Dict[str, Any]]] = None
    education: Optional[List[Dict[str, Any]]] = None
    company_name: Optional[str] = None
    company_website: Optional[str] = None
    company_logo: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    company_description: Optional[str] = None
    profile_completion: int

    class Config:
        from_attributes = True


class ProfileUpdateResponse(BaseModel):
    message: str
    user: ProfileResponse
    requires_admin_review: bool


class ResumeUploadResponse(BaseModel):
    message: str
    resume: str
    profile_completion: int


class LogoUploadResponse(BaseModel):
    message: str
    logo: str
    profile_completion: int


class VerificationRequestResponse(BaseModel):
    message: str
    profile_completion: int
