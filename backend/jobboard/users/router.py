"""
Profile routes
"""
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse
import structlog

from jobboard.auth.dependencies import get_user_from_header_or_query, require_capability
from jobboard.models import User
from jobboard.users.schemas import (
    LogoUploadResponse,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    PublicProfileResponse,
    ResumeUploadResponse,
    VerificationRequestResponse,
)
from jobboard.users.service import ProfileService, get_profile_service

router = APIRouter(prefix="/api/v1", tags=["Profiles"])
logger = structlog.get_logger()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: User = Depends(require_capability("profile:read")),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Own profile with a recomputed completion score"""
    return ProfileResponse.model_validate(profiles.read_own(current_user))


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    changes: ProfileUpdate,
    current_user: User = Depends(require_capability("profile:write")),
    profiles: ProfileService = Depends(get_profile_service),
):
    user, requires_review = profiles.update(current_user, changes)
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=ProfileResponse.model_validate(user),
        requires_admin_review=requires_review,
    )


@router.post("/profile/resume", response_model=ResumeUploadResponse)
def upload_resume(
    resume: UploadFile = File(...),
    current_user: User = Depends(require_capability("profile:resume:upload")),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Upload or replace the seeker's resume (PDF, DOC, DOCX; 5MB max)"""
    user = profiles.upload_resume(current_user, resume)
    return ResumeUploadResponse(
        message="Resume uploaded successfully",
        resume=user.resume,
        profile_completion=user.profile_completion,
    )


@router.post("/profile/logo", response_model=LogoUploadResponse)
def upload_logo(
    logo: UploadFile = File(...),
    current_user: User = Depends(require_capability("profile:logo:upload")),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Upload or replace the employer's company logo"""
    user = profiles.upload_logo(current_user, logo)
    return LogoUploadResponse(
        message="Logo uploaded successfully",
        logo=user.company_logo,
        profile_completion=user.profile_completion,
    )


@router.get("/users/{user_id}/profile", response_model=PublicProfileResponse)
def get_user_profile(
    user_id: int,
    current_user: User = Depends(require_capability("users:profile:read")),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Another user's profile; seeker profiles are limited to employers and admins"""
    return PublicProfileResponse.model_validate(profiles.view_profile(current_user, user_id))


@router.get("/resume/{user_id}")
def download_resume(
    user_id: int,
    current_user: User = Depends(get_user_from_header_or_query),
    profiles: ProfileService = Depends(get_profile_service),
):
    """
    Serve a resume to its owner, any employer or any admin.
    The token may come from the Authorization header or ?token= so the
    frontend can open the file in a new tab.
    """
    path, content_type = profiles.resume_for(current_user, user_id)
    logger.info("resume_served", user_id=user_id, viewer_id=current_user.id)
    return FileResponse(
        path,
        media_type=content_type,
        headers={
            "Content-Disposition": f'inline; filename="{path.name}"',
            "Cache-Control": "no-store",
            "Content-Length": str(path.stat().st_size),
        },
    )


@router.post("/employer/request-verification", response_model=VerificationRequestResponse)
def request_verification(
    current_user: User = Depends(require_capability("employer:verification:request")),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Ask the admins to verify a completed employer profile"""
    message, completion = profiles.request_verification(current_user)
    return VerificationRequestResponse(message=message, profile_completion=completion)
