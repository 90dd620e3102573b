"""
Hirer endpoints.

Account management for hirers, plus the submission log (which talents may
also write to).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_principal, get_db, get_media_storage, require_hirer
from api.routes.v1.identity import add_account_routes
from api.schemas.submissions import CreateSubmission, UpdateSubmission
from api.services import principals as principal_service
from api.services import submissions as submission_service
from core.storage.s3 import S3Storage
from database.models.principals import Hirer, Principal, PrincipalKind

router = APIRouter(prefix="/hirers", tags=["hirers"])

add_account_routes(router, PrincipalKind.HIRER, require_hirer)


@router.put(
    "/update-profile",
    summary="Update Hirer Profile",
    description="Partial update; empty values are ignored. Accepts multipart form data.",
)
async def update_profile(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    device_token: Optional[str] = Form(None, alias="deviceToken"),
    profile_pic: Optional[UploadFile] = File(None, alias="profilePic"),
    hirer: Hirer = Depends(require_hirer),
    db: AsyncSession = Depends(get_db),
    storage: S3Storage = Depends(get_media_storage),
):
    """Update profile fields and optionally replace the profile picture."""
    return await principal_service.update_profile(
        db,
        hirer,
        {
            "name": name,
            "email": email,
            "phone": phone,
            "age": age,
            "country": country,
            "city": city,
            "device_token": device_token,
        },
        {"profile_pic": profile_pic},
        storage,
    )


# ==================== Submissions ==================== #

@router.post(
    "/submit",
    status_code=status.HTTP_201_CREATED,
    summary="Create Submission",
)
async def submit(
    request: CreateSubmission,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Record a submission owned by the caller."""
    return await submission_service.create_submission(
        db, principal, request.subject, request.description
    )


@router.get("/submissions", summary="List Submissions")
async def list_submissions(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """All submissions, newest first."""
    return await submission_service.list_submissions(db)


@router.put("/submissions/{submission_id}", summary="Update Submission")
async def update_submission(
    request: UpdateSubmission,
    submission_id: int = Path(..., description="Submission ID"),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    return await submission_service.update_submission(
        db, principal, submission_id, request.subject, request.description
    )


@router.delete("/submissions/{submission_id}", summary="Delete Submission")
async def delete_submission(
    submission_id: int = Path(..., description="Submission ID"),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    return await submission_service.delete_submission(db, principal, submission_id)


@router.get("/hirer/{owner_id}/submissions", summary="List Owner Submissions")
async def list_owner_submissions(
    owner_id: int = Path(..., description="Owner principal ID"),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """One owner's submissions; the owner or an admin only."""
    return await submission_service.list_owner_submissions(db, principal, owner_id)
