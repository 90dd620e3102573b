"""Talent endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_db, get_media_storage, require_hirer, require_talent
from api.routes.v1.identity import add_account_routes
from api.services import principals as principal_service
from core.storage.s3 import S3Storage
from database.models.principals import Hirer, PrincipalKind, Talent

router = APIRouter(prefix="/talents", tags=["talents"])

add_account_routes(router, PrincipalKind.TALENT, require_talent)


@router.put(
    "/update-profile",
    summary="Update Talent Profile",
    description=(
        "Partial update; empty values are ignored. Accepts multipart form data "
        "with optional front, left, right and profilePic images and a video."
    ),
)
async def update_profile(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    height: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    body_type: Optional[str] = Form(None, alias="bodyType"),
    skin_tone: Optional[str] = Form(None, alias="skinTone"),
    language: Optional[str] = Form(None),
    skills: Optional[list[str]] = Form(None),
    makeover_needed: Optional[str] = Form(None, alias="makeoverNeeded"),
    willing_to_work_as_extra: Optional[str] = Form(None, alias="willingToWorkAsExtra"),
    about_yourself: Optional[str] = Form(None, alias="aboutYourself"),
    device_token: Optional[str] = Form(None, alias="deviceToken"),
    front: Optional[UploadFile] = File(None),
    left: Optional[UploadFile] = File(None),
    right: Optional[UploadFile] = File(None),
    profile_pic: Optional[UploadFile] = File(None, alias="profilePic"),
    video: Optional[UploadFile] = File(None),
    talent: Talent = Depends(require_talent),
    db: AsyncSession = Depends(get_db),
    storage: S3Storage = Depends(get_media_storage),
):
    """Update profile fields and replace any uploaded images or video."""
    return await principal_service.update_profile(
        db,
        talent,
        {
            "name": name,
            "email": email,
            "phone": phone,
            "age": age,
            "height": height,
            "weight": weight,
            "body_type": body_type,
            "skin_tone": skin_tone,
            "language": language,
            "skills": skills,
            "makeover_needed": makeover_needed,
            "willing_to_work_as_extra": willing_to_work_as_extra,
            "about_yourself": about_yourself,
            "device_token": device_token,
        },
        {
            "front": front,
            "left": left,
            "right": right,
            "profile_pic": profile_pic,
            "video": video,
        },
        storage,
    )


@router.get(
    "/all-talents",
    summary="List Talents",
    description="Talents with complete profiles. Contact details only after an accepted request.",
)
async def all_talents(
    hirer: Hirer = Depends(require_hirer),
    db: AsyncSession = Depends(get_db),
):
    return await principal_service.list_talents(db, hirer)
