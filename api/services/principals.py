"""Identity service functions shared by the hirer and talent endpoints."""

import logging
from datetime import timedelta
from typing import Any, Optional

from fastapi import UploadFile
from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.principals import RegisterRequest
from api.services.media import MEDIA_SLOTS_BY_KIND, media_url, replace_media
from core.config import settings
from core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from core.integrations.mailer import MailDispatcher
from core.security import (
    create_access_token,
    generate_otp,
    generate_reset_token,
    hash_password,
    hash_token,
    otp_matches,
    verify_password,
)
from core.storage.s3 import S3Storage
from core.utils.datetime import add_minutes, is_past, now
from database.models.hiring_requests import HiringRequest, HiringStatus
from database.models.principals import (
    MODEL_BY_KIND,
    ROLES_BY_KIND,
    BodyType,
    Principal,
    PrincipalKind,
    SkinTone,
    Talent,
    TalentSkill,
)

logger = logging.getLogger(__name__)

HIRER_PROFILE_FIELDS = ("name", "email", "phone", "age", "country", "city", "device_token")
TALENT_PROFILE_FIELDS = (
    "name", "email", "phone", "age", "height", "weight", "body_type",
    "skin_tone", "language", "skills", "makeover_needed",
    "willing_to_work_as_extra", "about_yourself", "device_token",
)
PROFILE_FIELDS_BY_KIND = {
    PrincipalKind.HIRER: HIRER_PROFILE_FIELDS,
    PrincipalKind.TALENT: TALENT_PROFILE_FIELDS,
}

_email_adapter = TypeAdapter(EmailStr)


def issue_token(principal: Principal) -> str:
    return create_access_token(
        subject_id=principal.id,
        kind=principal.kind,
        role=principal.role,
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(days=settings.access_token_expire_days),
    )


async def find_by_email(
    session: AsyncSession, kind: PrincipalKind, email: str
) -> Optional[Principal]:
    model = MODEL_BY_KIND[kind]
    result = await session.execute(select(model).where(model.email == email.lower()))
    return result.scalar_one_or_none()


def serialize_profile(principal: Principal) -> dict[str, Any]:
    """Own profile without password hash, OTP, reset token or storage keys."""
    profile = {
        "id": principal.id,
        "kind": principal.kind,
        "name": principal.name,
        "email": principal.email,
        "phone": principal.phone,
        "gender": principal.gender,
        "role": principal.role,
        "age": principal.age,
        "is_verified": principal.is_verified,
        "device_token": principal.device_token,
        "profile_pic": principal.profile_pic_url,
        "created_at": principal.created_at,
        "updated_at": principal.updated_at,
    }
    if principal.kind == PrincipalKind.HIRER.value:
        profile.update(country=principal.country, city=principal.city)
    else:
        profile.update(
            height=principal.height,
            weight=principal.weight,
            body_type=principal.body_type,
            skin_tone=principal.skin_tone,
            language=principal.language,
            skills=principal.skills or [],
            images={
                slot: media_url(principal, slot)
                for slot in MEDIA_SLOTS_BY_KIND[PrincipalKind.TALENT]
                if slot != "video"
            },
            video=principal.video_url,
            about_yourself=principal.about_yourself or "",
            makeover_needed=bool(principal.makeover_needed),
            willing_to_work_as_extra=bool(principal.willing_to_work_as_extra),
        )
    return profile


# ==================== Registration & verification ==================== #

async def register(
    session: AsyncSession,
    kind: PrincipalKind,
    data: RegisterRequest,
    mailer: MailDispatcher,
) -> dict[str, Any]:
    """Create an unverified principal, or overwrite an unverified one, and email an OTP."""
    allowed_roles = {role.value for role in ROLES_BY_KIND[kind]}
    if data.role not in allowed_roles:
        raise BadRequestError(
            f"Invalid role for {kind.value}. Allowed: {', '.join(sorted(allowed_roles))}"
        )

    existing = await find_by_email(session, kind, data.email)
    if existing is not None and existing.is_verified:
        raise ConflictError("Email already registered")

    otp = generate_otp()
    fields = {
        "name": data.name,
        "phone": data.phone,
        "gender": data.gender.value,
        "role": data.role,
        "password_hash": hash_password(data.password),
        "otp": otp,
        "otp_expires_at": add_minutes(now(), settings.otp_expire_minutes),
        "is_verified": False,
        "device_token": data.device_token,
    }

    if existing is not None:
        # Re-registration over an unverified record keeps its id
        principal = existing
        for field, value in fields.items():
            setattr(principal, field, value)
    else:
        principal = MODEL_BY_KIND[kind](email=data.email, **fields)
        session.add(principal)

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError("Email already registered") from e

    logger.info(f"Registered {kind.value} {principal.id} (awaiting OTP)")
    await mailer.send_otp(principal.email, otp, settings.otp_expire_minutes)

    return {
        "message": "OTP sent to email. Please verify to complete registration.",
        "user_id": principal.id,
        "token": issue_token(principal),
    }


async def verify_otp(session: AsyncSession, principal: Principal, otp: str) -> dict[str, Any]:
    """Mark the caller verified if the OTP matches and has not expired."""
    if is_past(principal.otp_expires_at) or not otp_matches(principal.otp, otp):
        raise UnauthorizedError("Invalid or expired OTP")

    principal.otp = None
    principal.otp_expires_at = None
    principal.is_verified = True
    await session.commit()

    logger.info(f"{principal.kind} {principal.id} verified")
    return {
        **principal.public_summary(),
        "token": issue_token(principal),
        "message": "OTP verified successfully",
    }


async def resend_otp(
    session: AsyncSession, principal: Principal, mailer: MailDispatcher
) -> dict[str, Any]:
    if principal.is_verified:
        raise BadRequestError(f"{principal.kind} is already verified")

    otp = generate_otp()
    principal.otp = otp
    principal.otp_expires_at = add_minutes(now(), settings.otp_expire_minutes)
    await session.commit()

    await mailer.send_otp(principal.email, otp, settings.otp_expire_minutes)
    return {"message": "New OTP sent to email"}


# ==================== Login & password reset ==================== #

async def login(
    session: AsyncSession,
    kind: PrincipalKind,
    email: str,
    password: str,
    device_token: Optional[str] = None,
) -> dict[str, Any]:
    principal = await find_by_email(session, kind, email)
    if principal is None or not verify_password(password, principal.password_hash):
        raise UnauthorizedError("Invalid email or password")

    if not principal.is_verified:
        raise ForbiddenError("Please verify your OTP before logging in")

    if device_token:
        principal.device_token = device_token
        await session.commit()

    logger.info(f"{kind.value} {principal.id} logged in")
    return {**principal.public_summary(), "token": issue_token(principal)}


async def forgot_password(
    session: AsyncSession,
    kind: PrincipalKind,
    email: str,
    mailer: MailDispatcher,
) -> dict[str, Any]:
    """Store a hashed reset token and email the plain one."""
    principal = await find_by_email(session, kind, email)
    if principal is None:
        raise NotFoundError("User not found")

    token = generate_reset_token()
    principal.reset_token_hash = hash_token(token)
    principal.reset_token_expires_at = add_minutes(now(), settings.reset_token_expire_minutes)
    await session.commit()

    await mailer.send_password_reset(principal.email, token, settings.reset_token_expire_minutes)
    return {"message": "Reset code sent to email"}


async def reset_password(
    session: AsyncSession,
    kind: PrincipalKind,
    token: str,
    new_password: str,
) -> dict[str, Any]:
    model = MODEL_BY_KIND[kind]
    result = await session.execute(
        select(model).where(model.reset_token_hash == hash_token(token))
    )
    principal = result.scalar_one_or_none()
    if principal is None or is_past(principal.reset_token_expires_at):
        raise BadRequestError("Invalid or expired reset token")

    principal.password_hash = hash_password(new_password)
    principal.reset_token_hash = None
    principal.reset_token_expires_at = None
    await session.commit()

    logger.info(f"{kind.value} {principal.id} reset their password")
    return {"message": "Password reset successfully"}


# ==================== Profile ==================== #

def get_profile(principal: Principal) -> dict[str, Any]:
    return {"message": "Profile retrieved successfully", "profile": serialize_profile(principal)}


def _parse_bool(field: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise BadRequestError(f"{field} must be true or false")


def _parse_choice(field: str, value: str, choices) -> str:
    allowed = {choice.value for choice in choices}
    if value not in allowed:
        raise BadRequestError(f"Invalid {field}. Allowed: {', '.join(sorted(allowed))}")
    return value


def _parse_skills(values: list[str]) -> list[str]:
    # Accept repeated form fields as well as one comma separated value
    skills = [part.strip() for value in values for part in value.split(",") if part.strip()]
    for skill in skills:
        _parse_choice("skill", skill, TalentSkill)
    return list(dict.fromkeys(skills))


def clean_profile_fields(kind: PrincipalKind, raw: dict[str, Any]) -> dict[str, Any]:
    """
    Drop empty values and convert form strings to column values.

    Raises:
        BadRequestError: For unparseable numbers, booleans or enum values
    """
    fields: dict[str, Any] = {}
    for field in PROFILE_FIELDS_BY_KIND[kind]:
        value = raw.get(field)
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "" or value == []:
            continue

        if field == "age":
            try:
                value = int(value)
            except ValueError:
                raise BadRequestError("age must be a whole number")
            if value < 0:
                raise BadRequestError("age must be a whole number")
        elif field == "email":
            try:
                value = _email_adapter.validate_python(value).lower()
            except ValidationError:
                raise BadRequestError("Invalid email address")
        elif field == "body_type":
            value = _parse_choice(field, value, BodyType)
        elif field == "skin_tone":
            value = _parse_choice(field, value, SkinTone)
        elif field == "skills":
            value = _parse_skills(value)
            if not value:
                continue
        elif field in ("makeover_needed", "willing_to_work_as_extra"):
            value = _parse_bool(field, value)

        fields[field] = value
    return fields


async def update_profile(
    session: AsyncSession,
    principal: Principal,
    raw_fields: dict[str, Any],
    uploads: dict[str, UploadFile],
    storage: S3Storage,
) -> dict[str, Any]:
    """Partially update the caller's profile and replace any uploaded media."""
    kind = PrincipalKind(principal.kind)
    fields = clean_profile_fields(kind, raw_fields)
    uploads = {
        slot: upload for slot, upload in uploads.items()
        if upload is not None and upload.filename and slot in MEDIA_SLOTS_BY_KIND[kind]
    }

    if not fields and not uploads:
        raise BadRequestError("At least one field, image, or video must be provided for update")

    new_email = fields.get("email")
    if new_email and new_email != principal.email:
        other = await find_by_email(session, kind, new_email)
        if other is not None and other.id != principal.id:
            raise ConflictError("Email already in use")

    if uploads:
        await replace_media(storage, principal, uploads)

    for field, value in fields.items():
        setattr(principal, field, value)

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError("Email already in use") from e

    await session.refresh(principal)
    logger.info(
        f"Updated {kind.value} {principal.id} profile: "
        f"{sorted(fields)} media={sorted(uploads)}"
    )
    return {"message": "Profile updated successfully", "profile": serialize_profile(principal)}


# ==================== Talent directory ==================== #

def _present(column):
    return and_(column.is_not(None), column != "")


COMPLETE_TALENT_CRITERIA = (
    _present(Talent.name),
    _present(Talent.role),
    _present(Talent.gender),
    Talent.age.is_not(None),
    _present(Talent.height),
    _present(Talent.weight),
    _present(Talent.body_type),
    _present(Talent.skin_tone),
    _present(Talent.language),
    _present(Talent.front_image_url),
    _present(Talent.left_image_url),
    _present(Talent.right_image_url),
    _present(Talent.video_url),
    Talent.makeover_needed.is_not(None),
    Talent.willing_to_work_as_extra.is_not(None),
    _present(Talent.about_yourself),
)


async def list_talents(session: AsyncSession, hirer: Principal) -> dict[str, Any]:
    """
    Talents with a complete profile, as seen by a hirer.

    Email and phone are only revealed for talents that accepted a request
    from this hirer.
    """
    result = await session.execute(
        select(Talent).where(*COMPLETE_TALENT_CRITERIA).order_by(Talent.id)
    )
    # Skills live in a JSON column; emptiness is checked here
    talents = [talent for talent in result.scalars().all() if talent.skills]

    accepted = await session.execute(
        select(HiringRequest.talent_id).where(
            HiringRequest.hirer_id == hirer.id,
            HiringRequest.status == HiringStatus.ACCEPTED.value,
        )
    )
    contactable = set(accepted.scalars().all())

    items = []
    for talent in talents:
        show_contact = talent.id in contactable
        items.append({
            "id": talent.id,
            "name": talent.name,
            "email": talent.email if show_contact else "",
            "phone": talent.phone if show_contact else "",
            "role": talent.role,
            "gender": talent.gender,
            "age": talent.age,
            "height": talent.height,
            "weight": talent.weight,
            "body_type": talent.body_type,
            "skin_tone": talent.skin_tone,
            "language": talent.language,
            "skills": talent.skills,
            "images": {
                "profile_pic": talent.profile_pic_url,
                "front": talent.front_image_url,
                "left": talent.left_image_url,
                "right": talent.right_image_url,
            },
            "video": talent.video_url,
            "makeover_needed": talent.makeover_needed,
            "willing_to_work_as_extra": talent.willing_to_work_as_extra,
            "about_yourself": talent.about_yourself,
            "created_at": talent.created_at,
            "updated_at": talent.updated_at,
        })

    return {"message": "Talents retrieved successfully", "talents": items}
