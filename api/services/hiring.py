"""
Hiring request workflow.

A hirer sends at most one request to each talent. Only the named talent
can answer it: Accepted keeps the row, Rejected deletes it. Both answers
apply only while the request is still Pending.
"""

import logging
from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from core.security import AuditAction, ResourceType, log_audit_event
from core.utils.datetime import now
from database.models.hiring_requests import HiringRequest, HiringStatus
from database.models.principals import Principal, PrincipalKind, Talent

logger = logging.getLogger(__name__)

UNKNOWN_HIRER = "Unknown Hirer"
UNKNOWN_TALENT = "Unknown Talent"
UNKNOWN_ROLE = "Unknown Role"

RESPONSE_STATUSES = (HiringStatus.ACCEPTED.value, HiringStatus.REJECTED.value)


def display_fields(principal: Optional[Principal], unknown_name: str) -> dict[str, Any]:
    """Public name, picture and role with fallbacks for missing values."""
    if principal is None:
        return {"id": None, "name": unknown_name, "profile_pic": None, "role": UNKNOWN_ROLE}
    return {
        "id": principal.id,
        "name": principal.name or unknown_name,
        "profile_pic": principal.profile_pic_url,
        "role": principal.role or UNKNOWN_ROLE,
    }


def serialize_request(request: HiringRequest) -> dict[str, Any]:
    return {
        "id": request.id,
        "hirer_id": request.hirer_id,
        "talent_id": request.talent_id,
        "message": request.message,
        "status": request.status,
        "created_at": request.created_at,
        "updated_at": request.updated_at,
    }


async def send_request(
    session: AsyncSession,
    actor: Principal,
    talent_id: int,
    message: Optional[str] = None,
) -> dict[str, Any]:
    """Create a Pending request from the calling hirer to a talent."""
    if actor.kind != PrincipalKind.HIRER.value:
        raise ForbiddenError("Only hirers can send hiring requests")

    result = await session.execute(select(Talent).where(Talent.id == talent_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Talent not found")

    request = HiringRequest(
        hirer_id=actor.id,
        talent_id=talent_id,
        message=message or None,
        status=HiringStatus.PENDING.value,
    )
    session.add(request)
    try:
        # The (hirer_id, talent_id) unique constraint decides duplicates
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError("You have already sent a request to this talent") from e

    log_audit_event(
        AuditAction.CREATE,
        ResourceType.HIRING_REQUEST,
        resource_id=request.id,
        actor_id=actor.id,
        actor_kind=actor.kind,
        details={"talent_id": talent_id},
    )
    return {"message": "Hiring request sent successfully", "request": serialize_request(request)}


async def list_for_talent(session: AsyncSession, actor: Principal) -> dict[str, Any]:
    """Requests received by the calling talent, newest first."""
    if actor.kind != PrincipalKind.TALENT.value:
        raise ForbiddenError("Only talents can view received hiring requests")

    result = await session.execute(
        select(HiringRequest)
        .options(selectinload(HiringRequest.hirer))
        .where(HiringRequest.talent_id == actor.id)
        .order_by(HiringRequest.created_at.desc(), HiringRequest.id.desc())
    )
    requests = [
        {**serialize_request(request), "hirer": display_fields(request.hirer, UNKNOWN_HIRER)}
        for request in result.scalars().all()
    ]
    return {"message": "Hiring requests retrieved successfully", "requests": requests}


async def list_for_hirer(session: AsyncSession, actor: Principal) -> dict[str, Any]:
    """Requests sent by the calling hirer, newest first."""
    if actor.kind != PrincipalKind.HIRER.value:
        raise ForbiddenError("Only hirers can view sent hiring requests")

    result = await session.execute(
        select(HiringRequest)
        .options(selectinload(HiringRequest.hirer), selectinload(HiringRequest.talent))
        .where(HiringRequest.hirer_id == actor.id)
        .order_by(HiringRequest.created_at.desc(), HiringRequest.id.desc())
    )
    requests = [
        {
            **serialize_request(request),
            "hirer": display_fields(request.hirer, UNKNOWN_HIRER),
            "talent": display_fields(request.talent, UNKNOWN_TALENT),
        }
        for request in result.scalars().all()
    ]
    return {"message": "Hiring requests retrieved successfully", "requests": requests}


async def update_status(
    session: AsyncSession,
    actor: Principal,
    request_id: int,
    status: str,
) -> dict[str, Any]:
    """
    Accept or reject a pending request as its talent.

    Raises:
        BadRequestError: If status is not Accepted or Rejected
        ForbiddenError: If the caller is not the request's talent
        NotFoundError: If the request does not exist
        ConflictError: If the request is no longer Pending
    """
    if status not in RESPONSE_STATUSES:
        raise BadRequestError("Invalid status")

    if actor.kind != PrincipalKind.TALENT.value:
        raise ForbiddenError("Only the talent can accept or reject this request")

    request = await session.get(HiringRequest, request_id)
    if request is None:
        raise NotFoundError("Request not found")

    if request.talent_id != actor.id:
        raise ForbiddenError("Only the talent can accept or reject this request")

    if request.status != HiringStatus.PENDING.value:
        raise ConflictError(f"Request has already been {request.status.lower()}")

    hirer_id = request.hirer_id
    pending = (HiringRequest.id == request_id) & (
        HiringRequest.status == HiringStatus.PENDING.value
    )

    if status == HiringStatus.ACCEPTED.value:
        result = await session.execute(
            update(HiringRequest)
            .where(pending)
            .values(status=HiringStatus.ACCEPTED.value, updated_at=now())
        )
    else:
        result = await session.execute(delete(HiringRequest).where(pending))

    if result.rowcount == 0:
        # Answered concurrently between the read and the write
        await session.rollback()
        raise ConflictError("Request is no longer pending")
    await session.commit()

    if status == HiringStatus.REJECTED.value:
        log_audit_event(
            AuditAction.REJECT,
            ResourceType.HIRING_REQUEST,
            resource_id=request_id,
            actor_id=actor.id,
            actor_kind=actor.kind,
            details={"hirer_id": hirer_id, "talent_id": actor.id, "deleted": True},
        )
        return {"message": "Request rejected and deleted"}

    await session.refresh(request)
    log_audit_event(
        AuditAction.ACCEPT,
        ResourceType.HIRING_REQUEST,
        resource_id=request_id,
        actor_id=actor.id,
        actor_kind=actor.kind,
        details={"hirer_id": hirer_id, "talent_id": actor.id},
    )
    return {"message": "Request updated", "request": serialize_request(request)}
