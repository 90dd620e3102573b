"""Submission service functions."""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from api.services.hiring import UNKNOWN_HIRER, display_fields
from core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from core.security import AuditAction, ResourceType, log_audit_event
from database.models.principals import Principal
from database.models.submissions import Submission

logger = logging.getLogger(__name__)


def serialize_submission(submission: Submission, owner: Optional[Principal] = None) -> dict[str, Any]:
    data = {
        "id": submission.id,
        "owner_id": submission.owner_id,
        "subject": submission.subject,
        "description": submission.description,
        "created_at": submission.created_at,
        "updated_at": submission.updated_at,
    }
    if owner is not None:
        data["owner"] = display_fields(owner, UNKNOWN_HIRER)
    return data


async def _get_submission(session: AsyncSession, submission_id: int) -> Submission:
    result = await session.execute(
        select(Submission)
        .options(selectinload(Submission.owner))
        .where(Submission.id == submission_id)
    )
    submission = result.scalar_one_or_none()
    if submission is None:
        raise NotFoundError("Submission not found")
    return submission


async def create_submission(
    session: AsyncSession,
    actor: Principal,
    subject: str,
    description: str,
) -> dict[str, Any]:
    submission = Submission(owner_id=actor.id, subject=subject, description=description)
    session.add(submission)
    await session.commit()

    logger.info(f"{actor.kind} {actor.id} created submission {submission.id}")
    return {
        "message": "Submission created successfully",
        "submission": serialize_submission(submission),
    }


async def update_submission(
    session: AsyncSession,
    actor: Principal,
    submission_id: int,
    subject: Optional[str] = None,
    description: Optional[str] = None,
) -> dict[str, Any]:
    """Update subject and/or description. Owner only."""
    if not subject and not description:
        raise BadRequestError("At least one field (subject or description) must be provided")

    submission = await _get_submission(session, submission_id)
    if submission.owner_id != actor.id:
        raise ForbiddenError("You don't have permission to update this submission")

    if subject:
        submission.subject = subject
    if description:
        submission.description = description
    await session.commit()
    await session.refresh(submission)

    log_audit_event(
        AuditAction.UPDATE,
        ResourceType.SUBMISSION,
        resource_id=submission.id,
        actor_id=actor.id,
        actor_kind=actor.kind,
    )
    return {
        "message": "Submission updated successfully",
        "submission": serialize_submission(submission, actor),
    }


async def delete_submission(
    session: AsyncSession,
    actor: Principal,
    submission_id: int,
) -> dict[str, Any]:
    """Delete a submission. Owner or admin."""
    submission = await _get_submission(session, submission_id)
    if submission.owner_id != actor.id and not actor.is_admin:
        raise ForbiddenError("You don't have permission to delete this submission")

    await session.delete(submission)
    await session.commit()

    log_audit_event(
        AuditAction.DELETE,
        ResourceType.SUBMISSION,
        resource_id=submission_id,
        actor_id=actor.id,
        actor_kind=actor.kind,
        details={"owner_id": submission.owner_id},
    )
    return {"message": "Submission deleted successfully", "submission_id": submission_id}


async def list_submissions(
    session: AsyncSession,
    owner_id: Optional[int] = None,
) -> dict[str, Any]:
    """All submissions, or one owner's, newest first."""
    query = select(Submission).options(selectinload(Submission.owner))
    if owner_id is not None:
        query = query.where(Submission.owner_id == owner_id)
    result = await session.execute(
        query.order_by(Submission.created_at.desc(), Submission.id.desc())
    )

    submissions = [
        {
            **serialize_submission(submission),
            "owner": display_fields(submission.owner, UNKNOWN_HIRER),
        }
        for submission in result.scalars().all()
    ]
    return {"message": "Submissions retrieved successfully", "submissions": submissions}


async def list_owner_submissions(
    session: AsyncSession,
    actor: Principal,
    owner_id: int,
) -> dict[str, Any]:
    """One owner's submissions, visible to that owner or an admin."""
    if actor.id != owner_id and not actor.is_admin:
        raise ForbiddenError("You can only view your own submissions")
    return await list_submissions(session, owner_id=owner_id)
