"""Notification feed service functions."""

import logging
from typing import Any, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import BadRequestError, NotFoundError
from database.models.notifications import Notification
from database.models.principals import Principal

logger = logging.getLogger(__name__)

EMPTY_CONTENT_MESSAGE = "At least one of title, status, or body should be provided"


def _require_content(title: Optional[str], status: Optional[str], body: Optional[str]) -> None:
    if not (title or status or body):
        raise BadRequestError(EMPTY_CONTENT_MESSAGE)


async def send_to_all(
    session: AsyncSession,
    title: Optional[str] = None,
    status: Optional[str] = None,
    body: Optional[str] = None,
) -> dict[str, Any]:
    """Create a global notification."""
    _require_content(title, status, body)

    notification = Notification(title=title or None, status=status or None, body=body or None)
    session.add(notification)
    await session.commit()

    logger.info(f"Global notification {notification.id} created")
    return {
        "message": "Notification sent to all users successfully",
        "notification": notification.to_feed_item(),
    }


async def send_to_user(
    session: AsyncSession,
    actor: Principal,
    user_id: Optional[int] = None,
    title: Optional[str] = None,
    status: Optional[str] = None,
    body: Optional[str] = None,
) -> dict[str, Any]:
    """Create a notification for one principal, defaulting to the caller."""
    _require_content(title, status, body)

    target_id = user_id if user_id is not None else actor.id
    target = await session.get(Principal, target_id)
    if target is None:
        raise NotFoundError("User not found")

    notification = Notification(
        principal_id=target.id,
        principal_kind=target.kind,
        title=title or None,
        status=status or None,
        body=body or None,
    )
    session.add(notification)
    await session.commit()

    logger.info(f"Notification {notification.id} sent to {target.kind} {target.id}")
    return {
        "message": "Notification sent to user successfully",
        "notification": notification.to_feed_item(),
    }


async def global_feed(session: AsyncSession) -> dict[str, Any]:
    """Global notifications, newest first."""
    result = await session.execute(
        select(Notification)
        .where(Notification.principal_id.is_(None), Notification.principal_kind.is_(None))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return {
        "message": "Global notifications retrieved successfully",
        "notifications": [n.to_feed_item() for n in result.scalars().all()],
    }


async def user_feed(session: AsyncSession, actor: Principal) -> dict[str, Any]:
    """Notifications targeted at the caller plus global ones, newest first."""
    result = await session.execute(
        select(Notification)
        .where(
            or_(
                and_(
                    Notification.principal_id == actor.id,
                    Notification.principal_kind == actor.kind,
                ),
                and_(
                    Notification.principal_id.is_(None),
                    Notification.principal_kind.is_(None),
                ),
            )
        )
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return {
        "message": "User notifications retrieved successfully",
        "notifications": [n.to_feed_item() for n in result.scalars().all()],
    }
