"""Notification feed endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_principal, get_db
from api.schemas.notifications import NotificationContent, UserNotification
from api.services import notifications as notification_service
from database.models.principals import Principal

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/all", status_code=status.HTTP_201_CREATED, summary="Notify Everyone")
async def send_to_all(
    request: NotificationContent,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Create a global notification."""
    return await notification_service.send_to_all(
        db, request.title, request.status, request.body
    )


@router.post("/user", status_code=status.HTTP_201_CREATED, summary="Notify User")
async def send_to_user(
    request: UserNotification,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Create a notification for userId, or for the caller when omitted."""
    return await notification_service.send_to_user(
        db, principal, request.user_id, request.title, request.status, request.body
    )


@router.get("/global", summary="Global Feed")
async def global_feed(db: AsyncSession = Depends(get_db)):
    """Global notifications, newest first. No authentication required."""
    return await notification_service.global_feed(db)


@router.get("/user", summary="User Feed")
async def user_feed(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """The caller's notifications plus global ones, newest first."""
    return await notification_service.user_feed(db, principal)
