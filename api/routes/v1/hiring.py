"""
Hiring request endpoints.

Hirers send requests to talents; the named talent accepts or rejects them.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_principal, get_db
from api.schemas.common import ErrorResponse
from api.schemas.hiring import SendHiringRequest, UpdateHiringStatus
from api.services import hiring as hiring_service
from database.models.principals import Principal

router = APIRouter(
    prefix="/hiring",
    tags=["hiring"],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    },
)


@router.post(
    "/send",
    status_code=status.HTTP_201_CREATED,
    summary="Send Hiring Request",
    description="Hirer only. One request per hirer and talent.",
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def send_request(
    request: SendHiringRequest,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Create a Pending request to a talent."""
    return await hiring_service.send_request(db, principal, request.talent_id, request.message)


@router.get("/talent", summary="Received Hiring Requests")
async def talent_requests(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Requests received by the calling talent."""
    return await hiring_service.list_for_talent(db, principal)


@router.get("/hirer", summary="Sent Hiring Requests")
async def hirer_requests(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Requests sent by the calling hirer."""
    return await hiring_service.list_for_hirer(db, principal)


@router.put(
    "/status",
    summary="Answer Hiring Request",
    description="Talent only. Accepted keeps the request; Rejected deletes it.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def update_status(
    request: UpdateHiringStatus,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    return await hiring_service.update_status(db, principal, request.request_id, request.status)
