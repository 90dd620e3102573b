"""
Account endpoints shared by hirers and talents.

Registration, OTP verification, login, password reset and profile reads
behave the same for both kinds; ``add_account_routes`` mounts them on a
kind's router.
"""

from typing import Callable

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_db, get_mail_dispatcher
from api.schemas.common import MessageResponse
from api.schemas.principals import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyOtpRequest,
)
from api.services import principals as principal_service
from core.integrations.mailer import MailDispatcher
from database.models.principals import Principal, PrincipalKind


def add_account_routes(
    router: APIRouter,
    kind: PrincipalKind,
    require_kind: Callable,
) -> APIRouter:
    """Mount the account endpoints for ``kind`` on ``router``."""
    label = kind.value

    @router.post(
        "/register",
        status_code=status.HTTP_201_CREATED,
        summary=f"Register {label}",
        description="Create an unverified account and email a one-time password.",
    )
    async def register(
        request: RegisterRequest,
        db: AsyncSession = Depends(get_db),
        mailer: MailDispatcher = Depends(get_mail_dispatcher),
    ):
        """Register or re-register an unverified account."""
        return await principal_service.register(db, kind, request, mailer)

    @router.post("/verify-otp", summary=f"Verify {label} OTP")
    async def verify_otp(
        request: VerifyOtpRequest,
        principal: Principal = Depends(require_kind),
        db: AsyncSession = Depends(get_db),
    ):
        """Verify the emailed one-time password."""
        return await principal_service.verify_otp(db, principal, request.otp)

    @router.post(
        "/resend-otp", response_model=MessageResponse, summary=f"Resend {label} OTP"
    )
    async def resend_otp(
        principal: Principal = Depends(require_kind),
        db: AsyncSession = Depends(get_db),
        mailer: MailDispatcher = Depends(get_mail_dispatcher),
    ):
        """Email a fresh one-time password to an unverified account."""
        return await principal_service.resend_otp(db, principal, mailer)

    @router.post("/login", summary=f"{label} login")
    async def login(
        request: LoginRequest,
        db: AsyncSession = Depends(get_db),
    ):
        """Exchange email and password for a session token."""
        return await principal_service.login(
            db, kind, request.email, request.password, request.device_token
        )

    @router.post(
        "/forgot-password",
        response_model=MessageResponse,
        summary=f"Request {label} password reset",
    )
    async def forgot_password(
        request: ForgotPasswordRequest,
        db: AsyncSession = Depends(get_db),
        mailer: MailDispatcher = Depends(get_mail_dispatcher),
    ):
        """Email a password reset token."""
        return await principal_service.forgot_password(db, kind, request.email, mailer)

    @router.post(
        "/reset-password/{token}",
        response_model=MessageResponse,
        summary=f"Reset {label} password",
    )
    async def reset_password(
        request: ResetPasswordRequest,
        token: str = Path(..., description="Reset token from the email"),
        db: AsyncSession = Depends(get_db),
    ):
        """Set a new password using an emailed reset token."""
        return await principal_service.reset_password(db, kind, token, request.new_password)

    @router.get("/get-profile", summary=f"Get {label} profile")
    async def get_profile(principal: Principal = Depends(require_kind)):
        """Return the caller's own profile."""
        return principal_service.get_profile(principal)

    return router
