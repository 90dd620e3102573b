"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.exceptions import ForbiddenError
from core.integrations.mailer import MailDispatcher
from core.middleware.authentication import PrincipalContext, authenticate
from core.storage.s3 import S3Storage
from database.engine import get_db
from database.models.principals import Hirer, Principal, PrincipalKind, Talent


async def get_current_principal(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """
    Require a valid bearer token and return the caller's row.

    The caller is also stored on ``request.state.principal``.
    """
    principal = await authenticate(
        db, authorization, settings.jwt_secret_key, settings.jwt_algorithm
    )
    request.state.principal = PrincipalContext.from_principal(principal)
    return principal


async def require_hirer(
    principal: Principal = Depends(get_current_principal),
) -> Hirer:
    """Require the caller to be a hirer."""
    if principal.kind != PrincipalKind.HIRER.value:
        raise ForbiddenError("Access denied: Hirer account required")
    return principal


async def require_talent(
    principal: Principal = Depends(get_current_principal),
) -> Talent:
    """Require the caller to be a talent."""
    if principal.kind != PrincipalKind.TALENT.value:
        raise ForbiddenError("Access denied: Talent account required")
    return principal


def get_mail_dispatcher() -> MailDispatcher:
    return MailDispatcher()


@lru_cache
def get_media_storage() -> S3Storage:
    return S3Storage(settings.storage)
