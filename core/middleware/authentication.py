"""
Bearer-token authentication for hirers and talents.

Validates the session JWT from the Authorization header, resolves its
subject in the principals table and exposes the caller as a
PrincipalContext on ``request.state.principal``. Unverified principals are
let through so they can verify or resend their OTP.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import UnauthorizedError
from core.security import verify_jwt_token
from database.models.principals import Principal, PrincipalKind

logger = logging.getLogger(__name__)


class AuthenticationError(UnauthorizedError):
    """Base exception for authentication errors."""
    code = "AUTHENTICATION_FAILED"


class TokenMissingError(AuthenticationError):
    """Raised when no bearer token is supplied."""
    default_message = "Unauthorized: No token provided"


class TokenExpiredError(AuthenticationError):
    """Raised when JWT token has expired."""
    code = "TOKEN_EXPIRED"
    default_message = "Unauthorized: Token has expired"


class TokenInvalidError(AuthenticationError):
    """Raised when JWT token is malformed or its signature is wrong."""
    code = "INVALID_TOKEN"
    default_message = "Unauthorized: Invalid token"


class PrincipalNotFoundError(AuthenticationError):
    """Raised when the token subject does not exist."""
    default_message = "Unauthorized: User not found"


@dataclass(frozen=True)
class PrincipalContext:
    """The authenticated caller."""
    id: int
    kind: PrincipalKind
    role: str
    email: str
    is_admin: bool = False

    @property
    def is_hirer(self) -> bool:
        return self.kind == PrincipalKind.HIRER

    @property
    def is_talent(self) -> bool:
        return self.kind == PrincipalKind.TALENT

    @classmethod
    def from_principal(cls, principal: Principal) -> "PrincipalContext":
        return cls(
            id=principal.id,
            kind=PrincipalKind(principal.kind),
            role=principal.role,
            email=principal.email,
            is_admin=principal.is_admin,
        )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an Authorization header.

    Args:
        authorization: Raw header value

    Returns:
        The bearer token

    Raises:
        TokenMissingError: If the header is absent or not a Bearer header
        TokenInvalidError: If the token is not three dot-separated segments
    """
    if not authorization:
        raise TokenMissingError()

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise TokenMissingError()

    if len(token.split(".")) != 3:
        raise TokenInvalidError("Unauthorized: Malformed token")

    return token


async def authenticate(
    db: AsyncSession,
    authorization: Optional[str],
    secret_key: str,
    algorithm: str = "HS256",
) -> Principal:
    """
    Resolve the caller of a request.

    Args:
        db: Database session
        authorization: Raw Authorization header
        secret_key: JWT signing secret
        algorithm: JWT signing algorithm

    Returns:
        The principal named by the token subject

    Raises:
        AuthenticationError: For any missing, malformed, expired or unknown token
    """
    token = extract_bearer_token(authorization)

    try:
        payload = verify_jwt_token(token, secret_key, algorithm)
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected token: {type(e).__name__}")
        raise TokenInvalidError() from e

    try:
        principal_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise TokenInvalidError() from e

    # Single lookup: the row's discriminator decides Hirer vs Talent
    principal = await db.get(Principal, principal_id)
    if principal is None:
        raise PrincipalNotFoundError()

    return principal


def get_principal_context(request: Request) -> PrincipalContext:
    """
    Get the authenticated caller stored on the request.

    Raises:
        AuthenticationError: If the request was not authenticated
    """
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise AuthenticationError("User not authenticated")
    return principal
