"""
Security utilities.

Provides password hashing, session tokens, one-time codes and the audit
logger used for hiring-request state changes.
"""

import hashlib
import hmac
import json
import logging
import secrets
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional, TypedDict

import bcrypt
import jwt

logger = logging.getLogger("security.audit")

OTP_DIGITS = 6


class JWTPayload(TypedDict, total=False):
    """Claims carried by a session token."""
    sub: str
    kind: str
    role: str
    iat: int
    exp: int


# ==================== Passwords ==================== #

def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


# ==================== Session tokens ==================== #

def create_access_token(
    subject_id: int,
    kind: str,
    role: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed session token.

    Args:
        subject_id: Principal id
        kind: Principal kind (Hirer or Talent)
        role: Display role of the principal
        secret_key: Signing secret
        algorithm: JWT signing algorithm
        expires_delta: Lifetime of the token (15 days by default)

    Returns:
        Encoded JWT
    """
    if expires_delta is None:
        expires_delta = timedelta(days=15)

    now = datetime.now(timezone.utc)
    payload: JWTPayload = {
        "sub": str(subject_id),
        "kind": kind,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def verify_jwt_token(token: str, secret_key: str, algorithm: str = "HS256") -> JWTPayload:
    """
    Decode and verify a session token.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the signature or structure is invalid
    """
    return jwt.decode(
        token,
        secret_key,
        algorithms=[algorithm],
        options={"require": ["sub", "exp"]},
    )


# ==================== One-time codes ==================== #

def generate_otp() -> str:
    """Generate a 6-digit numeric one-time password."""
    return str(secrets.randbelow(9 * 10 ** (OTP_DIGITS - 1)) + 10 ** (OTP_DIGITS - 1))


def otp_matches(expected: Optional[str], submitted: Optional[str]) -> bool:
    """Constant-time OTP comparison. A cleared OTP never matches."""
    if not expected or submitted is None:
        return False
    return hmac.compare_digest(str(expected), str(submitted).strip())


def generate_reset_token() -> str:
    """Generate a URL-safe password reset token."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """Hash a reset token for storage (SHA-256)."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


# ==================== Audit ==================== #

class AuditAction(str, Enum):
    """Audit log action types."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"


class ResourceType(str, Enum):
    """Resource types for audit logging."""
    HIRING_REQUEST = "HIRING_REQUEST"
    SUBMISSION = "SUBMISSION"
    NOTIFICATION = "NOTIFICATION"
    PRINCIPAL = "PRINCIPAL"


def log_audit_event(
    action: AuditAction,
    resource_type: ResourceType,
    resource_id: Optional[Any] = None,
    actor_id: Optional[int] = None,
    actor_kind: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Log an audit event as a structured JSON line.

    Rejected hiring requests are deleted, so this log is the only record
    that they existed.
    """
    event = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event_type": "AUDIT",
        "action": action.value,
        "resource_type": resource_type.value,
        "resource_id": str(resource_id) if resource_id is not None else None,
        "actor_id": actor_id,
        "actor_kind": actor_kind,
        "details": details or {},
    }
    logger.info(json.dumps(event))
    return event
