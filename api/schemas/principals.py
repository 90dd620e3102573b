"""Registration, login and profile schemas for hirers and talents."""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from api.schemas.common import RequestModel
from database.models.principals import Gender


class RegisterRequest(RequestModel):
    """Schema for registering a hirer or talent."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=32)
    gender: Gender
    role: str = Field(min_length=1, max_length=50, description="Kind-specific role")
    password: str = Field(min_length=1, max_length=128)
    device_token: Optional[str] = Field(None, max_length=512)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class VerifyOtpRequest(RequestModel):
    otp: str = Field(min_length=1, max_length=12)

    @field_validator("otp", mode="before")
    @classmethod
    def coerce_otp(cls, v):
        """Clients may send the code as a number."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    device_token: Optional[str] = Field(None, max_length=512)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class ForgotPasswordRequest(RequestModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class ResetPasswordRequest(RequestModel):
    new_password: str = Field(min_length=1, max_length=128)
