"""Hiring request schemas."""

from typing import Optional

from pydantic import Field

from api.schemas.common import RequestModel


class SendHiringRequest(RequestModel):
    """Schema for a hirer proposing to engage a talent."""

    talent_id: int = Field(description="Talent to send the request to")
    message: Optional[str] = Field(None, max_length=5000)


class UpdateHiringStatus(RequestModel):
    """Schema for a talent answering a request."""

    request_id: int
    # Checked by the service so an unknown value is a plain 400
    status: str = Field(description="Accepted or Rejected")
