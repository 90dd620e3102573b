"""Submission schemas."""

from typing import Optional

from pydantic import Field

from api.schemas.common import RequestModel


class CreateSubmission(RequestModel):
    subject: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class UpdateSubmission(RequestModel):
    subject: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
