"""Common Pydantic schemas shared across the API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """
    Base for request bodies.

    Accepts both snake_case and camelCase keys (``talent_id`` or
    ``talentId``) and strips surrounding whitespace from strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(description="Human readable outcome")


class ErrorBody(BaseModel):
    code: str
    message: str
    path: str
    method: str


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error: ErrorBody
