"""Notification schemas."""

from typing import Optional

from pydantic import Field

from api.schemas.common import RequestModel


class NotificationContent(RequestModel):
    """Title, status and body; the service requires at least one of them."""

    title: Optional[str] = Field(None, max_length=255)
    status: Optional[str] = Field(None, max_length=100)
    body: Optional[str] = None


class UserNotification(NotificationContent):
    user_id: Optional[int] = Field(None, description="Target principal; defaults to the caller")
