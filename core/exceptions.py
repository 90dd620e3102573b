"""
Application error hierarchy.

Services raise these; the error handlers in core.middleware.error_handling
turn them into JSON responses with the matching HTTP status.
"""

from fastapi import status


class AppError(Exception):
    """Base exception for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    """Missing or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"
    default_message = "Invalid request"


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ForbiddenError(AppError):
    """Wrong principal kind or not the owner of the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_message = "You don't have permission to perform this action"


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(AppError):
    """Duplicate email, duplicate hiring request or a finished transition."""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    default_message = "Resource already exists"


class InternalError(AppError):
    """Unexpected store or provider failure."""


class MailDispatchError(InternalError):
    """Raised when an email could not be handed to the task queue."""

    code = "MAIL_DISPATCH_FAILED"
    default_message = "Failed to send email"


class StorageError(InternalError):
    """Raised when the object store rejects an upload or delete."""

    code = "STORAGE_ERROR"
    default_message = "Failed to store media file"
