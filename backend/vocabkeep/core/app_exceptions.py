"""Application-specific exceptions for consistent error handling.

The engine and services raise these; the API layer maps ``code`` onto an HTTP
status. Nothing below depends on the transport.
"""

from typing import Any


class AppError(Exception):
    """Application error with standardized error code."""

    code = "APP_ERROR"
    default_message = "Application error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize application error."""
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(AppError):
    """Item or its progress does not exist, or the item is retired."""

    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(AppError):
    """Duplicate term within a tenant."""

    code = "CONFLICT"
    default_message = "Resource conflict"


class InvalidInputError(AppError):
    """A required field is empty or a parameter is out of range."""

    code = "INVALID_INPUT"
    default_message = "Invalid input"


class InternalError(AppError):
    """Store failure, transaction failure, or any unexpected condition."""

    code = "INTERNAL_ERROR"
    default_message = "Internal server error"
