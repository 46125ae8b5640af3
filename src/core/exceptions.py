"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PROFILE_FORMAT = "INVALID_PROFILE_FORMAT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    # Timeout (504)
    REQUEST_TIMEOUT = "REQUEST_TIMEOUT"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ProfileValidationError(AppException):
    """Profile payload failed validation.

    Carries every violation found, not just the first.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Profile validation failed",
            status_code=400,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
            status_code=404,
            details={"profile_id": profile_id},
        )


class InvalidProfileFormatError(AppException):
    """Profile JSON could not be decoded at all."""

    def __init__(self, message: str = "Invalid profile JSON format") -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_PROFILE_FORMAT,
            message=message,
            status_code=400,
        )


class StorageError(AppException):
    """The database rejected or failed an operation."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=f"Failed to {operation} profile",
            status_code=500,
            details="The profile store is unavailable or rejected the request",
        )
