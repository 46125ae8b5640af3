"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    success: bool = False
    error_code: str
    error: str
    details: Any | None = None
    errors: list[str] | None = None
