"""Pydantic schemas for the profile API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class StoredProfileResponse(BaseModel):
    """A stored profile row including its JSON payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_name: str
    profile_description: str
    is_active: bool
    profile_json: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class ProfileSummaryResponse(BaseModel):
    """A stored profile row without its JSON payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_name: str
    profile_description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class SaveProfileResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "created_at": "2026-01-28T10:00:00",
                "message": "Profile saved successfully",
            }
        },
    )

    success: bool = True
    id: UUID
    created_at: datetime
    message: str = "Profile saved successfully"


class UpdateProfileResponse(BaseModel):
    success: bool = True
    id: UUID
    updated_at: datetime
    message: str = "Profile updated successfully"


class ProfileDetailResponse(BaseModel):
    success: bool = True
    profile: StoredProfileResponse


class ProfileListResponse(BaseModel):
    success: bool = True
    profiles: list[ProfileSummaryResponse]


class DeleteProfileResponse(BaseModel):
    success: bool = True
    deleted: bool
