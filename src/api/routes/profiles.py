"""Profile save/load API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Request, status

from api.dependencies.services import get_profile_service
from api.schemas.common import ErrorResponse
from api.schemas.profile import (
    DeleteProfileResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileSummaryResponse,
    SaveProfileResponse,
    StoredProfileResponse,
    UpdateProfileResponse,
)
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/api/save-profile", tags=["profiles"])


@router.post(
    "",
    response_model=SaveProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a profile",
    responses={
        201: {"description": "Profile saved successfully"},
        400: {"model": ErrorResponse, "description": "Profile failed validation"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def save_profile(
    request: Request,
    record: dict[str, Any] = Body(...),
    service: ProfileService = Depends(get_profile_service),
) -> SaveProfileResponse:
    """Validate and store a profile record draft.

    The body is checked by the store-level validator and by the profile
    completeness rules; every failure is reported at once.
    """
    saved = await service.create(record)
    return SaveProfileResponse(id=saved.id, created_at=saved.created_at)


@router.get(
    "",
    response_model=ProfileDetailResponse | ProfileListResponse,
    summary="Get one profile or list all profiles",
    responses={
        200: {"description": "Profile or profile list"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profiles(
    request: Request,
    profile_id: UUID | None = Query(None, alias="id"),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse | ProfileListResponse:
    """With ``?id=`` return that profile, otherwise list every profile."""
    if profile_id is not None:
        profile = await service.get_or_raise(profile_id)
        return ProfileDetailResponse(profile=StoredProfileResponse.model_validate(profile))

    items = await service.list_all()
    return ProfileListResponse(
        profiles=[ProfileSummaryResponse.model_validate(item) for item in items]
    )


@router.put(
    "",
    response_model=UpdateProfileResponse,
    summary="Replace a stored profile",
    responses={
        200: {"description": "Profile updated successfully"},
        400: {"model": ErrorResponse, "description": "Profile failed validation"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: UUID = Query(..., alias="id"),
    record: dict[str, Any] = Body(...),
    service: ProfileService = Depends(get_profile_service),
) -> UpdateProfileResponse:
    """Overwrite name, description, active flag and payload of a profile."""
    updated = await service.update(profile_id, record)
    return UpdateProfileResponse(id=updated.id, updated_at=updated.updated_at)


@router.delete(
    "",
    response_model=DeleteProfileResponse,
    summary="Delete a profile",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: UUID = Query(..., alias="id"),
    service: ProfileService = Depends(get_profile_service),
) -> DeleteProfileResponse:
    """Delete a profile. Deleting a missing profile is not an error."""
    deleted = await service.delete(profile_id)
    return DeleteProfileResponse(deleted=deleted)
