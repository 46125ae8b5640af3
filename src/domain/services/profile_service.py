"""Profile service layer with persistence rules."""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import (
    InvalidProfileFormatError,
    ProfileNotFoundError,
    ProfileValidationError,
    StorageError,
)
from domain.entities.profile import (
    ProfileListItem,
    ProfileRecordDraft,
    SavedProfile,
    StoredProfile,
    UpdatedProfile,
    ValidationResult,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_manager import (
    NAME_REQUIRED,
    profile_from_dict,
    validate_for_persistence,
)

logger = structlog.get_logger()

MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000


def validate_for_database(record: Any) -> ValidationResult:
    """Check a wire-level record before it is written.

    Runs independently of the profile manager so that payloads which never
    went through it (raw API calls) are still checked.
    """
    if not isinstance(record, Mapping):
        return ValidationResult.from_errors(["Profile data must be an object"])

    errors: list[str] = []

    name = record.get("profile_name")
    if not isinstance(name, str) or not name.strip():
        errors.append(NAME_REQUIRED)
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(f"Profile name must be {MAX_NAME_LENGTH} characters or less")

    description = record.get("profile_description")
    if description is not None:
        if not isinstance(description, str):
            errors.append("Profile description must be a string")
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            errors.append(
                f"Profile description must be {MAX_DESCRIPTION_LENGTH} characters or less"
            )

    is_active = record.get("is_active")
    if is_active is not None and not isinstance(is_active, bool):
        errors.append("Profile active flag must be a boolean")

    profile_json = record.get("profile_json")
    if not profile_json:
        errors.append("Profile JSON data is required")
    elif not isinstance(profile_json, Mapping):
        errors.append("Profile JSON data must be an object")
    else:
        for key in ("profile_name", "metadata"):
            if key not in profile_json:
                errors.append(f"Profile JSON must contain {key}")

    return ValidationResult.from_errors(errors)


def strip_transient_state(profile_json: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``profile_json`` with every feed deselected."""
    cleaned = dict(profile_json)
    feeds = cleaned.get("rssFeeds")
    if isinstance(feeds, list):
        cleaned["rssFeeds"] = [
            {**feed, "selected": False} if isinstance(feed, Mapping) else feed
            for feed in feeds
        ]
    return cleaned


class ProfileService:
    """Service layer for stored profiles."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def validate(self, record: Any) -> ValidationResult:
        """Store-level checks, then completeness of the embedded profile.

        Messages are deduplicated in order, so a missing name reported by
        both layers appears once.
        """
        errors = list(validate_for_database(record).errors)

        profile_json = record.get("profile_json") if isinstance(record, Mapping) else None
        if isinstance(profile_json, Mapping) and profile_json:
            try:
                profile = profile_from_dict(profile_json)
            except InvalidProfileFormatError as e:
                errors.append(e.message)
            else:
                errors.extend(validate_for_persistence(profile).errors)

        return ValidationResult.from_errors(list(dict.fromkeys(errors)))

    async def create(self, record: Mapping[str, Any]) -> SavedProfile:
        """Validate and insert a new profile."""
        draft = self._prepare(record)

        with self._storage_errors("save", profile_name=draft.profile_name):
            async with self._uow_factory() as uow:
                stored = await uow.profiles.create(draft)
                await uow.commit()

        logger.info("profile_created", profile_id=str(stored.id))
        return SavedProfile(id=stored.id, created_at=stored.created_at)

    async def get(self, profile_id: UUID) -> StoredProfile | None:
        """Get a profile by ID, or None if it does not exist."""
        with self._storage_errors("load", profile_id=str(profile_id)):
            async with self._uow_factory() as uow:
                return await uow.profiles.get(profile_id)

    async def get_or_raise(self, profile_id: UUID) -> StoredProfile:
        profile = await self.get(profile_id)
        if profile is None:
            raise ProfileNotFoundError(str(profile_id))
        return profile

    async def list_all(self) -> list[ProfileListItem]:
        """List profile summaries, most recently updated first."""
        with self._storage_errors("list"):
            async with self._uow_factory() as uow:
                return await uow.profiles.list_all()

    async def update(self, profile_id: UUID, record: Mapping[str, Any]) -> UpdatedProfile:
        """Overwrite an existing profile.

        Raises ProfileNotFoundError (and leaves the store untouched) if no
        row has this ID.
        """
        draft = self._prepare(record)

        with self._storage_errors("update", profile_id=str(profile_id)):
            async with self._uow_factory() as uow:
                stored = await uow.profiles.update(profile_id, draft)
                if stored is None:
                    raise ProfileNotFoundError(str(profile_id))
                await uow.commit()

        logger.info("profile_updated", profile_id=str(profile_id))
        return UpdatedProfile(id=stored.id, updated_at=stored.updated_at)

    async def delete(self, profile_id: UUID) -> bool:
        """Hard-delete a profile. Missing IDs return False."""
        with self._storage_errors("delete", profile_id=str(profile_id)):
            async with self._uow_factory() as uow:
                deleted = await uow.profiles.delete(profile_id)
                await uow.commit()

        logger.info("profile_deleted", profile_id=str(profile_id), deleted=deleted)
        return deleted

    def _prepare(self, record: Mapping[str, Any]) -> ProfileRecordDraft:
        result = self.validate(record)
        if not result.is_valid:
            logger.info("profile_validation_failed", errors=result.errors)
            raise ProfileValidationError(result.errors)

        is_active = record.get("is_active")
        return ProfileRecordDraft(
            profile_name=record["profile_name"],
            profile_description=record.get("profile_description") or "",
            is_active=True if is_active is None else is_active,
            profile_json=strip_transient_state(record["profile_json"]),
        )

    @contextmanager
    def _storage_errors(self, operation: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                "profile_storage_failed",
                operation=operation,
                error_type=type(e).__name__,
                exc_info=True,
                **context,
            )
            raise StorageError(operation) from e
