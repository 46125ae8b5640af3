"""SQLAlchemy implementation of Profile repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import ProfileListItem, ProfileRecordDraft, StoredProfile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, draft: ProfileRecordDraft) -> StoredProfile:
        """Insert a new profile row."""
        model = ProfileModel(
            profile_name=draft.profile_name,
            profile_description=draft.profile_description or "",
            is_active=draft.is_active,
            profile_json=draft.profile_json,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get(self, id: UUID) -> StoredProfile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[ProfileListItem]:
        """List all profiles without their JSON payload, newest update first."""
        stmt = select(
            ProfileModel.id,
            ProfileModel.profile_name,
            ProfileModel.profile_description,
            ProfileModel.is_active,
            ProfileModel.created_at,
            ProfileModel.updated_at,
        ).order_by(ProfileModel.updated_at.desc(), ProfileModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [
            ProfileListItem(
                id=row.id,
                profile_name=row.profile_name,
                profile_description=row.profile_description,
                is_active=row.is_active,
                created_at=row.created_at,
                updated_at=row.updated_at,
            )
            for row in result
        ]

    async def update(self, id: UUID, draft: ProfileRecordDraft) -> StoredProfile | None:
        """Overwrite name, description, active flag and payload."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        model.profile_name = draft.profile_name
        model.profile_description = draft.profile_description or ""
        model.is_active = draft.is_active
        model.profile_json = draft.profile_json
        # Set explicitly so an unchanged payload still counts as touched
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        stmt = delete(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: ProfileModel) -> StoredProfile:
        """Convert ORM model to domain entity."""
        return StoredProfile(
            id=model.id,
            profile_name=model.profile_name,
            profile_description=model.profile_description,
            is_active=model.is_active,
            profile_json=model.profile_json,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
