"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import ProfileListItem, ProfileRecordDraft, StoredProfile


class IProfileRepository(Protocol):
    """Repository interface for stored profiles."""

    async def create(self, draft: ProfileRecordDraft) -> StoredProfile:
        """Insert a new profile row."""
        ...

    async def get(self, id: UUID) -> StoredProfile | None:
        """Get a profile by ID."""
        ...

    async def list_all(self) -> list[ProfileListItem]:
        """List all profiles, most recently updated first."""
        ...

    async def update(self, id: UUID, draft: ProfileRecordDraft) -> StoredProfile | None:
        """Overwrite a profile row; None if no row matched."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return whether a row was removed."""
        ...
