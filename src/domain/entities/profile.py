"""Profile domain entities."""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

PROFILE_VERSION = "1.0"
DEFAULT_SUMMARY_LENGTH = 150
MAX_EVALUATION_CRITERIA = 3


class FeedStatus(StrEnum):
    """Whether a feed is polled."""

    ACTIVE = "active"
    PAUSED = "paused"


@dataclass(frozen=True, slots=True)
class Feed:
    """An RSS source attached to a profile.

    ``selected`` is UI state and is always cleared before a profile is
    stored or exported.
    """

    id: int
    name: str = ""
    url: str = ""
    status: FeedStatus = FeedStatus.ACTIVE
    selected: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == FeedStatus.ACTIVE

    def deselected(self) -> "Feed":
        return self if not self.selected else replace(self, selected=False)


@dataclass(frozen=True, slots=True)
class CategoryTags:
    """Boolean topic flags; attribute names are the wire keys."""

    inTheNews: bool = False
    transHealth: bool = False
    genderSenseLatest: bool = False
    transitionCoaching: bool = False
    communityHighlights: bool = False
    transRights: bool = False

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def as_dict(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in self.names()}

    def selected_count(self) -> int:
        return sum(1 for value in self.as_dict().values() if value)


@dataclass(frozen=True, slots=True)
class ProfileMetadata:
    created_at: datetime
    updated_at: datetime
    version: str = PROFILE_VERSION


@dataclass(frozen=True, slots=True)
class Profile:
    """A user-defined digest configuration.

    Instances are immutable; the profile manager returns new values for
    every change.
    """

    metadata: ProfileMetadata
    name: str = ""
    description: str = ""
    tone: str = ""
    evaluation_criteria: tuple[str, ...] = ()
    summary_length: int = DEFAULT_SUMMARY_LENGTH
    category_tags: CategoryTags = field(default_factory=CategoryTags)
    rss_feeds: tuple[Feed, ...] = ()

    @property
    def active_feeds(self) -> tuple[Feed, ...]:
        return tuple(feed for feed in self.rss_feeds if feed.is_active)


@dataclass(frozen=True, slots=True)
class ProfileInput:
    """Form submission used to overwrite every mutable profile field."""

    profile_name: str
    profile_description: str
    tone_of_voice: str
    criterion1: str = ""
    criterion2: str = ""
    criterion3: str = ""
    step_value: int = DEFAULT_SUMMARY_LENGTH
    category_tags: CategoryTags = field(default_factory=CategoryTags)
    rss_feeds: tuple[Feed, ...] = ()


@dataclass(frozen=True, slots=True)
class ProfileSummary:
    """Read-only view derived from a profile."""

    name: str
    criteria_count: int
    active_feed_count: int
    selected_category_count: int
    is_complete: bool


@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    errors: list[str]

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors)


@dataclass(frozen=True, slots=True)
class ProfileRecordDraft:
    """Database-ready record, before the store assigns id and timestamps."""

    profile_name: str
    profile_description: str
    is_active: bool
    profile_json: dict[str, Any]

    def as_dict(self) -> dict[str, Any]:
        return {
            "profile_name": self.profile_name,
            "profile_description": self.profile_description,
            "is_active": self.is_active,
            "profile_json": self.profile_json,
        }


@dataclass(frozen=True, slots=True)
class StoredProfile:
    """A persisted profile row."""

    id: UUID
    profile_name: str
    profile_description: str
    is_active: bool
    profile_json: dict[str, Any]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class ProfileListItem:
    """A persisted profile row without its JSON payload."""

    id: UUID
    profile_name: str
    profile_description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class SavedProfile:
    id: UUID
    created_at: datetime


@dataclass(frozen=True, slots=True)
class UpdatedProfile:
    id: UUID
    updated_at: datetime
