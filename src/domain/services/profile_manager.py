"""Profile construction, validation and (de)serialization.

Every function takes a ``Profile`` value and returns a new one (or a derived
view); nothing here holds state between calls.

Two merge rules differ on purpose and are kept apart:

* ``update_from_input`` replaces the category tags wholesale.
* ``load_from_untyped_json`` merges the blob's tags onto the current ones,
  so keys missing from the blob keep their previous value.
"""

import json
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from core.exceptions import InvalidProfileFormatError
from domain.entities.profile import (
    DEFAULT_SUMMARY_LENGTH,
    MAX_EVALUATION_CRITERIA,
    PROFILE_VERSION,
    CategoryTags,
    Feed,
    FeedStatus,
    Profile,
    ProfileInput,
    ProfileMetadata,
    ProfileRecordDraft,
    ProfileSummary,
    ValidationResult,
)

NAME_REQUIRED = "Profile name is required"
TONE_REQUIRED = "Tone of voice must be selected"
CRITERIA_REQUIRED = "At least one evaluation criteria must be selected"
ACTIVE_FEED_REQUIRED = "At least one RSS feed must be active"
CATEGORY_REQUIRED = "At least one category tag must be selected"


def _now() -> datetime:
    return datetime.utcnow()


def create_empty() -> Profile:
    """Return a blank profile stamped with the current time."""
    now = _now()
    return Profile(metadata=ProfileMetadata(created_at=now, updated_at=now))


def update_from_input(profile: Profile, form: ProfileInput) -> Profile:
    """Overwrite every mutable field of ``profile`` from a form submission.

    Blank criteria are dropped, tags are replaced wholesale and feed
    selection is cleared. ``createdAt`` survives; ``updatedAt`` is refreshed.
    """
    criteria = tuple(
        criterion
        for criterion in (form.criterion1, form.criterion2, form.criterion3)
        if criterion.strip() != ""
    )
    return replace(
        profile,
        name=form.profile_name,
        description=form.profile_description,
        tone=form.tone_of_voice,
        summary_length=form.step_value,
        evaluation_criteria=criteria[:MAX_EVALUATION_CRITERIA],
        category_tags=form.category_tags,
        rss_feeds=tuple(feed.deselected() for feed in form.rss_feeds),
        metadata=replace(profile.metadata, updated_at=_now()),
    )


def validate_for_persistence(profile: Profile) -> ValidationResult:
    """Check completeness, collecting every violation."""
    errors: list[str] = []

    if not profile.name.strip():
        errors.append(NAME_REQUIRED)
    if not profile.tone:
        errors.append(TONE_REQUIRED)
    if not profile.evaluation_criteria:
        errors.append(CRITERIA_REQUIRED)
    if not profile.active_feeds:
        errors.append(ACTIVE_FEED_REQUIRED)
    if profile.category_tags.selected_count() == 0:
        errors.append(CATEGORY_REQUIRED)

    return ValidationResult.from_errors(errors)


def to_stored_record(profile: Profile) -> ProfileRecordDraft:
    return ProfileRecordDraft(
        profile_name=profile.name,
        profile_description=profile.description,
        is_active=True,
        profile_json=profile_to_dict(profile),
    )


def summarize(profile: Profile) -> ProfileSummary:
    return ProfileSummary(
        name=profile.name,
        criteria_count=len(profile.evaluation_criteria),
        active_feed_count=len(profile.active_feeds),
        selected_category_count=profile.category_tags.selected_count(),
        is_complete=validate_for_persistence(profile).is_valid,
    )


# --- wire format ---


def feed_to_dict(feed: Feed) -> dict[str, Any]:
    return {
        "id": feed.id,
        "name": feed.name,
        "url": feed.url,
        "status": feed.status.value,
        "selected": False,
    }


def profile_to_dict(profile: Profile) -> dict[str, Any]:
    """Serialize to the JSON-compatible shape stored in ``profile_json``."""
    return {
        "profile_name": profile.name,
        "profile_description": profile.description,
        "tone_of_voice": profile.tone,
        "evaluationCriteria": list(profile.evaluation_criteria),
        "summaryLength": profile.summary_length,
        "categoryTags": profile.category_tags.as_dict(),
        "rssFeeds": [feed_to_dict(feed) for feed in profile.rss_feeds],
        "metadata": {
            "createdAt": _format_timestamp(profile.metadata.created_at),
            "updatedAt": _format_timestamp(profile.metadata.updated_at),
            "version": profile.metadata.version,
        },
    }


def profile_from_dict(data: Mapping[str, Any]) -> Profile:
    """Decode a stored ``profile_json`` payload starting from a blank profile."""
    return load_from_untyped_json(data, create_empty())


def export_as_json(profile: Profile) -> str:
    return json.dumps(profile_to_dict(profile), indent=2, ensure_ascii=False)


def load_from_untyped_json(blob: Any, current: Profile) -> Profile:
    """Decode an untrusted JSON document into a profile.

    Absent or mis-shaped fields fall back to defaults, category tags merge
    onto ``current``'s tags and ``createdAt`` falls back to ``current``'s.
    ``updatedAt`` is always stamped with the load time. Only a document that
    cannot be read at all raises ``InvalidProfileFormatError``.
    """
    try:
        if isinstance(blob, (str, bytes, bytearray)):
            blob = json.loads(blob)
        return _merge_blob(blob, current)
    except (AttributeError, TypeError, ValueError) as e:
        raise InvalidProfileFormatError() from e


def _merge_blob(blob: Mapping[str, Any], current: Profile) -> Profile:
    criteria = blob.get("evaluationCriteria")
    feeds = blob.get("rssFeeds")
    metadata = blob.get("metadata")
    if not isinstance(metadata, Mapping):
        metadata = {}

    created_at = _parse_timestamp(metadata.get("createdAt"))

    return Profile(
        name=_string(blob.get("profile_name")),
        description=_string(blob.get("profile_description")),
        tone=_string(blob.get("tone_of_voice")),
        evaluation_criteria=_criteria(criteria),
        summary_length=_summary_length(blob.get("summaryLength")),
        category_tags=_merge_tags(current.category_tags, blob.get("categoryTags")),
        rss_feeds=tuple(_feed_from_dict(f) for f in feeds) if isinstance(feeds, list) else (),
        metadata=ProfileMetadata(
            created_at=created_at or current.metadata.created_at,
            updated_at=_now(),
            version=PROFILE_VERSION,
        ),
    )


def _criteria(value: Any) -> tuple[str, ...]:
    # Non-string and blank entries are dropped, like blank form criteria
    if not isinstance(value, list):
        return ()
    kept = tuple(c for c in value if isinstance(c, str) and c.strip())
    return kept[:MAX_EVALUATION_CRITERIA]


def _summary_length(value: Any) -> int:
    """Whole numbers are kept (``200.0`` reads as 200); anything else is 150."""
    if isinstance(value, bool):
        return DEFAULT_SUMMARY_LENGTH
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not value:
        return DEFAULT_SUMMARY_LENGTH
    return value


def _merge_tags(current: CategoryTags, incoming: Any) -> CategoryTags:
    if not isinstance(incoming, Mapping):
        return current
    known = {k: bool(v) for k, v in incoming.items() if k in CategoryTags.names()}
    return replace(current, **known)


def _feed_from_dict(data: Mapping[str, Any]) -> Feed:
    if not isinstance(data, Mapping):
        raise TypeError("feed entry must be an object")
    try:
        status = FeedStatus(data.get("status"))
    except ValueError:
        status = FeedStatus.PAUSED
    feed_id = data.get("id")
    return Feed(
        id=feed_id if isinstance(feed_id, int) and not isinstance(feed_id, bool) else 0,
        name=_string(data.get("name")),
        url=_string(data.get("url")),
        status=status,
        selected=False,
    )


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    # Timestamps are kept naive UTC throughout
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
