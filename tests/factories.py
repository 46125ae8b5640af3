"""Test data builders."""

from typing import Any


def make_record(**overrides: Any) -> dict[str, Any]:
    """A complete record draft as the save endpoint expects it."""
    profile_json: dict[str, Any] = {
        "profile_name": "Digest A",
        "profile_description": "Morning digest",
        "tone_of_voice": "neutral",
        "evaluationCriteria": ["accuracy"],
        "summaryLength": 150,
        "categoryTags": {
            "inTheNews": True,
            "transHealth": False,
            "genderSenseLatest": False,
            "transitionCoaching": False,
            "communityHighlights": False,
            "transRights": False,
        },
        "rssFeeds": [
            {
                "id": 1,
                "name": "Example News",
                "url": "https://example.com/rss",
                "status": "active",
                "selected": True,
            }
        ],
        "metadata": {
            "createdAt": "2026-01-28T10:00:00",
            "updatedAt": "2026-01-28T10:00:00",
            "version": "1.0",
        },
    }
    json_overrides = overrides.pop("profile_json", {})
    name = profile_json["profile_name"]
    description = profile_json["profile_description"]
    if isinstance(json_overrides, dict):
        profile_json.update(json_overrides)
        payload: Any = profile_json
    else:
        payload = json_overrides

    record: dict[str, Any] = {
        "profile_name": name,
        "profile_description": description,
        "is_active": True,
        "profile_json": payload,
    }
    record.update(overrides)
    return record
