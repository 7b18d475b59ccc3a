"""Graph and Comment models — the catalog's document schema.

Stored documents are loose: legacy entries carry a single ``image`` field,
``likes``/``comments`` instead of the ``*Count`` counters, and sometimes no
timestamps at all.  All defaulting happens once, in :meth:`Graph.from_document`
and :meth:`Comment.from_document`, at the store-read boundary.  Render and
filter code downstream sees fully populated models only.

INVARIANT: counters are maintained by increment/decrement side effects and
are never recomputed from the sub-documents they count.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_NAME = "Untitled Graph"
DEFAULT_DESCRIPTION = "No description available."
DEFAULT_SUBJECT = "General"
DEFAULT_SOURCE = "#"
DEFAULT_AUTHOR = "Anonymous"

# Counter field -> legacy field consulted when the counter is missing or zero.
COUNTER_FIELDS: dict[str, str | None] = {
    "likeCount": "likes",
    "commentCount": "comments",
    "viewCount": None,
}

# Optional monetization fields, stored under their document names.
MONETIZATION_FIELDS = (
    "affiliateLink",
    "affiliateTitle",
    "sponsorName",
    "sponsorMessage",
    "sponsorLink",
    "sponsorLogo",
    "telegramLink",
    "donationLink",
)


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a stored timestamp (ISO string or datetime) to an aware datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        try:
            dt = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _count(data: dict[str, Any], field: str, legacy: str | None) -> int:
    """First truthy value of *field* then *legacy*, clamped at zero."""
    for key in (field, legacy):
        if key is None:
            continue
        raw = data.get(key)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            continue
        if raw:
            return max(0, int(raw))
    return 0


def _string_list(value: Any) -> list[str]:
    """Non-empty strings from *value*, deduplicated in first-seen order."""
    if not isinstance(value, list):
        return []
    return list(dict.fromkeys(str(v) for v in value if isinstance(v, str) and v.strip()))


class Graph(BaseModel):
    """One catalog entry.

    Field names are Python-style; :meth:`to_payload` and the JSON payloads
    use the store's camelCase names via aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = DEFAULT_NAME
    alias: str = ""
    description: str = DEFAULT_DESCRIPTION
    subject: str = DEFAULT_SUBJECT
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    source: str = DEFAULT_SOURCE

    affiliate_link: str | None = Field(default=None, alias="affiliateLink")
    affiliate_title: str | None = Field(default=None, alias="affiliateTitle")
    sponsor_name: str | None = Field(default=None, alias="sponsorName")
    sponsor_message: str | None = Field(default=None, alias="sponsorMessage")
    sponsor_link: str | None = Field(default=None, alias="sponsorLink")
    sponsor_logo: str | None = Field(default=None, alias="sponsorLogo")
    telegram_link: str | None = Field(default=None, alias="telegramLink")
    donation_link: str | None = Field(default=None, alias="donationLink")

    like_count: int = Field(default=0, ge=0, alias="likeCount")
    comment_count: int = Field(default=0, ge=0, alias="commentCount")
    view_count: int = Field(default=0, ge=0, alias="viewCount")

    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_document(
        cls,
        doc_id: str,
        data: dict[str, Any],
        *,
        now: datetime | None = None,
    ) -> Graph:
        """Build a Graph from raw store data, applying every read default.

        Legacy documents fall back to ``image`` for media and ``likes`` /
        ``comments`` for counters; missing timestamps default to *now*.
        """
        now = now or datetime.now(UTC)

        images = data.get("images")
        if images is None:
            images = [data.get("image")]

        fields: dict[str, Any] = {
            "id": doc_id,
            "name": _text(data.get("name"), DEFAULT_NAME),
            "alias": _text(data.get("alias"), ""),
            "description": _text(data.get("description"), DEFAULT_DESCRIPTION),
            "subject": _text(data.get("subject"), DEFAULT_SUBJECT),
            "tags": _string_list(data.get("tags")),
            "images": _string_list(images),
            "source": _text(data.get("source"), DEFAULT_SOURCE),
            "createdAt": parse_timestamp(data.get("createdAt")) or now,
            "updatedAt": parse_timestamp(data.get("updatedAt")) or now,
        }
        for name in MONETIZATION_FIELDS:
            fields[name] = _optional_text(data.get(name))
        for counter, legacy in COUNTER_FIELDS.items():
            fields[counter] = _count(data, counter, legacy)

        return cls.model_validate(fields)

    def counter(self, field: str) -> int:
        """Read a counter by its document name (``likeCount`` etc.)."""
        return {
            "likeCount": self.like_count,
            "commentCount": self.comment_count,
            "viewCount": self.view_count,
        }[field]

    def with_counter(self, field: str, delta: int) -> Graph:
        """Return a copy with counter *field* moved by *delta* (floored at 0)."""
        attr = {
            "likeCount": "like_count",
            "commentCount": "comment_count",
            "viewCount": "view_count",
        }[field]
        return self.model_copy(update={attr: max(0, getattr(self, attr) + delta)})

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict using the store's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


class Comment(BaseModel):
    """A comment sub-document under one graph."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    graph_id: str = Field(alias="graphId")
    text: str
    author: str = DEFAULT_AUTHOR
    timestamp: datetime | None = None
    likes: int = 0

    @classmethod
    def from_document(cls, doc_id: str, graph_id: str, data: dict[str, Any]) -> Comment:
        """Build a Comment from raw store data."""
        likes = data.get("likes")
        return cls.model_validate(
            {
                "id": doc_id,
                "graphId": graph_id,
                "text": str(data.get("text") or ""),
                "author": _text(data.get("author"), DEFAULT_AUTHOR),
                "timestamp": parse_timestamp(data.get("timestamp")),
                "likes": likes if isinstance(likes, int) and not isinstance(likes, bool) else 0,
            }
        )

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict using camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
