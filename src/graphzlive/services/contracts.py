"""Typed payload contracts for service boundaries.

These models validate payload shapes before they leave the service layer,
so a renamed key (``items`` vs ``graphs``) fails fast in tests instead of
rendering an empty table.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class GraphItem(BaseModel):
    """One graph row as emitted by listing operations (camelCase keys)."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    alias: str
    description: str
    subject: str
    tags: list[str]
    images: list[str]
    likeCount: int  # noqa: N815
    commentCount: int  # noqa: N815
    viewCount: int  # noqa: N815
    createdAt: str  # noqa: N815


class CatalogListData(BaseModel):
    """Payload contract for ``CatalogService.load`` and ``list_graphs``."""

    count: int
    total: int
    text: str | None = None
    category: str | None = None
    popular_tags: list[str] = Field(default_factory=list)
    items: list[GraphItem]


class CommentItem(BaseModel):
    """One comment row."""

    model_config = ConfigDict(extra="allow")

    id: str
    graphId: str  # noqa: N815
    text: str
    author: str
    timestamp: str | None
    likes: int


class CommentListData(BaseModel):
    """Payload contract for ``CommentService.load_comments`` and ``recent``."""

    model_config = ConfigDict(extra="allow")

    count: int
    comments: list[CommentItem]


class StatsData(BaseModel):
    """Payload contract for ``AdminService.stats``."""

    total_graphs: int
    total_views: int
    total_likes: int
    total_comments: int
    today_uploads: int


class AnalyticsEvent(BaseModel):
    """One tracked event as stored in local storage."""

    model_config = ConfigDict(extra="allow")

    event: str
    graphId: str | None = None  # noqa: N815
    timestamp: str
