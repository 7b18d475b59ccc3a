"""Derived catalog views — tag frequency, popular subjects, top graphs.

All rankings sort by count descending with a stable sort, so ties keep the
order in which the aggregation pass first met each key.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from graphzlive.domain.graph import DEFAULT_SUBJECT, Graph


def tag_frequency(graphs: Sequence[Graph]) -> list[tuple[str, int]]:
    """Count tag occurrences across *graphs*, most frequent first.

    Examples:
        >>> tag_frequency([])
        []
    """
    counts: Counter[str] = Counter()
    for graph in graphs:
        # A graph's tags are a set: repeats within one graph count once.
        counts.update(list(dict.fromkeys(graph.tags)))
    # Counter preserves insertion order, sorted() is stable.
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def popular_tags(graphs: Sequence[Graph], limit: int = 10) -> list[str]:
    """The *limit* most frequent tags (filter chips)."""
    return [tag for tag, _ in tag_frequency(graphs)[:limit]]


def popular_subjects(graphs: Sequence[Graph], limit: int = 6) -> list[tuple[str, int]]:
    """The *limit* subjects with the most graphs."""
    counts: Counter[str] = Counter(g.subject or DEFAULT_SUBJECT for g in graphs)
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]


def top_graphs(graphs: Sequence[Graph], limit: int = 5) -> list[Graph]:
    """The *limit* graphs with the highest view count."""
    return sorted(graphs, key=lambda g: g.view_count, reverse=True)[:limit]


@dataclass(frozen=True)
class CatalogStats:
    """Headline numbers for the admin dashboard."""

    total_graphs: int
    total_views: int
    total_likes: int
    total_comments: int
    today_uploads: int

    def as_dict(self) -> dict[str, int]:
        return {
            "total_graphs": self.total_graphs,
            "total_views": self.total_views,
            "total_likes": self.total_likes,
            "total_comments": self.total_comments,
            "today_uploads": self.today_uploads,
        }


def catalog_stats(graphs: Sequence[Graph], *, now: datetime | None = None) -> CatalogStats:
    """Sum counters and count graphs created since UTC midnight."""
    now = now or datetime.now(UTC)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return CatalogStats(
        total_graphs=len(graphs),
        total_views=sum(g.view_count for g in graphs),
        total_likes=sum(g.like_count for g in graphs),
        total_comments=sum(g.comment_count for g in graphs),
        today_uploads=sum(1 for g in graphs if g.created_at >= midnight),
    )
