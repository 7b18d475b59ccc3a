"""Catalog filtering — free-text search plus exact subject match.

Both filters are pure functions over a sequence of graphs and return the
matching subsequence in input order.  They scan linearly on every call;
fine for catalogs of a few thousand entries, beyond that an index is needed.
"""

from __future__ import annotations

from collections.abc import Sequence

from graphzlive.domain.graph import Graph


def _normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def matches_text(graph: Graph, term: str) -> bool:
    """True if *term* (already lowercased) occurs in any searchable field."""
    if not term:
        return True
    haystacks = (graph.name, graph.alias, graph.description, graph.subject)
    if any(term in h.lower() for h in haystacks):
        return True
    return any(term in tag.lower() for tag in graph.tags)


def filter_graphs(
    graphs: Sequence[Graph],
    text: str | None = None,
    category: str | None = None,
) -> list[Graph]:
    """Public catalog filter.

    Args:
        graphs: The cached catalog, in display order.
        text: Case-insensitive substring matched against name, alias,
            description, subject, and every tag.  Blank means no text filter.
        category: Exact subject to keep.  None or blank means no category filter.

    Examples:
        >>> filter_graphs([], "anything")
        []
    """
    term = _normalize(text)
    return [
        g for g in graphs if matches_text(g, term) and (not category or g.subject == category)
    ]


def filter_admin_table(
    graphs: Sequence[Graph],
    text: str | None = None,
    subject: str | None = None,
) -> list[Graph]:
    """Admin table filter: text over name/alias/description only, exact subject."""
    term = _normalize(text)
    result: list[Graph] = []
    for g in graphs:
        if term and not any(term in h.lower() for h in (g.name, g.alias, g.description)):
            continue
        if subject and g.subject != subject:
            continue
        result.append(g)
    return result
