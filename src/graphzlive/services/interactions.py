"""InteractionService — detail view, deep links, sharing, and outbound links.

Opening a graph is LOOKUP → COUNT VIEW → LOAD COMMENTS → RESPOND and
returns an explicit :class:`DetailView` payload.  There is no notion of a
"currently open" graph shared between calls.
"""

from __future__ import annotations

import logging
from typing import Any

from graphzlive.domain.catalog import DetailView
from graphzlive.domain.graph import DEFAULT_SOURCE, Graph
from graphzlive.domain.links import graph_id_from_url, share_text, share_url
from graphzlive.infrastructure.store import StoreError
from graphzlive.services.analytics import AnalyticsService
from graphzlive.services.base import BaseService
from graphzlive.services.catalog import CatalogService
from graphzlive.services.comments import CommentService
from graphzlive.services.counters import CounterService
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import traced

logger = logging.getLogger(__name__)

# Outbound link target -> (Graph attribute, analytics event).
VISIT_TARGETS: dict[str, tuple[str, str]] = {
    "source": ("source", "source_click"),
    "affiliate": ("affiliate_link", "affiliate_click"),
    "sponsor": ("sponsor_link", "sponsor_click"),
    "telegram": ("telegram_link", "telegram_click"),
}


def detail_payload(view: DetailView) -> dict[str, Any]:
    """Serialize a DetailView for ServiceResult.data."""
    return {
        "graph": view.graph.to_payload(),
        "comments": [c.to_payload() for c in view.comments],
        "comments_error": view.comments_error,
    }


class InteractionService(BaseService):
    """Public-surface interactions with a single graph."""

    def _lookup(self, op: str, graph_id: str) -> Graph | ServiceResult:
        catalog = CatalogService(self._workspace)
        load_error = catalog.ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})
        graph = self._catalog.get(graph_id)
        if graph is None:
            return failure(op, "NOT_FOUND", f"No graph found with ID: {graph_id}")
        return graph

    @traced
    def open_detail(self, graph_id: str) -> ServiceResult:
        """Show one graph: count the view, then load its comments.

        Unknown ids fail with ``NOT_FOUND`` and nothing is incremented.
        """
        op = "open_detail"
        found = self._lookup(op, graph_id)
        if isinstance(found, ServiceResult):
            return found

        viewed = CounterService(self._workspace).view(graph_id)
        warnings = list(viewed.warnings)
        if viewed.error is not None:
            warnings.append(viewed.error.message)
        graph = self._catalog.get(graph_id) or found

        comments_error: str | None = None
        try:
            comments = tuple(CommentService(self._workspace).fetch(graph_id))
        except StoreError:
            logger.warning("Comments for %s unavailable", graph_id, exc_info=True)
            comments = ()
            comments_error = "Failed to load comments"

        view = DetailView(graph=graph, comments=comments, comments_error=comments_error)
        return ServiceResult(ok=True, op=op, data=detail_payload(view), warnings=warnings)

    @traced
    def open_link(self, url: str) -> ServiceResult:
        """Open the graph named by a ``?graph=<id>`` page URL."""
        graph_id = graph_id_from_url(url)
        if graph_id is None:
            return failure("open_detail", "INVALID_LINK", f"No graph id in link: {url}")
        return self.open_detail(graph_id)

    @traced
    def share(self, graph_id: str) -> ServiceResult:
        """Build the share text and deep-link URL for one graph."""
        op = "share"
        found = self._lookup(op, graph_id)
        if isinstance(found, ServiceResult):
            return found

        site = self._settings.site
        AnalyticsService(self._workspace).track_event("share_copied", graph_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "graph_id": graph_id,
                "name": found.name,
                "text": share_text(found.name, site.name),
                "url": share_url(site.base_url, graph_id),
            },
        )

    @traced
    def visit(self, graph_id: str, target: str) -> ServiceResult:
        """Resolve an outbound link on a graph and record the click."""
        op = "visit"
        if target not in VISIT_TARGETS:
            return failure(op, "INVALID_TARGET", f"Unknown link target: {target}")
        found = self._lookup(op, graph_id)
        if isinstance(found, ServiceResult):
            return found

        attr, event = VISIT_TARGETS[target]
        url = getattr(found, attr)
        if not url or url == DEFAULT_SOURCE:
            return failure(op, "NO_LINK", f"Graph {graph_id} has no {target} link")

        AnalyticsService(self._workspace).track_event(event, graph_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={"graph_id": graph_id, "target": target, "url": url, "event": event},
        )
