"""CounterService — atomic like/view/comment-count increments.

Each increment is a single ``+1`` against the stored field, mirrored into
the cached entry only after the store accepted it.  A transient store
failure is logged and reported as a warning, never as an error: the
interaction that triggered it still succeeds, and the cache stays as it was
until the next full reload.
"""

from __future__ import annotations

import logging

from graphzlive.infrastructure.store import GRAPHS, Increment, StoreError
from graphzlive.services.analytics import AnalyticsService
from graphzlive.services.base import BaseService
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import traced

logger = logging.getLogger(__name__)


class CounterService(BaseService):
    """Increment-only engagement counters on graph documents."""

    @traced
    def like(self, graph_id: str) -> ServiceResult:
        return self._increment("like", graph_id, "likeCount", event="like")

    @traced
    def view(self, graph_id: str) -> ServiceResult:
        return self._increment("view", graph_id, "viewCount", event="view")

    @traced
    def increment_comment_count(self, graph_id: str) -> ServiceResult:
        return self._increment("increment_comment_count", graph_id, "commentCount")

    def _increment(
        self,
        op: str,
        graph_id: str,
        field: str,
        *,
        event: str | None = None,
    ) -> ServiceResult:
        try:
            self._workspace.store.update_doc(GRAPHS, graph_id, {field: Increment(1)})
        except StoreError as exc:
            if exc.code == "not-found":
                return failure(op, "NOT_FOUND", f"No graph found with ID: {graph_id}")
            logger.warning("Increment of %s on %s failed", field, graph_id, exc_info=True)
            return ServiceResult(
                ok=True,
                op=op,
                data={"graph_id": graph_id, "field": field, "applied": False, "count": None},
                warnings=[f"Could not update {field} for {graph_id}"],
            )

        patched = self._catalog.patch_counter(graph_id, field, 1)
        if event is not None:
            AnalyticsService(self._workspace).track_event(event, graph_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "graph_id": graph_id,
                "field": field,
                "applied": True,
                "count": patched.counter(field) if patched is not None else None,
            },
        )
