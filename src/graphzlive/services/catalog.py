"""CatalogService — load the graph collection and derive filtered views.

Pipeline for ``load``: FETCH → NORMALIZE → REPLACE CACHE → RESPOND.
A failed fetch leaves the cached catalog exactly as it was.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from graphzlive.domain.aggregation import popular_tags, tag_frequency
from graphzlive.domain.filters import filter_graphs
from graphzlive.domain.graph import Graph
from graphzlive.infrastructure.store import GRAPHS, StoreError
from graphzlive.services.base import BaseService
from graphzlive.services.contracts import CatalogListData, dump_validated
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load graphs"


class CatalogService(BaseService):
    """Loads the catalog into the workspace cache and answers list queries."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def load(self) -> ServiceResult:
        """Fetch every graph, newest first, and replace the cache."""
        op = "load_catalog"
        with trace_span("fetch_graphs") as span:
            try:
                docs = self._workspace.store.get_docs(
                    GRAPHS, order_by="createdAt", descending=True
                )
            except StoreError as exc:
                logger.error("Catalog load failed: %s", exc)
                return failure(op, "LOAD_FAILED", LOAD_FAILED_MESSAGE, retry=True)
            if span:
                span.annotate("documents", len(docs))

        now = datetime.now(UTC)
        graphs = [Graph.from_document(doc.id, doc.data, now=now) for doc in docs]
        self._catalog.replace(graphs)
        logger.debug("Loaded %d graphs", len(graphs))
        return ServiceResult(ok=True, op=op, data=self._list_payload(graphs))

    def ensure_loaded(self) -> ServiceResult | None:
        """Load the catalog if this process has not yet.

        Returns the failed load result, or None when the cache is ready.
        """
        if self._catalog.loaded:
            return None
        result = self.load()
        return None if result.ok else result

    @traced
    def list_graphs(
        self,
        *,
        text: str | None = None,
        category: str | None = None,
    ) -> ServiceResult:
        """Filtered view of the cached catalog (loads it first if needed)."""
        op = "list_graphs"
        load_error = self.ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})

        matched = filter_graphs(self._catalog.graphs, text, category)
        return ServiceResult(
            ok=True,
            op=op,
            data=self._list_payload(matched, text=text, category=category),
        )

    @traced
    def tags(self) -> ServiceResult:
        """Tag frequency over the whole catalog, most used first."""
        op = "tags"
        load_error = self.ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})

        freq = tag_frequency(self._catalog.graphs)
        limit = self._settings.catalog.popular_tags_limit
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(freq),
                "popular": [tag for tag, _ in freq[:limit]],
                "tags": [{"tag": tag, "count": count} for tag, count in freq],
            },
        )

    def get(self, graph_id: str) -> Graph | None:
        """Cached graph by id (None if unknown or the catalog failed to load)."""
        self.ensure_loaded()
        return self._catalog.get(graph_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _list_payload(
        self,
        graphs: list[Graph],
        *,
        text: str | None = None,
        category: str | None = None,
    ) -> dict[str, Any]:
        limit = self._settings.catalog.popular_tags_limit
        return dump_validated(
            CatalogListData,
            {
                "count": len(graphs),
                "total": len(self._catalog),
                "text": text,
                "category": category,
                "popular_tags": popular_tags(self._catalog.graphs, limit),
                "items": [g.to_payload() for g in graphs],
            },
        )
