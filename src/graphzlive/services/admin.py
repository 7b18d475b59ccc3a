"""AdminService — graph CRUD, dashboard numbers, and analytics export.

Every mutation is WRITE → RELOAD: after the store accepts a create, update
or delete, the whole catalog is re-fetched so the cache and tables reflect
the store.  Deleting a graph does not cascade to its comment
sub-collection; leftover comments are reported as a warning.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from graphzlive.domain.aggregation import catalog_stats, popular_subjects, top_graphs
from graphzlive.domain.filters import filter_admin_table
from graphzlive.domain.forms import REQUIRED_FIELDS_MESSAGE, GraphForm, form_inputs
from graphzlive.infrastructure.store import (
    GRAPHS,
    SERVER_TIMESTAMP,
    StoreError,
    comments_path,
)
from graphzlive.services._helpers import now_iso, today_iso
from graphzlive.services.base import BaseService
from graphzlive.services.catalog import CatalogService
from graphzlive.services.contracts import StatsData, dump_validated
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import traced

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "graphzlive-analytics-{date}.json"


class AdminService(BaseService):
    """Admin-surface operations on the graph collection."""

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    @traced
    def save(self, form: GraphForm, *, existing_id: str | None = None) -> ServiceResult:
        """Create a graph, or update *existing_id* with the submitted fields."""
        op = "save_graph"
        missing = form.missing_fields()
        if missing:
            return failure(op, "VALIDATION_ERROR", REQUIRED_FIELDS_MESSAGE, missing=missing)

        fields = form.to_document()
        store = self._workspace.store
        try:
            if existing_id:
                store.update_doc(GRAPHS, existing_id, {**fields, "updatedAt": SERVER_TIMESTAMP})
                graph_id = existing_id
            else:
                graph_id = store.add_doc(
                    GRAPHS,
                    {
                        **fields,
                        "likeCount": 0,
                        "commentCount": 0,
                        "viewCount": 0,
                        "createdAt": SERVER_TIMESTAMP,
                        "updatedAt": SERVER_TIMESTAMP,
                    },
                )
        except StoreError as exc:
            if exc.code == "not-found":
                return failure(op, "NOT_FOUND", f"No graph found with ID: {existing_id}")
            logger.error("Saving graph failed: %s", exc)
            return failure(op, "SAVE_FAILED", "Failed to save graph")

        logger.info("%s graph %s", "Updated" if existing_id else "Created", graph_id)
        warnings = self._reload()
        graph = self._catalog.get(graph_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "graph_id": graph_id,
                "created": existing_id is None,
                "graph": graph.to_payload() if graph is not None else None,
                "total": len(self._catalog),
            },
            warnings=warnings,
        )

    @traced
    def delete(self, graph_id: str) -> ServiceResult:
        """Remove a graph document outright, then reload the catalog."""
        op = "delete_graph"
        store = self._workspace.store
        try:
            removed = store.delete_doc(GRAPHS, graph_id)
        except StoreError as exc:
            logger.error("Deleting graph %s failed: %s", graph_id, exc)
            return failure(op, "DELETE_FAILED", "Failed to delete graph")
        if not removed:
            return failure(op, "NOT_FOUND", f"No graph found with ID: {graph_id}")

        warnings: list[str] = []
        orphaned = 0
        try:
            orphaned = store.count_docs(comments_path(graph_id))
        except StoreError:
            logger.debug("Could not count comments of %s", graph_id, exc_info=True)
        if orphaned:
            warnings.append(f"{orphaned} comment(s) left under {comments_path(graph_id)}")

        logger.info("Deleted graph %s", graph_id)
        warnings.extend(self._reload())
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "graph_id": graph_id,
                "orphaned_comments": orphaned,
                "total": len(self._catalog),
            },
            warnings=warnings,
        )

    def _reload(self) -> list[str]:
        result = CatalogService(self._workspace).load()
        if result.ok:
            return []
        return ["Catalog reload failed; listings may be stale"]

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    @traced
    def list_graphs(
        self,
        *,
        text: str | None = None,
        subject: str | None = None,
    ) -> ServiceResult:
        """Admin table rows (text over name/alias/description, exact subject)."""
        op = "admin_list"
        load_error = CatalogService(self._workspace).ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})

        graphs = self._catalog.graphs
        rows = filter_admin_table(graphs, text, subject)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(rows),
                "total": len(graphs),
                "subjects": sorted({g.subject for g in graphs}),
                "items": [g.to_payload() for g in rows],
            },
        )

    @traced
    def get_graph(self, graph_id: str) -> ServiceResult:
        """One graph, plus its stored fields as raw form inputs for an edit."""
        op = "get_graph"
        load_error = CatalogService(self._workspace).ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})
        graph = self._catalog.get(graph_id)
        if graph is None:
            return failure(op, "NOT_FOUND", f"No graph found with ID: {graph_id}")

        try:
            doc = self._workspace.store.get_doc(GRAPHS, graph_id)
        except StoreError as exc:
            logger.error("Reading graph %s failed: %s", graph_id, exc)
            return failure(op, "LOAD_FAILED", "Failed to load graph", retry=True)
        if doc is None:
            return failure(op, "NOT_FOUND", f"No graph found with ID: {graph_id}")
        return ServiceResult(
            ok=True,
            op=op,
            data={"graph": graph.to_payload(), "form": form_inputs(doc.data)},
        )

    @traced
    def stats(self) -> ServiceResult:
        """Dashboard totals over the cached catalog."""
        op = "stats"
        load_error = CatalogService(self._workspace).ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})
        stats = catalog_stats(self._catalog.graphs)
        return ServiceResult(ok=True, op=op, data=dump_validated(StatsData, stats.as_dict()))

    @traced
    def analytics(self) -> ServiceResult:
        """Totals, popular subjects, and the most viewed graphs."""
        op = "analytics"
        load_error = CatalogService(self._workspace).ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})

        config = self._settings.catalog
        graphs = self._catalog.graphs
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "totals": catalog_stats(graphs).as_dict(),
                "popular_subjects": [
                    {"subject": s, "count": n}
                    for s, n in popular_subjects(graphs, config.popular_subjects_limit)
                ],
                "top_graphs": [
                    {"id": g.id, "name": g.name, "subject": g.subject, "views": g.view_count}
                    for g in top_graphs(graphs, config.top_graphs_limit)
                ],
            },
        )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def build_export(self) -> dict[str, Any]:
        """Analytics snapshot of the cached catalog."""
        graphs = self._catalog.graphs
        stats = catalog_stats(graphs)
        return {
            "exportDate": now_iso(),
            "totalGraphs": stats.total_graphs,
            "totalViews": stats.total_views,
            "totalLikes": stats.total_likes,
            "totalComments": stats.total_comments,
            "graphs": [
                {
                    "name": g.name,
                    "alias": g.alias,
                    "subject": g.subject,
                    "views": g.view_count,
                    "likes": g.like_count,
                    "comments": g.comment_count,
                    "createdAt": g.created_at.isoformat(),
                }
                for g in graphs
            ],
        }

    @traced
    def export_analytics(self, output: Path | None = None) -> ServiceResult:
        """Write the analytics snapshot as JSON.

        Defaults to ``graphzlive-analytics-YYYY-MM-DD.json`` in the site root.
        """
        op = "export_analytics"
        load_error = CatalogService(self._workspace).ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})

        path = output or self._workspace.root / EXPORT_FILENAME.format(date=today_iso())
        snapshot = self.build_export()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(snapshot, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Analytics export failed: %s", exc)
            return failure(op, "EXPORT_FAILED", f"Failed to write {path}")

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "count": len(snapshot["graphs"])},
        )
