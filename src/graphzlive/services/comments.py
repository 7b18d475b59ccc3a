"""CommentService — post, list, and moderate graph comments.

Comments are an append-only sub-collection per graph.  Posting is
WRITE → COUNT → RELOAD: the comment document is written, the parent's
``commentCount`` is incremented, then the full list is re-read from the
store (no local merge).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from graphzlive.domain.graph import Comment
from graphzlive.infrastructure.store import GRAPHS, SERVER_TIMESTAMP, StoreError, comments_path
from graphzlive.services.analytics import AnalyticsService
from graphzlive.services.base import BaseService
from graphzlive.services.catalog import CatalogService
from graphzlive.services.contracts import CommentListData, dump_validated
from graphzlive.services.counters import CounterService
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=UTC)


class CommentService(BaseService):
    """Public comment posting/listing and admin moderation."""

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    @traced
    def post(self, graph_id: str, text: str, *, author: str | None = None) -> ServiceResult:
        """Post a comment; empty or whitespace-only text is rejected locally."""
        op = "post_comment"
        body = (text or "").strip()
        if not body:
            return failure(op, "EMPTY_COMMENT", "Comment cannot be empty")

        try:
            parent = self._workspace.store.get_doc(GRAPHS, graph_id)
        except StoreError as exc:
            logger.error("Comment post failed for %s: %s", graph_id, exc)
            return failure(op, "COMMENT_FAILED", "Failed to post comment")
        if parent is None:
            return failure(op, "NOT_FOUND", f"No graph found with ID: {graph_id}")

        name = (author or "").strip() or self._settings.comments.default_author
        try:
            comment_id = self._workspace.store.add_doc(
                comments_path(graph_id),
                {"text": body, "author": name, "timestamp": SERVER_TIMESTAMP, "likes": 0},
            )
        except StoreError as exc:
            logger.error("Comment post failed for %s: %s", graph_id, exc)
            return failure(op, "COMMENT_FAILED", "Failed to post comment")

        warnings: list[str] = []
        counted = CounterService(self._workspace).increment_comment_count(graph_id)
        warnings.extend(counted.warnings)

        reloaded = self.load_comments(graph_id)
        AnalyticsService(self._workspace).track_event("comment", graph_id)

        data = {
            "graph_id": graph_id,
            "comment_id": comment_id,
            "comment_count": counted.data.get("count"),
            "comments": reloaded.data.get("comments", []),
            "comments_error": reloaded.error.message if reloaded.error else None,
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @traced
    def load_comments(self, graph_id: str) -> ServiceResult:
        """All comments on one graph, newest first."""
        op = "load_comments"
        try:
            comments = self.fetch(graph_id)
        except StoreError as exc:
            logger.warning("Loading comments for %s failed: %s", graph_id, exc)
            return failure(op, "COMMENTS_UNAVAILABLE", "Failed to load comments")
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                CommentListData,
                {
                    "graph_id": graph_id,
                    "count": len(comments),
                    "comments": [c.to_payload() for c in comments],
                },
            ),
        )

    def fetch(self, graph_id: str) -> list[Comment]:
        """Read comments for *graph_id*, newest first.

        Raises:
            StoreError: the store read failed.
        """
        with trace_span("fetch_comments"):
            docs = self._workspace.store.get_docs(
                comments_path(graph_id), order_by="timestamp", descending=True
            )
        return [Comment.from_document(doc.id, graph_id, doc.data) for doc in docs]

    # ------------------------------------------------------------------
    # Admin surface
    # ------------------------------------------------------------------

    @traced
    def recent(
        self,
        *,
        graphs_limit: int | None = None,
        limit: int | None = None,
    ) -> ServiceResult:
        """Newest comments across the most recently created graphs.

        A graph whose comments cannot be read is skipped with a warning.
        """
        op = "recent_comments"
        config = self._settings.comments
        graphs_limit = config.recent_graphs_limit if graphs_limit is None else graphs_limit
        limit = config.recent_limit if limit is None else limit

        load_error = CatalogService(self._workspace).ensure_loaded()
        if load_error is not None:
            return load_error.model_copy(update={"op": op})

        warnings: list[str] = []
        collected: list[tuple[Comment, str]] = []
        for graph in self._catalog.graphs[:graphs_limit]:
            try:
                comments = self.fetch(graph.id)
            except StoreError:
                logger.warning("Skipping comments of %s", graph.id, exc_info=True)
                warnings.append(f"Could not load comments for {graph.name}")
                continue
            collected.extend((c, graph.name) for c in comments)

        collected.sort(key=lambda pair: pair[0].timestamp or _OLDEST, reverse=True)
        rows = [{**c.to_payload(), "graphName": name} for c, name in collected[:limit]]
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(CommentListData, {"count": len(rows), "comments": rows}),
            warnings=warnings,
        )

    @traced
    def delete(self, graph_id: str, comment_id: str) -> ServiceResult:
        """Delete one comment and decrement the parent's cached count by one."""
        op = "delete_comment"
        try:
            removed = self._workspace.store.delete_doc(comments_path(graph_id), comment_id)
        except StoreError as exc:
            logger.error("Deleting comment %s/%s failed: %s", graph_id, comment_id, exc)
            return failure(op, "DELETE_FAILED", "Failed to delete comment")
        if not removed:
            return failure(op, "NOT_FOUND", f"No comment {comment_id} on graph {graph_id}")

        warnings: list[str] = []
        CatalogService(self._workspace).ensure_loaded()
        graph = self._catalog.get(graph_id)
        new_count: int | None = None
        if graph is None:
            warnings.append(f"Comment count for {graph_id} not updated (graph not in catalog)")
        else:
            new_count = max(0, graph.comment_count - 1)
            try:
                self._workspace.store.update_doc(GRAPHS, graph_id, {"commentCount": new_count})
            except StoreError:
                logger.warning("Comment count update for %s failed", graph_id, exc_info=True)
                warnings.append(f"Comment count for {graph_id} not updated")
                new_count = None
            else:
                self._catalog.patch_counter(graph_id, "commentCount", -1)

        return ServiceResult(
            ok=True,
            op=op,
            data={"graph_id": graph_id, "comment_id": comment_id, "comment_count": new_count},
            warnings=warnings,
        )
