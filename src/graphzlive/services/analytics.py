"""AnalyticsService — best-effort event log and theme preference.

Events are appended to a ring buffer in local storage
(``{"events": [...]}`` under the configured key), keeping the most recent
``analytics.capacity`` entries.  Tracking never fails the operation that
triggered it: storage errors are logged and dropped.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog
from pydantic import ValidationError

from graphzlive.infrastructure.local_storage import LocalStorageError
from graphzlive.services._helpers import now_iso
from graphzlive.services.base import BaseService
from graphzlive.services.contracts import AnalyticsEvent
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import traced

logger = logging.getLogger(__name__)
_events_log = structlog.get_logger("graphzlive.analytics")

THEME_KEY = "theme"
THEMES = ("light", "dark")
DEFAULT_THEME = "light"


class AnalyticsService(BaseService):
    """Tracks user-interaction events and stores client preferences."""

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _read_events(self) -> list[dict[str, Any]]:
        blob = self._workspace.local_storage.get_item(self._settings.analytics.storage_key)
        if not isinstance(blob, dict):
            return []
        stored = blob.get("events")
        if not isinstance(stored, list):
            return []
        events: list[dict[str, Any]] = []
        for entry in stored:
            try:
                events.append(AnalyticsEvent.model_validate(entry).model_dump(mode="python"))
            except ValidationError:
                logger.debug("Skipping malformed analytics entry: %r", entry)
        return events

    def track_event(self, event: str, graph_id: str | None = None, **extra: Any) -> bool:
        """Append ``{event, graphId, timestamp, **extra}`` to the ring buffer.

        Returns True if the event was stored.  Never raises.
        """
        config = self._settings.analytics
        if not config.enabled:
            return False

        record = {"event": event, "graphId": graph_id, "timestamp": now_iso(), **extra}
        _events_log.debug("analytics.event", name=event, graph_id=graph_id, **extra)
        try:
            events = self._read_events()
            events.append(record)
            self._workspace.local_storage.set_item(
                config.storage_key, {"events": events[-config.capacity :]}
            )
        except (LocalStorageError, TypeError, ValueError):
            logger.warning("Analytics event %r not recorded", event, exc_info=True)
            return False
        return True

    @traced
    def list_events(self, *, limit: int | None = None) -> ServiceResult:
        """Stored events, oldest first; *limit* keeps only the newest N."""
        op = "list_events"
        try:
            events = self._read_events()
        except LocalStorageError as exc:
            logger.warning("Cannot read analytics events: %s", exc)
            return failure(op, "LOAD_FAILED", "Failed to read analytics events")

        total = len(events)
        if limit is not None and limit >= 0:
            events = events[-limit:] if limit else []
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(events), "total": total, "events": events},
        )

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------

    def current_theme(self) -> str:
        try:
            theme = self._workspace.local_storage.get_item(THEME_KEY)
        except LocalStorageError:
            logger.warning("Cannot read theme preference", exc_info=True)
            return DEFAULT_THEME
        return theme if theme in THEMES else DEFAULT_THEME

    @traced
    def theme(self) -> ServiceResult:
        return ServiceResult(ok=True, op="theme", data={"theme": self.current_theme()})

    @traced
    def toggle_theme(self) -> ServiceResult:
        """Flip between light and dark and persist the choice."""
        op = "theme"
        new_theme = "dark" if self.current_theme() == "light" else "light"
        warnings: list[str] = []
        try:
            self._workspace.local_storage.set_item(THEME_KEY, new_theme)
        except LocalStorageError as exc:
            logger.warning("Cannot save theme preference: %s", exc)
            warnings.append("Theme preference could not be saved")
        return ServiceResult(
            ok=True,
            op=op,
            data={"theme": new_theme, "toggled": True},
            warnings=warnings,
        )
