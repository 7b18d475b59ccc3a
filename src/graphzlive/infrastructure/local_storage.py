"""LocalStorage — a small persistent key-value store in one JSON file.

Holds per-user client state: the theme preference, the analytics ring
buffer, and the admin session record.  The file is re-read on every
access so separate ``graphz`` invocations see each other's writes, and
written via a temp file plus rename so a crash never leaves it half-written.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LOCAL_STORAGE_FILENAME = "local_storage.json"


class LocalStorageError(Exception):
    """The storage file could not be read or written."""


class LocalStorage:
    """``get_item`` / ``set_item`` / ``remove_item`` over a JSON object file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LocalStorageError(f"Cannot read {self._path}: {exc}") from exc
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise LocalStorageError(f"Corrupt local storage {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise LocalStorageError(f"Corrupt local storage {self._path}: not an object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".ls-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, default=str)
            os.replace(tmp, self._path)
        except OSError as exc:
            raise LocalStorageError(f"Cannot write {self._path}: {exc}") from exc

    def get_item(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug("local_storage set %s", key)

    def remove_item(self, key: str) -> bool:
        """Delete *key*. Returns True if it was present."""
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def keys(self) -> list[str]:
        return sorted(self._read())
