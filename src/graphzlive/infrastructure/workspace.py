"""Workspace — the single dependency injected into every service.

Owns the database engine and the three collaborators built on it (document
store, auth provider, local storage) plus the process-local
:class:`CatalogState`.  Constructed once per CLI invocation from
:class:`GraphzSettings`; services reach everything through it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphzlive.domain.catalog import CatalogState
from graphzlive.infrastructure.auth import AuthProvider
from graphzlive.infrastructure.database.engine import init_database
from graphzlive.infrastructure.local_storage import LOCAL_STORAGE_FILENAME, LocalStorage
from graphzlive.infrastructure.store import DocumentStore

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from graphzlive.config.settings import GraphzSettings

logger = logging.getLogger(__name__)


class Workspace:
    """Repository bundling store, auth, local storage, and the catalog cache.

    Stored on the CLI's ``AppContext``.  Services receive the Workspace via
    their :class:`BaseService` constructor.
    """

    def __init__(self, settings: GraphzSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.data_dir)
        self._store = DocumentStore(self._engine)
        self._auth = AuthProvider(self._engine)
        self._local_storage = LocalStorage(settings.data_dir / LOCAL_STORAGE_FILENAME)
        self._catalog = CatalogState()
        logger.debug("Workspace opened at %s", settings.data_dir)

    @property
    def root(self) -> Path:
        """The site root directory (holds ``.graphz/``)."""
        return self._settings.site_root

    @property
    def settings(self) -> GraphzSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def auth(self) -> AuthProvider:
        return self._auth

    @property
    def local_storage(self) -> LocalStorage:
        return self._local_storage

    @property
    def catalog(self) -> CatalogState:
        """Process-local cache of the loaded catalog."""
        return self._catalog

    def close(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()
