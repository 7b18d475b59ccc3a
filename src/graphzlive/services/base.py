"""BaseService — foundation for all graphz services.

Every service receives a :class:`Workspace` at construction time.  The
Workspace provides the document store, the auth provider, local storage,
and the shared catalog cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphzlive.config.settings import GraphzSettings
    from graphzlive.domain.catalog import CatalogState
    from graphzlive.infrastructure.workspace import Workspace


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def load(self) -> ServiceResult:
                docs = self._workspace.store.get_docs("graphs", ...)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def _settings(self) -> GraphzSettings:
        return self._workspace.settings

    @property
    def _catalog(self) -> CatalogState:
        return self._workspace.catalog
