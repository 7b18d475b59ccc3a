"""CatalogState — the single in-memory copy of the loaded catalog.

One writer: the catalog loader replaces the whole list, and the
interaction services patch counters they have just incremented remotely.
Everything else reads through the accessors.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from graphzlive.domain.graph import Comment, Graph


class CatalogState:
    """Ordered, id-addressable list of :class:`Graph` entries.

    Order is whatever the loader supplied (creation time, newest first).
    """

    def __init__(self, graphs: Iterable[Graph] = ()) -> None:
        self._graphs: list[Graph] = []
        self._index: dict[str, int] = {}
        self._loaded = False
        self.replace(graphs, loaded=False)

    def __len__(self) -> int:
        return len(self._graphs)

    def __iter__(self) -> Iterator[Graph]:
        return iter(tuple(self._graphs))

    def __contains__(self, graph_id: object) -> bool:
        return graph_id in self._index

    @property
    def loaded(self) -> bool:
        """True once a load has populated the state (even with zero entries)."""
        return self._loaded

    @property
    def graphs(self) -> tuple[Graph, ...]:
        return tuple(self._graphs)

    def get(self, graph_id: str) -> Graph | None:
        idx = self._index.get(graph_id)
        return self._graphs[idx] if idx is not None else None

    def replace(self, graphs: Iterable[Graph], *, loaded: bool = True) -> None:
        """Swap in a freshly loaded list wholesale."""
        new_graphs = list(graphs)
        self._graphs = new_graphs
        self._index = {g.id: i for i, g in enumerate(new_graphs)}
        self._loaded = loaded or self._loaded

    def patch_counter(self, graph_id: str, field: str, delta: int = 1) -> Graph | None:
        """Apply *delta* to one cached counter. No-op for unknown ids."""
        idx = self._index.get(graph_id)
        if idx is None:
            return None
        patched = self._graphs[idx].with_counter(field, delta)
        self._graphs[idx] = patched
        return patched


@dataclass(frozen=True)
class DetailView:
    """Everything the detail view renders for one graph.

    Passed explicitly to renderers instead of a "current graph id" global.
    ``comments_error`` is set when the comment fetch failed.
    """

    graph: Graph
    comments: tuple[Comment, ...] = ()
    comments_error: str | None = None
