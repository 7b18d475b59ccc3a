"""Tests for catalog filters."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from graphzlive.domain.filters import filter_admin_table, filter_graphs
from graphzlive.domain.graph import Graph

NOW = datetime(2026, 3, 1, tzinfo=UTC)


def _g(graph_id: str, **data: object) -> Graph:
    return Graph.from_document(graph_id, dict(data), now=NOW)


@pytest.fixture
def graphs() -> list[Graph]:
    return [
        _g("a", name="Derivative Basics", subject="Mathematics", tags=["calculus"]),
        _g("b", name="Lens Diagram", alias="optics-1", subject="Physics", tags=["optics"]),
        _g("c", name="Area Under Curve", subject="Mathematics", tags=["Integrals"]),
        _g("d", name="Mitosis", description="Cell division", subject="Biology"),
    ]


class TestFilterGraphs:
    def test_no_filters_returns_everything_in_order(self, graphs: list[Graph]) -> None:
        assert [g.id for g in filter_graphs(graphs)] == ["a", "b", "c", "d"]

    def test_blank_text_is_no_filter(self, graphs: list[Graph]) -> None:
        assert len(filter_graphs(graphs, "   ")) == 4

    def test_text_matches_case_insensitively(self, graphs: list[Graph]) -> None:
        assert [g.id for g in filter_graphs(graphs, "LENS")] == ["b"]

    def test_text_matches_alias_description_and_tags(self, graphs: list[Graph]) -> None:
        assert [g.id for g in filter_graphs(graphs, "optics-1")] == ["b"]
        assert [g.id for g in filter_graphs(graphs, "division")] == ["d"]
        assert [g.id for g in filter_graphs(graphs, "integral")] == ["c"]

    def test_text_matches_subject(self, graphs: list[Graph]) -> None:
        assert [g.id for g in filter_graphs(graphs, "physics")] == ["b"]

    def test_category_is_exact(self, graphs: list[Graph]) -> None:
        assert [g.id for g in filter_graphs(graphs, category="Mathematics")] == ["a", "c"]
        assert filter_graphs(graphs, category="mathematics") == []

    def test_combined_filters(self, graphs: list[Graph]) -> None:
        assert [g.id for g in filter_graphs(graphs, "curve", "Mathematics")] == ["c"]

    def test_result_is_subset_preserving_order(self, graphs: list[Graph]) -> None:
        result = filter_graphs(graphs, "a")
        positions = [graphs.index(g) for g in result]
        assert positions == sorted(positions)

    def test_empty_input(self) -> None:
        assert filter_graphs([], "x", "Physics") == []


class TestFilterAdminTable:
    def test_ignores_tags(self, graphs: list[Graph]) -> None:
        assert filter_admin_table(graphs, "integrals") == []

    def test_name_and_subject(self, graphs: list[Graph]) -> None:
        assert [g.id for g in filter_admin_table(graphs, "derivative", "Mathematics")] == ["a"]
