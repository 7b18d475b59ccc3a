"""Tests for the ServiceResult contract."""

from __future__ import annotations

from graphzlive.services.result import ServiceResult, failure


def test_failure_shorthand() -> None:
    result = failure("like", "NOT_FOUND", "No graph", warnings=["w"], graph_id="x")
    assert not result.ok
    assert result.error is not None
    assert result.error.detail == {"graph_id": "x"}
    assert result.warnings == ["w"]


def test_json_round_trip() -> None:
    result = ServiceResult(ok=True, op="tags", data={"count": 0})
    assert ServiceResult.model_validate_json(result.model_dump_json()) == result
