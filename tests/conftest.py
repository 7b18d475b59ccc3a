"""Shared pytest fixtures and test helpers for graphzlive tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from graphzlive.config.settings import GraphzSettings
from graphzlive.infrastructure.database.engine import init_database
from graphzlive.infrastructure.store import GRAPHS, comments_path
from graphzlive.infrastructure.workspace import Workspace

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / ".graphz")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site directory (no graphz.toml; defaults apply)."""
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> GraphzSettings:
    return GraphzSettings.from_cli(site_root=site_root)


@pytest.fixture
def workspace(settings: GraphzSettings) -> Generator[Workspace]:
    """Fully initialized workspace on a temp directory."""
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture(autouse=True)
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from the temp site root with no inherited GRAPHZ_* env."""
    monkeypatch.chdir(site_root)
    monkeypatch.delenv("GRAPHZ_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service and command test modules)
# ---------------------------------------------------------------------------


def graph_doc(name: str, *, days_ago: int = 0, **fields: Any) -> dict[str, Any]:
    """A complete graph document as the admin form would store it."""
    created = (BASE_TIME - timedelta(days=days_ago)).isoformat()
    doc: dict[str, Any] = {
        "name": name,
        "alias": name.lower().replace(" ", "-"),
        "description": f"About {name}",
        "subject": "Mathematics",
        "tags": ["calculus"],
        "images": [f"https://img.example/{name.lower().replace(' ', '-')}.png"],
        "likeCount": 0,
        "commentCount": 0,
        "viewCount": 0,
        "createdAt": created,
        "updatedAt": created,
    }
    doc.update(fields)
    return doc


def add_graph(workspace: Workspace, graph_id: str, name: str, **fields: Any) -> str:
    """Write a graph document with an explicit id directly to the store."""
    workspace.store.set_doc(GRAPHS, graph_id, graph_doc(name, **fields))
    return graph_id


def add_comment(
    workspace: Workspace,
    graph_id: str,
    text: str,
    *,
    minutes_ago: int = 0,
    author: str = "Anonymous",
) -> str:
    """Write a comment sub-document with a fixed timestamp."""
    ts = (BASE_TIME - timedelta(minutes=minutes_ago)).isoformat()
    return workspace.store.add_doc(
        comments_path(graph_id),
        {"text": text, "author": author, "timestamp": ts, "likes": 0},
    )


@pytest.fixture
def seeded(workspace: Workspace) -> Workspace:
    """Workspace holding three graphs (newest first: g-new, g-mid, g-old)."""
    add_graph(
        workspace,
        "g-old",
        "Limits Intro",
        days_ago=3,
        subject="Mathematics",
        tags=["calculus", "limits"],
        viewCount=10,
        likeCount=2,
    )
    add_graph(
        workspace,
        "g-mid",
        "Snell Law",
        days_ago=2,
        subject="Physics",
        tags=["optics", "calculus"],
        viewCount=30,
    )
    add_graph(
        workspace,
        "g-new",
        "Cell Cycle",
        days_ago=1,
        subject="Biology",
        tags=["cells"],
        description="Mitosis stages",
        viewCount=5,
        commentCount=1,
    )
    return workspace

