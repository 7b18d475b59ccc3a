"""Tests for InitService."""

from __future__ import annotations

from pathlib import Path

from graphzlive.services.init import InitService


class TestInitSite:
    def test_creates_config_and_database(self, tmp_path: Path) -> None:
        root = tmp_path / "site"
        result = InitService.init_site(root, name="Physics Graphs")
        assert result.ok
        assert result.data["files_created"] == 1
        assert result.data["graphs"] == 0
        config = (root / "graphz.toml").read_text(encoding="utf-8")
        assert 'name = "Physics Graphs"' in config
        assert (root / ".graphz" / "graphz.db").is_file()

    def test_rerun_keeps_existing_config(self, tmp_path: Path) -> None:
        InitService.init_site(tmp_path, name="First")
        result = InitService.init_site(tmp_path, name="Second")
        assert result.ok
        assert result.data["files_created"] == 0
        assert 'name = "First"' in (tmp_path / "graphz.toml").read_text(encoding="utf-8")
