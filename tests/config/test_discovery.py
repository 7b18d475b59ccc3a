"""Tests for graphz.toml discovery."""

from pathlib import Path

import click
import pytest

from graphzlive.config.discovery import CONFIG_ENV_VAR, find_config, read_config, resolve_site


class TestFindConfig:
    def test_none_when_absent(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_found_in_parent(self, tmp_path: Path) -> None:
        cfg = tmp_path / "graphz.toml"
        cfg.write_text("")
        child = tmp_path / "nested"
        child.mkdir()
        assert find_config(child) == cfg.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(cfg))
        assert find_config(tmp_path / "anywhere") == cfg


class TestResolveSite:
    def test_cwd_without_config(self, tmp_path: Path) -> None:
        root, toml_path = resolve_site()
        assert toml_path is None
        assert root.resolve() == tmp_path.resolve()

    def test_site_is_config_directory(self, tmp_path: Path) -> None:
        site = tmp_path / "site"
        site.mkdir()
        cfg = site / "graphz.toml"
        cfg.write_text("")
        assert resolve_site(config_path=str(cfg)) == (site, cfg)

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        root, toml_path = resolve_site(config_path=str(tmp_path / "nope.toml"), site_root=tmp_path)
        assert (root, toml_path) == (tmp_path, None)


class TestReadConfig:
    def test_reads_sections(self, tmp_path: Path) -> None:
        cfg = tmp_path / "graphz.toml"
        cfg.write_text("[catalog]\ntop_graphs_limit = 3\n")
        assert read_config(cfg) == {"catalog": {"top_graphs_limit": 3}}

    def test_bad_value_names_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "graphz.toml"
        cfg.write_text("[analytics]\ncapacity = \"lots\"\n")
        with pytest.raises(click.ClickException, match="Invalid settings in"):
            read_config(cfg)
