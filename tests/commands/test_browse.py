"""Tests for the browse command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from graphzlive.cli import cli
from graphzlive.infrastructure.workspace import Workspace
from tests.conftest import add_graph


class TestList:
    def test_empty_catalog(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["browse", "list"])
        assert result.exit_code == 0, result.output
        assert "0 graphs available" in result.output
        assert "No results. Try a different search or subject." in result.output

    def test_json_newest_first(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["--json", "browse", "list"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [i["id"] for i in data["data"]["items"]] == ["g-new", "g-mid", "g-old"]

    def test_quiet_filtered(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["-q", "browse", "list", "--subject", "Physics"])
        assert result.output.strip() == "g-mid"

    def test_tags(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["browse", "tags"])
        assert result.exit_code == 0
        assert "#calculus" in result.output

    def test_bracketed_text_renders(self, cli_runner: CliRunner, workspace: Workspace) -> None:
        add_graph(
            workspace,
            "g-br",
            "Tags [/b] explained",
            subject="Physics [/p]",
            images=["u.png"],
        )
        result = cli_runner.invoke(cli, ["browse", "list"])
        assert result.exit_code == 0, result.output
        assert "Tags [/b] explained" in result.output
        assert "Physics [/p]" in result.output

    def test_unknown_bracketed_id(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["browse", "show", "[/x]"])
        assert result.exit_code == 1
        assert "No graph found with ID: [/x]" in result.output


class TestShow:
    def test_show_counts_view(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["--json", "browse", "show", "g-mid"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["graph"]["viewCount"] == 31

    def test_show_unknown(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["browse", "show", "ghost"])
        assert result.exit_code == 1
        assert "No graph found with ID: ghost" in result.output

    def test_open_link(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        url = "https://graphzlive.web.app/?graph=g-old"
        result = cli_runner.invoke(cli, ["browse", "open", url])
        assert result.exit_code == 0, result.output
        assert "Limits Intro" in result.output
        assert "No comments yet. Be the first to comment!" in result.output


class TestEngagement:
    def test_like(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["--json", "browse", "like", "g-old"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["count"] == 3

    def test_comment_and_list(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(
            cli, ["browse", "comment", "g-mid", "Very clear", "--author", "Sam"]
        )
        assert result.exit_code == 0, result.output
        listed = cli_runner.invoke(cli, ["browse", "comments", "g-mid"])
        assert "Sam" in listed.output
        assert "Very clear" in listed.output

    def test_blank_comment(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["browse", "comment", "g-mid", "   "])
        assert result.exit_code == 1
        assert "Comment cannot be empty" in result.output

    def test_share_quiet(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["-q", "browse", "share", "g-new"])
        assert result.output.strip() == "https://graphzlive.web.app/?graph=g-new"

    def test_visit_launches_and_records(
        self, cli_runner: CliRunner, workspace: Workspace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        add_graph(workspace, "g-tg", "Telegram Graph", telegramLink="https://t.me/graphz")
        launched: list[str] = []

        def _launch(url: str, *_args: object, **_kwargs: object) -> int:
            launched.append(url)
            return 0

        monkeypatch.setattr("click.launch", _launch)
        result = cli_runner.invoke(cli, ["browse", "visit", "g-tg", "--target", "telegram"])
        assert result.exit_code == 0, result.output
        assert launched == ["https://t.me/graphz"]
        events = json.loads(cli_runner.invoke(cli, ["--json", "events"]).output)["data"]["events"]
        assert [(e["event"], e["graphId"]) for e in events] == [("telegram_click", "g-tg")]

    def test_visit_missing_link(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        result = cli_runner.invoke(cli, ["browse", "visit", "g-old", "--no-launch"])
        assert result.exit_code == 1
        assert "Graph g-old has no source link" in result.output
