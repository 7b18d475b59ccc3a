"""Tests for the admin and auth command groups."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from graphzlive.cli import cli
from graphzlive.infrastructure.store import GRAPHS
from graphzlive.infrastructure.workspace import Workspace
from tests.conftest import add_comment, add_graph

EMAIL = "admin@example.com"
PASSWORD = "s3cret!"

_ADD_ARGS = [
    "admin",
    "add",
    "--name",
    "Unit Circle",
    "--alias",
    "trig-1",
    "--description",
    "Angles and ratios",
    "--subject",
    "Mathematics",
    "--tags",
    "trigonometry, circle",
    "--image",
    "https://img.example/uc-1.png",
    "--image",
    "https://img.example/uc-2.png",
]


@pytest.fixture
def admin_cli(cli_runner: CliRunner, seeded: Workspace) -> CliRunner:
    """Runner with an account created and signed in."""
    created = cli_runner.invoke(cli, ["auth", "create-user", EMAIL, "--password", PASSWORD])
    assert created.exit_code == 0, created.output
    login = cli_runner.invoke(cli, ["admin", "login", "--email", EMAIL, "--password", PASSWORD])
    assert login.exit_code == 0, login.output
    return cli_runner


class TestGate:
    @pytest.mark.parametrize(
        "args",
        [
            ["admin", "list"],
            ["admin", "stats"],
            ["admin", "analytics"],
            ["admin", "export"],
            ["admin", "comments"],
            ["admin", "delete", "g-old", "--yes"],
        ],
    )
    def test_requires_login(
        self, cli_runner: CliRunner, seeded: Workspace, args: list[str]
    ) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "Admin login required" in result.output
        assert seeded.store.get_doc(GRAPHS, "g-old") is not None

    def test_bad_password(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        cli_runner.invoke(cli, ["auth", "create-user", EMAIL, "--password", PASSWORD])
        result = cli_runner.invoke(
            cli, ["admin", "login", "--email", EMAIL, "--password", "wrong!"]
        )
        assert result.exit_code == 1
        assert "Incorrect password" in result.output

    def test_logout_closes_gate(self, admin_cli: CliRunner) -> None:
        assert admin_cli.invoke(cli, ["admin", "logout"]).exit_code == 0
        assert admin_cli.invoke(cli, ["admin", "stats"]).exit_code == 1


class TestCrud:
    def test_add_then_list(self, admin_cli: CliRunner) -> None:
        added = admin_cli.invoke(cli, ["--json", *_ADD_ARGS])
        assert added.exit_code == 0, added.output
        data = json.loads(added.output)["data"]
        assert data["graph"]["images"] == [
            "https://img.example/uc-1.png",
            "https://img.example/uc-2.png",
        ]
        listed = admin_cli.invoke(cli, ["-q", "admin", "list", "--search", "unit"])
        assert listed.output.strip() == data["graph_id"]

    def test_add_missing_fields(self, admin_cli: CliRunner) -> None:
        result = admin_cli.invoke(cli, ["admin", "add", "--name", "Only a name"])
        assert result.exit_code == 1
        assert "Please fill all required fields" in result.output
        assert "missing: alias, description, subject, tags, images" in result.output

    def test_edit_changes_only_given_fields(
        self, admin_cli: CliRunner, seeded: Workspace
    ) -> None:
        result = admin_cli.invoke(cli, ["admin", "edit", "g-old", "--subject", "Calculus"])
        assert result.exit_code == 0, result.output
        doc = seeded.store.get_doc(GRAPHS, "g-old")
        assert doc is not None
        assert doc.data["subject"] == "Calculus"
        assert doc.data["name"] == "Limits Intro"
        assert doc.data["tags"] == ["calculus", "limits"]
        assert doc.data["likeCount"] == 2
        assert doc.data["source"] is None

    def test_edit_does_not_store_display_defaults(
        self, admin_cli: CliRunner, seeded: Workspace
    ) -> None:
        add_graph(seeded, "g-bare", "Bare Graph", description=None)
        result = admin_cli.invoke(cli, ["admin", "edit", "g-bare", "--subject", "Physics"])
        assert result.exit_code == 1
        assert "missing: description" in result.output
        doc = seeded.store.get_doc(GRAPHS, "g-bare")
        assert doc is not None
        assert doc.data["description"] is None

    def test_edit_unknown(self, admin_cli: CliRunner) -> None:
        result = admin_cli.invoke(cli, ["admin", "edit", "ghost", "--subject", "X"])
        assert result.exit_code == 1

    def test_delete_confirm_abort(self, admin_cli: CliRunner, seeded: Workspace) -> None:
        result = admin_cli.invoke(cli, ["admin", "delete", "g-mid"], input="n\n")
        assert result.exit_code == 1
        assert seeded.store.get_doc(GRAPHS, "g-mid") is not None

    def test_delete_yes(self, admin_cli: CliRunner, seeded: Workspace) -> None:
        result = admin_cli.invoke(cli, ["admin", "delete", "g-mid", "--yes"])
        assert result.exit_code == 0, result.output
        assert seeded.store.get_doc(GRAPHS, "g-mid") is None


class TestDashboard:
    def test_stats_json(self, admin_cli: CliRunner) -> None:
        result = admin_cli.invoke(cli, ["--json", "admin", "stats"])
        assert json.loads(result.output)["data"]["total_views"] == 45

    def test_analytics(self, admin_cli: CliRunner) -> None:
        result = admin_cli.invoke(cli, ["admin", "analytics"])
        assert result.exit_code == 0, result.output
        assert "Top graphs by views" in result.output
        assert "Snell Law" in result.output

    def test_export(self, admin_cli: CliRunner, tmp_path: Path) -> None:
        out = tmp_path / "export.json"
        result = admin_cli.invoke(cli, ["admin", "export", "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["totalGraphs"] == 3


class TestModeration:
    def test_recent_and_delete_comment(self, admin_cli: CliRunner, seeded: Workspace) -> None:
        comment_id = add_comment(seeded, "g-new", "spam spam")
        recent = admin_cli.invoke(cli, ["admin", "comments"])
        assert "spam spam" in recent.output
        assert "Cell Cycle" in recent.output

        deleted = admin_cli.invoke(cli, ["admin", "delete-comment", "g-new", comment_id])
        assert deleted.exit_code == 0, deleted.output
        doc = seeded.store.get_doc(GRAPHS, "g-new")
        assert doc is not None
        assert doc.data["commentCount"] == 0


class TestAuthGroup:
    def test_disable_and_unlock(self, cli_runner: CliRunner, seeded: Workspace) -> None:
        cli_runner.invoke(cli, ["auth", "create-user", EMAIL, "--password", PASSWORD])
        assert cli_runner.invoke(cli, ["auth", "disable", EMAIL]).exit_code == 0
        login = ["admin", "login", "--email", EMAIL, "--password", PASSWORD]
        refused = cli_runner.invoke(cli, login)
        assert "Account disabled" in refused.output
        assert cli_runner.invoke(cli, ["auth", "disable", EMAIL, "--enable"]).exit_code == 0
        assert cli_runner.invoke(cli, ["auth", "unlock", EMAIL]).exit_code == 0
        assert cli_runner.invoke(cli, login).exit_code == 0

    def test_create_user_prompts_for_password(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["auth", "create-user", EMAIL], input=f"{PASSWORD}\n{PASSWORD}\n"
        )
        assert result.exit_code == 0, result.output
