"""Command group: the admin surface (sign-in required)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from graphzlive.commands._base import GraphzGroup
from graphzlive.domain.forms import GraphForm
from graphzlive.services.admin import AdminService
from graphzlive.services.auth import AuthService
from graphzlive.services.comments import CommentService

if TYPE_CHECKING:
    from graphzlive.commands._context import AppContext

_ADMIN_EXAMPLES = """\
  graphz admin login --email admin@example.com
  graphz admin list --search derivative
  graphz admin add --name "Unit Circle" --alias trig-1 --description "Angles and ratios" \\
      --subject Mathematics --tags "trigonometry, circle" --image https://img.example/uc.png
  graphz admin edit <graph-id> --subject Geometry
  graphz admin delete <graph-id> --yes
  graphz admin stats
  graphz admin export --output analytics.json"""


def _graph_form_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the admin form fields as options."""
    options = [
        click.option("--name", default=None, help="Graph name (required)."),
        click.option("--alias", default=None, help="Short alias (required)."),
        click.option("--description", default=None, help="Description (required)."),
        click.option("--subject", default=None, help="Subject (required)."),
        click.option("--tags", default=None, help="Comma-separated tags (at least one)."),
        click.option(
            "--image",
            "images",
            multiple=True,
            help="Image URL; repeat for several (at least one).",
        ),
        click.option("--source", default=None, help="Source URL."),
        click.option("--telegram-link", default=None, help="Telegram link."),
        click.option("--donation-link", default=None, help="Donation link."),
        click.option("--affiliate-title", default=None, help="Affiliate button label."),
        click.option("--affiliate-link", default=None, help="Affiliate URL."),
        click.option("--sponsor-name", default=None, help="Sponsor name."),
        click.option("--sponsor-message", default=None, help="Sponsor message."),
        click.option("--sponsor-link", default=None, help="Sponsor URL."),
        click.option("--sponsor-logo", default=None, help="Sponsor logo URL."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _require_admin(app: AppContext, op: str) -> None:
    app.emit_or_continue(AuthService(app.workspace).require_session(op))


@click.group(cls=GraphzGroup, examples=_ADMIN_EXAMPLES)
@click.pass_obj
def admin(app: AppContext) -> None:
    """Manage graphs, comments, and analytics."""


# ── Session ──────────────────────────────────────────────────────────


@admin.command(
    examples="""\
  graphz admin login --email admin@example.com
  graphz admin login --email admin@example.com --password s3cret"""
)
@click.option("--email", prompt=True, help="Admin email.")
@click.option("--password", prompt=True, hide_input=True, help="Admin password.")
@click.pass_obj
def login(app: AppContext, email: str, password: str) -> None:
    """Sign in to the admin surface."""
    app.emit(AuthService(app.workspace).login(email, password))


@admin.command(
    examples="""\
  graphz admin logout"""
)
@click.pass_obj
def logout(app: AppContext) -> None:
    """Sign out and clear the stored session."""
    app.emit(AuthService(app.workspace).logout())


# ── Graph CRUD ───────────────────────────────────────────────────────


@admin.command(
    name="list",
    examples="""\
  graphz admin list
  graphz admin list --search optics --subject Physics""",
)
@click.option("--search", "text", default=None, help="Match name, alias, description.")
@click.option("--subject", default=None, help="Exact subject filter.")
@click.pass_obj
def list_cmd(app: AppContext, text: str | None, subject: str | None) -> None:
    """Admin table of all graphs."""
    _require_admin(app, "admin_list")
    app.emit(AdminService(app.workspace).list_graphs(text=text, subject=subject))


@admin.command(
    examples="""\
  graphz admin add --name "Ohm's Law" --alias ohm --description "V = IR" \\
      --subject Physics --tags "electricity, circuits" \\
      --image https://img.example/ohm-1.png --image https://img.example/ohm-2.png"""
)
@_graph_form_options
@click.pass_obj
def add(app: AppContext, images: tuple[str, ...], **fields: str | None) -> None:
    """Create a graph."""
    _require_admin(app, "save_graph")
    form = GraphForm.parse(images="\n".join(images), **fields)
    app.emit(AdminService(app.workspace).save(form))


@admin.command(
    examples="""\
  graphz admin edit <graph-id> --description "Updated caption"
  graphz admin edit <graph-id> --tags "optics, lenses" --sponsor-name ''"""
)
@click.argument("graph_id")
@_graph_form_options
@click.pass_obj
def edit(app: AppContext, graph_id: str, images: tuple[str, ...], **fields: str | None) -> None:
    """Update a graph; unspecified fields keep their current values.

    Pass an empty string to clear an optional field.
    """
    _require_admin(app, "save_graph")
    svc = AdminService(app.workspace)
    current = svc.get_graph(graph_id)
    app.emit_or_continue(current)
    merged: dict[str, Any] = dict(current.data["form"])
    if images:
        merged["images"] = "\n".join(images)
    for key, value in fields.items():
        if value is not None:
            merged[key] = value

    app.emit(svc.save(GraphForm.parse(**merged), existing_id=graph_id))


@admin.command(
    examples="""\
  graphz admin delete <graph-id>
  graphz admin delete <graph-id> --yes"""
)
@click.argument("graph_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete(app: AppContext, graph_id: str, yes: bool) -> None:
    """Delete a graph (its comments are not removed)."""
    _require_admin(app, "delete_graph")
    if not yes:
        click.confirm(f"Delete graph {graph_id}?", abort=True)
    app.emit(AdminService(app.workspace).delete(graph_id))


# ── Dashboard ────────────────────────────────────────────────────────


@admin.command(
    examples="""\
  graphz admin stats
  graphz --json admin stats"""
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Totals: graphs, views, likes, comments, uploads today."""
    _require_admin(app, "stats")
    app.emit(AdminService(app.workspace).stats())


@admin.command(
    examples="""\
  graphz admin analytics"""
)
@click.pass_obj
def analytics(app: AppContext) -> None:
    """Popular subjects and most viewed graphs."""
    _require_admin(app, "analytics")
    app.emit(AdminService(app.workspace).analytics())


@admin.command(
    examples="""\
  graphz admin export
  graphz admin export --output reports/analytics.json"""
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Destination file (default: graphzlive-analytics-YYYY-MM-DD.json).",
)
@click.pass_obj
def export(app: AppContext, output: Path | None) -> None:
    """Export catalog analytics as JSON."""
    _require_admin(app, "export_analytics")
    app.emit(AdminService(app.workspace).export_analytics(output))


# ── Comment moderation ───────────────────────────────────────────────


@admin.command(
    examples="""\
  graphz admin comments
  graphz admin comments --limit 50"""
)
@click.option("--limit", default=None, type=int, help="Max comments (default 20).")
@click.pass_obj
def comments(app: AppContext, limit: int | None) -> None:
    """Newest comments across the most recent graphs."""
    _require_admin(app, "recent_comments")
    app.emit(CommentService(app.workspace).recent(limit=limit))


@admin.command(
    "delete-comment",
    examples="""\
  graphz admin delete-comment <graph-id> <comment-id>""",
)
@click.argument("graph_id")
@click.argument("comment_id")
@click.pass_obj
def delete_comment(app: AppContext, graph_id: str, comment_id: str) -> None:
    """Delete one comment and decrement the graph's comment count."""
    _require_admin(app, "delete_comment")
    app.emit(CommentService(app.workspace).delete(graph_id, comment_id))
