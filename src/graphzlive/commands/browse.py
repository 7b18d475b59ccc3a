"""Command group: the public catalog surface."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from graphzlive.commands._base import GraphzGroup
from graphzlive.commands.client import launch_external
from graphzlive.services.catalog import CatalogService
from graphzlive.services.comments import CommentService
from graphzlive.services.counters import CounterService
from graphzlive.services.interactions import VISIT_TARGETS, InteractionService

if TYPE_CHECKING:
    from graphzlive.commands._context import AppContext

_BROWSE_EXAMPLES = """\
  graphz browse list
  graphz browse list --search limits --subject Mathematics
  graphz browse tags
  graphz browse show <graph-id>
  graphz browse open "https://graphzlive.web.app/?graph=<graph-id>"
  graphz browse like <graph-id>
  graphz browse comment <graph-id> "Great diagram" --author Priya
  graphz browse share <graph-id>
  graphz browse visit <graph-id> --target telegram"""


@click.group(cls=GraphzGroup, examples=_BROWSE_EXAMPLES)
@click.pass_obj
def browse(app: AppContext) -> None:
    """Browse graphs, like them, and join the discussion."""


@browse.command(
    name="list",
    examples="""\
  graphz browse list
  graphz browse list --search "chain rule"
  graphz browse list --subject Physics
  graphz -q browse list --search optics""",
)
@click.option(
    "--search", "text", default=None, help="Match name, alias, description, subject, tags."
)
@click.option("--subject", "category", default=None, help="Exact subject filter.")
@click.pass_obj
def list_cmd(app: AppContext, text: str | None, category: str | None) -> None:
    """List graphs as cards, newest first."""
    app.emit(CatalogService(app.workspace).list_graphs(text=text, category=category))


@browse.command(
    examples="""\
  graphz browse tags
  graphz --json browse tags"""
)
@click.pass_obj
def tags(app: AppContext) -> None:
    """Show tags ranked by how many graphs use them."""
    app.emit(CatalogService(app.workspace).tags())


@browse.command(
    examples="""\
  graphz browse show <graph-id>"""
)
@click.argument("graph_id")
@click.pass_obj
def show(app: AppContext, graph_id: str) -> None:
    """Open one graph (counts a view) with its comments."""
    app.emit(InteractionService(app.workspace).open_detail(graph_id))


@browse.command(
    name="open",
    examples="""\
  graphz browse open 'https://graphzlive.web.app/?graph=<graph-id>'""",
)
@click.argument("url")
@click.pass_obj
def open_cmd(app: AppContext, url: str) -> None:
    """Open the graph named by a shared ?graph=<id> link."""
    app.emit(InteractionService(app.workspace).open_link(url))


@browse.command(
    examples="""\
  graphz browse like <graph-id>"""
)
@click.argument("graph_id")
@click.pass_obj
def like(app: AppContext, graph_id: str) -> None:
    """Like a graph."""
    app.emit_or_continue(CatalogService(app.workspace).ensure_loaded())
    app.emit(CounterService(app.workspace).like(graph_id))


@browse.command(
    examples="""\
  graphz browse comment <graph-id> "Very clear, thanks!"
  graphz browse comment <graph-id> "Typo in the legend" --author Sam"""
)
@click.argument("graph_id")
@click.argument("text")
@click.option("--author", default=None, help="Display name (default: Anonymous).")
@click.pass_obj
def comment(app: AppContext, graph_id: str, text: str, author: str | None) -> None:
    """Post a comment on a graph."""
    app.emit_or_continue(CatalogService(app.workspace).ensure_loaded())
    app.emit(CommentService(app.workspace).post(graph_id, text, author=author))


@browse.command(
    examples="""\
  graphz browse comments <graph-id>"""
)
@click.argument("graph_id")
@click.pass_obj
def comments(app: AppContext, graph_id: str) -> None:
    """List comments on a graph, newest first."""
    app.emit(CommentService(app.workspace).load_comments(graph_id))


@browse.command(
    examples="""\
  graphz browse share <graph-id>
  graphz -q browse share <graph-id>"""
)
@click.argument("graph_id")
@click.pass_obj
def share(app: AppContext, graph_id: str) -> None:
    """Print share text and a deep link for a graph."""
    app.emit(InteractionService(app.workspace).share(graph_id))


@browse.command(
    examples="""\
  graphz browse visit <graph-id>
  graphz browse visit <graph-id> --target telegram
  graphz browse visit <graph-id> --target affiliate --no-launch""",
)
@click.argument("graph_id")
@click.option(
    "--target",
    type=click.Choice(sorted(VISIT_TARGETS)),
    default="source",
    show_default=True,
    help="Which outbound link to follow.",
)
@click.option("--no-launch", is_flag=True, help="Only print the link.")
@click.pass_obj
def visit(app: AppContext, graph_id: str, target: str, no_launch: bool) -> None:
    """Follow a graph's source, affiliate, sponsor, or Telegram link."""
    result = InteractionService(app.workspace).visit(graph_id, target)
    app.emit(result)
    if no_launch or app.settings.json_output:
        return
    if not launch_external(result.data["url"]):
        click.echo(f"Unable to open a browser. Visit {result.data['url']}", err=True)
