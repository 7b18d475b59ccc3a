"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from graphzlive.domain.graph import parse_timestamp
from graphzlive.domain.timefmt import format_date, format_relative
from graphzlive.output.console import create_console, get_output
from graphzlive.output.formatters import CardOptions

if TYPE_CHECKING:
    from rich.console import Console

    from graphzlive.services.result import ServiceResult

_DEFAULT_CARDS = CardOptions()

NO_RESULTS_MESSAGE = "No results. Try a different search or subject."
NO_COMMENTS_MESSAGE = "No comments yet. Be the first to comment!"


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    dark: bool = False,
    cards: CardOptions | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console(dark=dark)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, cards=cards or _DEFAULT_CARDS)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items") or result.data.get("comments")
    if items and isinstance(items, list):
        ids = [str(item["id"]) for item in items if isinstance(item, dict) and item.get("id")]
        return "\n".join(ids)
    for key in ("graph_id", "url", "uri", "path", "theme"):
        if key in result.data:
            return str(result.data[key])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="gz.ok")
    op = Text(f"  {result.op}", style="gz.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="gz.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="gz.id")
    elif key in ("path", "url", "uri"):
        v = Text(str(value), style="gz.url")
    elif key == "name":
        v = Text(str(value), style="gz.name")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _excerpt(text: str, length: int) -> str:
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


def _chips(tags: list[str], limit: int | None = None) -> str:
    shown = tags if limit is None else tags[:limit]
    return " ".join(f"#{t}" for t in shown)


def _relative(value: Any, now: datetime | None = None) -> str:
    return format_relative(parse_timestamp(value), now=now)


def _date(value: Any) -> str:
    dt = parse_timestamp(value)
    return format_date(dt) if dt else ""


def _counts(item: dict[str, Any]) -> str:
    return (
        f"{item.get('likeCount', 0)} likes · "
        f"{item.get('commentCount', 0)} comments · "
        f"{item.get('viewCount', 0)} views"
    )


def _badges(item: dict[str, Any]) -> Text:
    badges = Text()
    if item.get("sponsorName"):
        badges.append(f"Sponsored by {item['sponsorName']}", style="gz.sponsor")
    if item.get("affiliateLink"):
        if badges:
            badges.append("  ")
        badges.append(item.get("affiliateTitle") or "Get Notes", style="gz.affiliate")
    return badges


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_span(console: Console, span: dict[str, Any], indent: int = 4) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    notes = span.get("annotations") or {}
    if notes:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in notes.items()) + ")")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent=indent + 4)


def _comment_lines(
    console: Console,
    comments: list[dict[str, Any]],
    *,
    show_graph: bool = False,
) -> None:
    now = datetime.now(UTC)
    for c in comments:
        head = Text("  ")
        head.append(str(c.get("author", "")), style="gz.name")
        when = _relative(c.get("timestamp"), now)
        if when:
            head.append(f"  {when}", style="gz.muted")
        if show_graph and c.get("graphName"):
            head.append(f"  on {c['graphName']}", style="gz.subject")
        head.append(f"  [{c.get('id', '')}]", style="gz.muted")
        console.print(head)
        console.print(Text(f"    {c.get('text', '')}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="gz.error")
    op = Text(f"  {result.op}", style="gz.op")
    console.print(label, op, Text(": "), Text(msg))

    if err and err.detail.get("retry"):
        console.print(Text("  Please check your connection and try again.", style="gz.muted"))
    if err and err.detail.get("missing"):
        console.print(Text(f"  missing: {', '.join(err.detail['missing'])}", style="gz.muted"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_cards(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    """Catalog cards: count header, popular tag chips, one row per graph."""
    d = result.data
    items: list[dict[str, Any]] = d.get("items", [])
    console.print(Text(f"{d.get('count', len(items))} graphs available", style="gz.count"))

    active: list[str] = []
    if d.get("text"):
        active.append(f"search={d['text']!r}")
    if d.get("category"):
        active.append(f"subject={d['category']!r}")
    if active:
        console.print(Text(f"  filters: {', '.join(active)}", style="gz.muted"))
    if d.get("popular_tags"):
        console.print(Text(f"  popular: {_chips(d['popular_tags'])}", style="gz.tag"))

    if not items:
        console.print()
        console.print(Text(NO_RESULTS_MESSAGE, style="gz.muted"))
        return

    table = Table(show_header=True, show_lines=True, pad_edge=False, expand=False)
    table.add_column("ID", style="gz.id", no_wrap=True)
    table.add_column("Graph")
    table.add_column("Subject", style="gz.subject")
    table.add_column("Tags", style="gz.tag")
    table.add_column("Engagement", style="gz.muted")

    for item in items:
        graph = Text(str(item.get("name", "")), style="gz.name")
        if item.get("alias"):
            graph.append(f"\n{item['alias']}", style="gz.muted")
        graph.append(f"\n{_excerpt(str(item.get('description', '')), cards.excerpt_length)}")
        badges = _badges(item)
        if badges:
            graph.append("\n")
            graph.append_text(badges)
        images = item.get("images") or []
        image = images[0] if images else cards.placeholder_image
        graph.append(f"\nimage: {image}", style="gz.muted")

        table.add_row(
            Text(str(item.get("id", ""))),
            graph,
            Text(str(item.get("subject", ""))),
            Text(_chips(list(item.get("tags", [])), cards.tag_limit)),
            Text(_counts(item)),
        )

    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_tags(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    tags = result.data.get("tags", [])
    if not tags:
        console.print(Text("No tags yet.", style="gz.muted"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Tag", style="gz.tag")
    table.add_column("Graphs", justify="right", style="gz.count")
    for row in tags:
        table.add_row(Text(f"#{row['tag']}"), str(row["count"]))
    console.print(table)


def _graph_panel(console: Console, g: dict[str, Any], cards: CardOptions) -> None:
    body = Text()
    if g.get("alias"):
        body.append(f"{g['alias']}\n", style="gz.muted")
    body.append(str(g.get("subject", "")), style="gz.subject")
    body.append(f"  ·  {_date(g.get('createdAt'))}\n\n")
    body.append(f"{g.get('description', '')}\n\n")
    if g.get("tags"):
        body.append(f"{_chips(g['tags'])}\n", style="gz.tag")
    body.append(f"{_counts(g)}\n")

    body.append("\n")
    for url in g.get("images") or [cards.placeholder_image]:
        body.append(f"image: {url}\n")
    if g.get("source") and g["source"] != "#":
        body.append(f"source: {g['source']}\n")
    for key, label in (("telegramLink", "telegram"), ("donationLink", "donate")):
        if g.get(key):
            body.append(f"{label}: {g[key]}\n")
    if g.get("affiliateLink"):
        body.append(f"{g.get('affiliateTitle') or 'Get Notes'}: {g['affiliateLink']}\n")
    if g.get("sponsorName"):
        body.append(f"Sponsored by {g['sponsorName']}", style="gz.sponsor")
        if g.get("sponsorMessage"):
            body.append(f": {g['sponsorMessage']}")
        body.append("\n")
        if g.get("sponsorLink"):
            body.append(f"  {g['sponsorLink']}\n")

    body.rstrip()
    title = Text(f"{g.get('name', '?')} [{g.get('id', '')}]")
    console.print(Panel(body, title=title, border_style="gz.op", expand=False))


def _render_detail(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    """Detail panel for one graph, followed by its comments."""
    d = result.data
    _graph_panel(console, d.get("graph", {}), cards)
    if "comments" not in d:
        return

    console.print()
    comments = d.get("comments", [])
    console.print(Text(f"Comments ({len(comments)})", style="gz.op"))
    if d.get("comments_error"):
        console.print(Text(f"  {d['comments_error']}", style="gz.error"))
    elif not comments:
        console.print(Text(f"  {NO_COMMENTS_MESSAGE}", style="gz.muted"))
    else:
        _comment_lines(console, comments)
    if verbose:
        _render_meta(console, result)


def _render_counter(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "graph_id", d.get("graph_id", ""))
    if d.get("count") is not None:
        _field(console, d.get("field", "count"), d["count"])
    if not d.get("applied", True):
        _field(console, "applied", False)
    if verbose:
        _render_meta(console, result)


def _render_share(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    d = result.data
    console.print(Text(str(d.get("text", ""))))
    console.print(Text(str(d.get("url", "")), style="gz.url"))


# ── Comment renderers ─────────────────────────────────────────────────


def _render_comments(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    comments = result.data.get("comments", [])
    show_graph = result.op == "recent_comments"
    if result.op == "post_comment":
        _status_line(console, result)
        _field(console, "comment_id", result.data.get("comment_id", ""))
        if result.data.get("comment_count") is not None:
            _field(console, "commentCount", result.data["comment_count"])
        console.print()
        if result.data.get("comments_error"):
            console.print(Text(f"  {result.data['comments_error']}", style="gz.error"))
            return

    if not comments:
        console.print(Text(NO_COMMENTS_MESSAGE, style="gz.muted"))
        return
    console.print(Text(f"{len(comments)} comments", style="gz.count"))
    _comment_lines(console, comments, show_graph=show_graph)
    if verbose:
        _render_meta(console, result)


# ── Admin renderers ───────────────────────────────────────────────────


def _render_admin_table(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    if not items:
        console.print(Text("No graphs found", style="gz.muted"))
        return

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="gz.id", no_wrap=True)
    table.add_column("Name", style="gz.name")
    table.add_column("Subject", style="gz.subject")
    table.add_column("Views", justify="right")
    table.add_column("Likes", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("Created", style="gz.muted")
    for item in items:
        table.add_row(
            Text(str(item.get("id", ""))),
            Text(str(item.get("name", ""))),
            Text(str(item.get("subject", ""))),
            str(item.get("viewCount", 0)),
            str(item.get("likeCount", 0)),
            str(item.get("commentCount", 0)),
            _date(item.get("createdAt")),
        )
    console.print(table)
    count = result.data.get("count", len(items))
    console.print(f"\n{count} of {result.data.get('total', count)} graphs")


def _render_stats(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    d = result.data
    table = Table(show_header=False, pad_edge=False, expand=False, box=None)
    table.add_column("Metric", style="gz.key")
    table.add_column("Value", justify="right", style="gz.count")
    for key, label in (
        ("total_graphs", "Total graphs"),
        ("total_views", "Total views"),
        ("total_likes", "Total likes"),
        ("total_comments", "Total comments"),
        ("today_uploads", "Uploaded today"),
    ):
        if key in d:
            table.add_row(label, str(d[key]))
    console.print(table)


def _render_analytics(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    d = result.data
    stats_result = result.model_copy(update={"data": d.get("totals", {})})
    _render_stats(stats_result, console)

    console.print()
    console.print(Text("Popular subjects", style="gz.op"))
    for row in d.get("popular_subjects", []):
        line = Text("  ")
        line.append(str(row["subject"]), style="gz.subject")
        line.append(f"  {row['count']}")
        console.print(line)

    console.print()
    console.print(Text("Top graphs by views", style="gz.op"))
    top = d.get("top_graphs", [])
    if not top:
        console.print(Text("  No graphs yet.", style="gz.muted"))
    for rank, row in enumerate(top, start=1):
        line = Text(f"  {rank}. ")
        line.append(str(row["name"]), style="gz.name")
        line.append(f"  {row['views']} views")
        console.print(line)


def _render_mutation(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    """Status line plus the scalar fields of a write result."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)) or value is None:
            continue
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Client renderers ──────────────────────────────────────────────────


def _render_events(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    events = result.data.get("events", [])
    if not events:
        console.print(Text("No events recorded.", style="gz.muted"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("When", style="gz.muted")
    table.add_column("Event", style="gz.op")
    table.add_column("Graph", style="gz.id")
    table.add_column("Extra")
    now = datetime.now(UTC)
    for e in events:
        extra = {k: v for k, v in e.items() if k not in ("event", "graphId", "timestamp")}
        table.add_row(
            _relative(e.get("timestamp"), now),
            Text(str(e.get("event", ""))),
            Text(str(e.get("graphId") or "")),
            Text(json.dumps(extra, separators=(",", ":")) if extra else ""),
        )
    console.print(table)
    count = result.data.get("count", len(events))
    console.print(f"\n{count} of {result.data.get('total', count)} events")


def _render_donate(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    d = result.data
    console.print(Text(f"Support {d.get('payee_name', '')}", style="gz.name"))
    _field(console, "amount", f"{d.get('amount')} {d.get('currency', '')}")
    _field(console, "upi_id", d.get("upi_id", ""))
    _field(console, "uri", d.get("uri", ""))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    cards: CardOptions = _DEFAULT_CARDS,
) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Catalog
    "load_catalog": _render_cards,
    "list_graphs": _render_cards,
    "tags": _render_tags,
    "open_detail": _render_detail,
    "get_graph": _render_detail,
    "share": _render_share,
    "visit": _render_mutation,
    # Counters
    "like": _render_counter,
    "view": _render_counter,
    "increment_comment_count": _render_counter,
    # Comments
    "post_comment": _render_comments,
    "load_comments": _render_comments,
    "recent_comments": _render_comments,
    "delete_comment": _render_mutation,
    # Admin
    "admin_list": _render_admin_table,
    "save_graph": _render_mutation,
    "delete_graph": _render_mutation,
    "stats": _render_stats,
    "analytics": _render_analytics,
    "export_analytics": _render_mutation,
    # Auth
    "login": _render_mutation,
    "logout": _render_mutation,
    "create_user": _render_mutation,
    # Client
    "init_site": _render_mutation,
    "theme": _render_mutation,
    "list_events": _render_events,
    "donate": _render_donate,
}
