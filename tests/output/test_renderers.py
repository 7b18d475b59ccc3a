"""Tests for operation-specific Rich renderers."""

from graphzlive.output.formatters import CardOptions
from graphzlive.output.renderers import (
    NO_COMMENTS_MESSAGE,
    NO_RESULTS_MESSAGE,
    render_quiet,
    render_result,
)
from graphzlive.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _item(graph_id: str, **fields: object) -> dict[str, object]:
    item: dict[str, object] = {
        "id": graph_id,
        "name": "Unit Circle",
        "alias": "trig-1",
        "description": "Angles and ratios",
        "subject": "Mathematics",
        "tags": ["trig", "circle", "angles", "ratios"],
        "images": [],
        "likeCount": 3,
        "commentCount": 1,
        "viewCount": 12,
        "createdAt": "2026-03-05T10:00:00+00:00",
    }
    item.update(fields)
    return item


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("post_comment", "EMPTY_COMMENT", "Comment cannot be empty"))
        assert "ERROR" in output
        assert "post_comment" in output
        assert "Comment cannot be empty" in output

    def test_retry_hint(self) -> None:
        result = _err("list_graphs", "LOAD_FAILED", "Failed to load graphs", retry=True)
        output = render_result(result)
        assert "try again" in output

    def test_missing_fields_listed(self) -> None:
        result = _err(
            "save_graph",
            "VALIDATION_ERROR",
            "Please fill all required fields",
            missing=["tags", "images"],
        )
        assert "missing: tags, images" in render_result(result)

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Catalog cards ────────────────────────────────────────────────────


class TestCards:
    def test_empty_catalog(self) -> None:
        output = render_result(_ok("list_graphs", count=0, total=0, items=[]))
        assert "0 graphs available" in output
        assert NO_RESULTS_MESSAGE in output

    def test_card_row(self) -> None:
        output = render_result(_ok("list_graphs", count=1, total=1, items=[_item("g1")]))
        assert "1 graphs available" in output
        assert "Unit Circle" in output
        assert "#trig #circle #angles" in output
        assert "#ratios" not in output
        assert "3 likes" in output

    def test_excerpt_truncated(self) -> None:
        item = _item("g1", description="x" * 30)
        output = render_result(
            _ok("list_graphs", count=1, total=1, items=[item]),
            cards=CardOptions(excerpt_length=10),
        )
        assert "xxxxxxxxxx..." in output
        assert "x" * 11 not in output

    def test_filters_and_popular_chips(self) -> None:
        output = render_result(
            _ok(
                "list_graphs",
                count=0,
                total=4,
                text="optics",
                category="Physics",
                popular_tags=["calculus"],
                items=[],
            )
        )
        assert "search='optics'" in output
        assert "subject='Physics'" in output
        assert "#calculus" in output

    def test_first_image_shown(self) -> None:
        item = _item("g1", images=["https://img.example/uc.png", "https://img.example/2.png"])
        output = render_result(_ok("list_graphs", count=1, total=1, items=[item]))
        assert "image: https://img.example/uc.png" in output
        assert "2.png" not in output

    def test_bare_graph_has_placeholder_and_no_chips(self) -> None:
        item = _item("g1", tags=[], images=[])
        output = render_result(_ok("list_graphs", count=1, total=1, items=[item]))
        assert "assets/default.jpg" in output
        assert "#" not in output

    def test_user_text_is_not_markup(self) -> None:
        item = _item(
            "g1",
            name="[bold]x[/bold]",
            subject="Physics [/p]",
            tags=["[/t]", "[a, b]"],
        )
        output = render_result(_ok("list_graphs", count=1, total=1, items=[item]))
        assert "[bold]x[/bold]" in output
        assert "Physics [/p]" in output
        assert "#[/t] #[a, b]" in output

    def test_badges(self) -> None:
        item = _item("g1", sponsorName="Acme", affiliateLink="https://a.example")
        output = render_result(_ok("list_graphs", count=1, total=1, items=[item]))
        assert "Sponsored by Acme" in output
        assert "Get Notes" in output


# ── Detail & comments ────────────────────────────────────────────────


class TestDetail:
    def test_no_comments(self) -> None:
        output = render_result(
            _ok("open_detail", graph=_item("g1"), comments=[], comments_error=None)
        )
        assert "Comments (0)" in output
        assert NO_COMMENTS_MESSAGE in output
        assert "image: assets/default.jpg" in output

    def test_comments_error(self) -> None:
        output = render_result(
            _ok(
                "open_detail",
                graph=_item("g1"),
                comments=[],
                comments_error="Failed to load comments",
            )
        )
        assert "Failed to load comments" in output

    def test_comment_lines(self) -> None:
        comment = {"id": "c1", "author": "Priya", "text": "Great", "timestamp": None}
        output = render_result(_ok("load_comments", count=1, comments=[comment]))
        assert "Priya" in output
        assert "Great" in output


# ── Admin & client ───────────────────────────────────────────────────


class TestAdmin:
    def test_empty_table(self) -> None:
        output = render_result(_ok("admin_list", count=0, total=0, items=[]))
        assert "No graphs found" in output

    def test_table_footer(self) -> None:
        output = render_result(_ok("admin_list", count=1, total=3, items=[_item("g1")]))
        assert "1 of 3 graphs" in output
        assert "Mar 5, 2026" in output

    def test_stats(self) -> None:
        output = render_result(
            _ok(
                "stats",
                total_graphs=3,
                total_views=45,
                total_likes=2,
                total_comments=1,
                today_uploads=0,
            )
        )
        assert "Total views" in output
        assert "45" in output


class TestQuiet:
    def test_ids_from_items(self) -> None:
        result = _ok("list_graphs", items=[_item("g1"), _item("g2")])
        assert render_quiet(result) == "g1\ng2"

    def test_scalar_key(self) -> None:
        assert render_quiet(_ok("share", url="https://x/?graph=g1", text="t")) == (
            "https://x/?graph=g1"
        )

    def test_status_fallback(self) -> None:
        assert render_quiet(_ok("logout", signed_out=True)) == "OK: logout"

    def test_error(self) -> None:
        assert render_quiet(_err("like", "NOT_FOUND", "nope")) == "ERROR: like: nope"


class TestMarkupSafety:
    def test_error_message(self) -> None:
        output = render_result(_err("open_detail", "NOT_FOUND", "No graph found with ID: [/x]"))
        assert "No graph found with ID: [/x]" in output

    def test_error_detail_in_verbose(self) -> None:
        result = _err("save_graph", "SAVE_FAILED", "Failed", cause="[/oops]")
        assert "cause: [/oops]" in render_result(result, verbose=True)

    def test_admin_table(self) -> None:
        items = [
            _item("g1", name="Tags [/b] explained", subject="[i]Maths"),
            _item("[/id]", name="Closed interval [a, b]"),
        ]
        output = render_result(_ok("admin_list", count=2, total=2, items=items))
        assert "Tags [/b] explained" in output
        assert "[i]Maths" in output
        assert "Closed interval [a, b]" in output
        assert "[/id]" in output

    def test_share_text(self) -> None:
        result = _ok(
            "share",
            graph_id="g1",
            text="Check out this graph: Sets [/u] on GraphzLive",
            url="https://graphzlive.web.app/?graph=g1",
        )
        assert "Check out this graph: Sets [/u] on GraphzLive" in render_result(result)

    def test_tag_table_and_events(self) -> None:
        tags = render_result(_ok("tags", count=1, tags=[{"tag": "[/q]", "count": 2}]))
        assert "#[/q]" in tags
        events = render_result(
            _ok(
                "list_events",
                count=1,
                total=1,
                events=[{"event": "like", "graphId": "[/g]", "timestamp": None, "note": "[b]"}],
            )
        )
        assert "[/g]" in events
        assert '"note":"[b]"' in events
