"""Tests for relative and absolute date formatting."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from graphzlive.domain.timefmt import format_date, format_relative

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=5), "5m ago"),
        (timedelta(hours=3), "3h ago"),
        (timedelta(days=2), "2d ago"),
        (timedelta(days=9), "Mar 1, 2026"),
    ],
)
def test_format_relative(delta: timedelta, expected: str) -> None:
    assert format_relative(NOW - delta, now=NOW) == expected


def test_missing_timestamp_is_blank() -> None:
    assert format_relative(None, now=NOW) == ""


def test_format_date_has_no_zero_padding() -> None:
    assert format_date(datetime(2026, 3, 5, tzinfo=UTC)) == "Mar 5, 2026"
