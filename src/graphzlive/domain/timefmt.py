"""Human-readable timestamps for cards, comments, and the admin table."""

from __future__ import annotations

from datetime import UTC, datetime


def format_date(dt: datetime) -> str:
    """``Mar 5, 2026`` style date.

    Examples:
        >>> format_date(datetime(2026, 3, 5, tzinfo=UTC))
        'Mar 5, 2026'
    """
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def format_relative(dt: datetime | None, *, now: datetime | None = None) -> str:
    """Relative age: ``just now``, ``5m ago``, ``3h ago``, ``2d ago``, else a date.

    Returns an empty string for a missing timestamp (a comment whose
    server timestamp has not been read back yet).
    """
    if dt is None:
        return ""
    now = now or datetime.now(UTC)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    seconds = (now - dt).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return format_date(dt)
