"""Outbound links — share URLs, ``?graph=<id>`` deep links, UPI payment URIs."""

from __future__ import annotations

from urllib.parse import parse_qs, quote, urlencode, urlsplit, urlunsplit

GRAPH_QUERY_PARAM = "graph"


def share_url(base_url: str, graph_id: str) -> str:
    """``base_url`` with ``?graph=<id>`` set (replacing any existing query).

    Examples:
        >>> share_url("https://graphzlive.web.app/", "abc123")
        'https://graphzlive.web.app/?graph=abc123'
    """
    parts = urlsplit(base_url)
    query = urlencode({GRAPH_QUERY_PARAM: graph_id})
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


def share_text(graph_name: str, site_name: str = "GraphzLive") -> str:
    return f"Check out this graph: {graph_name} on {site_name}"


def graph_id_from_url(url: str) -> str | None:
    """Extract the ``graph`` query parameter from a page URL, if present.

    Examples:
        >>> graph_id_from_url("https://graphzlive.web.app/?graph=abc123")
        'abc123'
        >>> graph_id_from_url("https://graphzlive.web.app/") is None
        True
    """
    values = parse_qs(urlsplit(url).query).get(GRAPH_QUERY_PARAM)
    if not values:
        return None
    value = values[0].strip()
    return value or None


def build_upi_uri(
    upi_id: str,
    *,
    payee_name: str,
    amount: int | str,
    note: str,
    currency: str = "INR",
) -> str:
    """``upi://pay`` deep link for a donation.

    The payee id is passed through verbatim; name and note are
    percent-encoded.

    Examples:
        >>> build_upi_uri("me@upi", payee_name="Graphz Live", amount=50, note="Thanks")
        'upi://pay?pa=me@upi&pn=Graphz%20Live&am=50&cu=INR&tn=Thanks'
    """
    return (
        f"upi://pay?pa={upi_id}&pn={quote(payee_name, safe='')}"
        f"&am={amount}&cu={currency}&tn={quote(note, safe='')}"
    )
