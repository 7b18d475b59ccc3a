"""Rich Console factory and theme for graphz output.

Consoles render into a StringIO buffer so renderers keep the
``format_result() -> str`` contract.  Rich turns color off by itself when
output is not a terminal (CliRunner, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

GRAPHZ_THEME = Theme(
    {
        "gz.ok": "bold green",
        "gz.error": "bold red",
        "gz.warning": "bold yellow",
        "gz.op": "bold cyan",
        "gz.key": "dim",
        "gz.id": "bold blue",
        "gz.name": "bold",
        "gz.subject": "magenta",
        "gz.tag": "cyan",
        "gz.count": "green",
        "gz.muted": "dim",
        "gz.sponsor": "bold yellow",
        "gz.affiliate": "bold magenta",
        "gz.url": "underline blue",
    }
)

_DARK_THEME_OVERRIDES = Theme(
    {
        "gz.name": "bold white",
        "gz.muted": "grey62",
    }
)


def create_console(
    *,
    no_color: bool = False,
    width: int | None = None,
    dark: bool = False,
) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (consistent test output).
        dark: Layer the dark-theme overrides on top of the base theme.
    """
    console = Console(
        file=StringIO(),
        theme=GRAPHZ_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )
    if dark:
        console.push_theme(_DARK_THEME_OVERRIDES)
    return console


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
