"""Output mode selection for ServiceResult.

Humans get Rich renderers, ``--quiet`` gets ids or a status line, and
``--json`` gets the full result model serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphzlive.services.result import ServiceResult


@dataclass(frozen=True)
class CardOptions:
    """How catalog cards are abbreviated."""

    placeholder_image: str = "assets/default.jpg"
    excerpt_length: int = 100
    tag_limit: int = 3


@dataclass(frozen=True)
class OutputSettings:
    """Resolved output flags for one invocation."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    dark: bool = False
    cards: CardOptions = field(default_factory=CardOptions)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display in the requested mode."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    from graphzlive.output.renderers import render_quiet, render_result

    if settings.quiet:
        return render_quiet(result)
    return render_result(
        result,
        verbose=settings.verbose,
        dark=settings.dark,
        cards=settings.cards,
    )
