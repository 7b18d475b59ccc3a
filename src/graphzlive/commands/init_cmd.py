"""Command: site initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from graphzlive.commands._base import GraphzCommand

if TYPE_CHECKING:
    from graphzlive.commands._context import AppContext

_INIT_EXAMPLES = """\
  graphz init
  graphz init /srv/graphz --name "Physics Graphs"
  graphz --json init ."""


@click.command("init", cls=GraphzCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--name", default=None, help="Site name written to graphz.toml.")
@click.pass_obj
def init_cmd(app: AppContext, path: str, name: str | None) -> None:
    """Create graphz.toml and the .graphz/ data directory."""
    from graphzlive.services.init import InitService

    app.emit(InitService.init_site(Path(path).resolve(), name=name))
