"""Root CLI group for graphz with global flags and command registration."""

from __future__ import annotations

import click

from graphzlive import __version__
from graphzlive.commands import register_commands
from graphzlive.commands._base import GraphzGroup
from graphzlive.commands._context import AppContext
from graphzlive.config.settings import GraphzSettings

_ROOT_EXAMPLES = """\
  graphz init
  graphz browse list --search calculus
  graphz browse show <graph-id>
  graphz admin login --email admin@example.com
  graphz --json admin stats"""


@click.group(cls=GraphzGroup, invoke_without_command=True, examples=_ROOT_EXAMPLES)
@click.version_option(version=__version__, prog_name="graphz")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """graphz — browse and manage the GraphzLive catalog."""
    settings = GraphzSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
