"""Click base classes with an ``--examples`` flag.

``graphz <cmd> --examples`` prints worked invocations and exits, which
keeps ``--help`` short.  Groups set ``command_class`` so every subcommand
accepts ``examples=`` without passing ``cls=`` each time.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager, value-less ``--examples`` option when examples are given."""

    examples: str | None
    params: list[click.Parameter]

    def _install_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def _show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_show,
                help="Show usage examples.",
            )
        )


class GraphzCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class GraphzGroup(_ExamplesMixin, click.Group):
    command_class = GraphzCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
