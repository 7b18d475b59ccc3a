"""Subcommand modules for graphz.

Provides register_commands(), which imports command modules lazily so
``graphz --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root group.

    3 groups (browse, admin, auth) + 4 standalone commands.
    """
    # --- Groups ---
    from graphzlive.commands.admin import admin
    from graphzlive.commands.auth import auth
    from graphzlive.commands.browse import browse

    cli.add_command(browse)
    cli.add_command(admin)
    cli.add_command(auth)

    # --- Standalone commands ---
    from graphzlive.commands.client import donate, events, theme
    from graphzlive.commands.init_cmd import init_cmd

    cli.add_command(init_cmd)
    cli.add_command(theme)
    cli.add_command(donate)
    cli.add_command(events)
