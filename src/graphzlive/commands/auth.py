"""Command group: admin account management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from graphzlive.commands._base import GraphzGroup
from graphzlive.services.auth import AuthService

if TYPE_CHECKING:
    from graphzlive.commands._context import AppContext

_AUTH_EXAMPLES = """\
  graphz auth create-user admin@example.com
  graphz auth disable admin@example.com
  graphz auth unlock admin@example.com"""


@click.group(cls=GraphzGroup, examples=_AUTH_EXAMPLES)
@click.pass_obj
def auth(app: AppContext) -> None:
    """Create and manage admin accounts."""


@auth.command(
    "create-user",
    examples="""\
  graphz auth create-user admin@example.com
  graphz auth create-user admin@example.com --password s3cret!""",
)
@click.argument("email")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (at least 6 characters).",
)
@click.pass_obj
def create_user(app: AppContext, email: str, password: str) -> None:
    """Register an admin account."""
    app.emit(AuthService(app.workspace).create_user(email, password))


@auth.command(
    examples="""\
  graphz auth disable admin@example.com
  graphz auth disable admin@example.com --enable"""
)
@click.argument("email")
@click.option("--enable", is_flag=True, help="Re-enable instead of disabling.")
@click.pass_obj
def disable(app: AppContext, email: str, enable: bool) -> None:
    """Disable (or re-enable) an account."""
    app.emit(AuthService(app.workspace).set_disabled(email, not enable))


@auth.command(
    examples="""\
  graphz auth unlock admin@example.com"""
)
@click.argument("email")
@click.pass_obj
def unlock(app: AppContext, email: str) -> None:
    """Lift the lockout after too many failed sign-ins."""
    app.emit(AuthService(app.workspace).unlock(email))
