"""Standalone commands: theme preference, donations, and the event log."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from graphzlive.commands._base import GraphzCommand
from graphzlive.services.analytics import AnalyticsService
from graphzlive.services.donation import DonationService

if TYPE_CHECKING:
    from graphzlive.commands._context import AppContext

logger = logging.getLogger(__name__)


def launch_external(url: str) -> bool:
    """Hand *url* to the OS launcher. Returns False if nothing opened it."""
    try:
        return click.launch(url) == 0
    except OSError:
        logger.debug("No handler for %s", url, exc_info=True)
        return False


@click.command(
    cls=GraphzCommand,
    examples="""\
  graphz theme
  graphz theme --toggle""",
)
@click.option("--toggle", is_flag=True, help="Switch between light and dark.")
@click.pass_obj
def theme(app: AppContext, toggle: bool) -> None:
    """Show or toggle the light/dark theme."""
    svc = AnalyticsService(app.workspace)
    app.emit(svc.toggle_theme() if toggle else svc.theme())


@click.command(
    cls=GraphzCommand,
    examples="""\
  graphz donate
  graphz donate --amount 250
  graphz donate --amount 50 --no-launch""",
)
@click.option("--amount", type=int, default=None, help="Amount in INR (default 100, minimum 10).")
@click.option("--no-launch", is_flag=True, help="Only print the payment details.")
@click.pass_obj
def donate(app: AppContext, amount: int | None, no_launch: bool) -> None:
    """Support GraphzLive through a UPI payment app."""
    result = DonationService(app.workspace).prepare(amount)
    app.emit(result)
    if no_launch or app.settings.json_output:
        return

    if not launch_external(result.data["uri"]):
        d = result.data
        click.echo(
            f"Unable to open a UPI app. Pay manually: UPI ID {d['upi_id']}, "
            f"amount {d['amount']} {d['currency']}",
            err=True,
        )


@click.command(
    cls=GraphzCommand,
    examples="""\
  graphz events
  graphz events --limit 10
  graphz --json events""",
)
@click.option("--limit", type=int, default=None, help="Show only the newest N events.")
@click.pass_obj
def events(app: AppContext, limit: int | None) -> None:
    """Show the locally recorded analytics events."""
    app.emit(AnalyticsService(app.workspace).list_events(limit=limit))
