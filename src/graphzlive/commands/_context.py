"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Opens the Workspace lazily and owns result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from graphzlive.output.formatters import CardOptions, OutputSettings, format_result

if TYPE_CHECKING:
    from graphzlive.config.settings import GraphzSettings
    from graphzlive.infrastructure.workspace import Workspace
    from graphzlive.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is opened on first use so ``--help``, ``--version`` and
    ``--examples`` never touch the database.
    """

    def __init__(self, settings: GraphzSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from graphzlive.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from graphzlive.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from graphzlive.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def _dark(self) -> bool:
        if self._workspace is None:
            return False
        from graphzlive.services.analytics import AnalyticsService

        return AnalyticsService(self._workspace).current_theme() == "dark"

    def output_settings(self) -> OutputSettings:
        catalog = self.settings.catalog
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            dark=self._dark(),
            cards=CardOptions(
                placeholder_image=self.settings.site.placeholder_image,
                excerpt_length=catalog.description_excerpt,
                tag_limit=catalog.card_tag_limit,
            ),
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout.  Warnings go to stderr so piped output
          stays clean (in JSON mode they are already in the payload).
        * Failure: writes to stderr and exits with code 1.
        """
        settings = self.output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_or_continue(self, result: ServiceResult | None) -> None:
        """Emit *result* only if it is a failure (gates and preloads)."""
        if result is not None and not result.ok:
            self.emit(result)
