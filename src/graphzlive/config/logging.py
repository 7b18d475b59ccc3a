"""Route graphz diagnostics to stderr through structlog.

Service modules log with ``logging.getLogger(__name__)`` and the analytics
sink with ``structlog.get_logger("graphzlive.analytics")``; both end up in
one handler so stdout carries only rendered results.  ``-v`` opens the
``graphzlive`` tree to DEBUG (telemetry spans, analytics events, store
writes); ``--log-json`` switches the renderer to JSON lines.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Install the stderr handler, replacing any from an earlier invocation.

    Args:
        verbose: Let ``graphzlive`` loggers through at DEBUG; otherwise
            only warnings (failed increments, skipped comment fetches) show.
        log_json: Render JSON lines instead of the console format.
    """
    app_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("graphzlive").setLevel(app_level)
    # SQLAlchemy echoes every statement at INFO once its logger is enabled.
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
