"""Tests for structlog configuration."""

import logging

from graphzlive.config.logging import configure_logging


class TestConfigureLogging:
    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("graphzlive").level == logging.WARNING

    def test_verbose_is_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("graphzlive").level == logging.DEBUG
        configure_logging()

    def test_single_stderr_handler(self) -> None:
        configure_logging(log_json=True)
        configure_logging(log_json=True)
        assert len(logging.getLogger().handlers) == 1
