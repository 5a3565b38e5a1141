"""Tests for logging setup."""

import logging
from collections.abc import Iterator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from snapd_client.log import setup_logging


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Package logger with handlers removed before and after the test."""
    logger = logging.getLogger("snapd_client")
    saved = logger.handlers[:]
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved


class TestSetupLogging:
    """Handler wiring."""

    def test_file_handler(self, package_logger: logging.Logger, tmp_path: Path) -> None:
        """A rotating file handler writes to the given path."""
        setup_logging(tmp_path / "client.log")
        assert [type(h) for h in package_logger.handlers] == [RotatingFileHandler]
        logging.getLogger("snapd_client.api.client").debug("hello")
        assert "hello" in (tmp_path / "client.log").read_text()

    def test_verbose_adds_stderr(self, package_logger: logging.Logger, tmp_path: Path) -> None:
        """Verbose mode also logs to stderr."""
        setup_logging(tmp_path / "client.log", verbose=True)
        assert len(package_logger.handlers) == 2

    def test_idempotent(self, package_logger: logging.Logger, tmp_path: Path) -> None:
        """Second call does not add handlers."""
        setup_logging(tmp_path / "client.log")
        setup_logging(tmp_path / "client.log", verbose=True)
        assert len(package_logger.handlers) == 1
