"""Logging configuration for snapd-client."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMATTER = logging.Formatter(fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(log_path: Path, *, verbose: bool = False) -> None:
    """Configure the package logger: rotating file log, plus stderr when verbose.

    Idempotent: skips if handlers are already attached.
    """
    root = logging.getLogger("snapd_client")
    if root.handlers:
        return

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setFormatter(_FORMATTER)
    root.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(_FORMATTER)
        root.addHandler(stderr_handler)

    root.setLevel(logging.DEBUG)
