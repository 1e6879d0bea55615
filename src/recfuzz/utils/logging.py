"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain package loggers.
    - Allow optional verbose/debug modes for the CLI.

Notes/Edge cases:
    - Library code never installs output handlers; the package root logger
      only carries a ``NullHandler``.
    - :func:`configure_logging` is idempotent.

Dependencies:
    - Python `logging` module.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "recfuzz"
_HANDLER_NAME = "recfuzz-stderr"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``recfuzz`` namespace."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger at ``level``."""

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        # sys.stderr may have been swapped since the last call
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
