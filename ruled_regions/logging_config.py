"""Logging setup shared by every ruled_regions module."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator

PACKAGE_LOGGER_NAME = "ruled_regions"
LOG_LEVEL_ENV = "RULED_REGIONS_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"

_configured = False


def _resolve_level(level: int | str | None) -> int:
    """Turn a level name or number into a logging level, honouring the env var."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        return resolved
    return level


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach the package handler once and set the package log level."""
    global _configured

    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True
    root.setLevel(_resolve_level(level))
    return root


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between DEBUG and the default level."""
    configure_logging(logging.DEBUG if verbose else None)


@contextmanager
def verbose_logging(verbose: bool) -> Iterator[None]:
    """Log at DEBUG inside the block when ``verbose``, then restore the level."""
    if not verbose:
        yield
        return
    root = get_logger(PACKAGE_LOGGER_NAME)
    previous = root.level
    root.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        root.setLevel(previous)


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package logger."""
    if not _configured:
        configure_logging()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "set_verbose", "verbose_logging"]
