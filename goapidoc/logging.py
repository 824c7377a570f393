"""Logging for goapidoc: console records plus an optional log file."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT_LOGGER = "goapidoc"
_CONSOLE_FORMAT = "[goapidoc] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``goapidoc.<name>``, e.g. ``get_logger("packages.symbols")``."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}" if name else _ROOT_LOGGER)


def _formatted(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send goapidoc records to stderr and, when given, to ``log_file``.

    Verbose mode adds the DEBUG traversal records (packages discovered, symbol
    tables built). Skipped comments and operations are WARNING records and are
    always shown. Handlers from a previous call are closed first, so running the
    CLI twice in one process does not duplicate output.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_formatted(logging.StreamHandler(), level, _CONSOLE_FORMAT))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        logger.addHandler(_formatted(file_handler, level, _FILE_FORMAT))

    return logger


__all__ = ["configure_logging", "get_logger"]
