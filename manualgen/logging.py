"""Logging utilities for manualgen commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "manualgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the manualgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the manualgen logger with console output and an optional build log."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Start from a clean handler list each time the CLI configures logging.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[manualgen] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        build_log = logging.FileHandler(log_file, encoding="utf-8")
        build_log.setLevel(logging.DEBUG)
        build_log.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(build_log)

    return logger


__all__ = ["configure_logging", "get_logger"]
