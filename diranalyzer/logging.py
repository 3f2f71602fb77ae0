"""Logging utilities for diranalyzer commands and service mode."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "diranalyzer"

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR")

_CONSOLE_FORMAT = "[diranalyzer] %(levelname)s %(message)s"
# Tokenization runs on pool threads; the file sink records which worker logged.
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the diranalyzer hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def resolve_level(level: str | None, *, verbose: bool = False) -> int:
    """Map a configured level name to a logging level; `verbose` forces DEBUG."""
    if verbose:
        return logging.DEBUG
    if level is None:
        return logging.INFO
    name = level.upper()
    if name not in LEVEL_NAMES:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LEVEL_NAMES)}")
    return logging.getLevelName(name)


def configure_logging(
    *,
    verbose: bool = False,
    level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install console and optional file handlers on the diranalyzer logger."""
    resolved = resolve_level(level, verbose=verbose)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved)
    stream_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(resolved)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["LEVEL_NAMES", "configure_logging", "get_logger", "resolve_level"]
