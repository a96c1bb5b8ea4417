"""Logging utilities for scrtask runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "scrtask"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the scrtask hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the scrtask logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[scrtask] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


class TaskLog:
    """Log facade handed to descriptor generators.

    Generators report problems against the source file that caused them, so
    ``warn`` and ``error`` accept an optional location and line number.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("generator")

    def is_debug_enabled(self) -> bool:
        return self._logger.isEnabledFor(logging.DEBUG)

    def debug(self, message: str, cause: BaseException | None = None) -> None:
        self._logger.debug(message, exc_info=cause)

    def info(self, message: str, cause: BaseException | None = None) -> None:
        self._logger.info(message, exc_info=cause)

    def warn(
        self,
        message: str,
        location: str | None = None,
        line_number: int = 0,
        cause: BaseException | None = None,
    ) -> None:
        self._logger.warning(_with_location(message, location, line_number), exc_info=cause)

    def error(
        self,
        message: str,
        location: str | None = None,
        line_number: int = 0,
        cause: BaseException | None = None,
    ) -> None:
        self._logger.error(_with_location(message, location, line_number), exc_info=cause)


def _with_location(message: str, location: str | None, line_number: int) -> str:
    if not location:
        return message
    if line_number > 0:
        return f"{location} [{line_number}]: {message}"
    return f"{location}: {message}"


__all__ = ["TaskLog", "configure_logging", "get_logger"]
