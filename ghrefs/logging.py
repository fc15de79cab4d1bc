"""Logging setup shared by the ghrefs CLI and library components.

Components log through ``get_logger("<component>")`` and never configure handlers
themselves; the CLI calls :func:`configure_logging` once per invocation. The console
follows ``--verbose`` while a ``--log-file`` sink always records debug output, so a
quiet run can still be diagnosed afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "ghrefs"
_CONSOLE_FORMAT = "[ghrefs] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``ghrefs`` or the ``ghrefs.<name>`` child logger."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler and, when ``log_file`` is given, a debug file sink.

    Calling it again replaces (and closes) the handlers from the previous call.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    handlers = [_console_handler(console_level)]
    if log_file is not None:
        handlers.append(_file_handler(log_file))

    logger = logging.getLogger(_LOGGER_NAME)
    _reset(logger)
    logger.propagate = False
    # The logger passes everything its most talkative handler wants.
    logger.setLevel(min(handler.level for handler in handlers))
    for handler in handlers:
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
