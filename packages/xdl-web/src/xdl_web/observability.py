"""Structured logging for xdl-web.

This module provides:
- Structured logging setup via structlog
- A cached module logger for the package

Events are handed to the standard library logger ``xdl_web``, which
carries a ``NullHandler``. The dev server owns the terminal, so nothing
from the structured stream reaches stdout or stderr unless the host
application routes it there or ``configure_logging`` is given a file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

LOGGER_NAME = "xdl_web"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

# Module-level logger
_logger: BoundLogger | None = None


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a package logger, creating it if necessary.

    Args:
        name: Dotted module name below the package logger. The shared
            package logger is returned when omitted.

    Returns:
        Structlog logger writing to the standard library logger.

    Example:
        >>> logger = get_logger()
        >>> logger.info("compiler_created", project_root="/app")
    """
    global _logger
    if name is not None:
        return structlog.wrap_logger(logging.getLogger(name))
    if _logger is None:
        _logger = structlog.wrap_logger(logging.getLogger(LOGGER_NAME))
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def configure_logging(
    *,
    log_level: str = "WARNING",
    json_format: bool = False,
    add_timestamp: bool = True,
    log_file: Path | str | None = None,
) -> None:
    """Configure structured logging for xdl-web.

    Only the package logger is configured. It stops propagating to the
    root logger and writes to ``log_file`` if one is given, otherwise
    events are discarded.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.
        log_file: File the structured stream is appended to.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=True, log_file="xdl-web.log")
    """
    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # Module-level loggers must pick up later reconfiguration
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.NullHandler()

    package_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level.upper()))
    package_logger.propagate = False
