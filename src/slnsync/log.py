"""Logging configuration for slnsync with structlog support."""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog


LogLevel = int | str

LOGGER_PREFIX = "slnsync"


def _level_number(level: LogLevel) -> int:
    return getattr(logging, level.upper()) if isinstance(level, str) else level


def configure_logging(
    level: LogLevel = "INFO",
    *,
    json_logs: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Route structlog events of sync passes through standard logging.

    Args:
        level: Logging level
        json_logs: Render events as JSON lines instead of console output
        stream: Output stream (default: stderr)
    """
    stream = stream or sys.stderr
    logging.basicConfig(
        level=_level_number(level),
        handlers=[logging.StreamHandler(stream)],
        force=True,
        format="%(message)s",
    )
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=stream.isatty())
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, log_level: LogLevel | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger below the `slnsync` namespace.

    Args:
        name: Logger name, prefixed with 'slnsync.' unless it already is
            (module ``__name__`` values are)
        log_level: Optional level for the underlying standard logger
    """
    full_name = name if name.startswith(LOGGER_PREFIX) else f"{LOGGER_PREFIX}.{name}"
    if log_level is not None:
        logging.getLogger(full_name).setLevel(_level_number(log_level))
    return structlog.get_logger(full_name)
