# src/protean/core/logging.py
"""Structured logging configuration for protean.

The library itself only emits events through structlog-wrapped stdlib
loggers, which stay silent until handlers exist, and never configures output.
Applications (and the protean CLI) call configure_logging() once.

Both structlog and stdlib logging are routed through ProcessorFormatter, so
records from logging.getLogger(__name__) render exactly like structlog events.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from protean.core.config import ProteanSettings


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Remove the _record/_from_structlog keys ProcessorFormatter always adds."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(
    settings: ProteanSettings | None = None,
    *,
    json_output: bool | None = None,
    level: str | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Explicit keyword arguments win over `settings`; with neither, the
    ProteanSettings defaults apply (console output at INFO).

    Args:
        settings: Source of json_logs/log_level defaults
        json_output: If True, output JSON. If False, human-readable.
        level: Log level (DEBUG, INFO, WARNING, ERROR).
    """
    if settings is None:
        settings = ProteanSettings()
    if json_output is None:
        json_output = settings.json_logs
    log_level = getattr(logging, (level or settings.log_level).upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: list[Any]
    if json_output:
        renderer = [
            _drop_formatter_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [
            _drop_formatter_bookkeeping,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure logging; cached loggers would keep the old setup
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
