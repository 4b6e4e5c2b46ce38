"""Structured logging configuration.

Library modules only obtain loggers via ``structlog.get_logger(__name__)``;
applications (and the ``gdyn`` CLI) call :func:`configure_logging` once at
startup.

Environment variables:
- GRAFEAS_DYNAMODB_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- GRAFEAS_DYNAMODB_LOG_FORMAT: json | console (default: console)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """Configure structlog and the stdlib root handler.

    Subsequent calls are no-ops unless ``force=True``.
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("GRAFEAS_DYNAMODB_LOG_LEVEL", "WARNING")).upper()
    log_format = (format or os.environ.get("GRAFEAS_DYNAMODB_LOG_FORMAT", "console")).lower()
    numeric_level = getattr(logging, log_level, logging.WARNING)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )
    logging.getLogger("grafeas_dynamodb").setLevel(numeric_level)
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(numeric_level, logging.WARNING))

    _configured = True
