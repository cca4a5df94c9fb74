"""
Structured Logging
==================

structlog setup shared by the API server and the import script.

Production emits one JSON object per line; every other environment gets
the colored console renderer. Each event carries ``service`` plus any
request context bound by the HTTP middleware.
"""

import logging
import sys
from typing import Any

import structlog

from ioc_tracker.config.settings import get_settings

SERVICE_NAME = "ioc-tracker"

# Libraries that are chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "multipart", "python_multipart")


def _add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Install the structlog processor chain and stdlib root handler.

    Args:
        level: Level name overriding ``settings.log_level``
        json_output: Force JSON (True) or console (False) rendering;
            defaults to JSON in production only
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    if json_output is None:
        json_output = settings.is_production

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(**values: Any) -> None:
    """Attach values (request_id, path, ...) to every event in this context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a logger named after the calling module."""
    return structlog.get_logger(name)
