"""
Structured logging for the Chatbot backend.

Log events are rendered by structlog: colored console lines in debug mode,
one JSON object per line otherwise. Credential-bearing keys are masked
before rendering.
"""

import logging
import sys
from typing import Any, MutableMapping

import structlog

from app.core.config import get_settings

REDACTED = "[redacted]"

# Event keys whose values must never reach a log sink
SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "session",
    "cookie",
    "secret",
    "authorization",
})

# Third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "passlib": logging.ERROR,
    "aiosqlite": logging.WARNING,
}


def redact_secrets(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor that masks credential values."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def _renderer(debug: bool) -> list[Any]:
    if debug:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging() -> None:
    """Configure structlog and the stdlib root logger from settings."""
    debug = get_settings().debug

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_secrets,
            *_renderer(debug),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
