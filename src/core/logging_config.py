"""Structured logging configuration.

This module initializes structlog loggers with a stable structured format.
Events are rendered as JSON and emitted through standard logging handlers
on stderr so CLI command output on stdout stays parseable.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger bound to a stdlib logger.
    """
    _ensure_standard_handler(name)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger(name)


def _ensure_standard_handler(name: str) -> None:
    """Attach one stderr handler to the named stdlib logger.

    The logger stops propagating so a configured root logger does not
    print each event again.

    Args:
        name: Logger name.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
