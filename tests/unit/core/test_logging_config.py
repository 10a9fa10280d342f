"""Unit tests for logging configuration."""

from __future__ import annotations

import logging

from core.logging_config import get_logger


def test_get_logger_attaches_single_non_propagating_handler() -> None:
    """Module loggers should own one handler and not repeat events on root."""
    get_logger("tests.logging_config_target")
    get_logger("tests.logging_config_target")

    standard_logger = logging.getLogger("tests.logging_config_target")

    assert len(standard_logger.handlers) == 1
    assert standard_logger.propagate is False
