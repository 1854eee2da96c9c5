"""Tests for logging configuration."""

import logging

from meal_scan.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("meal_scan")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_configure_logging_updates_level() -> None:
    logger = logging.getLogger("meal_scan")

    configure_logging(logging.DEBUG)

    assert logger.level == logging.DEBUG
    configure_logging()
