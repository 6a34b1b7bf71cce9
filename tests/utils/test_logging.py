"""Unit tests for the tidychart logging helpers."""

import logging
import sys

import pytest

import tidychart  # noqa: F401  (installs the NullHandler)
from tidychart.utils.logging import LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_package_logger_has_null_handler():
    handlers = logging.getLogger(LOGGER_NAME).handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_get_logger_defaults_to_package_logger():
    assert get_logger().name == "tidychart"
    assert get_logger("tidychart.algorithms.lttb").parent.name in ("tidychart", "tidychart.algorithms")


def test_configure_logging_adds_stderr_handler_once(clean_logger):
    configure_logging("DEBUG", force=True)
    configure_logging("DEBUG")
    stderr_handlers = [
        h for h in clean_logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]
    assert len(stderr_handlers) == 1
    assert clean_logger.level == logging.DEBUG


def test_configure_logging_reads_env_var(clean_logger, monkeypatch):
    monkeypatch.setenv("TIDYCHART_LOG_LEVEL", "WARNING")
    logger = configure_logging(force=True)
    assert logger.level == logging.WARNING
