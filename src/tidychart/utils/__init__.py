"""Shared utilities for tidychart."""

from tidychart.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
