# tests/conftest.py
"""Pytest configuration and shared fixtures for tidychart tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure tidychart is importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def region_table():
    """Two months of values for two regions."""
    from tidychart.data.field_value import DataTable

    return DataTable.from_records([
        {"month": 1, "value": 10, "region": "N"},
        {"month": 2, "value": 20, "region": "S"},
    ])


@pytest.fixture
def sine_points():
    """1000 ascending-x points of a sine wave with one sharp spike."""
    import math

    from tidychart.data.model import DataPoint

    points = [DataPoint(float(i), math.sin(i / 50.0)) for i in range(1000)]
    points[437] = DataPoint(437.0, 25.0)
    return points
