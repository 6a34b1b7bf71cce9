"""
Largest-Triangle-Three-Buckets (LTTB) downsampling.

Reduces a time series to ``threshold`` points while keeping its visual shape
(Steinarsson 2013, "Downsampling Time Series for Visual Representation"):

  1. Keep the first and last point.
  2. Split the ``n - 2`` interior points into ``threshold - 2`` buckets of
     (nearly) equal size.
  3. From each bucket pick the point forming the largest triangle with the
     point picked from the previous bucket and the centroid of the next
     bucket (the last point for the final bucket). Ties go to the first index.

Peaks and inflection points maximize that area and are therefore kept far
more often than by stride sampling.

Usage:
    from tidychart.algorithms.lttb import lttb
    reduced = lttb(points, threshold=500)
"""

from __future__ import annotations

import numbers
from typing import Sequence

import numpy as np

from tidychart.data.model import DataPoint, Series
from tidychart.errors import ArgumentError
from tidychart.utils.logging import get_logger

logger = get_logger(__name__)


def _check_threshold(threshold: int) -> None:
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Integral):
        raise ArgumentError(f"threshold must be an integer, got {threshold!r}")
    if threshold < 3:
        raise ArgumentError(f"LTTB threshold must be >= 3, got {threshold}")


def lttb_indices(xs: Sequence[float], ys: Sequence[float], threshold: int) -> np.ndarray:
    """
    Core LTTB selection on coordinate arrays.

    Parameters
    ----------
    xs, ys : array-like
        Coordinates of equal length, x ascending.
    threshold : int
        Number of points to keep (>= 3).

    Returns
    -------
    np.ndarray
        Ascending int64 indices of the kept points. ``arange(n)`` when
        ``n <= threshold``.

    Raises
    ------
    ArgumentError
        If threshold < 3 or the arrays are not 1-D with equal length.
    """
    _check_threshold(threshold)
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    if x.ndim != 1 or x.shape != y.shape:
        raise ArgumentError(f"xs and ys must be 1-D with equal length, got {x.shape} and {y.shape}")

    n = len(x)
    if n <= threshold:
        return np.arange(n, dtype=np.int64)

    n_buckets = threshold - 2
    n_inner = n - 2
    # bucket k spans [edges[k], edges[k + 1]); integer division keeps edges exact
    edges = 1 + (np.arange(n_buckets + 1, dtype=np.int64) * n_inner) // n_buckets

    selected = np.empty(threshold, dtype=np.int64)
    selected[0] = 0
    selected[-1] = n - 1

    a = 0  # index of the previously selected point
    for k in range(n_buckets):
        start, end = edges[k], edges[k + 1]

        if k + 1 < n_buckets:
            next_start, next_end = edges[k + 1], edges[k + 2]
            cx = x[next_start:next_end].mean()
            cy = y[next_start:next_end].mean()
        else:
            cx, cy = x[-1], y[-1]

        ax, ay = x[a], y[a]
        # twice the triangle area; the constant factor does not change argmax
        area = np.abs((ax - cx) * (y[start:end] - ay) - (ax - x[start:end]) * (cy - ay))
        a = int(start + np.argmax(area))
        selected[k + 1] = a

    return selected


def lttb(points: Sequence[DataPoint], threshold: int) -> list[DataPoint]:
    """
    Downsample points with LTTB.

    Returns exactly ``threshold`` points, including the first and last input
    points, in original order. When ``len(points) <= threshold`` the input is
    returned unchanged (as a list).

    Raises
    ------
    ArgumentError
        If threshold < 3.
    """
    _check_threshold(threshold)
    n = len(points)
    if n <= threshold:
        logger.debug("No LTTB downsampling needed: %d <= %d", n, threshold)
        return list(points)

    logger.info("LTTB downsampling: %d -> %d points", n, threshold)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return [points[i] for i in lttb_indices(xs, ys, threshold)]


def lttb_series(series: Series[DataPoint], threshold: int) -> Series[DataPoint]:
    """LTTB over a Series, keeping its label and color.

    The same Series object is returned when no reduction is needed.
    """
    _check_threshold(threshold)
    if len(series) <= threshold:
        return series
    return series.with_points(lttb(series.points, threshold))
