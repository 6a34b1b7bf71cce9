"""Nearest-point lookup for hover and tooltip hit testing.

Lookups are by x only. With ``assume_sorted=True`` (the default) points must
be in ascending x order and the search is a binary search; unsorted input
then gives an arbitrary nearby point rather than an error. Pass
``assume_sorted=False`` for a linear scan that works on any order.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from typing import Optional, Sequence

import numpy as np

from tidychart.data.model import DataPoint, Dataset
from tidychart.errors import ArgumentError
from tidychart.scales.base import Scale


def _point_x(p: DataPoint) -> float:
    return p.x


def nearest_point(
    points: Sequence[DataPoint],
    x: float,
    assume_sorted: bool = True,
) -> Optional[tuple[int, DataPoint]]:
    """
    Point whose x is closest to ``x``.

    Ties go to the lower index.

    Returns:
        (index, point), or None when points is empty.

    Raises:
        ArgumentError: If x is NaN.
    """
    if math.isnan(x):
        raise ArgumentError("query x must not be NaN")
    if not points:
        return None

    if not assume_sorted:
        xs = np.asarray([p.x for p in points], dtype=np.float64)
        i = int(np.argmin(np.abs(xs - x)))
        return i, points[i]

    i = bisect_left(points, x, key=_point_x)
    if i == len(points):
        best = i - 1
    elif i == 0:
        best = 0
    else:
        before, after = points[i - 1], points[i]
        best = i - 1 if abs(x - before.x) <= abs(after.x - x) else i
    # first of a run of equal x values
    if best > 0 and points[best - 1].x == points[best].x:
        best = bisect_left(points, points[best].x, hi=best, key=_point_x)
    return best, points[best]


def nearest_at_pixel(
    points: Sequence[DataPoint],
    pixel: float,
    scale: Scale,
    assume_sorted: bool = True,
) -> Optional[tuple[int, DataPoint]]:
    """nearest_point() for a pixel x coordinate, inverted through ``scale``."""
    return nearest_point(points, scale.invert(pixel), assume_sorted)


def nearest_in_dataset(
    dataset: Dataset,
    pixel: float,
    scale: Scale,
    assume_sorted: bool = True,
) -> Optional[tuple[int, int, DataPoint]]:
    """
    Closest point across the visible series of a dataset.

    Returns:
        (series_index, point_index, point), or None when no visible series
        has points. Ties go to the earlier series.
    """
    x = scale.invert(pixel)
    best: Optional[tuple[int, int, DataPoint]] = None
    best_dist = math.inf
    for s_idx, series in enumerate(dataset.series):
        if not series.visible:
            continue
        hit = nearest_point(series.points, x, assume_sorted)
        if hit is None:
            continue
        dist = abs(hit[1].x - x)
        if dist < best_dist:
            best_dist = dist
            best = (s_idx, hit[0], hit[1])
    return best
