"""
M4 downsampling (Jugel et al., VLDB 2014) and OHLC bucket aggregation.

M4 splits the x-range into ``target_buckets`` equal-width intervals, one per
pixel column, and keeps up to four points per interval: first, min-y, max-y
and last. Coinciding picks are kept once, in input order. Unlike LTTB the
output size is bounded (``<= 4 * target_buckets``) rather than exact, but
every extremum that decides a pixel column's vertical extent survives, which
matters for candlestick wicks.

aggregate_ohlc() is the bar-level counterpart: it merges runs of OHLC bars
into one bar per bucket (first open, max high, min low, last close).
"""

from __future__ import annotations

import numbers
from typing import Sequence

import numpy as np

from tidychart.data.model import DataPoint, OhlcBar, Series
from tidychart.errors import ArgumentError
from tidychart.utils.logging import get_logger

logger = get_logger(__name__)


def _check_buckets(target_buckets: int) -> None:
    if isinstance(target_buckets, bool) or not isinstance(target_buckets, numbers.Integral):
        raise ArgumentError(f"target_buckets must be an integer, got {target_buckets!r}")
    if target_buckets < 1:
        raise ArgumentError(f"target_buckets must be >= 1, got {target_buckets}")


# -----------------------------------------------------------------------------
# Step 1: assign every point to an x bucket
# -----------------------------------------------------------------------------


def bucket_ids(xs: Sequence[float], target_buckets: int) -> np.ndarray:
    """
    Equal-width x bucket of every point, in [0, target_buckets).

    The extent is taken over finite x only and the maximum x falls into the
    last bucket. When all finite x are equal they share bucket 0. Points
    with NaN or infinite x get -1 (no bucket).
    """
    _check_buckets(target_buckets)
    x = np.asarray(xs, dtype=np.float64)
    ids = np.full(x.size, -1, dtype=np.int64)
    finite = np.isfinite(x)
    if not finite.any():
        return ids
    x_min = float(x[finite].min())
    span = float(x[finite].max()) - x_min
    if span <= 0:
        ids[finite] = 0
        return ids
    scaled = np.floor((x[finite] - x_min) / span * target_buckets).astype(np.int64)
    ids[finite] = np.minimum(scaled, target_buckets - 1)
    return ids


# -----------------------------------------------------------------------------
# Step 2: first / min / max / last per bucket
# -----------------------------------------------------------------------------


def m4_indices(xs: Sequence[float], ys: Sequence[float], target_buckets: int) -> np.ndarray:
    """
    Indices kept by M4.

    Returns
    -------
    np.ndarray
        Indices grouped by bucket (ascending bucket order), ascending within
        each bucket. ``arange(n)`` when ``n <= 4 * target_buckets``.
        Points with non-finite x cannot be placed in a bucket and are dropped.

    Raises
    ------
    ArgumentError
        If target_buckets < 1 or the arrays differ in shape.
    """
    _check_buckets(target_buckets)
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    if x.ndim != 1 or x.shape != y.shape:
        raise ArgumentError(f"xs and ys must be 1-D with equal length, got {x.shape} and {y.shape}")

    n = len(x)
    if n <= 4 * target_buckets:
        return np.arange(n, dtype=np.int64)

    ids = bucket_ids(x, target_buckets)
    placed = np.flatnonzero(ids >= 0)
    if placed.size < n:
        logger.debug("M4 dropped %d points with non-finite x", n - placed.size)
    if placed.size == 0:
        return placed.astype(np.int64)
    # stable sort keeps input order inside each bucket
    order = placed[np.argsort(ids[placed], kind="stable")]
    sorted_ids = ids[order]
    splits = np.flatnonzero(np.diff(sorted_ids)) + 1

    kept: list[int] = []
    for members in np.split(order, splits):
        bucket_y = y[members]
        picks = {
            int(members[0]),
            int(members[int(np.argmin(bucket_y))]),
            int(members[int(np.argmax(bucket_y))]),
            int(members[-1]),
        }
        kept.extend(sorted(picks))
    return np.asarray(kept, dtype=np.int64)


def m4(points: Sequence[DataPoint], target_buckets: int) -> list[DataPoint]:
    """
    Downsample points with M4.

    Empty buckets emit nothing and points with NaN or infinite x are dropped.
    Output length is at most ``4 * target_buckets``.
    When ``len(points) <= 4 * target_buckets`` the input is returned unchanged
    (as a list).

    Raises
    ------
    ArgumentError
        If target_buckets < 1.
    """
    _check_buckets(target_buckets)
    n = len(points)
    if n <= 4 * target_buckets:
        logger.debug("No M4 downsampling needed: %d <= 4 * %d", n, target_buckets)
        return list(points)

    logger.info("M4 downsampling: %d points into %d buckets", n, target_buckets)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return [points[i] for i in m4_indices(xs, ys, target_buckets)]


def m4_series(series: Series[DataPoint], target_buckets: int) -> Series[DataPoint]:
    """M4 over a Series, keeping its label and color."""
    _check_buckets(target_buckets)
    if len(series) <= 4 * target_buckets:
        return series
    return series.with_points(m4(series.points, target_buckets))


# -----------------------------------------------------------------------------
# OHLC aggregation
# -----------------------------------------------------------------------------


def aggregate_ohlc(bars: Sequence[OhlcBar], target_buckets: int) -> list[OhlcBar]:
    """
    Merge consecutive OHLC bars into at most ``target_buckets`` bars.

    Bars are split into equal-count runs. Each run becomes one bar with the
    first timestamp and open, the max high, the min low and the last close,
    so the merged candle still spans every wick of its run.

    Raises
    ------
    ArgumentError
        If target_buckets < 1.
    """
    _check_buckets(target_buckets)
    n = len(bars)
    if n <= target_buckets:
        logger.debug("No OHLC aggregation needed: %d <= %d", n, target_buckets)
        return list(bars)

    logger.info("OHLC aggregation: %d -> %d candles", n, target_buckets)
    highs = np.asarray([b.high for b in bars], dtype=np.float64)
    lows = np.asarray([b.low for b in bars], dtype=np.float64)

    out = []
    for i in range(target_buckets):
        start = (i * n) // target_buckets
        end = ((i + 1) * n) // target_buckets
        if start >= end:
            continue
        first, last = bars[start], bars[end - 1]
        out.append(OhlcBar(
            timestamp=first.timestamp,
            open=first.open,
            high=float(highs[start:end].max()),
            low=float(lows[start:end].min()),
            close=last.close,
        ))
    return out
