"""
Descriptive statistics for box plots, violins, histograms and trend lines.

All functions take any iterable of floats (lists, tuples, numpy arrays).
Empty input is an ArgumentError rather than a NaN result: a chart cannot draw
a box plot of nothing, and a silent NaN tends to surface much later as an
invisible mark.

Percentiles use linear interpolation between order statistics
(``h = p/100 * (n - 1)``), which is numpy's default ``method="linear"``.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Union

import numpy as np

from tidychart.config import EngineDefaults
from tidychart.data.model import DataPoint
from tidychart.errors import ArgumentError
from tidychart.utils.logging import get_logger

logger = get_logger(__name__)


def _as_array(values: Iterable[float], what: str = "values") -> np.ndarray:
    if isinstance(values, np.ndarray):
        arr = values.astype(np.float64, copy=False).ravel()
    else:
        arr = np.asarray(list(values), dtype=np.float64)
    if arr.size == 0:
        raise ArgumentError(f"{what} must not be empty")
    return arr


# -----------------------------------------------------------------------------
# Central tendency and spread
# -----------------------------------------------------------------------------


def mean(values: Iterable[float]) -> float:
    return float(np.mean(_as_array(values)))


def median(values: Iterable[float]) -> float:
    return float(np.median(_as_array(values)))


def percentile(values: Iterable[float], p: float) -> float:
    """
    p-th percentile (p in [0, 100]) with linear interpolation.

    >>> percentile([1, 2, 3, 4], 50)
    2.5

    Raises:
        ArgumentError: If values is empty or p is outside [0, 100].
    """
    if not 0.0 <= p <= 100.0:
        raise ArgumentError(f"percentile must be in [0, 100], got {p!r}")
    return float(np.percentile(_as_array(values), p))


def extent(values: Iterable[float]) -> tuple[float, float]:
    """(min, max) of values."""
    arr = _as_array(values)
    return float(np.min(arr)), float(np.max(arr))


def std_dev(values: Iterable[float]) -> float:
    """Sample standard deviation (ddof=1).

    Raises:
        ArgumentError: With fewer than two values.
    """
    arr = _as_array(values)
    if arr.size < 2:
        raise ArgumentError("standard deviation needs at least 2 values")
    return float(np.std(arr, ddof=1))


def total(values: Iterable[float]) -> float:
    """Sum of values; 0.0 for an empty sequence."""
    return float(np.sum(np.asarray(list(values), dtype=np.float64)))


# -----------------------------------------------------------------------------
# Box plot
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class BoxPlotStats:
    """Five-number summary with Tukey whiskers.

    Whiskers are the most extreme data values still within
    ``whisker_factor * IQR`` of Q1 / Q3. Values beyond either fence are
    outliers, listed in input order.
    """
    min: float
    q1: float
    median: float
    q3: float
    max: float
    iqr: float
    lower_whisker: float
    upper_whisker: float
    mean: float
    outliers: tuple[float, ...] = ()

    @property
    def count_outliers(self) -> int:
        return len(self.outliers)


def box_plot_stats(
    values: Iterable[float],
    whisker_factor: float = EngineDefaults.WHISKER_FACTOR,
) -> BoxPlotStats:
    """
    Box plot summary of values.

    Raises:
        ArgumentError: If values is empty or whisker_factor is negative.
    """
    if whisker_factor < 0:
        raise ArgumentError(f"whisker_factor must be >= 0, got {whisker_factor!r}")
    arr = _as_array(values)
    q1, q2, q3 = (float(q) for q in np.percentile(arr, [25.0, 50.0, 75.0]))
    iqr = q3 - q1
    lower_fence = q1 - whisker_factor * iqr
    upper_fence = q3 + whisker_factor * iqr

    inside = arr[(arr >= lower_fence) & (arr <= upper_fence)]
    if inside.size:
        lower_whisker = float(inside.min())
        upper_whisker = float(inside.max())
    else:
        # only possible with a tiny whisker_factor on sparse data
        lower_whisker, upper_whisker = q1, q3
    outliers = tuple(float(v) for v in arr if v < lower_fence or v > upper_fence)

    return BoxPlotStats(
        min=float(arr.min()),
        q1=q1,
        median=q2,
        q3=q3,
        max=float(arr.max()),
        iqr=iqr,
        lower_whisker=lower_whisker,
        upper_whisker=upper_whisker,
        mean=float(arr.mean()),
        outliers=outliers,
    )


# -----------------------------------------------------------------------------
# Histogram
# -----------------------------------------------------------------------------


class BinRule(Enum):
    """Automatic bin count rules."""
    STURGES = "sturges"
    SCOTT = "scott"
    FREEDMAN_DIACONIS = "freedman_diaconis"


@dataclass(frozen=True)
class Bin:
    """Histogram bin ``[x0, x1)``; the last bin of a histogram is closed."""
    x0: float
    x1: float
    count: int

    @property
    def width(self) -> float:
        return self.x1 - self.x0


def _sturges(n: int) -> int:
    return int(math.ceil(math.log2(n))) + 1 if n > 1 else 1


def _count_from_width(span: float, width: float, n: int) -> int:
    if not width > 0 or not math.isfinite(width):
        return _sturges(n)
    return max(1, int(math.ceil(span / width)))


def bin_count(values: Iterable[float], rule: Union[BinRule, int] = BinRule.STURGES) -> int:
    """
    Number of bins the rule picks for values.

    Scott uses ``h = 3.49 * sd * n^(-1/3)``; Freedman-Diaconis uses
    ``h = 2 * IQR * n^(-1/3)``. Both fall back to Sturges when the width
    they compute is zero (e.g. IQR of 0).

    Raises:
        ArgumentError: Empty values or a fixed count < 1.
    """
    arr = _as_array(values)
    n = arr.size
    if isinstance(rule, numbers.Integral) and not isinstance(rule, bool):
        if rule < 1:
            raise ArgumentError(f"bin count must be >= 1, got {rule}")
        return int(rule)
    if not isinstance(rule, BinRule):
        raise ArgumentError(f"rule must be a BinRule or an int, got {rule!r}")

    span = float(arr.max() - arr.min())
    if rule is BinRule.STURGES:
        return _sturges(n)
    if rule is BinRule.SCOTT:
        sd = float(np.std(arr, ddof=1)) if n > 1 else 0.0
        return _count_from_width(span, 3.49 * sd * n ** (-1.0 / 3.0), n)
    q1, q3 = np.percentile(arr, [25.0, 75.0])
    return _count_from_width(span, 2.0 * float(q3 - q1) * n ** (-1.0 / 3.0), n)


def histogram(values: Iterable[float], rule: Union[BinRule, int] = BinRule.STURGES) -> list[Bin]:
    """
    Equal-width histogram from min to max.

    When every value is equal there is a single bin ``[v, v + 1)`` holding
    all of them.

    Raises:
        ArgumentError: Empty values or a fixed count < 1.
    """
    arr = _as_array(values)
    lo, hi = float(arr.min()), float(arr.max())
    if lo == hi:
        return [Bin(lo, lo + 1.0, int(arr.size))]

    k = bin_count(arr, rule)
    counts, edges = np.histogram(arr, bins=np.linspace(lo, hi, k + 1))
    return [Bin(float(edges[i]), float(edges[i + 1]), int(c)) for i, c in enumerate(counts)]


# -----------------------------------------------------------------------------
# Kernel density estimate
# -----------------------------------------------------------------------------


def silverman_bandwidth(samples: Iterable[float]) -> float:
    """
    Silverman's rule of thumb, ``1.06 * sd * n^(-1/5)``.

    Raises:
        ArgumentError: Fewer than 2 samples, or all samples equal.
    """
    arr = _as_array(samples, "samples")
    if arr.size < 2:
        raise ArgumentError("bandwidth estimation needs at least 2 samples")
    sd = float(np.std(arr, ddof=1))
    if sd <= 0:
        raise ArgumentError("bandwidth estimation needs samples with non-zero spread")
    return 1.06 * sd * arr.size ** -0.2


def kde(
    samples: Iterable[float],
    bandwidth: Optional[float] = None,
    grid: Optional[Sequence[float]] = None,
    points: int = EngineDefaults.KDE_POINTS,
) -> Iterator[tuple[float, float]]:
    """
    Gaussian kernel density estimate.

    ``density(x) = 1 / (n * h) * sum(K((x - xi) / h))`` with the standard
    normal kernel K.

    Arguments are validated immediately; the returned iterator computes one
    ``(x, density)`` pair per grid value as it is consumed.

    Args:
        samples: Observations.
        bandwidth: Kernel width h. None picks silverman_bandwidth(samples).
        grid: Evaluation points. None uses ``points`` evenly spaced values
            over ``[min - 3h, max + 3h]``.
        points: Grid size when grid is None.

    Raises:
        ArgumentError: Empty samples, bandwidth <= 0, or points < 1.
    """
    arr = _as_array(samples, "samples")
    if bandwidth is None:
        h = silverman_bandwidth(arr)
    else:
        h = float(bandwidth)
        if not h > 0 or not math.isfinite(h):
            raise ArgumentError(f"bandwidth must be a positive number, got {bandwidth!r}")

    if grid is None:
        if points < 1:
            raise ArgumentError(f"points must be >= 1, got {points}")
        xs = np.linspace(arr.min() - 3 * h, arr.max() + 3 * h, points)
    else:
        xs = np.asarray(list(grid), dtype=np.float64)

    logger.debug("KDE over %d samples, h=%g, %d grid points", arr.size, h, xs.size)
    return _kde_iter(arr, h, xs)


def _kde_iter(arr: np.ndarray, h: float, xs: np.ndarray) -> Iterator[tuple[float, float]]:
    norm = 1.0 / (h * math.sqrt(2.0 * math.pi) * arr.size)
    for x in xs:
        z = (x - arr) / h
        yield float(x), float(norm * np.exp(-0.5 * z * z).sum())


# -----------------------------------------------------------------------------
# Smoothing and trend
# -----------------------------------------------------------------------------


def sma(values: Iterable[float], window: int) -> list[float]:
    """Simple moving average over full windows.

    Returns ``len(values) - window + 1`` values, or [] when window exceeds
    the input length.
    """
    if window < 1:
        raise ArgumentError(f"window must be >= 1, got {window}")
    arr = np.asarray(list(values), dtype=np.float64)
    if window > arr.size:
        return []
    return np.convolve(arr, np.full(window, 1.0 / window), mode="valid").tolist()


def ema(values: Iterable[float], alpha: float) -> list[float]:
    """Exponential moving average, seeded with the first value.

    ``out[i] = alpha * x[i] + (1 - alpha) * out[i - 1]``
    """
    if not 0.0 <= alpha <= 1.0:
        raise ArgumentError(f"alpha must be in [0, 1], got {alpha!r}")
    out: list[float] = []
    prev = 0.0
    for i, x in enumerate(values):
        prev = float(x) if i == 0 else alpha * float(x) + (1.0 - alpha) * prev
        out.append(prev)
    return out


def linear_regression(points: Sequence[DataPoint]) -> tuple[float, float]:
    """Least-squares fit ``y = intercept + slope * x``.

    Returns:
        (intercept, slope)

    Raises:
        ArgumentError: Fewer than 2 points or all x equal.
    """
    if len(points) < 2:
        raise ArgumentError("linear regression needs at least 2 points")
    x = np.asarray([p.x for p in points], dtype=np.float64)
    y = np.asarray([p.y for p in points], dtype=np.float64)
    dx = x - x.mean()
    sxx = float(np.dot(dx, dx))
    if sxx == 0:
        raise ArgumentError("linear regression needs at least 2 distinct x values")
    slope = float(np.dot(dx, y - y.mean())) / sxx
    intercept = float(y.mean()) - slope * float(x.mean())
    return intercept, slope
