"""Continuous scales: linear, logarithmic and time.

LinearScale maps ``v`` to ``r0 + (v - d0) / (d1 - d0) * (r1 - r0)``. A
degenerate domain (d0 == d1) maps every value to ``r0`` instead of dividing
by zero. Pixel ranges may be reversed (e.g. ``(height, 0)`` for a y axis).
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd

from tidychart.errors import ArgumentError, DomainError
from tidychart.scales.base import Scale


def _as_pair(pair: Sequence[Any], what: str) -> tuple[float, float]:
    try:
        a, b = pair
        a, b = float(a), float(b)
    except (TypeError, ValueError) as e:
        raise DomainError(f"{what} must be a pair of numbers, got {pair!r}") from e
    if not (math.isfinite(a) and math.isfinite(b)):
        raise DomainError(f"{what} bounds must be finite, got {(a, b)!r}")
    return a, b


class LinearScale(Scale):
    """Linear domain -> range mapping.

    Args:
        domain: (d0, d1) data interval.
        range_: (r0, r1) pixel interval.

    Raises:
        DomainError: If either interval is not a pair of finite numbers.
    """

    def __init__(self, domain: Sequence[float], range_: Sequence[float]) -> None:
        self._domain = _as_pair(domain, "domain")
        self._range = _as_pair(range_, "range")

    @classmethod
    def from_values(cls, values: Iterable[float], range_: Sequence[float]) -> "LinearScale":
        """Fit the domain to the [min, max] extent of ``values``.

        Raises:
            ArgumentError: If ``values`` is empty.
        """
        arr = np.asarray(list(values), dtype=float)
        if arr.size == 0:
            raise ArgumentError("cannot fit a scale to an empty sequence")
        return cls((float(np.min(arr)), float(np.max(arr))), range_)

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    @property
    def range(self) -> tuple[float, float]:
        return self._range

    @property
    def is_degenerate(self) -> bool:
        """True when the domain has zero width."""
        return self._domain[0] == self._domain[1]

    def map(self, value: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        if d0 == d1:
            return r0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        """Exact algebraic inverse of map().

        A degenerate domain inverts every pixel to ``d0``.

        Raises:
            DomainError: If the range has zero width (every value maps to
                the same pixel, so no inverse exists).
        """
        d0, d1 = self._domain
        r0, r1 = self._range
        if d0 == d1:
            return d0
        if r0 == r1:
            raise DomainError("cannot invert a scale with a zero-width range")
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)

    def map_many(self, values: Iterable[float]) -> np.ndarray:
        """Vectorized map() over an array of values."""
        arr = np.asarray(list(values) if not isinstance(values, np.ndarray) else values, dtype=float)
        d0, d1 = self._domain
        r0, r1 = self._range
        if d0 == d1:
            return np.full(arr.shape, r0)
        return r0 + (arr - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = 5) -> list[float]:
        """``count + 1`` evenly spaced domain values from d0 to d1 inclusive."""
        if count < 1:
            raise ArgumentError(f"tick count must be >= 1, got {count}")
        d0, d1 = self._domain
        return np.linspace(d0, d1, count + 1).tolist()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._domain == other._domain and self._range == other._range

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self._domain!r}, range={self._range!r})"


class LogScale(Scale):
    """Logarithmic scale for data spanning several orders of magnitude.

    Raises:
        DomainError: If a domain bound is <= 0, or base is <= 0 or == 1.
    """

    def __init__(
        self,
        domain: Sequence[float],
        range_: Sequence[float],
        base: float = 10.0,
    ) -> None:
        self._domain = _as_pair(domain, "domain")
        self._range = _as_pair(range_, "range")
        if self._domain[0] <= 0 or self._domain[1] <= 0:
            raise DomainError(f"log scale domain must be > 0, got {self._domain!r}")
        if base <= 0 or base == 1:
            raise DomainError(f"log base must be > 0 and != 1, got {base!r}")
        self._base = float(base)

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    @property
    def range(self) -> tuple[float, float]:
        return self._range

    @property
    def base(self) -> float:
        return self._base

    def _log(self, v: float) -> float:
        return math.log(v, self._base)

    def map(self, value: float) -> float:
        """Map a positive value.

        Raises:
            DomainError: If ``value`` <= 0.
        """
        if value <= 0:
            raise DomainError(f"log scale cannot map non-positive value {value!r}")
        d0, d1 = self._domain
        r0, r1 = self._range
        if d0 == d1:
            return r0
        t = (self._log(value) - self._log(d0)) / (self._log(d1) - self._log(d0))
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        if d0 == d1:
            return d0
        if r0 == r1:
            raise DomainError("cannot invert a scale with a zero-width range")
        t = (pixel - r0) / (r1 - r0)
        return self._base ** (self._log(d0) + t * (self._log(d1) - self._log(d0)))

    def __repr__(self) -> str:
        return f"LogScale(domain={self._domain!r}, range={self._range!r}, base={self._base!r})"


def to_epoch_seconds(value: Any) -> float:
    """Epoch seconds of a number or anything pandas.Timestamp accepts.

    Raises:
        DomainError: If the value cannot be interpreted as a point in time.
    """
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return float(value)
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise DomainError(f"not a timestamp: {value!r}") from e
    if ts is pd.NaT:
        raise DomainError(f"not a timestamp: {value!r}")
    return ts.timestamp()


class TimeScale(LinearScale):
    """Linear scale over time, in epoch seconds.

    The domain and mapped values may be numbers (epoch seconds) or anything
    pandas.Timestamp understands: datetimes, numpy datetime64, ISO strings.
    Naive datetimes are taken as UTC.
    """

    def __init__(self, domain: Sequence[Any], range_: Sequence[float]) -> None:
        try:
            d0, d1 = domain
        except (TypeError, ValueError) as e:
            raise DomainError(f"domain must be a pair, got {domain!r}") from e
        super().__init__((to_epoch_seconds(d0), to_epoch_seconds(d1)), range_)

    def map(self, value: Any) -> float:
        return super().map(to_epoch_seconds(value))

    def invert_datetime(self, pixel: float) -> pd.Timestamp:
        """invert() as a UTC pandas Timestamp."""
        return pd.Timestamp(self.invert(pixel), unit="s", tz="UTC")
