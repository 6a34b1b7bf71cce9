"""Render-ready data structures.

All types here are frozen dataclasses. Transformations (projection,
downsampling, stacking) build new instances instead of mutating, so a caller
can keep the pre-transform value around for comparison or undo.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DataPoint:
    """A single (x, y) observation."""
    x: float
    y: float


@dataclass(frozen=True)
class Series(Generic[T]):
    """An ordered run of points sharing a label and color.

    Point order is significant. Time-series algorithms (LTTB, M4, nearest
    lookup) assume ascending x and do not validate it.
    """
    label: str
    points: tuple[T, ...] = ()
    color: Optional[str] = None
    visible: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def with_points(self, points: Iterable[T]) -> "Series[T]":
        """Copy of this series with ``points`` replaced (label/color kept)."""
        return replace(self, points=tuple(points))


@dataclass(frozen=True)
class Dataset:
    """Zero or more point series sharing the same axes."""
    series: tuple[Series[DataPoint], ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.series, tuple):
            object.__setattr__(self, "series", tuple(self.series))

    @classmethod
    def from_series(cls, series: Series[DataPoint]) -> "Dataset":
        return cls((series,))

    def add_series(self, series: Series[DataPoint]) -> "Dataset":
        """Return a new Dataset with ``series`` appended."""
        return Dataset(self.series + (series,))

    def labels(self) -> list[str]:
        return [s.label for s in self.series]

    def is_empty(self) -> bool:
        """True when there are no series or every series has no points."""
        return all(len(s) == 0 for s in self.series)


@dataclass(frozen=True)
class OhlcBar:
    """Open/high/low/close record for candlestick charts.

    ``timestamp`` is an x position: an epoch value or a sequential index.
    """
    timestamp: float
    open: float
    high: float
    low: float
    close: float

    @property
    def is_bullish(self) -> bool:
        """True when close >= open."""
        return self.close >= self.open


class WaterfallKind(Enum):
    """How a waterfall bar relates to the running total."""
    START = "start"    # sets the running total, drawn from zero
    DELTA = "delta"    # increments the running total
    TOTAL = "total"    # shows the running total, drawn from zero


@dataclass(frozen=True)
class WaterfallBar:
    """One step of a waterfall (running total) chart.

    ``delta`` is the absolute opening value for START bars, the increment for
    DELTA bars, and is ignored for TOTAL bars.
    """
    label: str
    delta: float
    kind: WaterfallKind = WaterfallKind.DELTA

    @classmethod
    def start(cls, label: str, value: float) -> "WaterfallBar":
        return cls(label, value, WaterfallKind.START)

    @classmethod
    def delta_bar(cls, label: str, delta: float) -> "WaterfallBar":
        return cls(label, delta, WaterfallKind.DELTA)

    @classmethod
    def total(cls, label: str) -> "WaterfallBar":
        return cls(label, 0.0, WaterfallKind.TOTAL)


@dataclass(frozen=True)
class BarSeries:
    """A named series of bar heights, one per category."""
    label: str
    values: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class BarDataset:
    """Category-based data for grouped or stacked bar charts.

    Every series holds exactly one value per entry in ``categories``.
    """
    categories: tuple[str, ...] = ()
    series: tuple[BarSeries, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.categories, tuple):
            object.__setattr__(self, "categories", tuple(self.categories))
        if not isinstance(self.series, tuple):
            object.__setattr__(self, "series", tuple(self.series))

    def add_series(self, label: str, values: Iterable[float]) -> "BarDataset":
        """Return a new BarDataset with a series appended."""
        return BarDataset(self.categories, self.series + (BarSeries(label, tuple(values)),))

    def values_matrix(self) -> list[list[float]]:
        """Per-series value lists, in series order (input shape for stack_series)."""
        return [list(s.values) for s in self.series]
