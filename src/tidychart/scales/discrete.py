"""Discrete scales: band (key -> pixel interval) and ordinal (key -> value).

Both raise UnknownKeyError for keys outside their domain; there is no silent
default position or color.
"""

from __future__ import annotations

import math
from typing import Any, Hashable, Iterable, Sequence

from tidychart.errors import ArgumentError, DomainError, UnknownKeyError
from tidychart.scales.base import Scale
from tidychart.scales.continuous import _as_pair


def _index_keys(keys: Iterable[Hashable]) -> tuple[tuple[Hashable, ...], dict[Hashable, int]]:
    ordered = tuple(keys)
    index: dict[Hashable, int] = {}
    for i, key in enumerate(ordered):
        if key in index:
            raise DomainError(f"duplicate key {key!r} in scale domain")
        index[key] = i
    return ordered, index


class BandScale(Scale):
    """Equal-width bands for discrete keys, e.g. bar chart categories.

    The range is split into ``n`` slots of width ``step = (r1 - r0) / n``.
    ``padding`` (fraction of the step, in [0, 1]) is removed symmetrically
    from both sides of each slot, so a band starts ``step * padding / 2``
    into its slot and is ``|step| * (1 - padding)`` wide.

    Args:
        keys: Ordered, unique domain keys.
        range_: (r0, r1) pixel interval; may be reversed.
        padding: Fraction of each slot left empty.

    Raises:
        DomainError: Duplicate keys or a non-numeric range.
        ArgumentError: ``padding`` outside [0, 1].
    """

    def __init__(
        self,
        keys: Iterable[Hashable],
        range_: Sequence[float],
        padding: float = 0.0,
    ) -> None:
        if not 0.0 <= padding <= 1.0:
            raise ArgumentError(f"padding must be in [0, 1], got {padding!r}")
        self._keys, self._index = _index_keys(keys)
        self._range = _as_pair(range_, "range")
        self._padding = float(padding)

    @property
    def keys(self) -> tuple[Hashable, ...]:
        return self._keys

    @property
    def range(self) -> tuple[float, float]:
        return self._range

    @property
    def padding(self) -> float:
        return self._padding

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    @property
    def step(self) -> float:
        """Signed slot width; 0.0 for an empty domain."""
        if not self._keys:
            return 0.0
        r0, r1 = self._range
        return (r1 - r0) / len(self._keys)

    @property
    def bandwidth(self) -> float:
        """Unsigned band width after padding."""
        return abs(self.step) * (1.0 - self._padding)

    def index_of(self, key: Hashable) -> int:
        try:
            return self._index[key]
        except KeyError:
            raise UnknownKeyError(key, f"key {key!r} is not in the band scale domain") from None

    def map_index(self, index: int) -> float:
        """Leading edge of the band at position ``index``."""
        step = self.step
        return self._range[0] + index * step + step * self._padding / 2.0

    def map(self, key: Hashable) -> float:
        """Leading edge of ``key``'s band.

        Raises:
            UnknownKeyError: If ``key`` is not in the domain.
        """
        return self.map_index(self.index_of(key))

    def map_center(self, key: Hashable) -> float:
        """Center of ``key``'s band.

        Raises:
            UnknownKeyError: If ``key`` is not in the domain.
        """
        step = self.step
        return self.map(key) + step * (1.0 - self._padding) / 2.0

    def invert(self, pixel: float) -> Hashable:
        """Key whose slot (band plus its padding) contains ``pixel``.

        Raises:
            UnknownKeyError: If ``pixel`` lies outside the range.
        """
        step = self.step
        if step == 0.0:
            raise UnknownKeyError(pixel, f"pixel {pixel!r} is outside an empty band scale")
        i = math.floor((pixel - self._range[0]) / step)
        n = len(self._keys)
        # the far edge of the range belongs to the last slot
        if i == n and pixel == self._range[1]:
            i = n - 1
        if not 0 <= i < n:
            raise UnknownKeyError(pixel, f"pixel {pixel!r} is outside range {self._range!r}")
        return self._keys[i]

    def __repr__(self) -> str:
        return f"BandScale(keys={list(self._keys)!r}, range={self._range!r}, padding={self._padding!r})"


class OrdinalScale(Scale):
    """Discrete key -> discrete value lookup, e.g. category -> color.

    When the range is shorter than the domain its values are reused
    cyclically, so a fixed palette can color any number of categories.

    Raises:
        DomainError: Duplicate keys or an empty range.
    """

    def __init__(self, keys: Iterable[Hashable], values: Iterable[Any]) -> None:
        self._keys, self._index = _index_keys(keys)
        self._values = tuple(values)
        if not self._values:
            raise DomainError("ordinal scale range must not be empty")

    @property
    def keys(self) -> tuple[Hashable, ...]:
        return self._keys

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def map(self, key: Hashable) -> Any:
        """Value assigned to ``key``.

        Raises:
            UnknownKeyError: If ``key`` is not in the domain.
        """
        try:
            i = self._index[key]
        except KeyError:
            raise UnknownKeyError(key, f"key {key!r} is not in the ordinal scale domain") from None
        return self._values[i % len(self._values)]

    def invert(self, value: Any) -> Hashable:
        """First key mapped to ``value``.

        Raises:
            UnknownKeyError: If no key maps to ``value``.
        """
        for i, key in enumerate(self._keys):
            if self._values[i % len(self._values)] == value:
                return key
        raise UnknownKeyError(value, f"no key maps to {value!r}")

    def __repr__(self) -> str:
        return f"OrdinalScale(keys={list(self._keys)!r}, values={list(self._values)!r})"
