"""Stacked baselines for stacked bar and area charts.

Stacks diverge: positive values grow upward from a positive baseline and
negative values grow downward from a separate negative baseline, so a
negative segment never hides part of a positive one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Sequence

from tidychart.errors import ArgumentError


@dataclass(frozen=True)
class StackedValue:
    """Vertical extent of one stacked segment, from y0 to y1."""
    y0: float
    y1: float

    @property
    def height(self) -> float:
        return self.y1 - self.y0


@dataclass(frozen=True)
class StackedSlot:
    """A stacked entry tagged with the slot (category) it belongs to."""
    slot: Hashable
    value: float
    y0: float
    y1: float


class _Baselines:
    """Running positive and negative tops of one stack."""

    def __init__(self) -> None:
        self.positive = 0.0
        self.negative = 0.0

    def push(self, value: float) -> tuple[float, float]:
        if value >= 0:
            y0 = self.positive
            self.positive += value
            return y0, self.positive
        y0 = self.negative
        self.negative += value
        return y0, self.negative


def stack_series(values: Sequence[Sequence[float]]) -> list[list[StackedValue]]:
    """
    Stack parallel series category by category.

    Args:
        values: One sequence per series, each with one value per category
            (e.g. BarDataset.values_matrix()). Series are stacked in the
            order given.

    Returns:
        Same shape as ``values``: a StackedValue per series per category.

    Raises:
        ArgumentError: If the series differ in length.
    """
    rows = [list(v) for v in values]
    if not rows:
        return []
    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise ArgumentError(f"series {i} has {len(row)} values, expected {width}")

    out: list[list[StackedValue]] = [[] for _ in rows]
    for j in range(width):
        stack = _Baselines()
        for i, row in enumerate(rows):
            out[i].append(StackedValue(*stack.push(float(row[j]))))
    return out


def stack_by_slot(entries: Iterable[tuple[Hashable, float]]) -> list[StackedSlot]:
    """
    Stack ``(slot, value)`` entries onto per-slot baselines.

    Entries are processed in order; each slot keeps its own positive and
    negative baseline. The result has one StackedSlot per entry, in input
    order.

    >>> [(s.slot, s.y0, s.y1) for s in stack_by_slot([("A", 3), ("B", -2), ("A", 1)])]
    [('A', 0.0, 3.0), ('B', 0.0, -2.0), ('A', 3.0, 4.0)]
    """
    stacks: dict[Hashable, _Baselines] = {}
    out = []
    for slot, value in entries:
        stack = stacks.setdefault(slot, _Baselines())
        y0, y1 = stack.push(float(value))
        out.append(StackedSlot(slot, float(value), y0, y1))
    return out
