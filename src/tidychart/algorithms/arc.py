"""Angle partition for pie and donut charts.

Angles are in radians in screen coordinates (y grows downward). The default
start angle ``-pi/2`` is twelve o'clock and angles increase clockwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from tidychart.errors import ArgumentError

TAU = 2.0 * math.pi


@dataclass(frozen=True)
class ArcSlice:
    """One pie slice.

    ``inner_radius`` is a fraction of the outer radius: 0 for a pie, in
    (0, 1) for a donut.
    """
    index: int
    value: float
    start_angle: float
    end_angle: float
    fraction: float
    inner_radius: float = 0.0

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2.0

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    def centroid(self, cx: float, cy: float, radius: float) -> tuple[float, float]:
        """Label anchor: the mid angle, halfway between inner and outer radius."""
        r = (self.inner_radius * radius + radius) / 2.0
        angle = self.mid_angle
        return cx + r * math.cos(angle), cy + r * math.sin(angle)


def partition_arcs(
    values: Iterable[float],
    inner_radius: float = 0.0,
    start_angle: float = -math.pi / 2.0,
) -> list[ArcSlice]:
    """
    Split a full turn proportionally to values, in input order.

    Zero values give zero-width slices so indices stay aligned with the
    input. The last slice ends exactly one full turn after ``start_angle``.

    Raises:
        ArgumentError: A negative or non-finite value, a total of zero
            (including empty input), or inner_radius outside [0, 1).
    """
    if not 0.0 <= inner_radius < 1.0:
        raise ArgumentError(f"inner_radius must be in [0, 1), got {inner_radius!r}")
    vals = [float(v) for v in values]
    for i, v in enumerate(vals):
        if not math.isfinite(v) or v < 0:
            raise ArgumentError(f"arc value {i} must be a finite number >= 0, got {v!r}")
    peak = max(vals, default=0.0)
    if peak == 0:
        raise ArgumentError("cannot partition arcs with a total of zero")
    # shares are computed on values scaled to [0, 1] so the sum cannot overflow
    shares = [v / peak for v in vals]
    grand_total = math.fsum(shares)

    slices = []
    running = 0.0
    angle = start_angle
    for i, (v, share) in enumerate(zip(vals, shares)):
        running += share
        end = start_angle + TAU * (running / grand_total)
        if i == len(vals) - 1:
            end = start_angle + TAU
        slices.append(ArcSlice(i, v, angle, end, share / grand_total, inner_radius))
        angle = end
    return slices
