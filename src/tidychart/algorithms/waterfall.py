"""Running-total geometry for waterfall charts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tidychart.data.model import WaterfallBar, WaterfallKind


@dataclass(frozen=True)
class WaterfallSegment:
    """Vertical span of one waterfall bar.

    ``baseline`` is where the bar starts and ``top`` where it ends; for a
    decreasing DELTA bar top is below baseline. ``running_total`` is the
    total after this bar.
    """
    label: str
    kind: WaterfallKind
    baseline: float
    top: float
    running_total: float

    @property
    def low(self) -> float:
        return min(self.baseline, self.top)

    @property
    def high(self) -> float:
        return max(self.baseline, self.top)

    @property
    def is_increase(self) -> bool:
        return self.top >= self.baseline


def waterfall_segments(bars: Iterable[WaterfallBar]) -> list[WaterfallSegment]:
    """
    Segments for bars, in order.

    START sets the running total and is drawn from zero. DELTA moves the
    running total and spans old to new total. TOTAL is drawn from zero to
    the current running total.
    """
    running = 0.0
    out = []
    for bar in bars:
        if bar.kind is WaterfallKind.START:
            running = float(bar.delta)
            out.append(WaterfallSegment(bar.label, bar.kind, 0.0, running, running))
        elif bar.kind is WaterfallKind.TOTAL:
            out.append(WaterfallSegment(bar.label, bar.kind, 0.0, running, running))
        else:
            base = running
            running += float(bar.delta)
            out.append(WaterfallSegment(bar.label, bar.kind, base, running, running))
    return out
