"""Domain -> range mappings for chart channels."""

from tidychart.scales.base import Scale
from tidychart.scales.continuous import LinearScale, LogScale, TimeScale, to_epoch_seconds
from tidychart.scales.discrete import BandScale, OrdinalScale

__all__ = [
    "BandScale",
    "LinearScale",
    "LogScale",
    "OrdinalScale",
    "Scale",
    "TimeScale",
    "to_epoch_seconds",
]
