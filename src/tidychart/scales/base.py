"""Shared scale contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Scale(ABC):
    """Maps domain values to pixel positions and back.

    Continuous scales (LinearScale, LogScale, TimeScale) take numbers;
    discrete scales (BandScale, OrdinalScale) take keys.
    """

    @abstractmethod
    def map(self, value: Any) -> Any:
        """Domain value -> range value."""

    @abstractmethod
    def invert(self, pixel: Any) -> Any:
        """Range value -> domain value."""

    def __call__(self, value: Any) -> Any:
        return self.map(value)
