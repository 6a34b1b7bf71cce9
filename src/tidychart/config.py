"""Engine defaults and the serializable downsampling configuration.

DownsampleConfig follows the same to_dict()/from_dict() convention used for
other persisted chart state, so a renderer can store it next to its own
settings as plain JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from tidychart.errors import ArgumentError


class EngineDefaults:
    """Default constants shared across modules."""
    LTTB_THRESHOLD = 1000
    M4_BUCKETS = 500
    KDE_POINTS = 100
    WHISKER_FACTOR = 1.5
    NULL_GROUP_LABEL = "(null)"


class DownsampleMethod(Enum):
    """Enumeration of available point reduction methods."""
    NONE = "none"
    LTTB = "lttb"
    M4 = "m4"


@dataclass(frozen=True)
class DownsampleConfig:
    """How a dataset should be reduced before rendering.

    ``threshold`` is the LTTB output size, or the M4 bucket count (typically
    the plot width in pixels). It is ignored for ``DownsampleMethod.NONE``.
    """
    method: DownsampleMethod = DownsampleMethod.LTTB
    threshold: int = EngineDefaults.LTTB_THRESHOLD

    @classmethod
    def lttb(cls, threshold: int = EngineDefaults.LTTB_THRESHOLD) -> "DownsampleConfig":
        return cls(DownsampleMethod.LTTB, threshold)

    @classmethod
    def m4(cls, buckets: int = EngineDefaults.M4_BUCKETS) -> "DownsampleConfig":
        return cls(DownsampleMethod.M4, buckets)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary (enum stored by value)."""
        return {
            "method": self.method.value,
            "threshold": self.threshold,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DownsampleConfig":
        """Deserialize from a dictionary produced by to_dict().

        Raises:
            ArgumentError: If ``method`` is not a known DownsampleMethod value.
        """
        method_val = data.get("method", DownsampleMethod.LTTB.value)
        try:
            method = DownsampleMethod(method_val)
        except ValueError as e:
            raise ArgumentError(f"unknown downsample method {method_val!r}") from e
        return cls(
            method=method,
            threshold=int(data.get("threshold", EngineDefaults.LTTB_THRESHOLD)),
        )
