"""Grammar-of-Graphics style encodings.

An Encoding declares which table columns feed which visual channel and how
each column is interpreted (numeric scale vs. grouping).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class FieldKind(Enum):
    """Measurement type of an encoded column."""
    QUANTITATIVE = "quantitative"
    NOMINAL = "nominal"
    ORDINAL = "ordinal"
    TEMPORAL = "temporal"

    @property
    def is_discrete(self) -> bool:
        return self in (FieldKind.NOMINAL, FieldKind.ORDINAL)


@dataclass(frozen=True)
class Field:
    """A table column name plus how to interpret it."""
    name: str
    kind: FieldKind = FieldKind.QUANTITATIVE

    @classmethod
    def quantitative(cls, name: str) -> "Field":
        return cls(name, FieldKind.QUANTITATIVE)

    @classmethod
    def nominal(cls, name: str) -> "Field":
        return cls(name, FieldKind.NOMINAL)

    @classmethod
    def ordinal(cls, name: str) -> "Field":
        return cls(name, FieldKind.ORDINAL)

    @classmethod
    def temporal(cls, name: str) -> "Field":
        return cls(name, FieldKind.TEMPORAL)


@dataclass(frozen=True)
class Encoding:
    """Channel assignment: x and y are required, color optionally splits series."""
    x: Field
    y: Field
    color: Optional[Field] = None

    def with_color(self, color: Optional[Field]) -> "Encoding":
        """Copy with the color channel set (or cleared when ``color`` is None)."""
        return replace(self, color=color)

    def columns(self) -> list[str]:
        """Names of every column this encoding reads, in channel order."""
        cols = [self.x.name, self.y.name]
        if self.color is not None:
            cols.append(self.color.name)
        return cols
