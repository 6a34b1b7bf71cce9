"""Tidy data layer: typed cell values, rows, and a row-oriented table.

DataTable is the entry point of the "raw data -> chart" pipeline. Rows are
mappings from column name to FieldValue and need not be homogeneous: a column
missing from a row reads as Null.

Interchange with pandas is provided by DataTable.to_frame() and
DataTable.from_frame() so tables can be inspected or built with the usual
DataFrame tooling.
"""

from __future__ import annotations

import datetime
import numbers
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

import numpy as np
import pandas as pd

from tidychart.config import EngineDefaults
from tidychart.errors import ArgumentError


class ValueKind(Enum):
    """Tag of a FieldValue."""
    NUMERIC = "numeric"
    TEXT = "text"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True, eq=True)
class FieldValue:
    """A single immutable table cell: Numeric, Text, Bool or Null.

    Equality and ordering dispatch on the tag first. Values with different
    tags are never equal, and ordering them raises TypeError.

    Use the explicit constructors (numeric, text, boolean, null) or
    from_python() to build values.
    """
    kind: ValueKind
    value: Any = None

    @classmethod
    def numeric(cls, value: float) -> "FieldValue":
        return cls(ValueKind.NUMERIC, float(value))

    @classmethod
    def text(cls, value: str) -> "FieldValue":
        return cls(ValueKind.TEXT, str(value))

    @classmethod
    def boolean(cls, value: bool) -> "FieldValue":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def null(cls) -> "FieldValue":
        return cls(ValueKind.NULL, None)

    @classmethod
    def from_python(cls, value: Any) -> "FieldValue":
        """Convert a plain Python / numpy / pandas scalar to a FieldValue.

        None -> Null, bool -> Bool, real numbers -> Numeric, str -> Text,
        datetimes -> Numeric epoch seconds. FieldValue instances pass through.

        Raises:
            ArgumentError: For any other type.
        """
        if isinstance(value, FieldValue):
            return value
        if value is None:
            return cls.null()
        if isinstance(value, (bool, np.bool_)):
            return cls.boolean(bool(value))
        if isinstance(value, (datetime.datetime, np.datetime64)):
            return cls.numeric(pd.Timestamp(value).timestamp())
        if isinstance(value, numbers.Real):
            return cls.numeric(float(value))
        if isinstance(value, str):
            return cls.text(value)
        raise ArgumentError(f"cannot convert {type(value).__name__} to a FieldValue")

    # -- predicates / accessors ---------------------------------------------

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def as_float(self) -> Optional[float]:
        """The numeric value, or None for any non-Numeric tag."""
        if self.kind is ValueKind.NUMERIC:
            return self.value
        return None

    def as_text(self) -> Optional[str]:
        """The string value, or None for any non-Text tag."""
        if self.kind is ValueKind.TEXT:
            return self.value
        return None

    def to_python(self) -> Any:
        """Inverse of from_python for the four tags (Null -> None)."""
        return self.value

    def group_key(self) -> str:
        """String form used when this value labels a group or a category."""
        if self.kind is ValueKind.TEXT:
            return self.value
        if self.kind is ValueKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is ValueKind.NUMERIC:
            v = self.value
            if v == v and v not in (float("inf"), float("-inf")) and v.is_integer():
                return str(int(v))
            return repr(v)
        return EngineDefaults.NULL_GROUP_LABEL

    # -- ordering within a tag ----------------------------------------------

    def _same_kind(self, other: Any) -> bool:
        if not isinstance(other, FieldValue):
            return False
        if other.kind is not self.kind:
            raise TypeError(
                f"cannot order FieldValue {self.kind.value} against {other.kind.value}"
            )
        return True

    def __lt__(self, other: Any) -> bool:
        if not self._same_kind(other):
            return NotImplemented
        if self.kind is ValueKind.NULL:
            return False
        return self.value < other.value

    def __le__(self, other: Any) -> bool:
        if not self._same_kind(other):
            return NotImplemented
        if self.kind is ValueKind.NULL:
            return True
        return self.value <= other.value

    def __gt__(self, other: Any) -> bool:
        if not self._same_kind(other):
            return NotImplemented
        if self.kind is ValueKind.NULL:
            return False
        return self.value > other.value

    def __ge__(self, other: Any) -> bool:
        if not self._same_kind(other):
            return NotImplemented
        if self.kind is ValueKind.NULL:
            return True
        return self.value >= other.value


NULL = FieldValue.null()

# A row maps unique column names to cell values. Rows stored in a DataTable
# are read-only views.
DataRow = Mapping[str, FieldValue]


class DataTable:
    """An immutable, row-oriented tidy table.

    The column set is derived from the rows (union across rows, in
    first-seen order) and cached on first access.

    Attributes:
        rows: Tuple of read-only row mappings.
    """

    def __init__(self, rows: Iterable[Mapping[str, FieldValue]] = ()) -> None:
        frozen = []
        for i, row in enumerate(rows):
            for col, val in row.items():
                if not isinstance(val, FieldValue):
                    raise ArgumentError(
                        f"row {i} column {col!r}: expected FieldValue, got {type(val).__name__}"
                    )
            frozen.append(MappingProxyType(dict(row)))
        self._rows: tuple[DataRow, ...] = tuple(frozen)
        self._columns: Optional[tuple[str, ...]] = None

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "DataTable":
        """Build a table from dicts of plain Python values (see FieldValue.from_python)."""
        return cls(
            {str(k): FieldValue.from_python(v) for k, v in rec.items()}
            for rec in records
        )

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "DataTable":
        """Build a table from a pandas DataFrame.

        Missing cells (None, NaN, NaT, pd.NA) become Null; numpy scalars are
        converted as in FieldValue.from_python.
        """
        columns = [str(c) for c in df.columns]
        rows = []
        for values in df.itertuples(index=False, name=None):
            row = {}
            for col, val in zip(columns, values):
                if val is None or (pd.api.types.is_scalar(val) and pd.isna(val)):
                    row[col] = NULL
                else:
                    row[col] = FieldValue.from_python(val)
            rows.append(row)
        return cls(rows)

    # -- basic container protocol -------------------------------------------

    @property
    def rows(self) -> tuple[DataRow, ...]:
        return self._rows

    @property
    def columns(self) -> tuple[str, ...]:
        """Union of column names across rows, in first-seen order."""
        if self._columns is None:
            seen: dict[str, None] = {}
            for row in self._rows:
                for col in row:
                    seen.setdefault(col, None)
            self._columns = tuple(seen)
        return self._columns

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[DataRow]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataTable):
            return NotImplemented
        return [dict(r) for r in self._rows] == [dict(r) for r in other._rows]

    def __repr__(self) -> str:
        return f"DataTable(rows={len(self._rows)}, columns={list(self.columns)!r})"

    def is_empty(self) -> bool:
        return not self._rows

    def value(self, row_index: int, column: str) -> FieldValue:
        """Cell at (row_index, column); a column missing from the row reads as Null."""
        return self._rows[row_index].get(column, NULL)

    def appended(self, row: Mapping[str, FieldValue]) -> "DataTable":
        """Return a new table with ``row`` added at the end."""
        return DataTable(self._rows + (row,))

    # -- column extraction ----------------------------------------------------

    def extract_numeric(self, column: str) -> list[float]:
        """All Numeric values of ``column``, skipping rows with any other tag."""
        out = []
        for row in self._rows:
            v = row.get(column, NULL).as_float()
            if v is not None:
                out.append(v)
        return out

    def extract_text(self, column: str) -> list[str]:
        """All Text values of ``column``, skipping rows with any other tag."""
        out = []
        for row in self._rows:
            v = row.get(column, NULL).as_text()
            if v is not None:
                out.append(v)
        return out

    def group_by(self, column: str) -> list[tuple[str, "DataTable"]]:
        """Split rows by the string form of ``column``.

        Returns:
            (group_key, sub_table) pairs in first-seen order. Row order within
            each group is preserved.
        """
        groups: dict[str, list[DataRow]] = {}
        for row in self._rows:
            key = row.get(column, NULL).group_key()
            groups.setdefault(key, []).append(row)
        return [(key, DataTable(rows)) for key, rows in groups.items()]

    # -- pandas interchange -----------------------------------------------------

    def to_frame(self) -> pd.DataFrame:
        """Convert to a pandas DataFrame, columns in first-seen order.

        Null cells become missing values: None in object columns, NaN where
        pandas infers a numeric or string dtype. Check them with pd.isna().
        """
        columns = list(self.columns)
        records = [
            [row.get(col, NULL).to_python() for col in columns]
            for row in self._rows
        ]
        return pd.DataFrame.from_records(records, columns=columns)
