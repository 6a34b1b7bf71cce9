"""Minimal CSV parser: text -> DataTable.

Rules:
  - Empty lines and lines starting with the comment prefix are skipped,
    including before the header.
  - The first remaining line is the header; its cells are the column names.
  - Every following line must have exactly as many cells as the header.
    A mismatch raises ParseError carrying the 1-based source line number.
  - Per cell: float parse -> Numeric; boolean literal -> Bool; empty -> Null;
    anything else -> Text. Cells are stripped of surrounding whitespace.

Limitation: there is no quoting or escaping, so a value cannot contain the
delimiter.
"""

from __future__ import annotations

from dataclasses import dataclass

from tidychart.data.field_value import DataTable, FieldValue
from tidychart.errors import ParseError
from tidychart.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CsvOptions:
    """Parsing options.

    Attributes:
        delimiter: Cell separator.
        comment_prefix: Lines starting with this (after stripping) are skipped.
        true_literals: Case-insensitive spellings parsed as Bool(True).
        false_literals: Case-insensitive spellings parsed as Bool(False).
    """
    delimiter: str = ","
    comment_prefix: str = "#"
    true_literals: tuple[str, ...] = ("true",)
    false_literals: tuple[str, ...] = ("false",)


DEFAULT_OPTIONS = CsvOptions()


def _parse_float(cell: str):
    # float() also accepts "1_000"; plain CSV numbers never contain underscores.
    if "_" in cell:
        return None
    try:
        return float(cell)
    except ValueError:
        return None


def parse_cell(cell: str, options: CsvOptions = DEFAULT_OPTIONS) -> FieldValue:
    """Infer the FieldValue of a single (already stripped) cell."""
    number = _parse_float(cell)
    if number is not None:
        return FieldValue.numeric(number)
    lowered = cell.lower()
    if lowered in (lit.lower() for lit in options.true_literals):
        return FieldValue.boolean(True)
    if lowered in (lit.lower() for lit in options.false_literals):
        return FieldValue.boolean(False)
    if cell == "":
        return FieldValue.null()
    return FieldValue.text(cell)


def parse_csv(text: str, options: CsvOptions = DEFAULT_OPTIONS) -> DataTable:
    """Parse CSV text into a DataTable.

    Args:
        text: The whole CSV document.
        options: Delimiter, comment prefix and boolean literals.

    Returns:
        DataTable with one row per data line, in source order.

    Raises:
        ParseError: If there is no header line, the header repeats a column
            name, or a data line has a different number of cells than the header.
    """
    headers = None
    rows = []
    # only "\n" ends a line; strip() drops the "\r" of "\r\n"
    for line_no, raw in enumerate(text.split("\n"), start=1):
        line = raw.strip()
        if not line or line.startswith(options.comment_prefix):
            continue

        cells = [c.strip() for c in line.split(options.delimiter)]

        if headers is None:
            if len(set(cells)) != len(cells):
                raise ParseError(f"duplicate column name in header {cells!r}", line_no)
            headers = cells
            continue

        if len(cells) != len(headers):
            raise ParseError(
                f"expected {len(headers)} cells, found {len(cells)}", line_no
            )
        rows.append({col: parse_cell(cell, options) for col, cell in zip(headers, cells)})

    if headers is None:
        raise ParseError("CSV has no header row")

    logger.debug("parsed csv: %d rows x %d columns", len(rows), len(headers))
    return DataTable(rows)
