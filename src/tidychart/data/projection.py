"""Table-to-series projection.

Turns a DataTable plus an Encoding (or plain column names) into the
render-ready structures of tidychart.data.model.

Row handling is the same everywhere: a row whose numeric channels do not hold
a Numeric value is skipped, never coerced. Columns that do not exist anywhere
in a non-empty table raise EncodingResolutionError, since that is a
configuration mistake rather than a data quality issue.
"""

from __future__ import annotations

from typing import Optional

from tidychart.data.encoding import Encoding, FieldKind
from tidychart.data.field_value import NULL, DataRow, DataTable
from tidychart.data.model import (
    BarDataset,
    BarSeries,
    DataPoint,
    Dataset,
    OhlcBar,
    Series,
    WaterfallBar,
    WaterfallKind,
)
from tidychart.errors import EncodingResolutionError
from tidychart.utils.logging import get_logger

logger = get_logger(__name__)

NUMERIC_KINDS = (FieldKind.QUANTITATIVE, FieldKind.TEMPORAL)


def _require_columns(table: DataTable, names: list[str]) -> None:
    if table.is_empty():
        return
    for name in names:
        if name not in table.columns:
            raise EncodingResolutionError(
                f"column {name!r} not found; table has {list(table.columns)!r}", column=name
            )


def _numeric_cell(row: DataRow, column: str, strict: bool) -> Optional[float]:
    value = row.get(column, NULL)
    number = value.as_float()
    if number is None and strict:
        raise EncodingResolutionError(
            f"column {column!r} holds {value.kind.value}, expected numeric", column=column
        )
    return number


def _extract_points(table: DataTable, x_col: str, y_col: str, strict: bool) -> list[DataPoint]:
    points = []
    for row in table:
        x = _numeric_cell(row, x_col, strict)
        y = _numeric_cell(row, y_col, strict)
        if x is None or y is None:
            continue
        points.append(DataPoint(x, y))
    return points


# -----------------------------------------------------------------------------
# Point series (line / scatter / area)
# -----------------------------------------------------------------------------


def project(table: DataTable, encoding: Encoding, *, strict: bool = False) -> Dataset:
    """Project a table onto x/y points, optionally split into series by color.

    Args:
        table: Source rows.
        encoding: x and y must be Quantitative or Temporal. color, when set,
            must be Nominal or Ordinal; each distinct value (string form)
            becomes one Series labeled with that value, in first-seen order.
        strict: If True, a non-numeric x/y cell raises instead of skipping the row.

    Returns:
        Dataset. Without color: a single Series with an empty label.
        Row order is preserved as point order within each series.

    Raises:
        EncodingResolutionError: Unknown column, wrong field kind, or (strict
            only) a non-numeric cell on x or y.
    """
    for channel, fld in (("x", encoding.x), ("y", encoding.y)):
        if fld.kind not in NUMERIC_KINDS:
            raise EncodingResolutionError(
                f"{channel} channel needs a quantitative or temporal field, "
                f"got {fld.kind.value} field {fld.name!r}",
                column=fld.name,
            )
    if encoding.color is not None and not encoding.color.kind.is_discrete:
        raise EncodingResolutionError(
            f"color channel needs a nominal or ordinal field, "
            f"got {encoding.color.kind.value} field {encoding.color.name!r}",
            column=encoding.color.name,
        )
    _require_columns(table, encoding.columns())

    x_col, y_col = encoding.x.name, encoding.y.name

    if encoding.color is None:
        points = _extract_points(table, x_col, y_col, strict)
        _log_skipped(len(table), len(points))
        return Dataset.from_series(Series("", points))

    series = []
    kept = 0
    for label, sub in table.group_by(encoding.color.name):
        points = _extract_points(sub, x_col, y_col, strict)
        kept += len(points)
        series.append(Series(label, points))
    _log_skipped(len(table), kept)
    return Dataset(series)


def _log_skipped(n_rows: int, n_points: int) -> None:
    if n_points < n_rows:
        logger.debug("projection skipped %d of %d rows with non-numeric x/y", n_rows - n_points, n_rows)


# -----------------------------------------------------------------------------
# Bars
# -----------------------------------------------------------------------------


def project_bars(table: DataTable, encoding: Encoding) -> BarDataset:
    """Project a table onto categories (x) and bar heights (y).

    Categories are the string forms of the non-null x values in first-seen
    order. When color is set, each distinct color value becomes a BarSeries.
    For each (series, category) the first row with a Numeric y supplies the
    value; a category the series has no such row for gets 0.0.

    Raises:
        EncodingResolutionError: Unknown column, or a non-numeric y field kind.
    """
    if encoding.y.kind not in NUMERIC_KINDS:
        raise EncodingResolutionError(
            f"y channel needs a quantitative field, got {encoding.y.kind.value}",
            column=encoding.y.name,
        )
    _require_columns(table, encoding.columns())

    cat_col, val_col = encoding.x.name, encoding.y.name

    categories: dict[str, None] = {}
    for row in table:
        cell = row.get(cat_col, NULL)
        if not cell.is_null:
            categories.setdefault(cell.group_key(), None)

    def _values(sub: DataTable) -> list[float]:
        first: dict[str, float] = {}
        for row in sub:
            cell = row.get(cat_col, NULL)
            number = row.get(val_col, NULL).as_float()
            if cell.is_null or number is None:
                continue
            first.setdefault(cell.group_key(), number)
        return [first.get(cat, 0.0) for cat in categories]

    if encoding.color is None:
        groups = [("", table)]
    else:
        groups = table.group_by(encoding.color.name)

    return BarDataset(
        categories=tuple(categories),
        series=tuple(BarSeries(label, _values(sub)) for label, sub in groups),
    )


# -----------------------------------------------------------------------------
# OHLC, grouped values, waterfall
# -----------------------------------------------------------------------------


def project_ohlc(
    table: DataTable,
    timestamp: str,
    open: str,
    high: str,
    low: str,
    close: str,
) -> list[OhlcBar]:
    """One OhlcBar per row; rows with any non-numeric field are skipped."""
    cols = [timestamp, open, high, low, close]
    _require_columns(table, cols)
    bars = []
    for row in table:
        values = [row.get(c, NULL).as_float() for c in cols]
        if any(v is None for v in values):
            continue
        bars.append(OhlcBar(*values))
    return bars


def project_groups(table: DataTable, group: str, value: str) -> dict[str, list[float]]:
    """Numeric ``value`` cells collected per ``group`` (first-seen order).

    Used as input for box plots and violins (see box_plot_stats, kde).
    Groups whose rows are all non-numeric map to an empty list.
    """
    _require_columns(table, [group, value])
    return {
        label: sub.extract_numeric(value)
        for label, sub in table.group_by(group)
    }


def project_waterfall(
    table: DataTable,
    label: str,
    value: str,
    kind: Optional[str] = None,
) -> list[WaterfallBar]:
    """One WaterfallBar per row.

    Args:
        table: Source rows.
        label: Column providing bar labels (string form).
        value: Column providing the bar value.
        kind: Optional column with "start" / "delta" / "total" (case-insensitive).
            Without it every bar is a DELTA bar.

    Raises:
        EncodingResolutionError: Unknown column or an unrecognized kind value.
    """
    _require_columns(table, [label, value] + ([kind] if kind else []))
    bars = []
    for row in table:
        bar_kind = WaterfallKind.DELTA
        if kind is not None:
            raw = row.get(kind, NULL).group_key().lower()
            try:
                bar_kind = WaterfallKind(raw)
            except ValueError as e:
                raise EncodingResolutionError(
                    f"column {kind!r}: unknown waterfall kind {raw!r}", column=kind
                ) from e
        number = row.get(value, NULL).as_float()
        if number is None:
            if bar_kind is not WaterfallKind.TOTAL:
                continue
            number = 0.0
        bars.append(WaterfallBar(row.get(label, NULL).group_key(), number, bar_kind))
    return bars
