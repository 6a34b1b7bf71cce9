"""Unit tests for table-to-series projection."""

import pytest

from tidychart.data.encoding import Encoding, Field
from tidychart.data.field_value import DataTable
from tidychart.data.model import DataPoint, OhlcBar, WaterfallKind
from tidychart.data.projection import (
    project,
    project_bars,
    project_groups,
    project_ohlc,
    project_waterfall,
)
from tidychart.errors import EncodingResolutionError


def _xy(color=None):
    enc = Encoding(Field.quantitative("month"), Field.quantitative("value"))
    return enc.with_color(color)


def test_color_splits_series(region_table):
    """Each color value becomes one series, in first-seen order."""
    dataset = project(region_table, _xy(Field.nominal("region")))
    assert dataset.labels() == ["N", "S"]
    assert dataset.series[0].points == (DataPoint(1.0, 10.0),)
    assert dataset.series[1].points == (DataPoint(2.0, 20.0),)


def test_no_color_gives_single_unlabeled_series(region_table):
    dataset = project(region_table, _xy())
    assert dataset.labels() == [""]
    assert len(dataset.series[0]) == 2


def test_non_numeric_rows_are_skipped():
    """Text, Bool and Null cells on x or y drop the row."""
    table = DataTable.from_records([
        {"month": 1, "value": 10},
        {"month": 2, "value": "n/a"},
        {"month": 3, "value": True},
        {"month": 4, "value": None},
        {"month": 5, "value": 50},
    ])
    dataset = project(table, _xy())
    assert [p.x for p in dataset.series[0].points] == [1.0, 5.0]


def test_strict_raises_on_non_numeric():
    table = DataTable.from_records([{"month": 1, "value": "n/a"}])
    with pytest.raises(EncodingResolutionError) as exc_info:
        project(table, _xy(), strict=True)
    assert exc_info.value.column == "value"


def test_missing_column_raises(region_table):
    enc = Encoding(Field.quantitative("month"), Field.quantitative("missing"))
    with pytest.raises(EncodingResolutionError):
        project(region_table, enc)


def test_empty_table_projects_to_empty_dataset():
    dataset = project(DataTable(), _xy())
    assert dataset.is_empty()


def test_nominal_x_is_rejected(region_table):
    enc = Encoding(Field.nominal("region"), Field.quantitative("value"))
    with pytest.raises(EncodingResolutionError):
        project(region_table, enc)


def test_quantitative_color_is_rejected(region_table):
    with pytest.raises(EncodingResolutionError):
        project(region_table, _xy(Field.quantitative("value")))


def test_point_order_follows_rows():
    table = DataTable.from_records([{"month": m, "value": m * 2} for m in (3, 1, 2)])
    xs = [p.x for p in project(table, _xy()).series[0].points]
    assert xs == [3.0, 1.0, 2.0]


def test_project_bars_fills_missing_categories():
    """The first row per (series, category) wins; absent categories get 0.0."""
    table = DataTable.from_records([
        {"fruit": "apple", "n": 3, "shop": "A"},
        {"fruit": "pear", "n": 5, "shop": "A"},
        {"fruit": "apple", "n": 4, "shop": "B"},
        {"fruit": "apple", "n": 99, "shop": "B"},
    ])
    enc = Encoding(Field.nominal("fruit"), Field.quantitative("n"), Field.nominal("shop"))
    bars = project_bars(table, enc)
    assert bars.categories == ("apple", "pear")
    assert [s.label for s in bars.series] == ["A", "B"]
    assert bars.values_matrix() == [[3.0, 5.0], [4.0, 0.0]]


def test_project_ohlc_skips_incomplete_rows():
    table = DataTable.from_records([
        {"t": 0, "o": 1, "h": 2, "l": 0.5, "c": 1.5},
        {"t": 1, "o": 1, "h": None, "l": 0.5, "c": 1.5},
    ])
    bars = project_ohlc(table, "t", "o", "h", "l", "c")
    assert bars == [OhlcBar(0.0, 1.0, 2.0, 0.5, 1.5)]
    assert bars[0].is_bullish


def test_project_groups():
    table = DataTable.from_records([
        {"g": "x", "v": 1}, {"g": "y", "v": 2}, {"g": "x", "v": 3}, {"g": "y", "v": "bad"},
    ])
    assert project_groups(table, "g", "v") == {"x": [1.0, 3.0], "y": [2.0]}


def test_project_waterfall_kinds():
    """A TOTAL row keeps its place even without a numeric value."""
    table = DataTable.from_records([
        {"label": "open", "v": 100, "kind": "start"},
        {"label": "sales", "v": 20, "kind": "delta"},
        {"label": "end", "v": None, "kind": "total"},
    ])
    bars = project_waterfall(table, "label", "v", kind="kind")
    assert [b.kind for b in bars] == [WaterfallKind.START, WaterfallKind.DELTA, WaterfallKind.TOTAL]
    assert bars[2].delta == 0.0


def test_project_waterfall_unknown_kind_raises():
    table = DataTable.from_records([{"label": "a", "v": 1, "kind": "sideways"}])
    with pytest.raises(EncodingResolutionError):
        project_waterfall(table, "label", "v", kind="kind")
