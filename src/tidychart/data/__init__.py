"""Data model, tidy table, CSV ingestion, encodings and projection."""

from tidychart.data.csv_reader import CsvOptions, parse_csv
from tidychart.data.encoding import Encoding, Field, FieldKind
from tidychart.data.field_value import NULL, DataRow, DataTable, FieldValue, ValueKind
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
from tidychart.data.projection import (
    project,
    project_bars,
    project_groups,
    project_ohlc,
    project_waterfall,
)

__all__ = [
    "BarDataset",
    "BarSeries",
    "CsvOptions",
    "DataPoint",
    "DataRow",
    "DataTable",
    "Dataset",
    "Encoding",
    "Field",
    "FieldKind",
    "FieldValue",
    "NULL",
    "OhlcBar",
    "Series",
    "ValueKind",
    "WaterfallBar",
    "WaterfallKind",
    "parse_csv",
    "project",
    "project_bars",
    "project_groups",
    "project_ohlc",
    "project_waterfall",
]
