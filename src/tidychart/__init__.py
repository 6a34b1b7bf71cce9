"""
tidychart: Chart data preparation for rendering layers.

This package provides:
- DataTable / FieldValue: tidy tables with typed cells, from CSV text,
  Python records or pandas DataFrames
- Encoding projection into Dataset, BarDataset, OHLC and waterfall records
- Linear, log, time, band and ordinal scales
- LTTB and M4 downsampling, statistics, stacking, arcs and hit testing
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from tidychart.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library (imported by other applications), logging is
automatically handled by the parent application's configuration.
"""

import logging

from tidychart.utils.logging import configure_logging, get_logger

from tidychart.config import DownsampleConfig, DownsampleMethod, EngineDefaults
from tidychart.data import (
    BarDataset,
    DataPoint,
    DataTable,
    Dataset,
    Encoding,
    Field,
    FieldKind,
    FieldValue,
    OhlcBar,
    Series,
    WaterfallBar,
    parse_csv,
    project,
)
from tidychart.errors import (
    ArgumentError,
    DomainError,
    EncodingResolutionError,
    ParseError,
    TidyChartError,
    UnknownKeyError,
)
from tidychart.pipeline import fit_xy_scales, prepare_dataset
from tidychart.scales import BandScale, LinearScale, LogScale, OrdinalScale, TimeScale

# Ensure tidychart logger has NullHandler so logs don't propagate to root
# when no application has configured logging. Applications/demos call
# configure_logging() to replace this with a real handler.
_logger = logging.getLogger("tidychart")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ArgumentError",
    "BandScale",
    "BarDataset",
    "DataPoint",
    "DataTable",
    "Dataset",
    "DomainError",
    "DownsampleConfig",
    "DownsampleMethod",
    "Encoding",
    "EncodingResolutionError",
    "EngineDefaults",
    "Field",
    "FieldKind",
    "FieldValue",
    "LinearScale",
    "LogScale",
    "OhlcBar",
    "OrdinalScale",
    "ParseError",
    "Series",
    "TidyChartError",
    "TimeScale",
    "UnknownKeyError",
    "WaterfallBar",
    "configure_logging",
    "fit_xy_scales",
    "get_logger",
    "parse_csv",
    "prepare_dataset",
    "project",
]

__version__ = "0.1.0"
