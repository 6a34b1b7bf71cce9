"""
End-to-end data preparation: CSV text or DataTable -> Dataset -> scales.

Usage:
    from tidychart.pipeline import prepare_dataset, fit_xy_scales

    dataset = prepare_dataset(csv_text, encoding, DownsampleConfig.lttb(800))
    x_scale, y_scale = fit_xy_scales(dataset, width=800, height=400)
"""

from __future__ import annotations

from typing import Optional, Union

from tidychart.algorithms.downsample import downsample_dataset
from tidychart.config import DownsampleConfig
from tidychart.data.csv_reader import DEFAULT_OPTIONS, CsvOptions, parse_csv
from tidychart.data.encoding import Encoding
from tidychart.data.field_value import DataTable
from tidychart.data.model import Dataset
from tidychart.data.projection import project
from tidychart.errors import ArgumentError
from tidychart.scales.continuous import LinearScale
from tidychart.utils.logging import get_logger

logger = get_logger(__name__)


def prepare_dataset(
    source: Union[str, DataTable],
    encoding: Encoding,
    downsample: Optional[DownsampleConfig] = None,
    *,
    csv_options: CsvOptions = DEFAULT_OPTIONS,
    strict: bool = False,
) -> Dataset:
    """
    Parse (when given CSV text), project, then optionally downsample.

    Args:
        source: CSV text or an already built DataTable.
        encoding: Column-to-channel mapping.
        downsample: Reduction to apply per series; None keeps every point.
        csv_options: Dialect used when source is text.
        strict: Passed to project().

    Raises:
        ParseError: Malformed CSV text.
        EncodingResolutionError: The encoding does not fit the table.
        ArgumentError: Invalid downsampling threshold.
    """
    table = parse_csv(source, csv_options) if isinstance(source, str) else source
    dataset = project(table, encoding, strict=strict)
    if downsample is not None:
        dataset = downsample_dataset(dataset, downsample)
    logger.debug(
        "Prepared %d series, %d points",
        len(dataset.series), sum(len(s) for s in dataset.series),
    )
    return dataset


def fit_xy_scales(dataset: Dataset, width: float, height: float) -> tuple[LinearScale, LinearScale]:
    """
    Linear x and y scales fitted to the extent of every point in dataset.

    The y range is ``(height, 0)`` so larger values are drawn higher in
    screen coordinates.

    Raises:
        ArgumentError: If the dataset has no points.
    """
    points = [p for s in dataset.series for p in s.points]
    if not points:
        raise ArgumentError("cannot fit scales to an empty dataset")
    x_scale = LinearScale.from_values((p.x for p in points), (0.0, width))
    y_scale = LinearScale.from_values((p.y for p in points), (height, 0.0))
    return x_scale, y_scale
