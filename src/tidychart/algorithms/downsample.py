"""Apply a DownsampleConfig to series and datasets."""

from __future__ import annotations

from tidychart.algorithms.lttb import lttb_series
from tidychart.algorithms.m4 import m4_series
from tidychart.config import DownsampleConfig, DownsampleMethod
from tidychart.data.model import DataPoint, Dataset, Series
from tidychart.utils.logging import get_logger

logger = get_logger(__name__)


def downsample_series(series: Series[DataPoint], config: DownsampleConfig) -> Series[DataPoint]:
    """Reduce one series with the configured method."""
    if config.method is DownsampleMethod.LTTB:
        return lttb_series(series, config.threshold)
    if config.method is DownsampleMethod.M4:
        return m4_series(series, config.threshold)
    return series


def downsample_dataset(dataset: Dataset, config: DownsampleConfig) -> Dataset:
    """Reduce every series of ``dataset``; series order and labels are kept.

    Raises:
        ArgumentError: If the threshold is invalid for the chosen method.
    """
    if config.method is DownsampleMethod.NONE:
        return dataset
    logger.debug(
        "Downsampling %d series with %s (threshold=%d)",
        len(dataset.series), config.method.value, config.threshold,
    )
    return Dataset(tuple(downsample_series(s, config) for s in dataset.series))
