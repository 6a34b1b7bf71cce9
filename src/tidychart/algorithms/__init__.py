"""Downsampling, statistics and derived geometry."""

from tidychart.algorithms.arc import ArcSlice, partition_arcs
from tidychart.algorithms.downsample import downsample_dataset, downsample_series
from tidychart.algorithms.lttb import lttb, lttb_indices, lttb_series
from tidychart.algorithms.m4 import aggregate_ohlc, m4, m4_indices, m4_series
from tidychart.algorithms.nearest import nearest_at_pixel, nearest_in_dataset, nearest_point
from tidychart.algorithms.stack import StackedSlot, StackedValue, stack_by_slot, stack_series
from tidychart.algorithms.statistics import (
    Bin,
    BinRule,
    BoxPlotStats,
    bin_count,
    box_plot_stats,
    ema,
    extent,
    histogram,
    kde,
    linear_regression,
    mean,
    median,
    percentile,
    silverman_bandwidth,
    sma,
    std_dev,
    total,
)
from tidychart.algorithms.waterfall import WaterfallSegment, waterfall_segments

__all__ = [
    "ArcSlice",
    "Bin",
    "BinRule",
    "BoxPlotStats",
    "StackedSlot",
    "StackedValue",
    "WaterfallSegment",
    "aggregate_ohlc",
    "bin_count",
    "box_plot_stats",
    "downsample_dataset",
    "downsample_series",
    "ema",
    "extent",
    "histogram",
    "kde",
    "linear_regression",
    "lttb",
    "lttb_indices",
    "lttb_series",
    "m4",
    "m4_indices",
    "m4_series",
    "mean",
    "median",
    "nearest_at_pixel",
    "nearest_in_dataset",
    "nearest_point",
    "partition_arcs",
    "percentile",
    "silverman_bandwidth",
    "sma",
    "stack_by_slot",
    "stack_series",
    "std_dev",
    "total",
    "waterfall_segments",
]
