"""Unit tests for descriptive statistics, histograms and KDE."""

import math
import types

import numpy as np
import pytest

from tidychart.algorithms.statistics import (
    BinRule,
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
    sma,
    std_dev,
    total,
)
from tidychart.data.model import DataPoint
from tidychart.errors import ArgumentError


@pytest.mark.parametrize("p, expected", [(50, 2.5), (0, 1.0), (100, 4.0), (25, 1.75)])
def test_percentile_linear_interpolation(p, expected):
    assert percentile([1, 2, 3, 4], p) == pytest.approx(expected)


def test_percentile_errors():
    with pytest.raises(ArgumentError):
        percentile([], 50)
    with pytest.raises(ArgumentError):
        percentile([1, 2], 101)
    with pytest.raises(ArgumentError):
        percentile([1, 2], -1)


def test_basic_summaries():
    assert mean([1, 2, 3, 6]) == 3.0
    assert median([3, 1, 2]) == 2.0
    assert extent([4, -2, 9]) == (-2.0, 9.0)
    assert total([1.5, 2.5]) == 4.0
    assert total([]) == 0.0
    data = [2, 4, 4, 4, 5, 5, 7, 9]
    assert std_dev(data) == pytest.approx(np.std(data, ddof=1))


def test_empty_input_raises():
    for fn in (mean, median, extent):
        with pytest.raises(ArgumentError):
            fn([])
    with pytest.raises(ArgumentError):
        std_dev([1.0])


def test_box_plot_flags_outliers():
    """Whiskers stop at the last value inside 1.5 * IQR; 100 is an outlier."""
    stats = box_plot_stats([1, 2, 3, 4, 100])
    assert (stats.q1, stats.median, stats.q3) == (2.0, 3.0, 4.0)
    assert stats.iqr == 2.0
    assert stats.lower_whisker == 1.0
    assert stats.upper_whisker == 4.0
    assert stats.outliers == (100.0,)
    assert stats.mean == 22.0
    assert (stats.min, stats.max) == (1.0, 100.0)


def test_box_plot_without_outliers():
    stats = box_plot_stats(range(1, 10))
    assert stats.outliers == ()
    assert stats.lower_whisker == 1.0
    assert stats.upper_whisker == 9.0


def test_box_plot_single_value():
    stats = box_plot_stats([7])
    assert stats.lower_whisker == stats.upper_whisker == 7.0


def test_histogram_fixed_count():
    bins = histogram(range(10), 5)
    assert [b.count for b in bins] == [2, 2, 2, 2, 2]
    assert bins[0].x0 == 0.0
    assert bins[-1].x1 == 9.0


def test_histogram_counts_every_value():
    rng = np.random.default_rng(0)
    data = rng.normal(size=500)
    for rule in BinRule:
        bins = histogram(data, rule)
        assert sum(b.count for b in bins) == 500


def test_histogram_degenerate_data():
    bins = histogram([2.0, 2.0, 2.0])
    assert len(bins) == 1
    assert (bins[0].x0, bins[0].x1, bins[0].count) == (2.0, 3.0, 3)


def test_bin_rules():
    """Freedman-Diaconis falls back to Sturges when the IQR is zero."""
    assert bin_count(range(10), BinRule.STURGES) == 5
    assert bin_count([1, 1, 1, 1, 1, 1, 1, 1, 5], BinRule.FREEDMAN_DIACONIS) == 5
    with pytest.raises(ArgumentError):
        bin_count([1, 2], 0)


def test_kde_is_lazy_and_validates_eagerly():
    """Bad arguments raise at call time; densities are computed on iteration."""
    density = kde([0.0, 1.0, 2.0], bandwidth=0.5, points=11)
    assert isinstance(density, types.GeneratorType)
    assert len(list(density)) == 11
    with pytest.raises(ArgumentError):
        kde([0.0, 1.0], bandwidth=0)
    with pytest.raises(ArgumentError):
        kde([0.0, 1.0], bandwidth=-1.0)
    with pytest.raises(ArgumentError):
        kde([], bandwidth=1.0)


def test_kde_single_kernel_peak():
    ((x, d),) = list(kde([0.0], bandwidth=1.0, grid=[0.0]))
    assert x == 0.0
    assert d == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))


def test_kde_integrates_to_about_one():
    rng = np.random.default_rng(1)
    pairs = list(kde(rng.normal(size=200), points=400))
    xs = np.array([p[0] for p in pairs])
    ds = np.array([p[1] for p in pairs])
    area = float(np.sum(ds) * (xs[1] - xs[0]))
    assert area == pytest.approx(1.0, abs=0.02)


def test_kde_silverman_needs_spread():
    with pytest.raises(ArgumentError):
        kde([3.0, 3.0, 3.0])


def test_moving_averages():
    assert sma([1, 2, 3, 4], 2) == [1.5, 2.5, 3.5]
    assert sma([1, 2], 5) == []
    assert ema([1, 2, 3], 0.5) == [1.0, 1.5, 2.25]
    with pytest.raises(ArgumentError):
        ema([1], 1.5)


def test_linear_regression():
    points = [DataPoint(x, 2 * x + 1) for x in range(5)]
    intercept, slope = linear_regression(points)
    assert intercept == pytest.approx(1.0)
    assert slope == pytest.approx(2.0)
    with pytest.raises(ArgumentError):
        linear_regression([DataPoint(1, 1), DataPoint(1, 2)])
