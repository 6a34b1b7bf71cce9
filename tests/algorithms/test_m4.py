"""Unit tests for M4 downsampling and OHLC aggregation."""

import pytest

from tidychart.algorithms.m4 import aggregate_ohlc, bucket_ids, m4, m4_indices, m4_series
from tidychart.data.model import DataPoint, OhlcBar, Series
from tidychart.errors import ArgumentError


def test_first_min_max_last_per_bucket():
    """Duplicate picks in a flat bucket collapse to first and last."""
    ys = [0, 3, 9, 1, -4, 2, 2, 2, 2, 5] + [1] * 10
    xs = list(range(20))
    assert m4_indices(xs, ys, 2).tolist() == [0, 2, 4, 9, 10, 19]


def test_last_x_falls_in_last_bucket():
    assert bucket_ids([0, 5, 10], 4).tolist() == [0, 2, 3]


def test_bounded_output_keeps_extrema(sine_points):
    """Global min and max y survive and the output stays within 4 points per bucket."""
    out = m4(sine_points, 25)
    assert len(out) <= 100
    assert max(sine_points, key=lambda p: p.y) in out
    assert min(sine_points, key=lambda p: p.y) in out
    assert out[0] == sine_points[0]
    assert out[-1] == sine_points[-1]


def test_output_points_stay_in_their_bucket(sine_points):
    buckets = 25
    ids = bucket_ids([p.x for p in sine_points], buckets)
    idx = m4_indices([p.x for p in sine_points], [p.y for p in sine_points], buckets)
    kept_ids = ids[idx]
    # buckets appear in ascending order and each is represented by at most 4 points
    assert kept_ids.tolist() == sorted(kept_ids.tolist())
    for b in set(kept_ids.tolist()):
        assert (kept_ids == b).sum() <= 4


def test_under_limit_returns_input():
    points = [DataPoint(i, i) for i in range(8)]
    assert m4(points, 2) == points


def test_equal_x_collapses_into_one_bucket():
    """With no x extent every point shares one bucket."""
    points = [DataPoint(1.0, float(y)) for y in [3, 1, 4, 1, 5, 9, 2, 6, 5, 3]]
    out = m4(points, 2)
    assert out == [points[0], points[1], points[5], points[9]]


def test_zero_buckets_raises():
    with pytest.raises(ArgumentError):
        m4([DataPoint(0, 0)], 0)


def test_m4_series_noop_returns_same_object():
    series = Series("s", [DataPoint(0, 0)])
    assert m4_series(series, 1) is series


def test_aggregate_ohlc():
    bars = [
        OhlcBar(0, 10, 12, 9, 11),
        OhlcBar(1, 11, 15, 10, 14),
        OhlcBar(2, 14, 14, 7, 8),
        OhlcBar(3, 8, 9, 6, 9),
    ]
    assert aggregate_ohlc(bars, 2) == [
        OhlcBar(0, 10, 15.0, 9.0, 14),
        OhlcBar(2, 14, 14.0, 6.0, 9),
    ]
    assert aggregate_ohlc(bars, 4) == bars
    with pytest.raises(ArgumentError):
        aggregate_ohlc(bars, 0)


def test_nan_x_is_dropped_not_bucketed():
    """One NaN x must not collapse the rest of the series into a single bucket."""
    points = [DataPoint(float(i), float(i % 7)) for i in range(100)]
    points[50] = DataPoint(float("nan"), 3.0)
    out = m4(points, 10)
    assert points[50] not in out
    assert len(out) > 20
    assert out[0] == points[0]
    assert out[-1] == points[-1]


def test_bucket_ids_marks_non_finite_x():
    ids = bucket_ids([0.0, float("nan"), 10.0, float("inf")], 2)
    assert ids.tolist() == [0, -1, 1, -1]
    assert bucket_ids([float("nan")] * 3, 2).tolist() == [-1, -1, -1]


def test_all_nan_x_gives_empty_output():
    xs = [float("nan")] * 10
    assert m4_indices(xs, list(range(10)), 1).tolist() == []
