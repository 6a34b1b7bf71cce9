"""Unit tests for LTTB downsampling."""

import numpy as np
import pytest

from tidychart.algorithms.lttb import lttb, lttb_indices, lttb_series
from tidychart.data.model import DataPoint, Series
from tidychart.errors import ArgumentError


@pytest.mark.parametrize("threshold", [3, 4, 10, 100, 999])
def test_output_length_equals_threshold(sine_points, threshold):
    """LTTB keeps exactly threshold points, including both endpoints."""
    out = lttb(sine_points, threshold)
    assert len(out) == threshold
    assert out[0] == sine_points[0]
    assert out[-1] == sine_points[-1]


def test_output_keeps_input_order(sine_points):
    idx = lttb_indices([p.x for p in sine_points], [p.y for p in sine_points], 50)
    assert np.all(np.diff(idx) > 0)


def test_spike_survives(sine_points):
    """A lone extreme point maximizes the triangle area of its bucket."""
    out = lttb(sine_points, 100)
    assert DataPoint(437.0, 25.0) in out


def test_under_threshold_returns_input(sine_points):
    small = sine_points[:20]
    assert lttb(small, 20) == small
    assert lttb(small, 500) == small


def test_threshold_below_three_raises():
    """The threshold is validated before the no-op fast path."""
    with pytest.raises(ArgumentError):
        lttb([DataPoint(0, 0)], 2)
    with pytest.raises(ArgumentError):
        lttb([], 0)


def test_ties_pick_first_index():
    """Points 1 and 3 form equal triangles; the earlier one is kept."""
    points = [DataPoint(0, 0), DataPoint(1, 5), DataPoint(2, 0), DataPoint(3, -5), DataPoint(4, 0)]
    assert lttb(points, 3) == [points[0], points[1], points[4]]


def test_mismatched_arrays_raise():
    with pytest.raises(ArgumentError):
        lttb_indices([0, 1, 2], [0, 1], 3)


def test_lttb_series_keeps_label(sine_points):
    series = Series("temp", sine_points, color="blue")
    reduced = lttb_series(series, 10)
    assert (reduced.label, reduced.color, len(reduced)) == ("temp", "blue", 10)
    assert lttb_series(series, 5000) is series
