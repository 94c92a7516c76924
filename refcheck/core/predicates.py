# refcheck/core/predicates.py
"""
Boolean checks of a candidate series against bounds, a reference, or a
threshold.

Two failure channels:
- length mismatches between paired series are "check failed" (False),
  so one mis-sized input does not abort a batch of checks
- non-float arrays and negative sample minimums are programming errors
  and raise (UnsupportedDtype / InvalidArgument)
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from .dtypes import SeriesLike, as_float_array
from .exceptions import InvalidArgument
from .interpolation import interpolate_onto
from .timeseries import TimeSeries


Condition = Callable[[Any], Any]


# ---- mask helpers ----
def count_samples(mask: np.ndarray) -> int:
    """Number of True entries in a boolean mask."""
    return int(np.count_nonzero(mask))


def longest_run(mask: np.ndarray) -> int:
    """Length of the longest stretch of consecutive True entries."""
    m = np.asarray(mask, dtype=bool)
    if m.size == 0 or not m.any():
        return 0
    # Run boundaries are where the padded mask flips.
    edges = np.flatnonzero(np.diff(np.concatenate(([False], m, [False])).astype(np.int8)))
    starts, stops = edges[::2], edges[1::2]
    return int((stops - starts).max())


def _check_min_samples(min_samples: int) -> int:
    n = int(min_samples)
    if n != min_samples or n < 0:
        raise InvalidArgument(f"sample minimum must be a non-negative integer, got {min_samples!r}")
    return n


# ---- bounds ----
def is_within_bounds(
    test: SeriesLike,
    min_bounds: SeriesLike,
    max_bounds: SeriesLike,
) -> bool:
    """True iff min_bounds[i] <= test[i] <= max_bounds[i] for every sample."""
    x = as_float_array(test, name="test")
    lo = as_float_array(min_bounds, name="min_bounds")
    hi = as_float_array(max_bounds, name="max_bounds")
    if x.size != lo.size or x.size != hi.size:
        return False
    return bool(np.all((lo <= x) & (x <= hi)))


def is_within_time_bounds(
    test_time: SeriesLike,
    test: SeriesLike,
    min_time: SeriesLike,
    min_bounds: SeriesLike,
    max_time: SeriesLike,
    max_bounds: SeriesLike,
) -> bool:
    """
    Time-varying bounds check.

    Each bound carries its own time base and is interpolated onto
    `test_time` before the inclusive comparison. Any (time, value) length
    mismatch makes the check fail.
    """
    t = as_float_array(test_time, name="test_time")
    x = as_float_array(test, name="test")
    lo_t = as_float_array(min_time, name="min_time")
    lo = as_float_array(min_bounds, name="min_bounds")
    hi_t = as_float_array(max_time, name="max_time")
    hi = as_float_array(max_bounds, name="max_bounds")

    if t.size != x.size:
        return False
    if lo_t.size != lo.size or hi_t.size != hi.size:
        return False
    if x.size == 0:
        return True
    if lo.size == 0 or hi.size == 0:
        # Nothing to interpolate a bound from.
        return False

    lo_at = interpolate_onto(t, lo_t, lo)
    hi_at = interpolate_onto(t, hi_t, hi)
    return bool(np.all((lo_at <= x) & (x <= hi_at)))


def series_within_bounds(
    series: TimeSeries,
    min_series: TimeSeries,
    max_series: TimeSeries,
) -> bool:
    """is_within_time_bounds() for TimeSeries objects."""
    return is_within_time_bounds(
        series.time,
        series.values,
        min_series.time,
        min_series.values,
        max_series.time,
        max_series.values,
    )


# ---- similarity ----
def is_variance_within_threshold(
    test: SeriesLike,
    reference: SeriesLike,
    threshold: float,
) -> bool:
    """
    Mean squared deviation from a paired reference: sum((test - ref)^2) / n.

    This is not the variance of a single distribution; it measures how far
    `test` strays from `reference` sample by sample.
    """
    x = as_float_array(test, name="test")
    ref = as_float_array(reference, name="reference")
    if x.size != ref.size:
        return False
    if x.size == 0:
        return True
    diff = x - ref
    variance = np.mean(diff * diff)
    return bool(variance <= threshold)


def is_mean_difference_within_threshold(
    test: SeriesLike,
    reference: SeriesLike,
    threshold: float,
) -> bool:
    """True iff |mean(test) - mean(reference)| <= threshold."""
    x = as_float_array(test, name="test")
    ref = as_float_array(reference, name="reference")
    if x.size != ref.size:
        return False
    if x.size == 0:
        return True
    return bool(abs(np.mean(x) - np.mean(ref)) <= threshold)


# ---- threshold counts / runs ----
def has_at_least_n_samples_above_threshold(
    test: SeriesLike, threshold: float, min_samples: int
) -> bool:
    n = _check_min_samples(min_samples)
    x = as_float_array(test, name="test")
    return count_samples(x > threshold) >= n


def has_at_least_n_samples_below_threshold(
    test: SeriesLike, threshold: float, min_samples: int
) -> bool:
    n = _check_min_samples(min_samples)
    x = as_float_array(test, name="test")
    return count_samples(x < threshold) >= n


def has_at_least_n_consecutive_samples_above_threshold(
    test: SeriesLike, threshold: float, min_consecutive: int
) -> bool:
    n = _check_min_samples(min_consecutive)
    x = as_float_array(test, name="test")
    if n == 0:
        return True
    return longest_run(x > threshold) >= n


def has_at_least_n_consecutive_samples_below_threshold(
    test: SeriesLike, threshold: float, min_consecutive: int
) -> bool:
    n = _check_min_samples(min_consecutive)
    x = as_float_array(test, name="test")
    if n == 0:
        return True
    return longest_run(x < threshold) >= n


# ---- arbitrary conditions ----
def has_at_least_n_samples_with_condition_true(
    test: SeriesLike, condition: Condition, min_samples: int
) -> bool:
    """Count samples for which `condition(sample)` is truthy."""
    n = _check_min_samples(min_samples)
    x = as_float_array(test, name="test")
    count = 0
    for value in x:
        if condition(value):
            count += 1
    return count >= n


def has_at_least_n_consecutive_samples_with_condition_true(
    test: SeriesLike, condition: Condition, min_consecutive: int
) -> bool:
    """Stops scanning as soon as the streak reaches `min_consecutive`."""
    n = _check_min_samples(min_consecutive)
    x = as_float_array(test, name="test")
    if n == 0:
        return True
    streak = 0
    for value in x:
        if condition(value):
            streak += 1
            if streak >= n:
                return True
        else:
            streak = 0
    return False
