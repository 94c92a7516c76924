# refcheck/core/__init__.py
"""
Core numeric checks for refcheck.

This module defines the I/O-free validation primitives:
- interpolation: piecewise-linear lookup over a time base
- predicates: bounds, similarity, threshold count and run-length checks
- corridor: 2D point-in-corridor test
- TimeSeries / Corridor: validated containers for the above

Everything here works on float32/float64 series only.
"""

from .timeseries import TimeSeries
from .corridor import Corridor, is_within_2d_corridor
from .interpolation import linear_interpolate, interpolate_at_time, interpolate_onto
from .predicates import (
    count_samples,
    longest_run,
    is_within_bounds,
    is_within_time_bounds,
    series_within_bounds,
    is_variance_within_threshold,
    is_mean_difference_within_threshold,
    has_at_least_n_samples_above_threshold,
    has_at_least_n_samples_below_threshold,
    has_at_least_n_consecutive_samples_above_threshold,
    has_at_least_n_consecutive_samples_below_threshold,
    has_at_least_n_samples_with_condition_true,
    has_at_least_n_consecutive_samples_with_condition_true,
)
from .exceptions import (
    CoreError,
    InvalidArgument,
    InvalidTimeSeries,
    UnsupportedDtype,
    CodecError,
    VectorIOError,
    TypeMismatch,
    SizeMismatch,
    ConfigError,
    ChecksFailed,
)


__all__ = [
    # containers
    "TimeSeries",
    "Corridor",

    # interpolation
    "linear_interpolate",
    "interpolate_at_time",
    "interpolate_onto",

    # predicates
    "count_samples",
    "longest_run",
    "is_within_bounds",
    "is_within_time_bounds",
    "series_within_bounds",
    "is_variance_within_threshold",
    "is_mean_difference_within_threshold",
    "has_at_least_n_samples_above_threshold",
    "has_at_least_n_samples_below_threshold",
    "has_at_least_n_consecutive_samples_above_threshold",
    "has_at_least_n_consecutive_samples_below_threshold",
    "has_at_least_n_samples_with_condition_true",
    "has_at_least_n_consecutive_samples_with_condition_true",
    "is_within_2d_corridor",

    # exceptions
    "CoreError",
    "InvalidArgument",
    "InvalidTimeSeries",
    "UnsupportedDtype",
    "CodecError",
    "VectorIOError",
    "TypeMismatch",
    "SizeMismatch",
    "ConfigError",
    "ChecksFailed",
]
