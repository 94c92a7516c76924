# refcheck/core/interpolation.py
"""
Piecewise-linear lookup over a (time, value) pair.

Outside the time base the first/last value is held (flat extrapolation).
The time base is assumed non-decreasing; this is not checked, and an
unsorted time base gives an undefined (but non-raising) result.
"""

from __future__ import annotations

import numpy as np

from .dtypes import SeriesLike, as_float_array, common_float_dtype
from .exceptions import InvalidArgument


def linear_interpolate(x: float, x0: float, y0: float, x1: float, y1: float) -> float:
    """Value at `x` on the line through (x0, y0) and (x1, y1); `y0` if x0 == x1."""
    if x1 == x0:
        return y0
    return y0 + (y1 - y0) * (x - x0) / (x1 - x0)


def _checked_base(time_base: SeriesLike, values: SeriesLike) -> tuple[np.ndarray, np.ndarray]:
    t = as_float_array(time_base, name="time_base")
    v = as_float_array(values, name="values")
    if t.size != v.size or t.size == 0:
        raise InvalidArgument(
            "Time and value vectors must have same non-zero size, "
            f"got {t.size} vs {v.size}"
        )
    return t, v


def interpolate_onto(
    target_times: SeriesLike,
    time_base: SeriesLike,
    values: SeriesLike,
) -> np.ndarray:
    """
    Interpolate (time_base, values) at every entry of `target_times`.

    Semantics per target `t`:
    - t <= time_base[0]  -> values[0]
    - t >= time_base[-1] -> values[-1]
    - otherwise the first segment [t_i, t_i+1] with t_i <= t <= t_i+1 is used

    A NaN target compares false against both ends and yields NaN; it is
    not clamped to either end value.

    Raises
    ------
    InvalidArgument
        If time_base and values differ in length or are empty.
    """
    t, v = _checked_base(time_base, values)
    target = as_float_array(target_times, name="target_times")
    dtype = common_float_dtype(t, v, target)
    t = t.astype(dtype, copy=False)
    v = v.astype(dtype, copy=False)
    target = target.astype(dtype, copy=False)

    out = np.empty(target.shape, dtype=dtype)
    if target.size == 0:
        return out

    below = target <= t[0]
    above = ~below & (target >= t[-1])
    inner = ~(below | above)

    out[below] = v[0]
    out[above] = v[-1]

    if np.any(inner):
        tt = target[inner]
        # First i with t[i+1] >= tt; for a sorted base t[i] < tt then holds.
        i = np.searchsorted(t[1:], tt, side="left")
        i = np.minimum(i, t.size - 2)
        x0, x1 = t[i], t[i + 1]
        y0, y1 = v[i], v[i + 1]
        dx = x1 - x0
        degenerate = dx == 0
        safe_dx = np.where(degenerate, 1, dx)
        out[inner] = np.where(degenerate, y0, y0 + (y1 - y0) * (tt - x0) / safe_dx)
        out[np.isnan(target)] = np.nan

    return out


def interpolate_at_time(
    target_time: float,
    time_base: SeriesLike,
    values: SeriesLike,
) -> np.floating:
    """
    Value of the series (time_base, values) at `target_time`.

    The result keeps the precision of the inputs (float32 in, float32 out).

    Raises
    ------
    InvalidArgument
        If time_base and values differ in length or are empty.
    """
    t, v = _checked_base(time_base, values)
    dtype = common_float_dtype(t, v)
    target = np.asarray([target_time], dtype=dtype)
    return interpolate_onto(target, t, v)[0]
