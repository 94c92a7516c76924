# refcheck/core/timeseries.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .dtypes import SeriesLike, as_float_array
from .exceptions import InvalidTimeSeries, UnsupportedDtype, InvalidArgument
from .interpolation import interpolate_at_time, interpolate_onto


@dataclass(frozen=True, slots=True)
class TimeSeries:
    """
    Immutable time series: 1D time base + 1D float32/float64 values.

    The time base is expected to be non-decreasing but this is not enforced;
    interpolation on an unsorted base gives an undefined result.
    """

    time: np.ndarray = field(repr=False)
    values: np.ndarray = field(repr=False)
    unit: str | None = None
    name: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        try:
            t = as_float_array(self.time, name="time")
            v = as_float_array(self.values, name="values")
        except (InvalidArgument, UnsupportedDtype) as e:
            raise InvalidTimeSeries(str(e)) from e

        if t.size != v.size:
            raise InvalidTimeSeries(
                f"`time` and `values` must have same length, got {t.size} vs {v.size}"
            )
        if t.size > 0 and not np.isfinite(t).all():
            raise InvalidTimeSeries("`time` contains non-finite values (NaN/Inf).")

        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidTimeSeries("`attrs` must be a dict.")

        object.__setattr__(self, "time", t)
        object.__setattr__(self, "values", v)

    @classmethod
    def from_samples(
        cls,
        values: SeriesLike,
        *,
        dt: float,
        t0: float = 0.0,
        unit: str | None = None,
        name: str | None = None,
    ) -> "TimeSeries":
        """Build a uniformly sampled series: time[i] = t0 + i * dt."""
        v = as_float_array(values, name="values")
        t = t0 + np.arange(v.size, dtype=v.dtype) * v.dtype.type(dt)
        return cls(time=t, values=v, unit=unit, name=name)

    @property
    def n(self) -> int:
        return int(self.time.size)

    def __len__(self) -> int:
        return self.n

    @property
    def dtype(self) -> np.dtype:
        return self.values.dtype

    @property
    def t_start(self) -> float | None:
        return None if self.n == 0 else float(self.time[0])

    @property
    def t_end(self) -> float | None:
        return None if self.n == 0 else float(self.time[-1])

    def at(self, t: float) -> np.floating:
        """Interpolated value at time `t` (flat outside the time base)."""
        if self.n == 0:
            raise InvalidTimeSeries("Cannot interpolate an empty TimeSeries.")
        return interpolate_at_time(t, self.time, self.values)

    def resample(self, time: SeriesLike) -> "TimeSeries":
        """Interpolate this series onto another time base."""
        if self.n == 0:
            raise InvalidTimeSeries("Cannot resample an empty TimeSeries.")
        t = as_float_array(time, name="time")
        return TimeSeries(
            time=t,
            values=interpolate_onto(t, self.time, self.values),
            unit=self.unit,
            name=self.name,
            attrs=self.attrs.copy(),
        )

    def slice_time(
        self,
        t_min: float | None = None,
        t_max: float | None = None,
        *,
        closed: str = "both",
    ) -> "TimeSeries":
        if closed not in {"both", "left", "right", "neither"}:
            raise ValueError("closed must be one of: both, left, right, neither")

        if self.n == 0:
            return self

        t = self.time
        mask = np.ones_like(t, dtype=bool)

        if t_min is not None:
            mask &= (t >= t_min) if closed in {"both", "left"} else (t > t_min)
        if t_max is not None:
            mask &= (t <= t_max) if closed in {"both", "right"} else (t < t_max)

        return TimeSeries(
            time=t[mask],
            values=self.values[mask],
            unit=self.unit,
            name=self.name,
            attrs=self.attrs.copy(),
        )

    def shifted(self, offset: float) -> "TimeSeries":
        """Copy with `offset` added to every value (e.g. to build a bound)."""
        return TimeSeries(
            time=self.time,
            values=self.values + self.values.dtype.type(offset),
            unit=self.unit,
            name=self.name,
            attrs=self.attrs.copy(),
        )

    def to_numpy(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        if copy:
            return self.time.copy(), self.values.copy()
        return self.time, self.values
