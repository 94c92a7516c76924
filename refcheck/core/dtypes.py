# refcheck/core/dtypes.py
"""
Float-only coercion for numeric series.

Every numeric entry point funnels its inputs through `as_float_array`:
- numpy arrays must already be float32 or float64
- plain Python sequences / scalars are converted to float64
- anything that is not 1D is rejected
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .exceptions import InvalidArgument, UnsupportedDtype

FLOAT_DTYPES: tuple[np.dtype, ...] = (np.dtype(np.float32), np.dtype(np.float64))

SeriesLike = Union[np.ndarray, Sequence[float]]


def is_float_dtype(dtype: np.dtype) -> bool:
    return np.dtype(dtype) in FLOAT_DTYPES


def as_float_array(data: SeriesLike, *, name: str = "series") -> np.ndarray:
    """Return `data` as a 1D float32/float64 array (no copy when possible)."""
    if isinstance(data, np.ndarray):
        if not is_float_dtype(data.dtype):
            raise UnsupportedDtype(
                f"`{name}` must be float32 or float64, got {data.dtype}"
            )
        arr = data
    else:
        try:
            arr = np.asarray(data, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise UnsupportedDtype(f"`{name}` is not a sequence of real numbers") from e

    if arr.ndim != 1:
        raise InvalidArgument(f"`{name}` must be 1D, got shape {arr.shape}")
    return arr


def common_float_dtype(*arrays: np.ndarray) -> np.dtype:
    """Result precision of mixing float32/float64 arrays."""
    return np.result_type(*arrays)


def resolve_float_dtype(dtype: object) -> np.dtype:
    """np.dtype(dtype), restricted to float32/float64 ("float32", np.float64, ...)."""
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise UnsupportedDtype(f"not a numpy dtype: {dtype!r}") from e
    if resolved not in FLOAT_DTYPES:
        raise UnsupportedDtype(f"dtype must be float32 or float64, got {resolved}")
    return resolved
