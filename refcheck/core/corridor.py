# refcheck/core/corridor.py
"""
2D corridor containment.

A corridor is bounded by two polylines traversed in the same direction
(e.g. both from start to end of a track). For a segment (x1, y1) -> (x2, y2)
the signed area

    cross = (x2 - x1) * (py - y1) - (y2 - y1) * (px - x1)

is positive when the point lies to the left of the segment. A point is
inside when it lies on or to the right of every left-boundary segment
(cross <= 0) and on or to the left of every right-boundary segment
(cross >= 0). Each segment is treated as an infinite half-plane, so the
test is exact for convex corridors only.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .dtypes import SeriesLike, as_float_array
from .exceptions import InvalidArgument


def _boundary(x: SeriesLike, y: SeriesLike, side: str) -> tuple[np.ndarray, np.ndarray]:
    bx = as_float_array(x, name=f"x_{side}")
    by = as_float_array(y, name=f"y_{side}")
    if bx.size != by.size:
        raise InvalidArgument(
            f"{side} boundary vectors must have consistent sizes, got {bx.size} vs {by.size}"
        )
    if bx.size < 2:
        raise InvalidArgument(f"{side} boundary must have at least 2 points, got {bx.size}")
    return bx, by


def signed_side(
    px: np.ndarray,
    py: np.ndarray,
    bx: np.ndarray,
    by: np.ndarray,
) -> np.ndarray:
    """
    Cross product of every point against every boundary segment.

    Returns an array of shape (n_points, n_segments).
    """
    x1, y1 = bx[:-1], by[:-1]
    dx, dy = np.diff(bx), np.diff(by)
    return dx * (py[:, None] - y1) - dy * (px[:, None] - x1)


def is_within_2d_corridor(
    x_test: SeriesLike,
    y_test: SeriesLike,
    x_left: SeriesLike,
    y_left: SeriesLike,
    x_right: SeriesLike,
    y_right: SeriesLike,
) -> bool:
    """
    True iff every test point lies inside the corridor (boundaries included).

    Raises
    ------
    InvalidArgument
        If x_test/y_test differ in length, a boundary's coordinate vectors
        differ in length, or a boundary has fewer than 2 points.
    """
    px = as_float_array(x_test, name="x_test")
    py = as_float_array(y_test, name="y_test")
    if px.size != py.size:
        raise InvalidArgument(
            f"Test vectors must have the same size, got {px.size} vs {py.size}"
        )
    lx, ly = _boundary(x_left, y_left, "left")
    rx, ry = _boundary(x_right, y_right, "right")

    if px.size == 0:
        return True

    # Written as containment so a NaN coordinate never counts as inside.
    inside_left = np.all(signed_side(px, py, lx, ly) <= 0)
    inside_right = np.all(signed_side(px, py, rx, ry) >= 0)
    return bool(inside_left and inside_right)


@dataclass(frozen=True, slots=True)
class Corridor:
    """Validated left/right boundary polylines."""

    x_left: np.ndarray = field(repr=False)
    y_left: np.ndarray = field(repr=False)
    x_right: np.ndarray = field(repr=False)
    y_right: np.ndarray = field(repr=False)
    name: str | None = None

    def __post_init__(self) -> None:
        lx, ly = _boundary(self.x_left, self.y_left, "left")
        rx, ry = _boundary(self.x_right, self.y_right, "right")
        object.__setattr__(self, "x_left", lx)
        object.__setattr__(self, "y_left", ly)
        object.__setattr__(self, "x_right", rx)
        object.__setattr__(self, "y_right", ry)

    @classmethod
    def from_offsets(
        cls,
        x: SeriesLike,
        y: SeriesLike,
        half_width: float,
        *,
        name: str | None = None,
    ) -> "Corridor":
        """
        Corridor of +/- `half_width` around a centre line, offset along y.

        With the centre line running in +x, the left boundary is the upper
        edge (y + half_width) and the right boundary the lower one.
        """
        cx = as_float_array(x, name="x")
        cy = as_float_array(y, name="y")
        if half_width < 0:
            raise InvalidArgument(f"half_width must be >= 0, got {half_width}")
        return cls(
            x_left=cx,
            y_left=cy + half_width,
            x_right=cx,
            y_right=cy - half_width,
            name=name,
        )

    def contains(self, x: SeriesLike, y: SeriesLike) -> bool:
        return is_within_2d_corridor(
            x, y, self.x_left, self.y_left, self.x_right, self.y_right
        )
