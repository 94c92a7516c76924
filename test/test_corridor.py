# test/test_corridor.py
import numpy as np
import pytest

from refcheck.core.corridor import Corridor, is_within_2d_corridor, signed_side
from refcheck.core.exceptions import InvalidArgument


# Straight corridor 0 <= x <= 2, both boundaries running in +y.
X_LEFT = [0.0, 0.0, 0.0, 0.0]
Y_LEFT = [0.0, 1.0, 2.0, 3.0]
X_RIGHT = [2.0, 2.0, 2.0, 2.0]
Y_RIGHT = [0.0, 1.0, 2.0, 3.0]


def _inside(x, y):
    return is_within_2d_corridor(x, y, X_LEFT, Y_LEFT, X_RIGHT, Y_RIGHT)


def test_points_inside_corridor():
    assert _inside([1.0, 1.0, 1.0], [0.5, 1.5, 2.5])
    assert _inside([1.0], [0.5])


def test_point_left_of_left_boundary_is_outside():
    assert not _inside([-1.0], [0.5])
    assert not _inside([-0.5], [1.0])


def test_point_right_of_right_boundary_is_outside():
    assert not _inside([3.0], [1.0])


def test_one_outside_point_fails_whole_trajectory():
    assert not _inside([1.0, 1.0, -1.0], [0.5, 1.5, 2.5])


def test_boundary_points_are_inside():
    assert _inside([0.0, 2.0, 1.0], [1.0, 1.0, 0.0])


def test_empty_trajectory_passes():
    assert _inside([], [])


def test_mismatched_test_vectors_raise():
    with pytest.raises(InvalidArgument):
        _inside([1.0, 2.0], [1.0, 2.0, 3.0])


def test_boundary_with_single_point_raises():
    with pytest.raises(InvalidArgument):
        is_within_2d_corridor([1.0], [1.0], [1.0], [1.0], X_RIGHT, Y_RIGHT)


def test_boundary_with_inconsistent_sizes_raises():
    with pytest.raises(InvalidArgument):
        is_within_2d_corridor([1.0], [1.0], X_LEFT, Y_LEFT, X_RIGHT, [0.0, 1.0])


def test_signed_side_shape_and_sign():
    px = np.array([1.0, -1.0])
    py = np.array([0.5, 0.5])
    cross = signed_side(px, py, np.array(X_LEFT), np.array(Y_LEFT))
    assert cross.shape == (2, 3)
    assert np.all(cross[0] < 0)  # right of an upward line
    assert np.all(cross[1] > 0)  # left of it


def test_diagonal_corridor():
    # Band between y = x + 1 (left) and y = x - 1 (right), heading +x/+y.
    xs = [0.0, 5.0]
    assert is_within_2d_corridor(
        [1.0, 3.0], [1.5, 2.2],
        xs, [1.0, 6.0],
        xs, [-1.0, 4.0],
    )
    assert not is_within_2d_corridor(
        [1.0], [2.5],
        xs, [1.0, 6.0],
        xs, [-1.0, 4.0],
    )


class TestCorridorObject:
    def test_contains_matches_free_function(self):
        c = Corridor(
            x_left=np.array(X_LEFT), y_left=np.array(Y_LEFT),
            x_right=np.array(X_RIGHT), y_right=np.array(Y_RIGHT),
        )
        assert c.contains([1.0], [0.5])
        assert not c.contains([-1.0], [0.5])

    def test_validates_on_construction(self):
        with pytest.raises(InvalidArgument):
            Corridor(x_left=[0.0], y_left=[0.0], x_right=X_RIGHT, y_right=Y_RIGHT)

    def test_from_offsets_around_centre_line(self):
        x = np.linspace(0.0, 4.0, 9)
        y = np.full_like(x, 1.0)
        c = Corridor.from_offsets(x, y, 0.2, name="lane")

        assert c.name == "lane"
        assert np.allclose(c.y_left, 1.2)
        assert np.allclose(c.y_right, 0.8)
        assert c.contains([0.5, 2.0, 3.5], [1.1, 0.9, 1.0])
        assert not c.contains([2.0], [1.3])
        assert not c.contains([2.0], [0.7])

    def test_from_offsets_rejects_negative_width(self):
        with pytest.raises(InvalidArgument):
            Corridor.from_offsets([0.0, 1.0], [0.0, 0.0], -0.1)


def test_nan_point_is_outside_corridor():
    assert not _inside([np.nan], [0.5])
    assert not _inside([1.0], [np.nan])
    assert not _inside([1.0, np.nan], [0.5, 1.0])
