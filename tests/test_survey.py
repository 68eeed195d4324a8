"""
Tests for observation point coercion and survey layouts.
"""

import numpy as np
import pytest

from gravity.survey import as_points, grid, grid_shape, profile, profile_distance


class TestAsPoints:

    def test_single_vector(self):
        pts = as_points([1, 2, 3])
        assert pts.shape == (1, 3)
        assert pts.dtype == float

    def test_batch(self):
        assert as_points([[0, 0, 0], [1, 1, 1]]).shape == (2, 3)

    def test_empty(self):
        assert as_points([]).shape == (0, 3)

    @pytest.mark.parametrize("bad", [
        [1, 2],
        [[1, 2, 3, 4]],
        [[[1, 2, 3]]],
        [[1, float("nan"), 3]],
        [[1, float("inf"), 3]],
        "abc",
        [["a", "b", "c"]],
    ])
    def test_rejects(self, bad):
        with pytest.raises(ValueError):
            as_points(bad)


class TestProfile:

    def test_endpoints_inclusive(self):
        pts = profile([-10, 0, 0], [10, 0, 0], 5)
        assert pts[:, 0].tolist() == [-10.0, -5.0, 0.0, 5.0, 10.0]
        assert np.all(pts[:, 1:] == 0.0)

    def test_distance(self):
        pts = profile([0, 0, 0], [3, 4, 0], 3)
        assert profile_distance(pts).tolist() == [0.0, 2.5, 5.0]

    def test_too_few_points(self):
        with pytest.raises(ValueError):
            profile([0, 0, 0], [1, 0, 0], 1)


class TestGrid:

    def test_shape_and_order(self):
        pts = grid((0, 2), (0, 1), 3, 2, z=1.5)
        assert pts.shape == (6, 3)
        # x varies fastest
        assert pts[:3, 0].tolist() == [0.0, 1.0, 2.0]
        assert pts[:3, 1].tolist() == [0.0, 0.0, 0.0]
        assert pts[3:, 1].tolist() == [1.0, 1.0, 1.0]
        assert np.all(pts[:, 2] == 1.5)

    def test_reshape_restores_layout(self):
        pts = grid((0, 2), (0, 1), 3, 2)
        layout = pts[:, 0].reshape(grid_shape(3, 2))
        assert layout.shape == (2, 3)
        assert layout[1].tolist() == [0.0, 1.0, 2.0]

    def test_needs_samples(self):
        with pytest.raises(ValueError):
            grid((0, 1), (0, 1), 0, 3)
