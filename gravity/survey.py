"""
Observation points: coercion and simple survey layouts.

The forward model only needs an ordered (N, 3) array of positions.
Profiles and grids are conveniences for callers that sample the field
along a line or over a horizontal plane.
"""

import numpy as np


def as_points(points):
    """
    Coerce one 3-vector or a sequence of 3-vectors into an (N, 3) array.

    Parameters
    ----------
    points : array_like
        Shape (3,) or (N, 3).

    Returns
    -------
    ndarray, shape (N, 3), dtype float

    Raises
    ------
    ValueError
        If the input has the wrong shape or contains NaN/Inf.
    """
    try:
        arr = np.asarray(points, dtype=float)
    except (TypeError, ValueError):
        raise ValueError("Observation points must be numeric 3-vectors") from None
    if arr.ndim == 1 and arr.shape[0] == 3:
        arr = arr.reshape(1, 3)
    if arr.size == 0 and arr.ndim <= 2:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(
            "Observation points must have shape (N, 3), got {}".format(arr.shape)
        )
    if not np.all(np.isfinite(arr)):
        raise ValueError("Observation points must be finite")
    return arr


def profile(start, end, num_points):
    """
    Evenly spaced points on the segment start -> end, both inclusive.

    Parameters
    ----------
    start, end : sequence of float
        Segment end points (x, y, z).
    num_points : int
        Number of samples, at least 2.

    Returns
    -------
    ndarray, shape (num_points, 3)
    """
    num_points = int(num_points)
    if num_points < 2:
        raise ValueError("A profile needs at least 2 points")
    start = as_points(start)[0]
    end = as_points(end)[0]
    t = np.linspace(0.0, 1.0, num_points)
    return start + t[:, np.newaxis] * (end - start)


def profile_distance(points):
    """Distance along a profile from its first point, shape (N,)."""
    points = as_points(points)
    if len(points) == 0:
        return np.zeros(0)
    return np.linalg.norm(points - points[0], axis=1)


def grid(x_range, y_range, num_x, num_y, z=0.0):
    """
    Horizontal grid of observation points at height z.

    Points are flattened row-major: y varies slowest, x fastest, so
    values.reshape(grid_shape(num_x, num_y)) restores the 2-D layout.

    Parameters
    ----------
    x_range, y_range : (float, float)
        Inclusive (min, max) extents.
    num_x, num_y : int
        Number of samples per axis, each at least 1.
    z : float
        Observation height.

    Returns
    -------
    ndarray, shape (num_x * num_y, 3)
    """
    num_x, num_y = int(num_x), int(num_y)
    if num_x < 1 or num_y < 1:
        raise ValueError("Grid needs at least one sample per axis")
    xs = np.linspace(float(x_range[0]), float(x_range[1]), num_x)
    ys = np.linspace(float(y_range[0]), float(y_range[1]), num_y)
    xx, yy = np.meshgrid(xs, ys)
    zz = np.full_like(xx, float(z))
    return np.column_stack([xx.ravel(), yy.ravel(), zz.ravel()])


def grid_shape(num_x, num_y):
    """Array shape that restores a flattened grid: (num_y, num_x)."""
    return (int(num_y), int(num_x))
