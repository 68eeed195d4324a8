"""
Rotation matrices about the principal axes.

All matrices act on ROW vectors: a point or field vector v (shape (3,)
or (N, 3)) is rotated by v @ R. In this convention the matrices below
are the transposes of the familiar column-vector forms, and v @ R is a
right-handed rotation of v by the given angle.

A cuboid with rotation angles (x, y, z) is placed in the world by
rotating its centroid-relative vertices with Rx(x) @ Ry(y) @ Rz(z).
Observation points are taken into the body frame with the inverse
composition Rz(-z) @ Ry(-y) @ Rx(-x).
"""

import numpy as np


def rotation_matrix_x(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, s],
        [0.0, -s, c],
    ])


def rotation_matrix_y(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c, 0.0, -s],
        [0.0, 1.0, 0.0],
        [s, 0.0, c],
    ])


def rotation_matrix_z(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c, s, 0.0],
        [-s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def body_rotation(x_angle, y_angle, z_angle):
    """
    Total body rotation R = Rx(x) @ Ry(y) @ Rz(z).

    Body-frame gravity vectors map to the world as g @ R and gradient
    tensors as R.T @ gg @ R.
    """
    return (
        rotation_matrix_x(x_angle)
        @ rotation_matrix_y(y_angle)
        @ rotation_matrix_z(z_angle)
    )


def inverse_body_rotation(x_angle, y_angle, z_angle):
    """Inverse of body_rotation: Rz(-z) @ Ry(-y) @ Rx(-x)."""
    return (
        rotation_matrix_z(-z_angle)
        @ rotation_matrix_y(-y_angle)
        @ rotation_matrix_x(-x_angle)
    )


def to_body_frame(points, centre, angles):
    """
    Rotate world points about centre into an unrotated body frame.

    Parameters
    ----------
    points : ndarray, shape (N, 3)
        Observation points in the world frame.
    centre : ndarray, shape (3,)
        Rotation centre (the body centroid).
    angles : sequence of float
        Body rotation (x, y, z) in radians.

    Returns
    -------
    ndarray, shape (N, 3)
    """
    centre = np.asarray(centre, dtype=float)
    return (points - centre) @ inverse_body_rotation(*angles) + centre


def to_world_frame(points, centre, angles):
    """Inverse of to_body_frame: place body-frame points in the world."""
    centre = np.asarray(centre, dtype=float)
    return (points - centre) @ body_rotation(*angles) + centre


def rotate_vectors(vectors, rotation):
    """Body-frame vectors (N, 3) to world frame: v @ R."""
    return vectors @ rotation


def rotate_tensors(tensors, rotation):
    """Body-frame tensors (N, 3, 3) to world frame: R.T @ T @ R."""
    return rotation.T @ tensors @ rotation
