"""
Cuboid: closed-form field of a uniform rectangular prism (Nagy 1966).

For an observation point P and a corner V_i, let (x, y, z) be the
corner-relative offset P * (1 + eps) - V_i and r its length. Each field
quantity is a signed sum over the 8 corners, in the winding order of
gravity.geometry, multiplied by G * density:

    gx  += s * ( y ln(r+z) + z ln(r+y) - x atan(yz / (r x)) )
    gy  += s * ( z ln(r+x) + x ln(r+z) - y atan(xz / (r y)) )
    gz  += s * ( x ln(r+y) + y ln(r+x) - z atan(xy / (r z)) )
    gxx += s * -atan(yz / (r x))
    gyy += s * -atan(xz / (r y))
    gzz += s * -atan(xy / (r z))
    gxy += s * ln(r+z)
    gxz += s * ln(r+y)
    gyz += s * ln(r+x)

The per-component methods evaluate the prism in its own (unrotated)
frame. calculate() handles rotation: points are taken into the body
frame, the full vector/tensor is evaluated there and rotated back.

Each sum is written out per component on purpose; the axis/term
correspondence is easy to get backwards in a generic loop. Outside the
body gxx + gyy + gzz must vanish (Laplace), which the tests check.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numpy as np

from gravity.body import (
    GravityBody,
    perturbed,
    require_finite,
    require_positive,
    singular_mask,
)
from gravity.components import FieldComponent
from gravity.constants import G
from gravity.geometry import VERTEX_SIGNS, axis_aligned_vertices
from gravity.rotation import body_rotation, rotate_tensors, rotate_vectors, to_body_frame
from gravity.survey import as_points


def _offsets(points, vertex):
    """Corner-relative offsets (x, y, z) and distance r for every point."""
    d = points - vertex
    x = d[:, 0]
    y = d[:, 1]
    z = d[:, 2]
    r = np.sqrt(x * x + y * y + z * z)
    return x, y, z, r


class Cuboid(GravityBody):
    """
    Rectangular prism with a signed density contrast.

    Parameters
    ----------
    x_length, y_length, z_length : float
        Full edge lengths in metres. Must be positive.
    x_centroid, y_centroid, z_centroid : float
        World-frame centre in metres.
    x_rotation, y_rotation, z_rotation : float
        Rotation about the centroid in radians, composed as
        Rx(x) @ Ry(y) @ Rz(z) (see gravity.rotation).
    density : float
        Density contrast in kg/m^3. Negative for a void.

    Raises
    ------
    DegenerateGeometryError
        If any length is zero, negative or not finite.
    """

    type_name = "cuboid"
    fields = (
        "x_length", "y_length", "z_length",
        "x_centroid", "y_centroid", "z_centroid",
        "x_rotation", "y_rotation", "z_rotation",
        "density",
    )

    def __init__(self, x_length=1.0, y_length=1.0, z_length=1.0,
                 x_centroid=0.0, y_centroid=0.0, z_centroid=-1.0,
                 x_rotation=0.0, y_rotation=0.0, z_rotation=0.0,
                 density=-2000.0):
        self.x_length = require_positive("x_length", x_length)
        self.y_length = require_positive("y_length", y_length)
        self.z_length = require_positive("z_length", z_length)
        self.x_centroid = require_finite("x_centroid", x_centroid)
        self.y_centroid = require_finite("y_centroid", y_centroid)
        self.z_centroid = require_finite("z_centroid", z_centroid)
        self.x_rotation = require_finite("x_rotation", x_rotation)
        self.y_rotation = require_finite("y_rotation", y_rotation)
        self.z_rotation = require_finite("z_rotation", z_rotation)
        self.density = require_finite("density", density)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def centre(self):
        return np.array([self.x_centroid, self.y_centroid, self.z_centroid])

    def lengths(self):
        return np.array([self.x_length, self.y_length, self.z_length])

    def rotation(self):
        """Rotation angles (x, y, z) in radians."""
        return (self.x_rotation, self.y_rotation, self.z_rotation)

    def is_rotated(self):
        return any(angle != 0.0 for angle in self.rotation())

    def volume(self):
        return self.x_length * self.y_length * self.z_length

    def vertices(self):
        """Axis-aligned corners in canonical winding order, shape (8, 3)."""
        return axis_aligned_vertices(self.centre(), self.lengths())

    # ------------------------------------------------------------------
    # Rotated evaluation
    # ------------------------------------------------------------------

    def calculate(self, component, points):
        """
        Raw world-frame contribution to one field component.

        Unrotated prisms dispatch straight to the scalar method. Rotated
        prisms evaluate the full body-frame vector or tensor at the
        inverse-rotated points and rotate it back with R = Rx Ry Rz:
        g_world = g_local @ R, gg_world = R.T @ gg_local @ R.
        """
        component = FieldComponent.parse(component)
        points = as_points(points)
        if not self.is_rotated():
            return self.component_method(component)(points)

        local = to_body_frame(points, self.centre(), self.rotation())
        rotation = body_rotation(*self.rotation())
        if component.is_vector:
            return rotate_vectors(self.g(local), rotation)[:, component.index]
        i, j = component.index
        return rotate_tensors(self.gg(local), rotation)[:, i, j]

    # ------------------------------------------------------------------
    # Body-frame field: gravity vector
    # ------------------------------------------------------------------

    def g(self, points):
        points = perturbed(as_points(points))
        g = np.zeros((len(points), 3))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                g[:, 0] += sign * (
                    y * np.log(r + z) + z * np.log(r + y)
                    - x * np.arctan((y * z) / (r * x))
                )
                g[:, 1] += sign * (
                    z * np.log(r + x) + x * np.log(r + z)
                    - y * np.arctan((x * z) / (r * y))
                )
                g[:, 2] += sign * (
                    x * np.log(r + y) + y * np.log(r + x)
                    - z * np.arctan((x * y) / (r * z))
                )
                singular |= singular_mask(r)
        g[singular] = np.nan
        return g * G * self.density

    def gx(self, points):
        points = perturbed(as_points(points))
        gx = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gx += sign * (
                    y * np.log(r + z) + z * np.log(r + y)
                    - x * np.arctan((y * z) / (r * x))
                )
                singular |= singular_mask(r)
        gx[singular] = np.nan
        return gx * G * self.density

    def gy(self, points):
        points = perturbed(as_points(points))
        gy = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gy += sign * (
                    z * np.log(r + x) + x * np.log(r + z)
                    - y * np.arctan((x * z) / (r * y))
                )
                singular |= singular_mask(r)
        gy[singular] = np.nan
        return gy * G * self.density

    def gz(self, points):
        points = perturbed(as_points(points))
        gz = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gz += sign * (
                    x * np.log(r + y) + y * np.log(r + x)
                    - z * np.arctan((x * y) / (r * z))
                )
                singular |= singular_mask(r)
        gz[singular] = np.nan
        return gz * G * self.density

    # ------------------------------------------------------------------
    # Body-frame field: gradient tensor
    # ------------------------------------------------------------------

    def gg(self, points):
        points = perturbed(as_points(points))
        gg = np.zeros((len(points), 3, 3))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gg[:, 0, 0] += sign * -np.arctan((y * z) / (r * x))
                gg[:, 1, 1] += sign * -np.arctan((x * z) / (r * y))
                gg[:, 2, 2] += sign * -np.arctan((x * y) / (r * z))
                gg[:, 0, 1] += sign * np.log(r + z)
                gg[:, 0, 2] += sign * np.log(r + y)
                gg[:, 1, 2] += sign * np.log(r + x)
                singular |= singular_mask(r)
        gg[:, 1, 0] = gg[:, 0, 1]
        gg[:, 2, 0] = gg[:, 0, 2]
        gg[:, 2, 1] = gg[:, 1, 2]
        gg[singular] = np.nan
        return gg * G * self.density

    def gxx(self, points):
        points = perturbed(as_points(points))
        gxx = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gxx += sign * -np.arctan((y * z) / (r * x))
                singular |= singular_mask(r)
        gxx[singular] = np.nan
        return gxx * G * self.density

    def gyy(self, points):
        points = perturbed(as_points(points))
        gyy = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gyy += sign * -np.arctan((x * z) / (r * y))
                singular |= singular_mask(r)
        gyy[singular] = np.nan
        return gyy * G * self.density

    def gzz(self, points):
        points = perturbed(as_points(points))
        gzz = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gzz += sign * -np.arctan((x * y) / (r * z))
                singular |= singular_mask(r)
        gzz[singular] = np.nan
        return gzz * G * self.density

    def gxy(self, points):
        points = perturbed(as_points(points))
        gxy = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gxy += sign * np.log(r + z)
                singular |= singular_mask(r)
        gxy[singular] = np.nan
        return gxy * G * self.density

    def gxz(self, points):
        points = perturbed(as_points(points))
        gxz = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gxz += sign * np.log(r + y)
                singular |= singular_mask(r)
        gxz[singular] = np.nan
        return gxz * G * self.density

    def gyz(self, points):
        points = perturbed(as_points(points))
        gyz = np.zeros(len(points))
        singular = np.zeros(len(points), dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for sign, vertex in zip(VERTEX_SIGNS, self.vertices()):
                x, y, z, r = _offsets(points, vertex)
                gyz += sign * np.log(r + x)
                singular |= singular_mask(r)
        gyz[singular] = np.nan
        return gyz * G * self.density

    def __str__(self):
        return "x_length: {}, y_length: {}, z_length: {}, volume: {}, mass: {}, centre: {}".format(
            self.x_length, self.y_length, self.z_length,
            self.volume(), self.mass(), self.centre().tolist(),
        )
