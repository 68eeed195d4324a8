"""
Sphere: field of a uniform sphere, exact as an equivalent point mass.

With d = P * (1 + eps) - centre, r2 = |d|^2 and
C = -(4/3) * pi * G * radius^3 * density (that is, -G * mass):

    gx  = C * x / r2^(3/2)
    gxx = (C / r2^(3/2)) * (1 - 3 x^2 / r2)
    gxy = -3 C x y / r2^(5/2)

and cyclic permutations for the other components. Valid outside the
sphere; the sphere is isotropic so rotation never applies.

Gxy is the y-derivative of gx, so it carries x * y. The desktop editor
that shares this model format used y * z here, which repeats Gyz.
"""

import numpy as np

from gravity.body import GravityBody, perturbed, require_finite, require_positive
from gravity.constants import FOUR_THIRDS_PI, G
from gravity.survey import as_points


class Sphere(GravityBody):
    """
    Uniform sphere with a signed density contrast.

    Parameters
    ----------
    x_centroid, y_centroid, z_centroid : float
        Centre in metres.
    radius : float
        Radius in metres. Must be positive.
    density : float
        Density contrast in kg/m^3. Negative for a void.

    Raises
    ------
    DegenerateGeometryError
        If the radius is zero, negative or not finite.
    """

    type_name = "sphere"
    fields = ("x_centroid", "y_centroid", "z_centroid", "radius", "density")

    def __init__(self, x_centroid=0.0, y_centroid=0.0, z_centroid=-1.0,
                 radius=1.0, density=-2000.0):
        self.x_centroid = require_finite("x_centroid", x_centroid)
        self.y_centroid = require_finite("y_centroid", y_centroid)
        self.z_centroid = require_finite("z_centroid", z_centroid)
        self.radius = require_positive("radius", radius)
        self.density = require_finite("density", density)

    def centre(self):
        return np.array([self.x_centroid, self.y_centroid, self.z_centroid])

    def volume(self):
        return FOUR_THIRDS_PI * self.radius ** 3

    def _constant(self):
        return -FOUR_THIRDS_PI * G * self.radius ** 3 * self.density

    def _offsets(self, points):
        """Centre-relative offsets (x, y, z), squared distance r2, and C."""
        d = perturbed(as_points(points)) - self.centre()
        x = d[:, 0]
        y = d[:, 1]
        z = d[:, 2]
        return x, y, z, x * x + y * y + z * z, self._constant()

    @staticmethod
    def _finish(values, r2):
        values[r2 == 0.0] = np.nan
        return values

    # ------------------------------------------------------------------
    # Gravity vector
    # ------------------------------------------------------------------

    def g(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            g = c * np.column_stack([x, y, z]) / r2[:, np.newaxis] ** 1.5
        g[r2 == 0.0] = np.nan
        return g

    def gx(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish(c * x / r2 ** 1.5, r2)

    def gy(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish(c * y / r2 ** 1.5, r2)

    def gz(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish(c * z / r2 ** 1.5, r2)

    # ------------------------------------------------------------------
    # Gradient tensor
    # ------------------------------------------------------------------

    def gg(self, points):
        x, y, z, r2, c = self._offsets(points)
        d = np.column_stack([x, y, z])
        with np.errstate(divide="ignore", invalid="ignore"):
            outer = d[:, :, np.newaxis] * d[:, np.newaxis, :]
            gg = (c / r2 ** 1.5)[:, np.newaxis, np.newaxis] * (
                np.eye(3) - 3.0 * outer / r2[:, np.newaxis, np.newaxis]
            )
        gg[r2 == 0.0] = np.nan
        return gg

    def gxx(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish((c / r2 ** 1.5) * (1.0 - 3.0 * x * x / r2), r2)

    def gyy(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish((c / r2 ** 1.5) * (1.0 - 3.0 * y * y / r2), r2)

    def gzz(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish((c / r2 ** 1.5) * (1.0 - 3.0 * z * z / r2), r2)

    def gxy(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish(-3.0 * c * x * y / r2 ** 2.5, r2)

    def gxz(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish(-3.0 * c * x * z / r2 ** 2.5, r2)

    def gyz(self, points):
        x, y, z, r2, c = self._offsets(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._finish(-3.0 * c * y * z / r2 ** 2.5, r2)

    def __str__(self):
        return "radius: {}, volume: {}, mass: {}, centre: {}".format(
            self.radius, self.volume(), self.mass(), self.centre().tolist(),
        )
