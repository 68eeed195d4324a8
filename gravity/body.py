"""
GravityBody: the capability set shared by every solid source body.

A body is pure geometry plus a signed density contrast. It computes
the raw (SI, unscaled) gravity vector and gradient tensor it induces at
a batch of observation points. Display scaling is the aggregator's
job (gravity.engine), never the body's.

Concrete variants:
    Cuboid  - gravity.cuboid (rotated rectangular prism, Nagy 1966)
    Sphere  - gravity.sphere (equivalent point mass)

Adding a variant means subclassing GravityBody and adding it to
BODY_TYPES; the abstract methods make the interface checked at
instantiation time.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math
from abc import ABC, abstractmethod

import numpy as np

from gravity.components import FieldComponent
from gravity.constants import OBSERVATION_PERTURBATION
from gravity.survey import as_points


class DegenerateGeometryError(ValueError):
    """A length or radius is zero, negative or not finite."""


def require_positive(name, value):
    """Return value as float, or raise DegenerateGeometryError."""
    value = _as_float(name, value)
    if not (math.isfinite(value) and value > 0.0):
        raise DegenerateGeometryError(
            "{} must be positive, got {}".format(name, value)
        )
    return value


def require_finite(name, value):
    """Return value as float, or raise ValueError if it is NaN/Inf."""
    value = _as_float(name, value)
    if not math.isfinite(value):
        raise ValueError("{} must be finite, got {}".format(name, value))
    return value


def _as_float(name, value):
    if isinstance(value, bool):
        raise ValueError("{} must be a number, got {!r}".format(name, value))
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError("{} must be a number, got {!r}".format(name, value)) from None
    return value


def perturbed(points):
    """Observation points nudged off exact alignments: P * (1 + eps)."""
    return points * (1.0 + OBSERVATION_PERTURBATION)


class GravityBody(ABC):
    """
    Abstract base class for a gravity source body.

    Every scalar field method accepts one 3-vector or an (N, 3) array
    of observation points and returns an (N,) array of raw values
    (m/s^2 for the vector, 1/s^2 for the tensor). A point that
    coincides with a singular location of the body evaluates to NaN.

    Class Attributes
    ----------------
    type_name : str
        Serialization tag (e.g. "cuboid").
    fields : tuple of str
        Geometry parameter names, in constructor order.
    """

    type_name = ""
    fields = ()

    # -- geometry ---------------------------------------------------------

    @abstractmethod
    def centre(self):
        """Centroid as an ndarray of shape (3,)."""

    @abstractmethod
    def volume(self):
        """Volume in m^3."""

    def mass(self):
        """Anomalous mass in kg; negative for a void."""
        return self.density * self.volume()

    # -- field ------------------------------------------------------------

    @abstractmethod
    def g(self, points):
        """Gravity vector, shape (N, 3)."""

    @abstractmethod
    def gg(self, points):
        """Symmetric gradient tensor, shape (N, 3, 3)."""

    @abstractmethod
    def gx(self, points):
        pass

    @abstractmethod
    def gy(self, points):
        pass

    @abstractmethod
    def gz(self, points):
        pass

    @abstractmethod
    def gxx(self, points):
        pass

    @abstractmethod
    def gxy(self, points):
        pass

    @abstractmethod
    def gxz(self, points):
        pass

    @abstractmethod
    def gyy(self, points):
        pass

    @abstractmethod
    def gyz(self, points):
        pass

    @abstractmethod
    def gzz(self, points):
        pass

    def component_method(self, component):
        """Bound scalar method for a FieldComponent (e.g. self.gxz)."""
        return getattr(self, FieldComponent.parse(component).value)

    def calculate(self, component, points):
        """
        Raw contribution of this body to one field component.

        Parameters
        ----------
        component : FieldComponent or str
        points : array_like, shape (3,) or (N, 3)

        Returns
        -------
        ndarray, shape (N,)
            Unscaled SI values, NaN at singular points.
        """
        method = self.component_method(component)
        return method(as_points(points))

    # -- serialization ----------------------------------------------------

    def parameters(self):
        """Geometry parameters as a plain dict, in constructor order."""
        return {name: getattr(self, name) for name in self.fields}

    def to_dict(self):
        """Geometry subset of the persisted document, tagged by type."""
        data = {"type": self.type_name}
        data.update(self.parameters())
        return data

    def describe(self):
        """Summary used by the service layer: parameters plus derived values."""
        return {
            "type": self.type_name,
            "parameters": self.parameters(),
            "volume": self.volume(),
            "mass": self.mass(),
            "centre": self.centre().tolist(),
        }

    def copy(self, **changes):
        """New body of the same type with some parameters replaced."""
        params = self.parameters()
        params.update(changes)
        return type(self)(**params)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.parameters() == other.parameters()

    def __repr__(self):
        args = ", ".join("{}={}".format(k, v) for k, v in self.parameters().items())
        return "{}({})".format(type(self).__name__, args)


def singular_mask(*radii):
    """True where any of the given distance arrays is exactly zero."""
    mask = np.zeros(np.shape(radii[0]), dtype=bool)
    for r in radii:
        mask |= (r == 0.0)
    return mask
