"""
Field component selector.

The nine measurable quantities: the gravity vector (Gx, Gy, Gz) and the
upper triangle of the symmetric gradient tensor (Gxx, Gxy, Gxz, Gyy,
Gyz, Gzz). Each member knows its display scale and where it sits in the
vector or tensor, so dispatch never needs a string switch.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from enum import Enum

from gravity.constants import VECTOR_SCALE, TENSOR_SCALE


class FieldComponent(Enum):
    GX = "gx"
    GY = "gy"
    GZ = "gz"
    GXX = "gxx"
    GXY = "gxy"
    GXZ = "gxz"
    GYY = "gyy"
    GYZ = "gyz"
    GZZ = "gzz"

    @property
    def label(self):
        """Display label, e.g. 'Gxz'."""
        return "G" + self.value[1:]

    @property
    def is_vector(self):
        return len(self.value) == 2

    @property
    def is_tensor(self):
        return len(self.value) == 3

    @property
    def scale(self):
        """Display scale applied once to an aggregated field."""
        return VECTOR_SCALE if self.is_vector else TENSOR_SCALE

    @property
    def unit(self):
        return "uGal" if self.is_vector else "E"

    @property
    def index(self):
        """
        Position in the gravity vector or gradient tensor.

        Returns
        -------
        int or tuple of int
            Vector index for Gx/Gy/Gz, (row, col) for tensor components.
        """
        axes = ["xyz".index(c) for c in self.value[1:]]
        if self.is_vector:
            return axes[0]
        return tuple(axes)

    @classmethod
    def parse(cls, value):
        """
        Resolve a component from a member or a case-insensitive name.

        Accepts 'Gz', 'gz', 'GZ' and the symmetric aliases 'Gyx', 'Gzx',
        'Gzy'.

        Raises
        ------
        ValueError
            If the name does not denote one of the nine components.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError("Field component must be a string, got {!r}".format(value))
        name = value.strip().lower()
        if len(name) == 3 and name[0] == "g" and name[1] > name[2]:
            name = "g" + name[2] + name[1]
        try:
            return cls(name)
        except ValueError:
            raise ValueError("Unknown field component '{}'".format(value)) from None


VECTOR_COMPONENTS = (FieldComponent.GX, FieldComponent.GY, FieldComponent.GZ)

TENSOR_COMPONENTS = (
    FieldComponent.GXX,
    FieldComponent.GXY,
    FieldComponent.GXZ,
    FieldComponent.GYY,
    FieldComponent.GYZ,
    FieldComponent.GZZ,
)

DIAGONAL_COMPONENTS = (FieldComponent.GXX, FieldComponent.GYY, FieldComponent.GZZ)
