"""
Geometry derivation: user-facing shape parameters -> vertices and outlines.

Vertex winding order (relative to the centroid, per axis):

    index:  0    1    2    3    4    5    6    7
    x:      -    -    -    -    +    +    +    +
    y:      -    -    +    +    -    +    +    -
    z:      -    +    +    -    -    -    +    +
    sign:  +1   -1   +1   -1   -1   +1   -1   +1

The prism formulas in gravity.cuboid sum signed corner terms in exactly
this order; reordering the vertices without reordering VERTEX_SIGNS
flips terms and silently breaks the field.

Geometry is derived fresh from the parameters on every call. Nothing
here is cached, since parameters may change between evaluations.
"""

from enum import Enum

import numpy as np

from gravity.rotation import to_world_frame

VERTEX_OCTANTS = np.array([
    [-1.0, -1.0, -1.0],
    [-1.0, -1.0, 1.0],
    [-1.0, 1.0, 1.0],
    [-1.0, 1.0, -1.0],
    [1.0, -1.0, -1.0],
    [1.0, 1.0, -1.0],
    [1.0, 1.0, 1.0],
    [1.0, -1.0, 1.0],
])

VERTEX_SIGNS = (1.0, -1.0, 1.0, -1.0, -1.0, 1.0, -1.0, 1.0)

# The 12 box edges as vertex index pairs
CUBOID_EDGES = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (3, 5), (4, 0), (6, 2), (7, 1),
)


class Plane(Enum):
    XY = "xy"
    XZ = "xz"
    YZ = "yz"

    @property
    def axes(self):
        """Indices of the two world axes kept by the projection."""
        return tuple("xyz".index(c) for c in self.value)

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                "Unknown plane '{}' (expected XY, XZ or YZ)".format(value)
            ) from None


# Vertices (unrotated) whose projections form the silhouette rectangle,
# as a closed loop in traversal order
SILHOUETTE_INDICES = {
    Plane.XY: (0, 3, 5, 4),
    Plane.XZ: (0, 1, 6, 4),
    Plane.YZ: (0, 1, 2, 3),
}


def axis_aligned_vertices(centroid, lengths):
    """
    The 8 corners of an axis-aligned box in canonical winding order.

    Parameters
    ----------
    centroid : sequence of float
        Box centre (x, y, z).
    lengths : sequence of float
        Full edge lengths (Lx, Ly, Lz).

    Returns
    -------
    ndarray, shape (8, 3)
    """
    centroid = np.asarray(centroid, dtype=float)
    half = np.asarray(lengths, dtype=float) / 2.0
    return centroid + VERTEX_OCTANTS * half


def cuboid_vertices(cuboid):
    """Unrotated vertices of a cuboid body."""
    return axis_aligned_vertices(cuboid.centre(), cuboid.lengths())


def rotated_vertices(cuboid):
    """Vertices of a cuboid placed in the world with its rotation applied."""
    return to_world_frame(cuboid_vertices(cuboid), cuboid.centre(), cuboid.rotation())


def project(points, plane):
    """Drop the axis normal to plane: (N, 3) -> (N, 2)."""
    i, j = Plane.parse(plane).axes
    points = np.asarray(points, dtype=float)
    return points[:, [i, j]]


def silhouette(cuboid, plane):
    """
    Closed 4-vertex outline of an unrotated cuboid in plane.

    Rotation is ignored; rotated outlines are drawn by the caller from
    projected_vertices() / edge_segments().

    Returns
    -------
    list of [float, float]
    """
    plane = Plane.parse(plane)
    verts = project(cuboid_vertices(cuboid), plane)
    return [verts[i].tolist() for i in SILHOUETTE_INDICES[plane]]


def projected_vertices(cuboid, plane):
    """All 8 rotated vertices projected onto plane, in winding order."""
    return project(rotated_vertices(cuboid), plane).tolist()


def edge_segments(cuboid, plane):
    """The 12 rotated box edges projected onto plane as [[a, b], ...]."""
    verts = project(rotated_vertices(cuboid), plane)
    return [[verts[i].tolist(), verts[j].tolist()] for i, j in CUBOID_EDGES]


def sphere_outline(sphere, plane, num_points=64):
    """Closed circle loop (first point not repeated) of a sphere in plane."""
    num_points = max(3, int(num_points))
    centre = project(sphere.centre().reshape(1, 3), plane)[0]
    theta = np.linspace(0.0, 2.0 * np.pi, num_points, endpoint=False)
    loop = centre + sphere.radius * np.column_stack([np.cos(theta), np.sin(theta)])
    return loop.tolist()


def outline(body, plane, num_points=64):
    """
    Renderer-facing outline of any body in plane.

    Returns
    -------
    dict
        Cuboid: {"silhouette", "vertices", "edges"}. Sphere: {"outline"}.
    """
    if body.type_name == "cuboid":
        return {
            "silhouette": silhouette(body, plane),
            "vertices": projected_vertices(body, plane),
            "edges": edge_segments(body, plane),
        }
    if body.type_name == "sphere":
        return {"outline": sphere_outline(body, plane, num_points)}
    raise ValueError("No outline for body type '{}'".format(body.type_name))
