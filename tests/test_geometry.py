"""
Tests for vertex derivation and 2-D outlines (gravity.geometry).
"""

import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from gravity.cuboid import Cuboid
from gravity.geometry import (
    CUBOID_EDGES,
    VERTEX_OCTANTS,
    VERTEX_SIGNS,
    Plane,
    axis_aligned_vertices,
    cuboid_vertices,
    edge_segments,
    outline,
    project,
    projected_vertices,
    rotated_vertices,
    silhouette,
    sphere_outline,
)
from gravity.sphere import Sphere


class TestWindingOrder:
    """The signed corner sums depend on this exact order."""

    def test_signs_follow_octants(self):
        for octant, sign in zip(VERTEX_OCTANTS, VERTEX_SIGNS):
            assert sign == -np.prod(octant)

    def test_signs_sum_to_zero(self):
        assert sum(VERTEX_SIGNS) == 0

    def test_first_and_last_vertex(self):
        verts = axis_aligned_vertices([0.0, 0.0, -5.5], [10.0, 10.0, 10.0])
        assert verts[0].tolist() == [-5.0, -5.0, -10.5]
        assert verts[6].tolist() == [5.0, 5.0, -0.5]
        assert verts[7].tolist() == [5.0, -5.0, -0.5]

    def test_vertices_are_distinct_corners(self):
        verts = axis_aligned_vertices([1.0, 2.0, 3.0], [2.0, 4.0, 6.0])
        assert len({tuple(v) for v in verts.tolist()}) == 8
        assert verts.min(axis=0).tolist() == [0.0, 0.0, 0.0]
        assert verts.max(axis=0).tolist() == [2.0, 4.0, 6.0]


class TestEdges:

    def test_twelve_unique_edges(self):
        assert len(CUBOID_EDGES) == 12
        assert len({frozenset(e) for e in CUBOID_EDGES}) == 12

    def test_edges_join_adjacent_corners(self):
        for i, j in CUBOID_EDGES:
            differ = np.count_nonzero(VERTEX_OCTANTS[i] != VERTEX_OCTANTS[j])
            assert differ == 1

    def test_edge_lengths_survive_rotation(self):
        block = Cuboid(x_length=3.0, y_length=2.0, z_length=1.0,
                       x_rotation=0.4, y_rotation=0.2, z_rotation=-0.9)
        verts = rotated_vertices(block)
        lengths = sorted(
            round(float(np.linalg.norm(verts[i] - verts[j])), 9) for i, j in CUBOID_EDGES
        )
        assert lengths == [1.0] * 4 + [2.0] * 4 + [3.0] * 4


class TestRotatedVertices:

    def test_unrotated_is_axis_aligned(self):
        block = Cuboid(x_length=2.0, y_length=3.0, z_length=4.0)
        assert np.allclose(rotated_vertices(block), cuboid_vertices(block))

    def test_matches_scipy(self):
        block = Cuboid(x_length=2.0, y_length=3.0, z_length=4.0,
                       x_centroid=1.0, y_centroid=-1.0, z_centroid=-6.0,
                       x_rotation=0.3, y_rotation=-0.6, z_rotation=1.1)
        rot = Rotation.from_euler("xyz", block.rotation())
        expected = rot.apply(cuboid_vertices(block) - block.centre()) + block.centre()
        assert np.allclose(rotated_vertices(block), expected)

    def test_centroid_is_preserved(self):
        block = Cuboid(x_centroid=4.0, y_centroid=1.0, z_centroid=-3.0, z_rotation=0.8)
        assert np.allclose(rotated_vertices(block).mean(axis=0), block.centre())


class TestProjections:

    @pytest.fixture
    def block(self):
        return Cuboid(x_length=4.0, y_length=2.0, z_length=1.0,
                      x_centroid=10.0, y_centroid=20.0, z_centroid=-3.0)

    def test_plane_parse(self):
        assert Plane.parse("XZ") is Plane.XZ
        assert Plane.parse(Plane.YZ) is Plane.YZ
        assert Plane.XZ.axes == (0, 2)
        with pytest.raises(ValueError):
            Plane.parse("xw")

    def test_project_drops_normal_axis(self):
        pts = np.array([[1.0, 2.0, 3.0]])
        assert project(pts, "xy").tolist() == [[1.0, 2.0]]
        assert project(pts, "xz").tolist() == [[1.0, 3.0]]
        assert project(pts, "yz").tolist() == [[2.0, 3.0]]

    def test_silhouette_xy(self, block):
        assert silhouette(block, "xy") == [
            [8.0, 19.0], [8.0, 21.0], [12.0, 21.0], [12.0, 19.0],
        ]

    def test_silhouette_xz(self, block):
        assert silhouette(block, "xz") == [
            [8.0, -3.5], [8.0, -2.5], [12.0, -2.5], [12.0, -3.5],
        ]

    def test_silhouette_yz(self, block):
        assert silhouette(block, "yz") == [
            [19.0, -3.5], [19.0, -2.5], [21.0, -2.5], [21.0, -3.5],
        ]

    def test_projected_vertices_and_edges(self, block):
        assert len(projected_vertices(block, "xz")) == 8
        segments = edge_segments(block, "xz")
        assert len(segments) == 12
        assert all(len(seg) == 2 and len(seg[0]) == 2 for seg in segments)

    def test_sphere_outline(self):
        ball = Sphere(x_centroid=1.0, y_centroid=2.0, z_centroid=-3.0, radius=0.5)
        loop = np.array(sphere_outline(ball, "xz", num_points=32))
        assert loop.shape == (32, 2)
        dist = np.linalg.norm(loop - [1.0, -3.0], axis=1)
        assert np.allclose(dist, 0.5)

    def test_outline_dispatch(self, block):
        ball = Sphere()
        assert set(outline(block, "xy")) == {"silhouette", "vertices", "edges"}
        assert set(outline(ball, "xy")) == {"outline"}

    def test_quarter_turn_swaps_footprint(self):
        block = Cuboid(x_length=4.0, y_length=2.0, z_length=1.0, z_rotation=math.pi / 2)
        verts = np.array(projected_vertices(block, "xy"))
        assert verts[:, 0].max() == pytest.approx(1.0)
        assert verts[:, 1].max() == pytest.approx(2.0)
