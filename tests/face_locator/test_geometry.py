"""Unit tests for per-face geometry."""

import numpy as np
import pytest

from face_locator.errors import DegenerateFaceError, FaceIndexError
from face_locator.geometry import (
    barycentric,
    centroid,
    face_plane,
    face_vertices,
    plane_of,
)
from face_locator.mesh import TriangleMesh


@pytest.fixture
def collinear_mesh():
    return TriangleMesh(
        verts=[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0, 0.0]],
        connectivity=[[0, 1, 2]],
    )


def test_centroid_single_triangle(simple_triangle_mesh):
    np.testing.assert_allclose(
        centroid(simple_triangle_mesh, 0), [1 / 3, 1 / 3, 0.0], atol=1e-12
    )


def test_centroid_is_vertex_mean(two_triangle_square):
    for face in range(two_triangle_square.face_count()):
        expected = np.mean(face_vertices(two_triangle_square, face), axis=0)
        np.testing.assert_allclose(centroid(two_triangle_square, face), expected)


def test_centroid_out_of_range(simple_triangle_mesh):
    with pytest.raises(FaceIndexError) as excinfo:
        centroid(simple_triangle_mesh, 1)
    assert excinfo.value.face_index == 1
    assert excinfo.value.face_count == 1


def test_face_index_must_be_integral(two_triangle_square):
    with pytest.raises(TypeError):
        centroid(two_triangle_square, 0.9)
    with pytest.raises(TypeError):
        face_vertices(two_triangle_square, 1.0)
    np.testing.assert_allclose(
        centroid(two_triangle_square, np.int64(1)), centroid(two_triangle_square, 1)
    )


def test_plane_of(simple_triangle_mesh):
    plane = plane_of(simple_triangle_mesh, 0)
    np.testing.assert_allclose(plane.normal, [0.0, 0.0, 1.0], atol=1e-12)
    assert plane.d == pytest.approx(0.0)


def test_plane_of_degenerate(collinear_mesh):
    assert plane_of(collinear_mesh, 0) is None
    with pytest.raises(DegenerateFaceError) as excinfo:
        face_plane(collinear_mesh, 0)
    assert excinfo.value.face_index == 0


def test_barycentric_known_point():
    p1 = np.array([0.0, 0.0, 0.0])
    p2 = np.array([1.0, 0.0, 0.0])
    p3 = np.array([0.0, 1.0, 0.0])
    alpha, beta, gamma = barycentric(np.array([0.25, 0.25, 0.0]), p1, p2, p3)
    assert alpha == pytest.approx(0.5)
    assert beta == pytest.approx(0.25)
    assert gamma == pytest.approx(0.25)


def test_barycentric_weights_reconstruct_point():
    rng = np.random.default_rng(0)
    p1 = np.array([0.2, -1.0, 0.5])
    p2 = np.array([3.0, 0.4, -0.2])
    p3 = np.array([-0.5, 2.0, 1.0])
    for _ in range(20):
        s, t = rng.uniform(-2.0, 2.0, size=2)
        point = p1 + s * (p2 - p1) + t * (p3 - p1)
        alpha, beta, gamma = barycentric(point, p1, p2, p3)
        assert alpha + beta + gamma == pytest.approx(1.0)
        np.testing.assert_allclose(alpha * p1 + beta * p2 + gamma * p3, point, atol=1e-9)


def test_barycentric_degenerate():
    p = np.zeros(3)
    with pytest.raises(DegenerateFaceError):
        barycentric(p, p, np.array([1.0, 0.0, 0.0]), np.array([2.0, 0.0, 0.0]))


def test_geometry_through_generic_adapter(dict_mesh):
    np.testing.assert_allclose(centroid(dict_mesh, 0), [1 / 3, 1 / 3, 0.0])
    assert plane_of(dict_mesh, 0) is not None
