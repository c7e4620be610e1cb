from __future__ import annotations

import numpy as np
import pytest

from face_locator.config import config
from face_locator.mesh import TriangleMesh


@pytest.fixture(autouse=True)
def _restore_tolerances():
    """Keep tests from leaking global tolerance changes."""
    with config.use():
        yield


@pytest.fixture
def simple_triangle_mesh():
    """
    Provides a TriangleMesh with a single triangle:
        v0 = [0, 0, 0]
        v1 = [1, 0, 0]
        v2 = [0, 1, 0]
    """
    verts = np.array(
        [
            [0.0, 0.0, 0.0],  # v0
            [1.0, 0.0, 0.0],  # v1
            [0.0, 1.0, 0.0],  # v2
        ]
    )
    connectivity = np.array([[0, 1, 2]])  # One triangle
    return TriangleMesh(verts=verts, connectivity=connectivity)


@pytest.fixture
def two_triangle_square():
    """
    Unit square split into two triangles along the diagonal (0-2):
      v3 (0,1) ---- v2 (1,1)
        |  \\    1     |
        |    \\        |
        |   0  \\      |
      v0 (0,0) ---- v1 (1,0)
    Triangles: [0,1,2] and [0,2,3], both with normal +z.
    Centroids: (2/3, 1/3, 0) and (1/3, 2/3, 0).
    """
    verts = np.array(
        [
            [0.0, 0.0, 0.0],  # v0
            [1.0, 0.0, 0.0],  # v1
            [1.0, 1.0, 0.0],  # v2
            [0.0, 1.0, 0.0],  # v3
        ],
        dtype=float,
    )
    conn = np.array([[0, 1, 2], [0, 2, 3]], dtype=int)
    return TriangleMesh(verts=verts, connectivity=conn)


@pytest.fixture
def stacked_floors():
    """
    Two identical triangles stacked vertically: face 0 at z=0, face 1 at z=2.
    """
    verts = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 2.0],
            [1.0, 0.0, 2.0],
            [0.0, 1.0, 2.0],
        ]
    )
    conn = np.array([[0, 1, 2], [3, 4, 5]])
    return TriangleMesh(verts=verts, connectivity=conn)


@pytest.fixture
def empty_mesh():
    return TriangleMesh(verts=np.zeros((0, 3)), connectivity=np.zeros((0, 3), int))


class DictMesh:
    """Minimal MeshQuery implementation over plain Python lists."""

    def __init__(self, positions, faces, normals):
        self.positions = positions
        self.faces = faces
        self.normals = normals

    def face_count(self):
        return len(self.faces)

    def face_vertex(self, face_index, corner):
        return self.faces[face_index][corner]

    def vertex_position(self, vertex_index):
        return self.positions[vertex_index]

    def face_normal(self, face_index):
        return self.normals[face_index]


@pytest.fixture
def dict_mesh():
    """Single unit right triangle served through a non-NumPy adapter."""
    return DictMesh(
        positions=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
        faces=[(0, 1, 2)],
        normals=[(0.0, 0.0, 1.0)],
    )
